"""
Sequence file readers: GenBank, FASTA, EMBL and GFF3.

Readers never raise on malformed content. Structural problems are raised
internally as ParseError and reported to the caller as ``None`` (no usable
sequence), so a front end can show "unsupported format" without crashing.
"""

from __future__ import annotations

import functools
import gzip
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import unquote

from loguru import logger

from ..exceptions import ParseError
from ..models import Feature, Sequence, Strand


GENBANK_FEATURE_RE = re.compile(r'^ {5}(\S+)\s+(\S.*)$')
GENBANK_CONTINUATION_RE = re.compile(r'^ {21}[^/\s]')
GENBANK_QUALIFIER_RE = re.compile(r'^ {21}/([^=\s]+)(?:=(.*))?$')

EMBL_FEATURE_RE = re.compile(r'^FT   (\S+)\s+(\S.*)$')
EMBL_CONTINUATION_RE = re.compile(r'^FT {19}[^/\s]')
EMBL_QUALIFIER_RE = re.compile(r'^FT {19}/([^=\s]+)(?:=(.*))?$')

NAMING_QUALIFIERS = ("label", "gene", "product")

_DIGITS = re.compile(r'\d+')
_SEQUENCE_NOISE = re.compile(r'[\d\s]')

SUFFIX_FORMATS = {
    ".gb": "genbank", ".gbk": "genbank", ".genbank": "genbank", ".gbff": "genbank",
    ".fa": "fasta", ".fasta": "fasta", ".fna": "fasta", ".fas": "fasta", ".seq": "fasta",
    ".embl": "embl", ".emb": "embl",
    ".gff": "gff3", ".gff3": "gff3",
}


def _no_result_on_error(format_name: str):
    """Turn a ParseError raised by a reader into a logged ``None``."""
    def decorator(reader: Callable[[str], Sequence]) -> Callable[[str], Optional[Sequence]]:
        @functools.wraps(reader)
        def wrapper(text: str) -> Optional[Sequence]:
            try:
                return reader(text)
            except ParseError as e:
                logger.warning(f"Unparseable {format_name} input: {e}")
                return None
        return wrapper
    return decorator


def _unquote(value: Optional[str]) -> str:
    if value is None:
        return ""
    return value.strip().replace('"', '')


def parse_location(location: str) -> Tuple[int, int, Strand]:
    """
    Reduce a feature location to a bounding span.
    
    Start and end are the smallest and largest integers in the location, so
    ``join(...)`` and ``order(...)`` collapse to one span. ``complement``
    anywhere in the location selects the reverse strand.
    """
    numbers = [int(n) for n in _DIGITS.findall(location)]
    if not numbers:
        raise ParseError(f"No coordinates in location: {location}")
    strand = Strand.REVERSE if "complement" in location else Strand.FORWARD
    return min(numbers), max(numbers), strand


class _FeatureBuilder:
    """Accumulates one feature's location and qualifiers."""
    
    def __init__(self, feature_type: str, location: str):
        self.type = feature_type
        self.location = location
        self.qualifiers: Dict[str, str] = {}
        self._last_key: Optional[str] = None
    
    def add_qualifier(self, key: str, value: Optional[str]) -> None:
        value = _unquote(value)
        if key in self.qualifiers and self.qualifiers[key]:
            self.qualifiers[key] = f"{self.qualifiers[key]}; {value}"
        else:
            self.qualifiers[key] = value
        self._last_key = key
    
    def continue_qualifier(self, text: str) -> None:
        if self._last_key is None:
            return
        text = _unquote(text)
        current = self.qualifiers[self._last_key]
        self.qualifiers[self._last_key] = f"{current} {text}" if current else text
    
    def build(self) -> Optional[Feature]:
        if self.type == "source":
            return None
        try:
            start, end, strand = parse_location(self.location)
        except ParseError as e:
            logger.warning(f"Skipping {self.type} feature: {e}")
            return None
        
        label = None
        for key in NAMING_QUALIFIERS:
            if self.qualifiers.get(key):
                label = self.qualifiers[key]
                break
        
        return Feature(
            start=start,
            end=end,
            type=self.type,
            strand=strand,
            label=label,
            attributes=dict(self.qualifiers),
        )


def _scan_features(
    lines: List[str],
    feature_re: re.Pattern,
    continuation_re: re.Pattern,
    qualifier_re: re.Pattern,
    prefix_width: int,
) -> List[Feature]:
    """Shared feature-table walker for GenBank and EMBL."""
    features: List[Feature] = []
    current: Optional[_FeatureBuilder] = None
    in_location = False
    
    for line in lines:
        match = feature_re.match(line)
        if match:
            if current:
                feature = current.build()
                if feature:
                    features.append(feature)
            current = _FeatureBuilder(match.group(1), match.group(2).strip())
            in_location = True
            continue
        
        if current is None:
            continue
        
        if continuation_re.match(line):
            if in_location:
                current.location += line[prefix_width:].strip()
            else:
                current.continue_qualifier(line[prefix_width:])
            continue
        
        qualifier = qualifier_re.match(line)
        if qualifier:
            in_location = False
            current.add_qualifier(qualifier.group(1), qualifier.group(2))
    
    if current:
        feature = current.build()
        if feature:
            features.append(feature)
    return features


@_no_result_on_error("GenBank")
def parse_genbank(text: str) -> Optional[Sequence]:
    """
    Parse a GenBank record.
    
    Returns ``None`` when there is no ORIGIN section or it holds no bases.
    """
    name = "Unknown"
    circular = False
    feature_lines: List[str] = []
    sequence_parts: List[str] = []
    section = None
    found_origin = False
    
    for raw_line in text.splitlines():
        line = raw_line.rstrip()
        if line.startswith("LOCUS"):
            parts = line.split()
            if len(parts) > 1:
                name = parts[1]
            circular = "circular" in line
            section = None
        elif line.startswith("FEATURES"):
            section = "features"
        elif line.startswith("ORIGIN"):
            section = "origin"
            found_origin = True
        elif line.startswith("//"):
            if found_origin:
                break
            section = None
        elif section == "origin":
            sequence_parts.append(_SEQUENCE_NOISE.sub("", line))
        elif section == "features":
            if line and not line.startswith(" "):
                # Another top-level keyword (e.g. BASE COUNT, CONTIG)
                section = None
                continue
            feature_lines.append(line)
    
    if not found_origin:
        raise ParseError("No ORIGIN section found")
    sequence = "".join(sequence_parts).upper()
    if not sequence:
        raise ParseError("ORIGIN section is empty")
    
    features = _scan_features(
        feature_lines, GENBANK_FEATURE_RE, GENBANK_CONTINUATION_RE, GENBANK_QUALIFIER_RE, 21
    )
    logger.debug(f"GenBank {name}: {len(sequence)} bp, {len(features)} features")
    return Sequence(name=name, sequence=sequence, circular=circular, features=features)


@_no_result_on_error("FASTA")
def parse_fasta(text: str) -> Optional[Sequence]:
    """Parse the first record of a FASTA document; always linear, no features."""
    name = "Unknown"
    sequence_parts: List[str] = []
    seen_header = False
    
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(">"):
            if seen_header:
                logger.info(f"FASTA contains more than one record; using the first ({name})")
                break
            name = line[1:].strip() or "Unknown"
            seen_header = True
        elif line.startswith(";"):
            continue
        else:
            sequence_parts.append("".join(line.split()))
    
    sequence = "".join(sequence_parts).upper()
    if not sequence:
        raise ParseError("No sequence data found")
    return Sequence(name=name, sequence=sequence, circular=False)


@_no_result_on_error("EMBL")
def parse_embl(text: str) -> Optional[Sequence]:
    """Parse an EMBL record; ``None`` when no SQ body is present."""
    name = "Unknown"
    circular = False
    feature_lines: List[str] = []
    sequence_parts: List[str] = []
    in_sequence = False
    
    for raw_line in text.splitlines():
        line = raw_line.rstrip()
        if line.startswith("//"):
            if in_sequence:
                break
            continue
        if in_sequence:
            sequence_parts.append(_SEQUENCE_NOISE.sub("", line))
        elif line.startswith("ID"):
            parts = line.split()
            if len(parts) > 1:
                name = parts[1].rstrip(";")
            circular = "circular" in line
        elif line.startswith("AC") and name == "Unknown":
            accession = line[2:].strip().split(";")[0].strip()
            if accession:
                name = accession
        elif line.startswith("FT"):
            feature_lines.append(line)
        elif line.startswith("SQ"):
            in_sequence = True
    
    sequence = "".join(sequence_parts).upper()
    if not sequence:
        raise ParseError("No SQ sequence body found")
    
    features = _scan_features(
        feature_lines, EMBL_FEATURE_RE, EMBL_CONTINUATION_RE, EMBL_QUALIFIER_RE, 21
    )
    logger.debug(f"EMBL {name}: {len(sequence)} bp, {len(features)} features")
    return Sequence(name=name, sequence=sequence, circular=circular, features=features)


def parse_gff3(text: str) -> List[Feature]:
    """
    Parse GFF3 annotation records into features.
    
    Sequence data is not read; records after a ``##FASTA`` directive are
    ignored. Malformed records are skipped with a warning.
    """
    features: List[Feature] = []
    
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.rstrip("\r\n")
        if line.startswith("##FASTA") or line.startswith(">"):
            break
        if not line.strip() or line.startswith("#"):
            continue
        
        try:
            features.append(_parse_gff3_record(line, line_number))
        except ParseError as e:
            logger.warning(f"Skipping invalid GFF3 record: {e}")
            continue
    
    logger.debug(f"GFF3: {len(features)} features")
    return features


def _parse_gff3_record(line: str, line_number: int) -> Feature:
    fields = line.split("\t")
    if len(fields) < 9:
        raise ParseError(
            f"Expected 9 tab-separated columns, got {len(fields)}",
            line_number=line_number,
            line_content=line
        )
    
    _, _, feature_type, start_str, end_str, _, strand_str, _, attribute_str = fields[:9]
    try:
        start, end = int(start_str), int(end_str)
    except ValueError:
        raise ParseError(
            f"Non-integer coordinates {start_str!r}, {end_str!r}",
            line_number=line_number,
            line_content=line
        ) from None
    
    attributes: Dict[str, str] = {}
    for pair in attribute_str.split(";"):
        key, sep, value = pair.partition("=")
        key = key.strip()
        if key and sep:
            attributes[key] = unquote(value)
    
    label = (
        attributes.get("Name") or attributes.get("gene")
        or attributes.get("product") or attributes.get("ID")
    )
    return Feature(
        start=start,
        end=end,
        type=feature_type,
        strand=Strand.REVERSE if strand_str == "-" else Strand.FORWARD,
        label=label,
        attributes=attributes,
    )


def annotate_with_gff3(record: Sequence, text: str) -> Sequence:
    """Return a copy of ``record`` whose features come from a GFF3 document."""
    return record.with_features(parse_gff3(text))


def detect_format(text: str) -> Optional[str]:
    """Guess a file format from its content."""
    stripped = text.lstrip()
    if stripped.startswith("LOCUS"):
        return "genbank"
    if stripped.startswith("ID ") or stripped.startswith("ID\t"):
        return "embl"
    if stripped.startswith("##gff-version"):
        return "gff3"
    if stripped.startswith(">"):
        return "fasta"
    first = stripped.splitlines()[0] if stripped else ""
    if first.count("\t") >= 8:
        return "gff3"
    return None


_READERS = {
    "genbank": parse_genbank,
    "fasta": parse_fasta,
    "embl": parse_embl,
}


def parse_sequence_text(text: str, fmt: Optional[str] = None) -> Optional[Sequence]:
    """
    Parse text in a known or detected format.
    
    Returns ``None`` when the format is unknown, carries no sequence (GFF3),
    or the content is unparseable.
    """
    fmt = fmt or detect_format(text)
    if fmt is None:
        logger.warning("Could not detect sequence format")
        return None
    if fmt == "gff3":
        logger.warning("GFF3 holds annotations only; supply the sequence separately")
        return None
    
    reader = _READERS.get(fmt)
    if reader is None:
        logger.warning(f"Unsupported format: {fmt}")
        return None
    return reader(text)


def read_text(file_path: Union[str, Path]) -> str:
    """Read a text file, transparently decompressing ``.gz``."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise ParseError(f"Input file not found: {file_path}")
    
    try:
        if file_path.suffix == ".gz":
            with gzip.open(file_path, "rt", encoding="utf-8") as f:
                return f.read()
        with open(file_path, "r", encoding="utf-8") as f:
            return f.read()
    except (IOError, UnicodeDecodeError) as e:
        raise ParseError(f"Failed to read input file {file_path}: {e}") from e


def read_sequence_file(file_path: Union[str, Path]) -> Optional[Sequence]:
    """
    Read a sequence file.
    
    The format is sniffed from the content; the suffix decides only when
    sniffing fails (e.g. headerless FASTA). I/O failures raise ParseError;
    unparseable content returns ``None``.
    """
    file_path = Path(file_path)
    text = read_text(file_path)
    
    suffix = file_path.suffix.lower()
    if suffix == ".gz":
        suffix = Path(file_path.stem).suffix.lower()
    suffix_fmt = SUFFIX_FORMATS.get(suffix)
    detected = detect_format(text)
    if detected and suffix_fmt and detected != suffix_fmt:
        logger.warning(f"{file_path.name} looks like {detected}, not {suffix_fmt}")
    fmt = detected or suffix_fmt
    
    logger.info(f"Reading {file_path} as {fmt or 'unknown format'}")
    return parse_sequence_text(text, fmt)
