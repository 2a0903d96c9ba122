"""
Tab-separated report writers for analysis results.

Coordinates are written 1-based inclusive, the way sequence viewers show
them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger

from .analysis.codon_usage import codon_usage_rows
from .analysis.digestion import get_gel_migration, ladder_migrations
from .core.translation import format_amino_acid_sequence
from .exceptions import ReportError
from .models import (
    AlignmentResult,
    CodonUsageResult,
    CutSite,
    DigestFragment,
    ORF,
    PrimerPair,
    Sequence,
    SequenceStats,
)


def _write_table(output_file: Path, header: List[str], rows: Iterable[List[object]]) -> Path:
    output_file = Path(output_file)
    try:
        with open(output_file, 'w') as f:
            f.write("\t".join(header) + "\n")
            for row in rows:
                f.write("\t".join(str(value) for value in row) + "\n")
    except IOError as e:
        raise ReportError(str(e), output_file=str(output_file)) from e
    
    logger.debug(f"Wrote {output_file}")
    return output_file


def write_cut_sites(sites: List[CutSite], output_file: Path) -> Path:
    """Write one row per recognition site."""
    header = ["enzyme", "recognition_seq", "site_start", "cut_after", "overhang"]
    return _write_table(output_file, header, (
        [s.enzyme.name, s.enzyme.recognition_seq, s.position + 1, s.cut_position, s.enzyme.overhang.value]
        for s in sites
    ))


def write_fragments(fragments: List[DigestFragment], output_file: Path) -> Path:
    """Write digest fragments with their relative gel migration."""
    max_length = max((f.length for f in fragments), default=0)
    header = ["index", "start", "end", "length", "migration", "sequence"]
    return _write_table(output_file, header, (
        [f.index, f.start + 1, f.end, f.length, f"{get_gel_migration(f.length, max_length):.3f}", f.sequence]
        for f in fragments
    ))


def write_gel_ladder(fragments: List[DigestFragment], output_file: Path) -> Path:
    """Write the marker ladder on the same migration scale as the fragments."""
    max_length = max((f.length for f in fragments), default=0)
    return _write_table(output_file, ["size", "migration"], (
        [size, f"{migration:.3f}"] for size, migration in ladder_migrations(max_length)
    ))


def write_orfs(orfs: List[ORF], proteins: List[str], output_file: Path) -> Path:
    """Write ORFs alongside their translated proteins."""
    header = ["frame", "strand", "start", "end", "length", "aa_length", "protein"]
    return _write_table(output_file, header, (
        [f"{orf.frame:+d}", orf.strand.value, orf.start + 1, orf.end, orf.length, orf.aa_length, protein]
        for orf, protein in zip(orfs, proteins)
    ))


def write_codon_usage(result: CodonUsageResult, output_file: Path) -> Path:
    """Write the 64-codon usage table."""
    header = ["aa", "codon", "count", "frequency", "fraction_of_aa"]
    return _write_table(output_file, header, (
        [row.aa, row.codon, row.count, f"{row.frequency:.4f}", f"{row.fraction_of_aa:.4f}"]
        for row in codon_usage_rows(result)
    ))


def write_primer_pairs(pairs: List[PrimerPair], output_file: Path) -> Path:
    """Write one row per primer, two rows per pair."""
    header = [
        "pair", "direction", "start", "end", "length", "Tm", "GC_content",
        "self_complementarity", "gc_clamp", "product_size", "primer_seq",
    ]
    rows = []
    for i, pair in enumerate(pairs):
        for primer in (pair.forward, pair.reverse):
            rows.append([
                i,
                "LEFT" if primer is pair.forward else "RIGHT",
                primer.start + 1,
                primer.end,
                primer.length,
                f"{primer.tm:.2f}",
                f"{primer.gc_percent:.2f}",
                f"{primer.self_complementarity:.2f}",
                "YES" if primer.has_gc_clamp else "NO",
                pair.product_size,
                primer.sequence,
            ])
    return _write_table(output_file, header, rows)


def format_alignment(result: AlignmentResult, name1: str = "seq1", name2: str = "seq2", width: int = 60) -> str:
    """Render an alignment as wrapped three-line blocks."""
    label_width = max(len(name1), len(name2))
    lines = [
        f"Score: {result.score}",
        f"Identity: {result.identity:.1%} ({result.length} columns)",
        f"Gaps: {result.gaps}",
        "",
    ]
    for i in range(0, result.length, width):
        lines.append(f"{name1:<{label_width}}  {result.aligned_seq1[i:i + width]}")
        lines.append(f"{'':<{label_width}}  {result.match_line[i:i + width]}")
        lines.append(f"{name2:<{label_width}}  {result.aligned_seq2[i:i + width]}")
        lines.append("")
    return "\n".join(lines)


def write_alignment(
    result: AlignmentResult,
    output_file: Path,
    name1: str = "seq1",
    name2: str = "seq2",
) -> Path:
    """Write a human-readable alignment."""
    output_file = Path(output_file)
    try:
        with open(output_file, 'w') as f:
            f.write(format_alignment(result, name1, name2) + "\n")
    except IOError as e:
        raise ReportError(str(e), output_file=str(output_file)) from e
    return output_file


def write_summary(
    record: Sequence,
    stats: SequenceStats,
    output_file: Path,
    codon_usage: Optional[CodonUsageResult] = None,
    unique_cutters: Optional[List[str]] = None,
    longest_protein: Optional[str] = None,
) -> Path:
    """Write a plain-text overview of the sequence."""
    output_file = Path(output_file)
    lines = [
        f"Name: {record.name}",
        f"Topology: {'circular' if record.circular else 'linear'}",
        f"Length: {stats.length} bp",
        f"GC content: {stats.gc_content:.1f}%",
        "Base counts: " + ", ".join(f"{base}={count}" for base, count in stats.counts.items()),
        f"Molecular weight: {stats.mw_ssdna:,.0f} Da (ssDNA), {stats.mw_dsdna:,.0f} Da (dsDNA)",
        f"Features: {len(record.features)}",
    ]
    for feature_type, count in sorted(stats.feature_types.items()):
        lines.append(f"  {feature_type}: {count}")
    if unique_cutters is not None:
        lines.append(f"Unique cutters: {', '.join(unique_cutters) if unique_cutters else 'none'}")
    if codon_usage is not None:
        lines.append(
            f"Codon usage: {codon_usage.total_codons} codons, CAI {codon_usage.cai:.3f} "
            f"({codon_usage.reference}), GC3 {codon_usage.gc3_content:.1f}%"
        )
    if longest_protein:
        lines.append("Longest ORF protein:")
        lines.append(format_amino_acid_sequence(longest_protein))
    
    try:
        with open(output_file, 'w') as f:
            f.write("\n".join(lines) + "\n")
    except IOError as e:
        raise ReportError(str(e), output_file=str(output_file)) from e
    return output_file
