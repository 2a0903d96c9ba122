"""Sequence composition helpers and feature sub-sequence extraction."""

from __future__ import annotations

import re
from collections import Counter

from loguru import logger

from ..models import Feature, Sequence, SequenceStats, Strand
from .translation import reverse_complement


# Approximate average masses (Da) per nucleotide / base pair
MW_SSDNA_PER_NT = 330
MW_DSDNA_PER_BP = 649

_NON_IUPAC = re.compile(r'[^ACGTURYSWKMBDHVN]')


def clean_sequence(text: str) -> str:
    """Uppercase and drop everything that is not a nucleotide or IUPAC code."""
    return _NON_IUPAC.sub('', text.upper())


def calculate_gc_content(sequence: str) -> float:
    """GC content as a percentage of the full sequence length."""
    if not sequence:
        return 0.0
    seq_upper = sequence.upper()
    return (seq_upper.count('G') + seq_upper.count('C')) / len(sequence) * 100.0


def estimate_tm(sequence: str) -> float:
    """
    Quick melting temperature estimate for an arbitrary selection.
    
    Only A, C, G and T are counted. Below 14 nt the Wallace rule applies,
    otherwise 50 + 0.1 * (%GC * length).
    """
    bases = re.sub(r'[^ACGT]', '', sequence.upper())
    length = len(bases)
    if not length:
        return 0.0
    gc = bases.count('G') + bases.count('C')
    if length < 14:
        return float(2 * (length - gc) + 4 * gc)
    return 50 + 0.1 * (gc / length * 100 * length)


def sequence_stats(record: Sequence) -> SequenceStats:
    """Length, base composition, approximate mass and feature breakdown."""
    seq = record.sequence.upper()
    counts = {'A': 0, 'T': 0, 'G': 0, 'C': 0, 'N': 0, 'other': 0}
    for base, count in Counter(seq).items():
        if base in counts:
            counts[base] += count
        else:
            counts['other'] += count
    
    feature_types = Counter(f.type for f in record.features)
    length = len(seq)
    return SequenceStats(
        length=length,
        counts=counts,
        gc_content=calculate_gc_content(seq),
        mw_ssdna=float(length * MW_SSDNA_PER_NT),
        mw_dsdna=float(length * MW_DSDNA_PER_BP),
        feature_types=dict(feature_types),
    )


def extract_feature_sequence(record: Sequence, feature: Feature) -> str:
    """
    Sub-sequence covered by a feature, read 5' to 3' on the feature's strand.
    
    Feature coordinates are 1-based and inclusive. A feature whose end lies
    before its start runs through the origin, which is only meaningful on a
    circular sequence.
    """
    seq = record.sequence
    start = max(feature.start, 1) - 1
    end = min(feature.end, len(seq))
    
    if feature.wraps_origin:
        if not record.circular:
            logger.warning(
                f"Feature {feature.name} ({feature.start}..{feature.end}) wraps the origin "
                f"of linear sequence {record.name}"
            )
            return ""
        region = seq[start:] + seq[:end]
    else:
        region = seq[start:end]
    
    if feature.strand == Strand.REVERSE:
        region = reverse_complement(region)
    return region
