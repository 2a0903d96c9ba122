"""
Codon usage statistics and Codon Adaptation Index.

Reference tables give, for each codon, its usage as a fraction of the
codons encoding the same amino acid.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Dict, List

from loguru import logger

from ..core.sequence_utils import extract_feature_sequence
from ..core.translation import CODON_TABLE
from ..exceptions import ConfigurationError
from ..models import CodonCount, CodonUsageResult, Sequence


ECOLI_REFERENCE: Dict[str, float] = {
    'TTT': 0.58, 'TTC': 0.42, 'TTA': 0.14, 'TTG': 0.13,
    'CTT': 0.12, 'CTC': 0.10, 'CTA': 0.04, 'CTG': 0.47,
    'ATT': 0.51, 'ATC': 0.42, 'ATA': 0.08, 'ATG': 1.00,
    'GTT': 0.28, 'GTC': 0.22, 'GTA': 0.17, 'GTG': 0.33,
    'TCT': 0.17, 'TCC': 0.15, 'TCA': 0.14, 'TCG': 0.14,
    'CCT': 0.18, 'CCC': 0.13, 'CCA': 0.20, 'CCG': 0.49,
    'ACT': 0.19, 'ACC': 0.40, 'ACA': 0.17, 'ACG': 0.25,
    'GCT': 0.18, 'GCC': 0.26, 'GCA': 0.23, 'GCG': 0.33,
    'TAT': 0.59, 'TAC': 0.41, 'TAA': 0.61, 'TAG': 0.09,
    'CAT': 0.57, 'CAC': 0.43, 'CAA': 0.34, 'CAG': 0.66,
    'AAT': 0.49, 'AAC': 0.51, 'AAA': 0.74, 'AAG': 0.26,
    'GAT': 0.63, 'GAC': 0.37, 'GAA': 0.68, 'GAG': 0.32,
    'TGT': 0.46, 'TGC': 0.54, 'TGA': 0.30, 'TGG': 1.00,
    'CGT': 0.36, 'CGC': 0.36, 'CGA': 0.07, 'CGG': 0.11,
    'AGT': 0.16, 'AGC': 0.25, 'AGA': 0.07, 'AGG': 0.04,
    'GGT': 0.35, 'GGC': 0.37, 'GGA': 0.13, 'GGG': 0.15,
}

HUMAN_REFERENCE: Dict[str, float] = {
    'TTT': 0.45, 'TTC': 0.55, 'TTA': 0.07, 'TTG': 0.13,
    'CTT': 0.13, 'CTC': 0.20, 'CTA': 0.07, 'CTG': 0.41,
    'ATT': 0.36, 'ATC': 0.48, 'ATA': 0.16, 'ATG': 1.00,
    'GTT': 0.18, 'GTC': 0.24, 'GTA': 0.11, 'GTG': 0.47,
    'TCT': 0.19, 'TCC': 0.22, 'TCA': 0.15, 'TCG': 0.05,
    'CCT': 0.29, 'CCC': 0.33, 'CCA': 0.28, 'CCG': 0.11,
    'ACT': 0.25, 'ACC': 0.36, 'ACA': 0.28, 'ACG': 0.12,
    'GCT': 0.27, 'GCC': 0.40, 'GCA': 0.23, 'GCG': 0.11,
    'TAT': 0.43, 'TAC': 0.57, 'TAA': 0.28, 'TAG': 0.20,
    'CAT': 0.41, 'CAC': 0.59, 'CAA': 0.25, 'CAG': 0.75,
    'AAT': 0.46, 'AAC': 0.54, 'AAA': 0.42, 'AAG': 0.58,
    'GAT': 0.46, 'GAC': 0.54, 'GAA': 0.42, 'GAG': 0.58,
    'TGT': 0.45, 'TGC': 0.55, 'TGA': 0.52, 'TGG': 1.00,
    'CGT': 0.08, 'CGC': 0.19, 'CGA': 0.11, 'CGG': 0.21,
    'AGT': 0.15, 'AGC': 0.24, 'AGA': 0.20, 'AGG': 0.20,
    'GGT': 0.16, 'GGC': 0.34, 'GGA': 0.25, 'GGG': 0.25,
}

YEAST_REFERENCE: Dict[str, float] = {
    'TTT': 0.59, 'TTC': 0.41, 'TTA': 0.28, 'TTG': 0.29,
    'CTT': 0.13, 'CTC': 0.06, 'CTA': 0.14, 'CTG': 0.11,
    'ATT': 0.46, 'ATC': 0.26, 'ATA': 0.27, 'ATG': 1.00,
    'GTT': 0.39, 'GTC': 0.21, 'GTA': 0.21, 'GTG': 0.19,
    'TCT': 0.26, 'TCC': 0.16, 'TCA': 0.21, 'TCG': 0.10,
    'CCT': 0.31, 'CCC': 0.15, 'CCA': 0.42, 'CCG': 0.12,
    'ACT': 0.35, 'ACC': 0.22, 'ACA': 0.30, 'ACG': 0.14,
    'GCT': 0.38, 'GCC': 0.22, 'GCA': 0.29, 'GCG': 0.11,
    'TAT': 0.56, 'TAC': 0.44, 'TAA': 0.47, 'TAG': 0.23,
    'CAT': 0.64, 'CAC': 0.36, 'CAA': 0.69, 'CAG': 0.31,
    'AAT': 0.59, 'AAC': 0.41, 'AAA': 0.58, 'AAG': 0.42,
    'GAT': 0.65, 'GAC': 0.35, 'GAA': 0.70, 'GAG': 0.30,
    'TGT': 0.63, 'TGC': 0.37, 'TGA': 0.30, 'TGG': 1.00,
    'CGT': 0.15, 'CGC': 0.06, 'CGA': 0.07, 'CGG': 0.04,
    'AGT': 0.16, 'AGC': 0.11, 'AGA': 0.48, 'AGG': 0.21,
    'GGT': 0.47, 'GGC': 0.19, 'GGA': 0.22, 'GGG': 0.12,
}

DEFAULT_REFERENCE = 'E. coli K12'

REFERENCE_TABLES: Dict[str, Dict[str, float]] = {
    DEFAULT_REFERENCE: ECOLI_REFERENCE,
    'Human': HUMAN_REFERENCE,
    'Yeast (S. cerevisiae)': YEAST_REFERENCE,
}

# Relative adaptiveness floor so a rare codon cannot drive log() to -inf
MIN_ADAPTIVENESS = 0.01

_NON_ACGT = re.compile(r'[^ACGT]')


def _reference_table(reference: str) -> Dict[str, float]:
    try:
        return REFERENCE_TABLES[reference]
    except KeyError:
        raise ConfigurationError(
            f"Unknown codon usage reference: {reference} "
            f"(choose from {', '.join(REFERENCE_TABLES)})",
            parameter='codon_reference'
        ) from None


def analyze_codon_usage(coding_sequence: str, reference: str = DEFAULT_REFERENCE) -> CodonUsageResult:
    """
    Tabulate codon usage for one coding region.
    
    Non-ACGT characters are stripped before the region is split into
    codons; a trailing partial codon is ignored.
    
    Args:
        coding_sequence: In-frame coding sequence
        reference: Name of the reference table used for CAI
        
    Returns:
        CodonUsageResult with a row for each of the 64 codons. GC values
        are percentages; CAI is 0 when no codon can be scored.
    """
    table = _reference_table(reference)
    seq = _NON_ACGT.sub('', coding_sequence.upper())
    total_codons = len(seq) // 3
    codons = [seq[i:i + 3] for i in range(0, total_codons * 3, 3)]
    
    codon_counts = Counter(codons)
    aa_counts: Counter = Counter()
    for codon, count in codon_counts.items():
        aa_counts[CODON_TABLE[codon]] += count
    
    counts = []
    for codon, aa in CODON_TABLE.items():
        count = codon_counts.get(codon, 0)
        counts.append(CodonCount(
            codon=codon,
            aa=aa,
            count=count,
            frequency=count / total_codons if total_codons else 0.0,
            fraction_of_aa=count / aa_counts[aa] if aa_counts[aa] else 0.0,
        ))
    
    gc3 = sum(1 for codon in codons if codon[2] in 'GC')
    gc = seq.count('G') + seq.count('C')
    
    log_sum = 0.0
    scored = 0
    for codon in codons:
        weight = table.get(codon)
        if weight is None or CODON_TABLE[codon] == '*':
            continue
        log_sum += math.log(max(weight, MIN_ADAPTIVENESS))
        scored += 1
    cai = math.exp(log_sum / scored) if scored else 0.0
    
    logger.debug(f"Codon usage: {total_codons} codons, CAI {cai:.3f} vs {reference}")
    return CodonUsageResult(
        total_codons=total_codons,
        counts=counts,
        cai=cai,
        gc_content=gc / len(seq) * 100 if seq else 0.0,
        gc3_content=gc3 / total_codons * 100 if total_codons else 0.0,
        reference=reference,
    )


def cds_sequences(record: Sequence) -> Dict[str, str]:
    """
    Coding sequences of every CDS feature, keyed by feature name.
    
    Repeated names get a numeric suffix.
    """
    regions: Dict[str, str] = {}
    for feature in record.features_of_type('CDS'):
        name = feature.name
        suffix = 2
        while name in regions:
            name = f"{feature.name}_{suffix}"
            suffix += 1
        regions[name] = extract_feature_sequence(record, feature)
    return regions


def codon_usage_rows(result: CodonUsageResult) -> List[CodonCount]:
    """Rows ordered by amino acid, then codon, for display."""
    return sorted(result.counts, key=lambda row: (row.aa, row.codon))
