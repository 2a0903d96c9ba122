"""
PCR primer candidate generation, scoring and pairing.

Candidates are anchored at the edges of the target region: one forward
primer per length starting at the region start, one reverse primer per
length ending at the region end.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from ..core.translation import reverse_complement
from ..exceptions import ConfigurationError
from ..models import Primer, PrimerPair, Strand


WALLACE_MAX_LENGTH = 14
SELF_COMPLEMENTARITY_RUN = 8
TM_TIE_TOLERANCE = 0.5


@dataclass
class PrimerOptions:
    """Primer candidate constraints."""
    
    min_length: int = 18
    max_length: int = 25
    min_tm: float = 55.0
    max_tm: float = 65.0
    min_gc: float = 40.0
    max_gc: float = 60.0
    max_tm_difference: float = 5.0
    
    def __post_init__(self):
        """Validate option ranges."""
        if self.min_length <= 0 or self.min_length > self.max_length:
            raise ConfigurationError(
                f"Invalid primer length range: {self.min_length}-{self.max_length}",
                parameter='primer_options.min_length'
            )
        if self.min_tm > self.max_tm:
            raise ConfigurationError(
                f"Invalid primer Tm range: {self.min_tm}-{self.max_tm}",
                parameter='primer_options.min_tm'
            )
        if self.min_gc > self.max_gc:
            raise ConfigurationError(
                f"Invalid primer GC range: {self.min_gc}-{self.max_gc}",
                parameter='primer_options.min_gc'
            )
        if self.max_tm_difference < 0:
            raise ConfigurationError(
                f"Invalid max Tm difference: {self.max_tm_difference}",
                parameter='primer_options.max_tm_difference'
            )


def calculate_tm(seq: str) -> float:
    """
    Melting temperature of an oligo.
    
    Wallace rule ``2*(A+T) + 4*(G+C)`` below 14 nt, otherwise the
    salt-adjusted approximation ``64.9 + 41*(GC - 16.4)/length``.
    """
    upper = seq.upper()
    length = len(upper)
    if length == 0:
        return 0.0
    
    gc = upper.count('G') + upper.count('C')
    at = upper.count('A') + upper.count('T')
    if length < WALLACE_MAX_LENGTH:
        return float(2 * at + 4 * gc)
    return 64.9 + 41 * (gc - 16.4) / length


def calculate_gc_percent(seq: str) -> float:
    """GC content as a percentage."""
    if not seq:
        return 0.0
    upper = seq.upper()
    return (upper.count('G') + upper.count('C')) / len(upper) * 100


def has_gc_clamp(seq: str) -> bool:
    """True when either of the two 3' terminal bases is G or C."""
    return any(base in 'GC' for base in seq[-2:].upper())


def score_self_complementarity(seq: str) -> float:
    """
    Self-dimer risk between 0 and 1.
    
    The primer is slid along its own reverse complement; the longest run of
    matching positions at any offset is divided by 8 and clamped, so an
    8 nt complementary stretch scores 1.0.
    """
    upper = seq.upper()
    rc = reverse_complement(upper)
    length = len(upper)
    max_run = 0
    
    for offset in range(length):
        run = 0
        for i in range(length - offset):
            if upper[i + offset] == rc[i]:
                run += 1
                max_run = max(max_run, run)
            else:
                run = 0
    
    return min(1.0, max_run / SELF_COMPLEMENTARITY_RUN)


def _make_primer(seq: str, start: int, end: int, strand: Strand) -> Primer:
    direction = "Forward" if strand == Strand.FORWARD else "Reverse"
    return Primer(
        sequence=seq,
        start=start,
        end=end,
        strand=strand,
        length=len(seq),
        tm=calculate_tm(seq),
        gc_percent=calculate_gc_percent(seq),
        self_complementarity=score_self_complementarity(seq),
        has_gc_clamp=has_gc_clamp(seq),
        name=f"{direction} {len(seq)}bp",
    )


def _accepted(primer: Primer, options: PrimerOptions) -> bool:
    return (options.min_tm <= primer.tm <= options.max_tm
            and options.min_gc <= primer.gc_percent <= options.max_gc)


def forward_candidates(sequence: str, region_start: int, options: PrimerOptions) -> List[Primer]:
    """Forward primers starting at ``region_start`` that pass the Tm and GC limits."""
    candidates = []
    for length in range(options.min_length, options.max_length + 1):
        end = region_start + length
        if end > len(sequence):
            break
        primer = _make_primer(sequence[region_start:end].upper(), region_start, end, Strand.FORWARD)
        if _accepted(primer, options):
            candidates.append(primer)
    return candidates


def reverse_candidates(sequence: str, region_end: int, options: PrimerOptions) -> List[Primer]:
    """Reverse primers ending at ``region_end`` that pass the Tm and GC limits."""
    candidates = []
    for length in range(options.min_length, options.max_length + 1):
        start = region_end - length
        if start < 0:
            break
        template = sequence[start:region_end].upper()
        primer = _make_primer(reverse_complement(template), start, region_end, Strand.REVERSE)
        if _accepted(primer, options):
            candidates.append(primer)
    return candidates


def _pair_rank(pair: PrimerPair):
    """Tm difference in 0.5 °C steps, then combined self-complementarity."""
    return (math.floor(pair.tm_difference / TM_TIE_TOLERANCE), pair.combined_self_complementarity)


def design_primers(
    sequence: str,
    region_start: int,
    region_end: int,
    options: Optional[PrimerOptions] = None,
) -> List[PrimerPair]:
    """
    Design primer pairs flanking a target region.
    
    Args:
        sequence: Template sequence
        region_start: 0-based start of the region (forward primer anchor)
        region_end: 0-based exclusive end of the region (reverse primer anchor)
        options: Candidate constraints; defaults when omitted
        
    Returns:
        Ranked primer pairs whose Tm differ by at most
        ``options.max_tm_difference``; empty for an empty region.
    """
    if options is None:
        options = PrimerOptions()
    
    region_start = max(region_start, 0)
    region_end = min(region_end, len(sequence))
    if region_end <= region_start:
        return []
    
    forwards = forward_candidates(sequence, region_start, options)
    reverses = reverse_candidates(sequence, region_end, options)
    
    pairs = []
    for fwd in forwards:
        for rev in reverses:
            if abs(fwd.tm - rev.tm) <= options.max_tm_difference:
                pairs.append(PrimerPair(
                    forward=fwd,
                    reverse=rev,
                    product_size=rev.end - fwd.start,
                ))
    
    logger.debug(
        f"Primer design {region_start}-{region_end}: {len(forwards)} forward, "
        f"{len(reverses)} reverse, {len(pairs)} pairs"
    )
    pairs.sort(key=_pair_rank)
    return pairs
