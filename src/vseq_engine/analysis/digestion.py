"""
In-silico restriction digest and gel migration estimate.
"""

import math
from typing import Iterable, List, Tuple

from loguru import logger

from ..models import CutSite, DigestFragment


# Migration model clamps (bp)
MIN_GEL_LENGTH = 100
MIN_GEL_REFERENCE = 10000

# Marker band sizes (bp), largest first
DNA_LADDER = (10000, 8000, 6000, 5000, 4000, 3000, 2000, 1500, 1000, 750, 500, 250)


def _cut_positions(cut_sites: Iterable[CutSite], length: int, circular: bool) -> List[int]:
    """Deduplicated, sorted cleavage positions that fall on the molecule."""
    positions = set()
    for site in cut_sites:
        position = site.cut_position
        if circular:
            positions.add(position % length)
        elif 0 <= position <= length:
            positions.add(position)
        else:
            logger.debug(f"{site.enzyme.name} cut at {position} lies outside the {length} bp molecule")
    return sorted(positions)


def simulate_digestion(sequence: str, cut_sites: Iterable[CutSite], circular: bool) -> List[DigestFragment]:
    """
    Simulate a restriction digest.
    
    Args:
        sequence: DNA sequence of the parent molecule
        cut_sites: Sites to cleave at (their ``cut_position`` is used)
        circular: Whether the parent molecule is circular
        
    Returns:
        Fragments sorted by length, largest first. Fragment lengths always
        sum to the parent length.
    """
    length = len(sequence)
    positions = _cut_positions(cut_sites, length, circular) if length else []
    
    if not positions:
        return [DigestFragment(
            index=0,
            start=0,
            end=length,
            length=length,
            sequence=sequence,
            is_linear=not circular,
        )]
    
    fragments = []
    if circular:
        for i, start in enumerate(positions):
            end = positions[(i + 1) % len(positions)]
            if end > start:
                fragments.append(DigestFragment(
                    index=i,
                    start=start,
                    end=end,
                    length=end - start,
                    sequence=sequence[start:end],
                ))
            else:
                # Crosses the origin
                fragments.append(DigestFragment(
                    index=i,
                    start=start,
                    end=end + length,
                    length=length - start + end,
                    sequence=sequence[start:] + sequence[:end],
                ))
    else:
        bounds = [0] + positions + [length]
        for i in range(len(bounds) - 1):
            start, end = bounds[i], bounds[i + 1]
            if end - start > 0:
                fragments.append(DigestFragment(
                    index=i,
                    start=start,
                    end=end,
                    length=end - start,
                    sequence=sequence[start:end],
                ))
    
    fragments.sort(key=lambda fragment: fragment.length, reverse=True)
    logger.debug(f"Digest of {length} bp ({'circular' if circular else 'linear'}) gave {len(fragments)} fragments")
    return fragments


def get_gel_migration(fragment_length: float, max_length: float) -> float:
    """
    Relative migration distance of a fragment on an agarose gel.
    
    Log-linear model: larger fragments give smaller values (closer to the
    well). Both lengths are clamped to at least 100 bp and the reference
    maximum to at least 10 kb.
    """
    min_log = math.log10(MIN_GEL_LENGTH)
    max_log = math.log10(max(max_length, MIN_GEL_REFERENCE))
    frag_log = math.log10(max(fragment_length, MIN_GEL_LENGTH))
    return 1 - (frag_log - min_log) / (max_log - min_log)


def ladder_migrations(max_length: float) -> List[Tuple[int, float]]:
    """Ladder band sizes paired with their migration on the same gel scale."""
    return [(size, get_gel_migration(size, max_length)) for size in DNA_LADDER]
