"""
Restriction cloning simulation: cut a vector and ligate an insert.
"""

from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger

from ..core.sequence_utils import clean_sequence
from ..core.translation import reverse_complement
from ..models import LigationResult, RestrictionEnzyme
from .restriction import find_cut_sites, group_sites_by_enzyme, load_enzyme_catalog


def simulate_ligation(
    vector: str,
    insert: str,
    enzyme1: str,
    enzyme2: Optional[str] = None,
    circular: bool = True,
    reverse_insert: bool = False,
    enzymes: Optional[Iterable[RestrictionEnzyme]] = None,
) -> Optional[LigationResult]:
    """
    Insert a fragment into a vector opened with one or two enzymes.
    
    The vector is opened at the first recognition site of each enzyme; the
    stretch between the two sites is replaced by the insert. With a single
    enzyme the insert is placed at that site.
    
    Args:
        vector: Vector sequence
        insert: Insert sequence (non-nucleotide characters are dropped)
        enzyme1: Name of the 5' enzyme
        enzyme2: Name of the 3' enzyme, or None for single-enzyme cloning
        circular: Whether the vector is circular (reported in the description)
        reverse_insert: Ligate the reverse complement of the insert
        enzymes: Catalog to search; the built-in catalog when omitted
        
    Returns:
        LigationResult, or None when the insert is empty or an enzyme does
        not cut the vector
    """
    insert = clean_sequence(insert)
    if not insert or not enzyme1:
        return None
    
    catalog = tuple(enzymes) if enzymes is not None else load_enzyme_catalog()
    by_enzyme = group_sites_by_enzyme(find_cut_sites(vector, catalog))
    
    sites1 = by_enzyme.get(enzyme1)
    if not sites1:
        logger.info(f"{enzyme1} does not cut the vector")
        return None
    cut1 = cut2 = sites1[0].position
    
    double = bool(enzyme2) and enzyme2 != enzyme1
    if double:
        sites2 = by_enzyme.get(enzyme2)
        if not sites2:
            logger.info(f"{enzyme2} does not cut the vector")
            return None
        cut2 = sites2[0].position
    
    pos1, pos2 = min(cut1, cut2), max(cut1, cut2)
    fragment = reverse_complement(insert) if reverse_insert else insert
    construct = vector[:pos1] + fragment + vector[pos2:]
    
    direction = "reverse" if reverse_insert else "forward"
    topology = "circular" if circular else "linear"
    if double:
        description = (f"{topology.capitalize()} vector cut at {enzyme1} ({pos1 + 1}) and "
                       f"{enzyme2} ({pos2 + 1}), insert ligated {direction}")
    else:
        description = f"{topology.capitalize()} vector cut at {enzyme1} ({pos1 + 1}), insert ligated {direction}"
    
    return LigationResult(sequence=construct, length=len(construct), description=description)
