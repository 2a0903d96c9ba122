"""
Restriction enzyme catalog and cut-site finder.

The built-in catalog ships as a tab-separated resource file and is read
once; cut sites are always recomputed from scratch for a sequence.
"""

from __future__ import annotations

from collections import OrderedDict
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from ..core.patterns import IUPAC_PATTERNS, find_overlapping
from ..exceptions import CatalogError
from ..models import CutSite, Overhang, RestrictionEnzyme


DEFAULT_CATALOG = Path(__file__).parent.parent / "data" / "enzymes.tsv"


def load_enzyme_catalog(catalog_file: Optional[Path] = None) -> Tuple[RestrictionEnzyme, ...]:
    """
    Load a restriction enzyme catalog.
    
    Each non-comment line holds ``name, recognition_seq, cut_sense,
    cut_antisense, overhang`` separated by tabs.
    
    Args:
        catalog_file: Catalog path; the built-in catalog when omitted
        
    Returns:
        Enzymes in file order
    """
    path = Path(catalog_file) if catalog_file else DEFAULT_CATALOG
    return _load_catalog(path.resolve())


@lru_cache(maxsize=8)
def _load_catalog(path: Path) -> Tuple[RestrictionEnzyme, ...]:
    if not path.exists():
        raise CatalogError("file not found", catalog_file=str(path))
    
    enzymes = []
    seen = set()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                
                parts = line.split('\t')
                if len(parts) != 5:
                    raise CatalogError(
                        f"line {line_number}: expected 5 tab-separated fields, got {len(parts)}",
                        catalog_file=str(path)
                    )
                
                name, site, cut_sense, cut_antisense, overhang = parts
                site = site.upper()
                if not site or any(base not in IUPAC_PATTERNS for base in site):
                    raise CatalogError(
                        f"line {line_number}: invalid recognition sequence {site!r}",
                        catalog_file=str(path)
                    )
                if name in seen:
                    logger.warning(f"Duplicate enzyme {name} in {path}, keeping first entry")
                    continue
                seen.add(name)
                
                enzymes.append(RestrictionEnzyme(
                    name=name,
                    recognition_seq=site,
                    cut_sense=int(cut_sense),
                    cut_antisense=int(cut_antisense),
                    overhang=Overhang(overhang),
                ))
    except (IOError, ValueError) as e:
        raise CatalogError(f"failed to read catalog: {e}", catalog_file=str(path)) from e
    
    logger.debug(f"Loaded {len(enzymes)} enzymes from {path.name}")
    return tuple(enzymes)


def get_enzyme(name: str, catalog: Optional[Iterable[RestrictionEnzyme]] = None) -> Optional[RestrictionEnzyme]:
    """Look up an enzyme by name (case-insensitive)."""
    wanted = name.lower()
    for enzyme in catalog if catalog is not None else load_enzyme_catalog():
        if enzyme.name.lower() == wanted:
            return enzyme
    return None


def select_enzymes(
    names: Iterable[str],
    catalog: Optional[Iterable[RestrictionEnzyme]] = None,
) -> List[RestrictionEnzyme]:
    """
    Pick enzymes from the catalog by name.
    
    Raises:
        CatalogError: if a name is not in the catalog
    """
    catalog = tuple(catalog) if catalog is not None else load_enzyme_catalog()
    selected = []
    for name in names:
        enzyme = get_enzyme(name, catalog)
        if enzyme is None:
            raise CatalogError(f"unknown enzyme: {name}")
        selected.append(enzyme)
    return selected


def find_cut_sites(sequence: str, enzymes: Optional[Iterable[RestrictionEnzyme]] = None) -> List[CutSite]:
    """
    Find every recognition site of every enzyme in a sequence.
    
    Overlapping occurrences are reported. No search is made across the
    origin of a circular molecule.
    
    Args:
        sequence: DNA sequence
        enzymes: Enzymes to search for; the built-in catalog when omitted
        
    Returns:
        Cut sites sorted by recognition start position
    """
    if enzymes is None:
        enzymes = load_enzyme_catalog()
    
    upper_seq = sequence.upper()
    sites = []
    for enzyme in enzymes:
        for position in find_overlapping(enzyme.recognition_seq, upper_seq):
            sites.append(CutSite(
                enzyme=enzyme,
                position=position,
                cut_position=position + enzyme.cut_sense,
            ))
    
    sites.sort(key=lambda site: site.position)
    return sites


def group_sites_by_enzyme(sites: Iterable[CutSite]) -> Dict[str, List[CutSite]]:
    """Group cut sites by enzyme name, preserving discovery order."""
    groups: Dict[str, List[CutSite]] = OrderedDict()
    for site in sites:
        groups.setdefault(site.enzyme.name, []).append(site)
    return groups


def unique_cutters(
    sites: Iterable[CutSite],
    enzymes: Optional[Iterable[RestrictionEnzyme]] = None,
) -> List[str]:
    """Names of enzymes that cut exactly once, in catalog order."""
    groups = group_sites_by_enzyme(sites)
    if enzymes is None:
        enzymes = load_enzyme_catalog()
    return [e.name for e in enzymes if len(groups.get(e.name, [])) == 1]


def enzymes_cutting_both(
    sites_a: Iterable[CutSite],
    sites_b: Iterable[CutSite],
    enzymes: Optional[Iterable[RestrictionEnzyme]] = None,
) -> List[str]:
    """Names of enzymes with at least one site in each of two sequences."""
    groups_a = group_sites_by_enzyme(sites_a)
    groups_b = group_sites_by_enzyme(sites_b)
    if enzymes is None:
        enzymes = load_enzyme_catalog()
    return [e.name for e in enzymes if groups_a.get(e.name) and groups_b.get(e.name)]
