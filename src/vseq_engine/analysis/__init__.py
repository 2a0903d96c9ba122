"""Analysis modules built on the core sequence model."""

from .restriction import (
    load_enzyme_catalog, get_enzyme, select_enzymes, find_cut_sites,
    group_sites_by_enzyme, unique_cutters, enzymes_cutting_both
)
from .digestion import DNA_LADDER, simulate_digestion, get_gel_migration, ladder_migrations
from .orf_finder import find_orfs_in_frame, find_all_orfs, translate_orf
from .codon_usage import REFERENCE_TABLES, analyze_codon_usage, cds_sequences
from .primer_design import PrimerOptions, calculate_tm, design_primers
from .cloning import simulate_ligation

__all__ = [
    "load_enzyme_catalog",
    "get_enzyme",
    "select_enzymes",
    "find_cut_sites",
    "group_sites_by_enzyme",
    "unique_cutters",
    "enzymes_cutting_both",
    "simulate_digestion",
    "DNA_LADDER",
    "get_gel_migration",
    "ladder_migrations",
    "find_orfs_in_frame",
    "find_all_orfs",
    "translate_orf",
    "REFERENCE_TABLES",
    "analyze_codon_usage",
    "cds_sequences",
    "PrimerOptions",
    "calculate_tm",
    "design_primers",
    "simulate_ligation"
]
