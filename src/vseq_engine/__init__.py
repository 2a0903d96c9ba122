"""Sequence analysis engine.

Readers for GenBank, FASTA, EMBL and GFF3, plus restriction mapping,
digestion, ORF finding, codon usage, primer design and pairwise alignment
over an in-memory sequence model.
"""

__version__ = "1.0.0"

from .config import AnalysisConfig
from .models import (
    Strand, Overhang, Feature, Sequence, RestrictionEnzyme, CutSite, DigestFragment,
    ORF, CodonCount, CodonUsageResult, Primer, PrimerPair, AlignmentResult,
    SequenceStats, LigationResult
)
from .core import (
    parse_genbank, parse_fasta, parse_embl, parse_gff3, annotate_with_gff3,
    parse_sequence_text, read_sequence_file,
    reverse_complement, translate,
    ScoringScheme, global_align, local_align, align_sequences,
    sequence_stats, extract_feature_sequence
)
from .analysis import (
    load_enzyme_catalog, find_cut_sites, simulate_digestion, find_all_orfs,
    REFERENCE_TABLES, analyze_codon_usage, PrimerOptions, design_primers,
    simulate_ligation
)
from .main import run_analysis

__all__ = [
    "__version__",
    "AnalysisConfig",
    "Strand",
    "Overhang",
    "Feature",
    "Sequence",
    "RestrictionEnzyme",
    "CutSite",
    "DigestFragment",
    "ORF",
    "CodonCount",
    "CodonUsageResult",
    "Primer",
    "PrimerPair",
    "AlignmentResult",
    "SequenceStats",
    "LigationResult",
    "parse_genbank",
    "parse_fasta",
    "parse_embl",
    "parse_gff3",
    "annotate_with_gff3",
    "parse_sequence_text",
    "read_sequence_file",
    "reverse_complement",
    "translate",
    "ScoringScheme",
    "global_align",
    "local_align",
    "align_sequences",
    "sequence_stats",
    "extract_feature_sequence",
    "load_enzyme_catalog",
    "find_cut_sites",
    "simulate_digestion",
    "find_all_orfs",
    "REFERENCE_TABLES",
    "analyze_codon_usage",
    "PrimerOptions",
    "design_primers",
    "simulate_ligation",
    "run_analysis"
]
