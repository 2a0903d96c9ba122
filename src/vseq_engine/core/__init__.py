"""Core sequence handling modules: readers, translation, patterns and alignment."""

from .readers import (
    parse_genbank, parse_fasta, parse_embl, parse_gff3,
    annotate_with_gff3, detect_format, parse_sequence_text, read_sequence_file
)
from .translation import complement, reverse_complement, translate, format_amino_acid_sequence
from .patterns import iupac_to_regex, find_overlapping
from .alignment import ScoringScheme, global_align, local_align, align_sequences
from .sequence_utils import clean_sequence, calculate_gc_content, estimate_tm, sequence_stats, extract_feature_sequence

__all__ = [
    "parse_genbank",
    "parse_fasta",
    "parse_embl",
    "parse_gff3",
    "annotate_with_gff3",
    "detect_format",
    "parse_sequence_text",
    "read_sequence_file",
    "complement",
    "reverse_complement",
    "translate",
    "format_amino_acid_sequence",
    "iupac_to_regex",
    "find_overlapping",
    "ScoringScheme",
    "global_align",
    "local_align",
    "align_sequences",
    "clean_sequence",
    "calculate_gc_content",
    "estimate_tm",
    "sequence_stats",
    "extract_feature_sequence"
]
