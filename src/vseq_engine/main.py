#!/usr/bin/env python3
"""
Main analysis module for the sequence analysis engine.

This module provides the command line entry point and runs every analysis
requested by an :class:`AnalysisConfig` over one input record.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from . import reports
from .analysis.codon_usage import REFERENCE_TABLES, analyze_codon_usage, cds_sequences
from .analysis.digestion import simulate_digestion
from .analysis.orf_finder import find_all_orfs, translate_orf
from .analysis.primer_design import design_primers
from .analysis.restriction import find_cut_sites, load_enzyme_catalog, select_enzymes, unique_cutters
from .config import ALIGN_MODES, LOG_LEVELS, AnalysisConfig
from .core.alignment import align_sequences
from .core.readers import read_sequence_file
from .core.sequence_utils import sequence_stats
from .core.translation import reverse_complement
from .exceptions import ConfigurationError, EngineError, ParseError
from .models import Sequence, Strand


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {message}"


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging configuration."""
    logger.remove()
    logger.add(sys.stdout, level=log_level.upper(), format=LOG_FORMAT)


def _load_record(path: Path) -> Sequence:
    record = read_sequence_file(path)
    if record is None:
        raise ParseError(f"No sequence could be read from {path}")
    return record


def _codon_usage_source(record: Sequence, orfs) -> Optional[str]:
    """First annotated CDS, falling back to the longest ORF."""
    coding = cds_sequences(record)
    if coding:
        name, sequence = next(iter(coding.items()))
        logger.debug(f"Codon usage from CDS {name}")
        return sequence
    if orfs:
        orf = orfs[0]
        sequence = record.sequence[orf.start:orf.end]
        logger.debug(f"Codon usage from longest ORF (frame {orf.frame:+d})")
        return reverse_complement(sequence) if orf.strand == Strand.REVERSE else sequence
    return None


def run_analysis(config: AnalysisConfig) -> Dict[str, Path]:
    """
    Run the configured analyses and write their reports.
    
    Args:
        config: Analysis configuration
    
    Returns:
        Report name to written path
    """
    config.output_dir.mkdir(parents=True, exist_ok=True)
    
    logger.info("Starting sequence analysis")
    logger.info(f"Input file: {config.input_file}")
    logger.info(f"Output directory: {config.output_dir}")
    
    written: Dict[str, Path] = {}
    
    # Step 1: Read the record
    logger.info("Step 1: Reading sequence...")
    record = _load_record(config.input_file)
    stats = sequence_stats(record)
    logger.info(
        f"Read {record.name}: {stats.length} bp, "
        f"{'circular' if record.circular else 'linear'}, {len(record.features)} features"
    )
    
    # Step 2: Restriction sites and digestion
    logger.info("Step 2: Mapping restriction sites...")
    if config.enzymes:
        enzymes = select_enzymes(config.enzymes)
    else:
        enzymes = load_enzyme_catalog()
    sites = find_cut_sites(record.sequence, enzymes)
    cutters = unique_cutters(sites, enzymes)
    logger.info(f"Found {len(sites)} sites, {len(cutters)} unique cutters")
    written['cut_sites'] = reports.write_cut_sites(sites, config.output_dir / "cut_sites.tsv")
    
    if config.enzymes:
        fragments = simulate_digestion(record.sequence, sites, record.circular)
        logger.info(f"Digest with {', '.join(config.enzymes)} gives {len(fragments)} fragments")
        written['fragments'] = reports.write_fragments(fragments, config.output_dir / "fragments.tsv")
        written['gel_ladder'] = reports.write_gel_ladder(fragments, config.output_dir / "gel_ladder.tsv")
    
    # Step 3: Open reading frames
    logger.info("Step 3: Scanning open reading frames...")
    orfs = find_all_orfs(record.sequence, config.min_orf_aa)
    proteins = [translate_orf(record.sequence, orf) for orf in orfs]
    logger.info(f"Found {len(orfs)} ORFs of at least {config.min_orf_aa} aa")
    written['orfs'] = reports.write_orfs(orfs, proteins, config.output_dir / "orfs.tsv")
    
    # Step 4: Codon usage
    logger.info("Step 4: Tabulating codon usage...")
    codon_usage = None
    coding = _codon_usage_source(record, orfs)
    if coding:
        codon_usage = analyze_codon_usage(coding, config.codon_reference)
        logger.info(f"CAI {codon_usage.cai:.3f} against {config.codon_reference}")
        written['codon_usage'] = reports.write_codon_usage(codon_usage, config.output_dir / "codon_usage.tsv")
    else:
        logger.warning("No CDS or ORF available for codon usage")
    
    # Step 5: Primers
    if config.primer_region is not None:
        logger.info("Step 5: Designing primers...")
        start, end = config.primer_region
        pairs = design_primers(record.sequence, start, end, config.primer_options)
        if pairs:
            logger.info(f"Designed {len(pairs)} primer pairs")
        else:
            logger.warning(f"No primer pairs found for region {start}-{end}")
        written['primers'] = reports.write_primer_pairs(pairs, config.output_dir / "primers.tsv")
    
    # Step 6: Pairwise alignment
    if config.align_to is not None:
        logger.info("Step 6: Aligning sequences...")
        other = _load_record(config.align_to)
        result = align_sequences(
            record.sequence,
            other.sequence,
            mode=config.align_mode,
            scoring=config.scoring,
            max_length=config.max_alignment_length,
        )
        logger.info(f"Alignment score {result.score}, identity {result.identity:.1%}")
        written['alignment'] = reports.write_alignment(
            result, config.output_dir / "alignment.txt", record.name, other.name
        )
    
    written['summary'] = reports.write_summary(
        record,
        stats,
        config.output_dir / "summary.txt",
        codon_usage=codon_usage,
        unique_cutters=cutters,
        longest_protein=proteins[0] if proteins else None,
    )
    
    logger.info("Analysis completed successfully")
    return written


def build_parser() -> argparse.ArgumentParser:
    """Command line parser."""
    parser = argparse.ArgumentParser(
        description="Sequence analysis engine - restriction maps, ORFs, codon usage, primers and alignments"
    )
    
    parser.add_argument(
        "input",
        type=Path,
        help="Input sequence file (GenBank, FASTA or EMBL, optionally gzipped)"
    )
    
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output directory (default: output)"
    )
    
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file; command line options override it"
    )
    
    parser.add_argument(
        "--min-orf-aa",
        type=int,
        help="Minimum ORF length in amino acids (default: 100)"
    )
    
    parser.add_argument(
        "--enzymes",
        help="Comma-separated enzymes to digest with (default: map the whole catalog, no digest)"
    )
    
    parser.add_argument(
        "--primer-region",
        type=int,
        nargs=2,
        metavar=("START", "END"),
        help="0-based half-open target region for primer design"
    )
    
    parser.add_argument(
        "--align-to",
        type=Path,
        help="Second sequence file to align against the input"
    )
    
    parser.add_argument(
        "--align-mode",
        choices=list(ALIGN_MODES),
        help="Alignment mode (default: global)"
    )
    
    parser.add_argument(
        "--codon-reference",
        choices=list(REFERENCE_TABLES),
        help="Reference organism for CAI (default: E. coli K12)"
    )
    
    parser.add_argument(
        "--max-alignment-length",
        type=int,
        help="Refuse to align sequences longer than this (default: 5000)"
    )
    
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        help="Logging level (default: INFO)"
    )
    
    return parser


def main(argv=None) -> None:
    """Main entry point for command line interface."""
    args = build_parser().parse_args(argv)
    
    # Setup logging
    setup_logging(args.log_level or "INFO")
    
    try:
        config = AnalysisConfig.from_args(vars(args))
        if args.log_level is None and config.log_level != "INFO":
            setup_logging(config.log_level)
        run_analysis(config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except EngineError as e:
        logger.error(f"Analysis failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
