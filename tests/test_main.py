#!/usr/bin/env python3
"""
End-to-end tests for the analysis runner and command line interface.
"""

import pytest

from vseq_engine.config import AnalysisConfig
from vseq_engine.core.alignment import global_align
from vseq_engine.exceptions import ReportError
from vseq_engine.main import main, run_analysis
from vseq_engine.reports import format_alignment, write_cut_sites


@pytest.fixture
def genbank_file(tmp_path, genbank_text):
    path = tmp_path / "plasmid.gb"
    path.write_text(genbank_text)
    return path


@pytest.fixture
def fasta_file(tmp_path):
    path = tmp_path / "other.fa"
    path.write_text(">other\nATGAAAGAATTCAAATAAGGATCC\n")
    return path


def _rows(path):
    return path.read_text().strip().split("\n")


def test_run_analysis(tmp_path, genbank_file, fasta_file):
    config = AnalysisConfig(
        input_file=genbank_file,
        output_dir=tmp_path / "out",
        min_orf_aa=5,
        enzymes=["EcoRI", "BamHI"],
        primer_region=(10, 50),
        align_to=fasta_file,
        align_mode="local",
    )
    written = run_analysis(config)
    
    assert set(written) == {
        "cut_sites", "fragments", "gel_ladder", "orfs", "codon_usage", "primers", "alignment", "summary"
    }
    for path in written.values():
        assert path.exists()
    
    cut_rows = _rows(written["cut_sites"])
    assert cut_rows[0].split("\t")[0] == "enzyme"
    assert [row.split("\t")[:2] for row in cut_rows[1:]] == [["EcoRI", "GAATTC"], ["BamHI", "GGATCC"]]
    
    fragment_lengths = [int(row.split("\t")[3]) for row in _rows(written["fragments"])[1:]]
    assert fragment_lengths == [48, 12]
    
    ladder_rows = _rows(written["gel_ladder"])
    assert len(ladder_rows) == 13
    assert ladder_rows[1] == "10000\t0.000"
    
    assert len(_rows(written["codon_usage"])) == 65
    assert "Score: 48" in written["alignment"].read_text()
    
    summary = written["summary"].read_text()
    assert "Name: pTEST" in summary
    assert "Topology: circular" in summary
    assert "Length: 60 bp" in summary


def test_whole_catalog_without_digest(tmp_path, genbank_file):
    config = AnalysisConfig(input_file=genbank_file, output_dir=tmp_path / "out")
    written = run_analysis(config)
    
    assert "fragments" not in written
    assert "primers" not in written
    assert "alignment" not in written
    names = [row.split("\t")[0] for row in _rows(written["cut_sites"])[1:]]
    assert "EcoRI" in names and "BamHI" in names


def test_cli(tmp_path, genbank_file):
    out = tmp_path / "cli"
    main([str(genbank_file), "-o", str(out), "--enzymes", "EcoRI", "--min-orf-aa", "5",
          "--log-level", "WARNING"])
    
    assert (out / "cut_sites.tsv").exists()
    assert (out / "fragments.tsv").exists()
    assert (out / "gel_ladder.tsv").exists()
    assert (out / "summary.txt").exists()
    assert len(_rows(out / "orfs.tsv")) == 2


def test_cli_with_config_file(tmp_path, genbank_file):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"output_dir: {tmp_path / 'from_yaml'}\nmin_orf_aa: 5\n")
    
    main([str(genbank_file), "--config", str(config_file)])
    
    assert (tmp_path / "from_yaml" / "orfs.tsv").exists()


def test_cli_missing_input(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.gb")])
    assert excinfo.value.code == 1


def test_cli_unknown_enzyme(tmp_path, genbank_file):
    with pytest.raises(SystemExit) as excinfo:
        main([str(genbank_file), "-o", str(tmp_path / "out"), "--enzymes", "Bogus"])
    assert excinfo.value.code == 1


def test_cli_non_integer_primer_region(tmp_path, genbank_file):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("primer_region: [a, 10]\n")
    
    with pytest.raises(SystemExit) as excinfo:
        main([str(genbank_file), "-o", str(tmp_path / "out"), "--config", str(config_file)])
    assert excinfo.value.code == 1


def test_cli_unreadable_sequence(tmp_path):
    path = tmp_path / "junk.gb"
    path.write_text("LOCUS       junk\n//\n")
    
    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "-o", str(tmp_path / "out")])
    assert excinfo.value.code == 1


def test_format_alignment():
    text = format_alignment(global_align("ACGT", "AGT"), "first", "second")
    lines = text.split("\n")
    
    assert lines[0] == "Score: 5"
    assert lines[4] == "first   ACGT"
    assert lines[5] == "        | ||"
    assert lines[6] == "second  A-GT"


def test_report_error(tmp_path):
    with pytest.raises(ReportError):
        write_cut_sites([], tmp_path / "missing_dir" / "cut_sites.tsv")
