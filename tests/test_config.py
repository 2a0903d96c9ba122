"""Tests for analysis configuration."""

from pathlib import Path

import pytest
import yaml

from vseq_engine.analysis.primer_design import PrimerOptions
from vseq_engine.config import AnalysisConfig
from vseq_engine.core.alignment import ScoringScheme
from vseq_engine.exceptions import ConfigurationError


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "input.fa"
    path.write_text(">x\nACGT\n")
    return path


def test_defaults(input_file):
    config = AnalysisConfig(input_file=input_file)
    
    assert config.output_dir == Path("output")
    assert config.min_orf_aa == 100
    assert config.enzymes == []
    assert config.primer_region is None
    assert isinstance(config.primer_options, PrimerOptions)
    assert config.scoring == ScoringScheme()
    assert config.align_mode == "global"
    assert config.codon_reference == "E. coli K12"
    assert config.max_alignment_length == 5000
    assert config.log_level == "INFO"


def test_value_conversion(input_file):
    config = AnalysisConfig(
        input_file=str(input_file),
        output_dir="results",
        enzymes="EcoRI, BamHI,",
        primer_region=[10, 90],
        primer_options={"min_tm": 50, "max_tm": 70},
        scoring={"match": 1, "mismatch": -2, "gap_open": -3, "gap_extend": -1},
        log_level="debug",
    )
    
    assert config.input_file == input_file
    assert config.output_dir == Path("results")
    assert config.enzymes == ["EcoRI", "BamHI"]
    assert config.primer_region == (10, 90)
    assert config.primer_options.min_tm == 50
    assert config.scoring.mismatch == -2
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("overrides", [
    {"min_orf_aa": -1},
    {"align_mode": "semiglobal"},
    {"codon_reference": "Martian"},
    {"max_alignment_length": 0},
    {"log_level": "LOUD"},
    {"primer_region": (50, 10)},
    {"primer_region": (1, 2, 3)},
    {"primer_region": ("a", 10)},
    {"primer_region": (None, 10)},
    {"primer_options": {"min_length": 30, "max_length": 20}},
])
def test_invalid_values(input_file, overrides):
    with pytest.raises(ConfigurationError):
        AnalysisConfig(input_file=input_file, **overrides)


def test_missing_files(tmp_path, input_file):
    with pytest.raises(ConfigurationError):
        AnalysisConfig(input_file=tmp_path / "missing.gb")
    with pytest.raises(ConfigurationError):
        AnalysisConfig(input_file=input_file, align_to=tmp_path / "missing.fa")


class TestYamlConfig:
    """Test loading configuration from YAML."""
    
    def test_from_yaml(self, tmp_path, input_file):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({
            "input_file": str(input_file),
            "output_dir": str(tmp_path / "out"),
            "min_orf_aa": 30,
            "enzymes": ["EcoRI", "NotI"],
            "primer_region": [100, 400],
            "primer_options": {"max_tm_difference": 2.0},
            "align_mode": "local",
        }))
        
        config = AnalysisConfig.from_yaml(config_file)
        
        assert config.min_orf_aa == 30
        assert config.enzymes == ["EcoRI", "NotI"]
        assert config.primer_region == (100, 400)
        assert config.primer_options.max_tm_difference == 2.0
        assert config.align_mode == "local"
    
    def test_overrides_win(self, tmp_path, input_file):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"input_file": str(input_file), "min_orf_aa": 30}))
        
        config = AnalysisConfig.from_yaml(config_file, min_orf_aa=60, align_mode=None)
        
        assert config.min_orf_aa == 60
        assert config.align_mode == "global"
    
    def test_unknown_key(self, tmp_path, input_file):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"input_file": str(input_file), "threads": 4}))
        
        with pytest.raises(ConfigurationError):
            AnalysisConfig.from_yaml(config_file)
    
    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("min_orf_aa: [unclosed\n")
        
        with pytest.raises(ConfigurationError):
            AnalysisConfig.from_yaml(config_file)
    
    def test_non_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")
        
        with pytest.raises(ConfigurationError):
            AnalysisConfig.from_yaml(config_file)
    
    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            AnalysisConfig.from_yaml(tmp_path / "missing.yaml")


class TestArgsConfig:
    """Test building configuration from parsed arguments."""
    
    def test_from_args(self, input_file):
        config = AnalysisConfig.from_args({
            "input": input_file,
            "output": None,
            "enzymes": "EcoRI",
            "primer_region": [5, 50],
            "log_level": None,
        })
        
        assert config.enzymes == ["EcoRI"]
        assert config.primer_region == (5, 50)
        assert config.output_dir == Path("output")
    
    def test_from_args_with_config_file(self, tmp_path, input_file):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"min_orf_aa": 30, "align_mode": "local"}))
        
        config = AnalysisConfig.from_args({
            "input": input_file,
            "config": config_file,
            "min_orf_aa": 75,
        })
        
        assert config.input_file == input_file
        assert config.min_orf_aa == 75
        assert config.align_mode == "local"
