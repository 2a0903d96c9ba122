"""Configuration management for sequence analysis runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from .analysis.codon_usage import DEFAULT_REFERENCE, REFERENCE_TABLES
from .analysis.primer_design import PrimerOptions
from .core.alignment import ScoringScheme
from .exceptions import ConfigurationError


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
ALIGN_MODES = ("global", "local")


@dataclass
class AnalysisConfig:
    """Analysis run configuration settings."""
    
    input_file: Path
    output_dir: Path = Path("output")
    min_orf_aa: int = 100
    enzymes: List[str] = field(default_factory=list)
    primer_region: Optional[Tuple[int, int]] = None
    primer_options: PrimerOptions = field(default_factory=PrimerOptions)
    scoring: ScoringScheme = field(default_factory=ScoringScheme)
    align_to: Optional[Path] = None
    align_mode: str = "global"
    codon_reference: str = DEFAULT_REFERENCE
    max_alignment_length: int = 5000
    log_level: str = "INFO"
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        self.input_file = Path(self.input_file)
        self.output_dir = Path(self.output_dir)
        if self.align_to is not None:
            self.align_to = Path(self.align_to)
        if isinstance(self.primer_options, dict):
            self.primer_options = PrimerOptions(**self.primer_options)
        if isinstance(self.scoring, dict):
            self.scoring = ScoringScheme(**self.scoring)
        if isinstance(self.enzymes, str):
            self.enzymes = [name.strip() for name in self.enzymes.split(",") if name.strip()]
        self.log_level = self.log_level.upper()
        
        if not self.input_file.exists():
            raise ConfigurationError(f"Input file not found: {self.input_file}")
        
        if self.align_to is not None and not self.align_to.exists():
            raise ConfigurationError(f"Alignment target not found: {self.align_to}", parameter="align_to")
        
        if self.min_orf_aa < 0:
            raise ConfigurationError(f"Invalid min_orf_aa: {self.min_orf_aa}", parameter="min_orf_aa")
        
        if self.align_mode not in ALIGN_MODES:
            raise ConfigurationError(f"Invalid align_mode: {self.align_mode}", parameter="align_mode")
        
        if self.codon_reference not in REFERENCE_TABLES:
            raise ConfigurationError(
                f"Unknown codon reference: {self.codon_reference}", parameter="codon_reference"
            )
        
        if self.max_alignment_length <= 0:
            raise ConfigurationError(
                f"Invalid max_alignment_length: {self.max_alignment_length}",
                parameter="max_alignment_length"
            )
        
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log_level: {self.log_level}", parameter="log_level")
        
        if self.primer_region is not None:
            if len(self.primer_region) != 2:
                raise ConfigurationError(
                    f"primer_region needs a start and an end: {self.primer_region}",
                    parameter="primer_region"
                )
            try:
                start, end = (int(x) for x in self.primer_region)
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"primer_region must be two integers: {self.primer_region}",
                    parameter="primer_region"
                ) from None
            if start < 0 or end <= start:
                raise ConfigurationError(f"Invalid primer_region: {start}-{end}", parameter="primer_region")
            self.primer_region = (start, end)
    
    @classmethod
    def from_yaml(cls, yaml_file: Path, **overrides) -> "AnalysisConfig":
        """
        Load configuration from a YAML file.
        
        Keyword overrides (e.g. from the command line) win over file values;
        ``None`` overrides are ignored.
        """
        yaml_file = Path(yaml_file)
        if not yaml_file.exists():
            raise ConfigurationError(f"Config file not found: {yaml_file}")
        
        try:
            with open(yaml_file, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML config: {e}", config_file=str(yaml_file))
        
        if not isinstance(data, dict):
            raise ConfigurationError("Top level must be a mapping", config_file=str(yaml_file))
        
        data.update({k: v for k, v in overrides.items() if v is not None})
        if 'primer_region' in data and data['primer_region'] is not None:
            data['primer_region'] = tuple(data['primer_region'])
        
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid config parameters: {e}", config_file=str(yaml_file))
    
    @classmethod
    def from_args(cls, args: dict) -> "AnalysisConfig":
        """Create configuration from command-line arguments."""
        # Map command-line argument names to config field names
        arg_mapping = {
            'input': 'input_file',
            'output': 'output_dir',
            'min_orf_aa': 'min_orf_aa',
            'enzymes': 'enzymes',
            'primer_region': 'primer_region',
            'align_to': 'align_to',
            'align_mode': 'align_mode',
            'codon_reference': 'codon_reference',
            'max_alignment_length': 'max_alignment_length',
            'log_level': 'log_level',
        }
        
        config_args = {}
        for arg_name, config_name in arg_mapping.items():
            if arg_name in args and args[arg_name] is not None:
                config_args[config_name] = args[arg_name]
        
        if 'primer_region' in config_args:
            config_args['primer_region'] = tuple(config_args['primer_region'])
        
        config_file = args.get('config')
        if config_file:
            return cls.from_yaml(config_file, **config_args)
        return cls(**config_args)
