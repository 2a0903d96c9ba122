"""Custom exceptions for the sequence analysis engine."""

from typing import Optional, Tuple


class EngineError(Exception):
    """Base exception for all engine errors."""
    pass


class ParseError(EngineError):
    """Exception raised while reading a sequence file."""
    
    def __init__(self, message: str, line_number: int = None, line_content: str = None):
        self.line_number = line_number
        self.line_content = line_content
        
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        if line_content is not None:
            message = f"{message} (content: {line_content[:50]}...)"
            
        super().__init__(message)


class CatalogError(EngineError):
    """Exception raised when a restriction enzyme catalog cannot be loaded."""
    
    def __init__(self, message: str, catalog_file: str = None):
        self.catalog_file = catalog_file
        
        if catalog_file is not None:
            message = f"Enzyme catalog {catalog_file}: {message}"
            
        super().__init__(message)


class AlignmentError(EngineError):
    """Exception raised when pairwise alignment inputs are rejected."""
    
    def __init__(self, message: str, seq_lengths: Optional[Tuple[int, int]] = None):
        self.seq_lengths = seq_lengths
        
        if seq_lengths is not None:
            message = f"{message} (lengths: {seq_lengths[0]} x {seq_lengths[1]})"
            
        super().__init__(message)


class ConfigurationError(EngineError):
    """Exception raised for configuration errors."""
    
    def __init__(self, message: str, config_file: str = None, parameter: str = None):
        self.config_file = config_file
        self.parameter = parameter
        
        if config_file is not None:
            message = f"Configuration error in {config_file}: {message}"
        if parameter is not None:
            message = f"{message} (parameter: {parameter})"
            
        super().__init__(message)


class ReportError(EngineError):
    """Exception raised when an analysis report cannot be written."""
    
    def __init__(self, message: str, output_file: str = None):
        self.output_file = output_file
        
        if output_file is not None:
            message = f"Failed to write {output_file}: {message}"
            
        super().__init__(message)
