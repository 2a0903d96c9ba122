"""Data models for the sequence analysis engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional


class Strand(Enum):
    """DNA strand orientation."""
    FORWARD = 1
    REVERSE = -1


class Overhang(Enum):
    """End produced by a restriction enzyme cut."""
    BLUNT = "blunt"
    FIVE_PRIME = "5prime"
    THREE_PRIME = "3prime"


@dataclass
class Feature:
    """Annotated region of a sequence (1-based, inclusive coordinates)."""
    
    start: int
    end: int
    type: str
    strand: Strand = Strand.FORWARD
    label: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    
    @property
    def name(self) -> str:
        """Display name: the label when present, otherwise the type."""
        return self.label or self.type
    
    @property
    def wraps_origin(self) -> bool:
        """True when the region runs through the origin of a circular molecule."""
        return self.end < self.start
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['strand'] = self.strand.value
        return data
    
    @classmethod
    def from_dict(cls, data: Dict) -> "Feature":
        """Create from dictionary."""
        data = dict(data)
        if not isinstance(data.get('strand', Strand.FORWARD), Strand):
            data['strand'] = Strand(data['strand'])
        data['attributes'] = dict(data.get('attributes') or {})
        return cls(**data)


@dataclass
class Sequence:
    """A nucleotide sequence and the features annotated on it."""
    
    name: str
    sequence: str
    circular: bool = False
    features: List[Feature] = field(default_factory=list)
    
    def __post_init__(self):
        self.sequence = self.sequence.upper()
    
    def __len__(self) -> int:
        return len(self.sequence)
    
    def with_features(self, features: List[Feature]) -> "Sequence":
        """Return a copy carrying a new feature list."""
        return replace(self, features=list(features))
    
    def features_of_type(self, feature_type: str) -> List[Feature]:
        """Features whose type matches, ignoring case."""
        wanted = feature_type.lower()
        return [f for f in self.features if f.type.lower() == wanted]
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'sequence': self.sequence,
            'circular': self.circular,
            'features': [f.to_dict() for f in self.features],
        }
    
    @classmethod
    def from_dict(cls, data: Dict) -> "Sequence":
        """Create from dictionary."""
        return cls(
            name=data['name'],
            sequence=data['sequence'],
            circular=data.get('circular', False),
            features=[Feature.from_dict(f) for f in data.get('features', [])],
        )


@dataclass(frozen=True)
class RestrictionEnzyme:
    """Restriction enzyme reference data."""
    
    name: str
    recognition_seq: str
    cut_sense: int
    cut_antisense: int
    overhang: Overhang
    
    @property
    def site_length(self) -> int:
        """Get recognition sequence length."""
        return len(self.recognition_seq)
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['overhang'] = self.overhang.value
        return data
    
    @classmethod
    def from_dict(cls, data: Dict) -> "RestrictionEnzyme":
        """Create from dictionary."""
        data = dict(data)
        if not isinstance(data['overhang'], Overhang):
            data['overhang'] = Overhang(data['overhang'])
        return cls(**data)


@dataclass
class CutSite:
    """One occurrence of an enzyme recognition site."""
    
    enzyme: RestrictionEnzyme
    position: int  # 0-based start of the recognition sequence
    cut_position: int  # 0-based index where the sense strand is cleaved
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            'enzyme': self.enzyme.name,
            'position': self.position,
            'cut_position': self.cut_position,
        }


@dataclass
class DigestFragment:
    """Fragment produced by an in-silico digest."""
    
    index: int
    start: int
    end: int  # exclusive; exceeds the parent length for fragments crossing the origin
    length: int
    sequence: str
    is_linear: bool = True
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ORF:
    """Open reading frame in forward-strand coordinates (0-based, end exclusive)."""
    
    frame: int
    start: int
    end: int
    length: int
    aa_length: int
    strand: Strand
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['strand'] = self.strand.value
        return data


@dataclass
class CodonCount:
    """Usage statistics for a single codon."""
    
    codon: str
    aa: str
    count: int = 0
    frequency: float = 0.0
    fraction_of_aa: float = 0.0
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class CodonUsageResult:
    """Codon usage summary of a coding region."""
    
    total_codons: int = 0
    counts: List[CodonCount] = field(default_factory=list)
    cai: float = 0.0
    gc_content: float = 0.0
    gc3_content: float = 0.0
    reference: str = ""
    
    def count_for(self, codon: str) -> Optional[CodonCount]:
        """Get the row for a codon."""
        codon = codon.upper()
        for row in self.counts:
            if row.codon == codon:
                return row
        return None
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class Primer:
    """Primer candidate (0-based, half-open template coordinates)."""
    
    sequence: str = ""
    start: int = 0
    end: int = 0
    strand: Strand = Strand.FORWARD
    length: int = 0
    tm: float = 0.0
    gc_percent: float = 0.0
    self_complementarity: float = 0.0
    has_gc_clamp: bool = False
    name: str = ""
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['strand'] = self.strand.value
        return data


@dataclass
class PrimerPair:
    """Forward and reverse primer flanking a PCR product."""
    
    forward: Primer = field(default_factory=Primer)
    reverse: Primer = field(default_factory=lambda: Primer(strand=Strand.REVERSE))
    product_size: int = 0
    
    @property
    def tm_difference(self) -> float:
        """Absolute melting temperature difference between the primers."""
        return abs(self.forward.tm - self.reverse.tm)
    
    @property
    def combined_self_complementarity(self) -> float:
        return self.forward.self_complementarity + self.reverse.self_complementarity
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            'forward': self.forward.to_dict(),
            'reverse': self.reverse.to_dict(),
            'product_size': self.product_size,
        }


@dataclass
class AlignmentResult:
    """Pairwise alignment of two sequences."""
    
    aligned_seq1: str = ""
    aligned_seq2: str = ""
    match_line: str = ""
    score: float = 0
    identity: float = 0.0
    gaps: int = 0
    length: int = 0
    start_seq1: int = 0
    start_seq2: int = 0
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class SequenceStats:
    """Composition summary of a sequence."""
    
    length: int = 0
    counts: Dict[str, int] = field(default_factory=dict)
    gc_content: float = 0.0
    mw_ssdna: float = 0.0
    mw_dsdna: float = 0.0
    feature_types: Dict[str, int] = field(default_factory=dict)
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class LigationResult:
    """Construct produced by inserting a fragment into a cut vector."""
    
    sequence: str
    length: int
    description: str
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)
