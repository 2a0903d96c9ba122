"""
Genetic code lookup, reverse complement and DNA to protein translation.
"""

from typing import Dict, List

from ..models import Strand


# Standard genetic code
CODON_TABLE: Dict[str, str] = {
    'TTT': 'F', 'TTC': 'F', 'TTA': 'L', 'TTG': 'L',
    'CTT': 'L', 'CTC': 'L', 'CTA': 'L', 'CTG': 'L',
    'ATT': 'I', 'ATC': 'I', 'ATA': 'I', 'ATG': 'M',
    'GTT': 'V', 'GTC': 'V', 'GTA': 'V', 'GTG': 'V',
    'TCT': 'S', 'TCC': 'S', 'TCA': 'S', 'TCG': 'S',
    'CCT': 'P', 'CCC': 'P', 'CCA': 'P', 'CCG': 'P',
    'ACT': 'T', 'ACC': 'T', 'ACA': 'T', 'ACG': 'T',
    'GCT': 'A', 'GCC': 'A', 'GCA': 'A', 'GCG': 'A',
    'TAT': 'Y', 'TAC': 'Y', 'TAA': '*', 'TAG': '*',
    'CAT': 'H', 'CAC': 'H', 'CAA': 'Q', 'CAG': 'Q',
    'AAT': 'N', 'AAC': 'N', 'AAA': 'K', 'AAG': 'K',
    'GAT': 'D', 'GAC': 'D', 'GAA': 'E', 'GAG': 'E',
    'TGT': 'C', 'TGC': 'C', 'TGA': '*', 'TGG': 'W',
    'CGT': 'R', 'CGC': 'R', 'CGA': 'R', 'CGG': 'R',
    'AGT': 'S', 'AGC': 'S', 'AGA': 'R', 'AGG': 'R',
    'GGT': 'G', 'GGC': 'G', 'GGA': 'G', 'GGG': 'G',
}

AA_TO_CODONS: Dict[str, List[str]] = {}
for _codon, _aa in CODON_TABLE.items():
    AA_TO_CODONS.setdefault(_aa, []).append(_codon)

STOP_CODONS = frozenset(AA_TO_CODONS['*'])
START_CODON = 'ATG'

# IUPAC complement, both cases
COMPLEMENT_MAP = {
    "A": "T", "T": "A", "G": "C", "C": "G",
    "R": "Y", "Y": "R", "S": "S", "W": "W",
    "K": "M", "M": "K", "B": "V", "V": "B",
    "D": "H", "H": "D", "N": "N",
    "a": "t", "t": "a", "g": "c", "c": "g",
    "r": "y", "y": "r", "s": "s", "w": "w",
    "k": "m", "m": "k", "b": "v", "v": "b",
    "d": "h", "h": "d", "n": "n",
}

_UNAMBIGUOUS = frozenset("ACGT")


def complement(seq: str) -> str:
    """Complement a sequence without reversing it."""
    return "".join(COMPLEMENT_MAP.get(base, base) for base in seq)


def reverse_complement(seq: str) -> str:
    """
    Get the reverse complement of a DNA sequence.
    
    Ambiguity codes map to their IUPAC complement; any other symbol is
    passed through unchanged.
    """
    return "".join(COMPLEMENT_MAP.get(base, base) for base in reversed(seq))


def translate(seq: str, strand: int = 1, stop_at_stop: bool = True) -> str:
    """
    Translate a DNA sequence into single-letter amino acids.
    
    Args:
        seq: DNA sequence, read in frame from its first base
        strand: 1 for forward, -1 to translate the reverse complement
        stop_at_stop: Halt after the first stop codon (the '*' is kept)
        
    Returns:
        Protein sequence; codons with non-ACGT bases become 'X' and a
        trailing partial codon is dropped.
    """
    if isinstance(strand, Strand):
        strand = strand.value
    dna = reverse_complement(seq) if strand == -1 else seq
    dna = dna.upper()
    
    amino_acids = []
    for i in range(0, len(dna) - 2, 3):
        codon = dna[i:i + 3]
        if not set(codon) <= _UNAMBIGUOUS:
            amino_acids.append('X')
            continue
        
        aa = CODON_TABLE[codon]
        amino_acids.append(aa)
        if stop_at_stop and aa == '*':
            break
    
    return "".join(amino_acids)


def format_amino_acid_sequence(aa_seq: str, line_length: int = 60) -> str:
    """Wrap a protein sequence into fixed-width lines."""
    return "\n".join(aa_seq[i:i + line_length] for i in range(0, len(aa_seq), line_length))
