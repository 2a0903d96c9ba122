"""IUPAC-aware degenerate motif matching."""

import re
from functools import lru_cache
from typing import Iterator, Pattern


# IUPAC to regex pattern mapping
IUPAC_PATTERNS = {
    "A": "A", "T": "T", "G": "G", "C": "C",
    "B": "[CGT]", "D": "[AGT]", "H": "[ACT]",
    "K": "[GT]", "M": "[AC]", "N": "[ACGT]",
    "R": "[AG]", "S": "[CG]", "V": "[ACG]",
    "W": "[AT]", "Y": "[CT]"
}


def iupac_to_pattern(seq: str) -> str:
    """Convert a recognition sequence with IUPAC codes to a regex string."""
    return "".join(IUPAC_PATTERNS.get(base, re.escape(base)) for base in seq.upper())


@lru_cache(maxsize=512)
def iupac_to_regex(seq: str) -> Pattern:
    """Compiled matcher for a recognition sequence."""
    return re.compile(iupac_to_pattern(seq))


def find_overlapping(motif: str, text: str) -> Iterator[int]:
    """
    Yield every start index where ``motif`` matches ``text``.
    
    Scanning resumes one base after each match start so tiling and
    overlapping occurrences are all reported. ``text`` is expected to be
    uppercase.
    """
    if not motif:
        return
    regex = iupac_to_regex(motif)
    pos = 0
    while True:
        match = regex.search(text, pos)
        if match is None:
            return
        yield match.start()
        pos = match.start() + 1
