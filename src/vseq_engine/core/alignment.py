#!/usr/bin/env python3
"""
Pairwise sequence alignment module.

Global (Needleman-Wunsch) and local (Smith-Waterman) dynamic-programming
alignment sharing one scoring model and one traceback. Both fill a full
(m+1) x (n+1) table, so callers should bound input lengths.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from loguru import logger

from ..exceptions import AlignmentError
from ..models import AlignmentResult


@dataclass
class ScoringScheme:
    """Match/mismatch/gap scores shared by both algorithms."""
    
    match: float = 2
    mismatch: float = -1
    gap_open: float = -5
    gap_extend: float = -1
    
    def substitution(self, a: str, b: str) -> float:
        """Score for aligning two bases against each other."""
        return self.match if a == b else self.mismatch
    
    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: Dict) -> "ScoringScheme":
        """Create from dictionary."""
        return cls(**data)


DEFAULT_SCORING = ScoringScheme()


def _empty_table(m: int, n: int) -> List[List[float]]:
    return [[0] * (n + 1) for _ in range(m + 1)]


def global_align(seq1: str, seq2: str, scoring: Optional[ScoringScheme] = None) -> AlignmentResult:
    """
    Needleman-Wunsch global alignment.
    
    Row and column zero are seeded with ``gap_open + k * gap_extend``; the
    recurrence itself charges only ``gap_extend`` per gap column.
    """
    s = scoring or DEFAULT_SCORING
    seq1, seq2 = seq1.upper(), seq2.upper()
    m, n = len(seq1), len(seq2)
    
    dp = _empty_table(m, n)
    for i in range(1, m + 1):
        dp[i][0] = s.gap_open + i * s.gap_extend
    for j in range(1, n + 1):
        dp[0][j] = s.gap_open + j * s.gap_extend
    
    for i in range(1, m + 1):
        row, prev = dp[i], dp[i - 1]
        a = seq1[i - 1]
        for j in range(1, n + 1):
            row[j] = max(
                prev[j - 1] + s.substitution(a, seq2[j - 1]),
                prev[j] + s.gap_extend,
                row[j - 1] + s.gap_extend,
            )
    
    return _traceback(dp, seq1, seq2, s, m, n, local=False)


def local_align(seq1: str, seq2: str, scoring: Optional[ScoringScheme] = None) -> AlignmentResult:
    """
    Smith-Waterman local alignment.
    
    Cells are floored at zero and the traceback starts from the first cell
    (row-major) holding the maximal score.
    """
    s = scoring or DEFAULT_SCORING
    seq1, seq2 = seq1.upper(), seq2.upper()
    m, n = len(seq1), len(seq2)
    
    dp = _empty_table(m, n)
    max_score = 0
    max_i = max_j = 0
    
    for i in range(1, m + 1):
        row, prev = dp[i], dp[i - 1]
        a = seq1[i - 1]
        for j in range(1, n + 1):
            value = max(
                0,
                prev[j - 1] + s.substitution(a, seq2[j - 1]),
                prev[j] + s.gap_extend,
                row[j - 1] + s.gap_extend,
            )
            row[j] = value
            if value > max_score:
                max_score = value
                max_i, max_j = i, j
    
    return _traceback(dp, seq1, seq2, s, max_i, max_j, local=True)


def _traceback(
    dp: List[List[float]],
    seq1: str,
    seq2: str,
    s: ScoringScheme,
    end_i: int,
    end_j: int,
    local: bool,
) -> AlignmentResult:
    """Walk back from (end_i, end_j), preferring the diagonal move."""
    aligned1: List[str] = []
    aligned2: List[str] = []
    match_line: List[str] = []
    matches = 0
    gaps = 0
    i, j = end_i, end_j
    
    while i > 0 or j > 0:
        if local and dp[i][j] == 0:
            break
        
        if i > 0 and j > 0 and dp[i][j] == dp[i - 1][j - 1] + s.substitution(seq1[i - 1], seq2[j - 1]):
            aligned1.append(seq1[i - 1])
            aligned2.append(seq2[j - 1])
            if seq1[i - 1] == seq2[j - 1]:
                match_line.append('|')
                matches += 1
            else:
                match_line.append('.')
            i -= 1
            j -= 1
        elif i > 0 and (j == 0 or dp[i][j] == dp[i - 1][j] + s.gap_extend):
            aligned1.append(seq1[i - 1])
            aligned2.append('-')
            match_line.append(' ')
            gaps += 1
            i -= 1
        else:
            aligned1.append('-')
            aligned2.append(seq2[j - 1])
            match_line.append(' ')
            gaps += 1
            j -= 1
    
    length = len(aligned1)
    return AlignmentResult(
        aligned_seq1="".join(reversed(aligned1)),
        aligned_seq2="".join(reversed(aligned2)),
        match_line="".join(reversed(match_line)),
        score=dp[end_i][end_j],
        identity=matches / length if length else 0.0,
        gaps=gaps,
        length=length,
        start_seq1=i,
        start_seq2=j,
    )


def align_sequences(
    seq1: str,
    seq2: str,
    mode: str = "global",
    scoring: Optional[ScoringScheme] = None,
    max_length: Optional[int] = None,
) -> AlignmentResult:
    """
    Align two sequences after checking the caller's size limit.
    
    Args:
        seq1: First sequence
        seq2: Second sequence
        mode: "global" or "local"
        scoring: Scoring scheme; defaults when omitted
        max_length: Reject inputs longer than this many bases
        
    Raises:
        AlignmentError: if the mode is unknown or an input is too long
    """
    if mode not in ("global", "local"):
        raise AlignmentError(f"Unknown alignment mode: {mode}")
    if max_length is not None and max(len(seq1), len(seq2)) > max_length:
        raise AlignmentError(
            f"Input exceeds the {max_length} bp alignment limit",
            seq_lengths=(len(seq1), len(seq2))
        )
    
    logger.debug(f"{mode.capitalize()} alignment of {len(seq1)} x {len(seq2)} bp")
    if mode == "local":
        return local_align(seq1, seq2, scoring)
    return global_align(seq1, seq2, scoring)
