"""
Six-frame open reading frame scan.
"""

from typing import List

from loguru import logger

from ..core.translation import CODON_TABLE, START_CODON, reverse_complement, translate
from ..models import ORF, Strand


FRAMES = (1, 2, 3, -1, -2, -3)


def find_orfs_in_frame(sequence: str, frame: int, min_aa_length: int) -> List[ORF]:
    """
    Scan one reading frame for ATG-initiated ORFs.
    
    After an ORF closes, scanning resumes past its stop codon, so start
    codons nested inside a reported ORF are not examined. An ORF that runs
    off the end of the sequence is reported up to its last complete codon
    and ends the scan of that frame.
    
    Args:
        sequence: Forward-strand DNA sequence
        frame: One of +1, +2, +3, -1, -2, -3
        min_aa_length: Minimum protein length, stop codon excluded
        
    Returns:
        ORFs in forward-strand coordinates, in scan order
    """
    if frame not in FRAMES:
        raise ValueError(f"Invalid reading frame: {frame}")
    
    forward = frame > 0
    strand = Strand.FORWARD if forward else Strand.REVERSE
    upper_seq = sequence.upper()
    work_seq = upper_seq if forward else reverse_complement(upper_seq)
    seq_len = len(work_seq)
    
    def to_forward(start: int, end: int):
        if forward:
            return start, end
        return seq_len - end, seq_len - start
    
    orfs = []
    i = abs(frame) - 1
    while i + 3 <= seq_len:
        if work_seq[i:i + 3] != START_CODON:
            i += 3
            continue
        
        j = i + 3
        stop_found = False
        while j + 3 <= seq_len:
            if CODON_TABLE.get(work_seq[j:j + 3]) == '*':
                stop_found = True
                break
            j += 3
        
        if stop_found:
            orf_end = j + 3
            aa_length = (orf_end - i) // 3 - 1
            if aa_length >= min_aa_length:
                start, end = to_forward(i, orf_end)
                orfs.append(ORF(
                    frame=frame,
                    start=start,
                    end=end,
                    length=orf_end - i,
                    aa_length=aa_length,
                    strand=strand,
                ))
            i = orf_end
            continue
        
        # Open to the end of the sequence; drop the partial trailing codon
        orf_length = (seq_len - i) // 3 * 3
        aa_length = orf_length // 3
        if aa_length >= min_aa_length:
            start, end = to_forward(i, i + orf_length)
            orfs.append(ORF(
                frame=frame,
                start=start,
                end=end,
                length=orf_length,
                aa_length=aa_length,
                strand=strand,
            ))
        break
    
    return orfs


def find_all_orfs(sequence: str, min_aa_length: int = 100) -> List[ORF]:
    """Find ORFs in all six frames, longest protein first."""
    orfs = []
    for frame in FRAMES:
        orfs.extend(find_orfs_in_frame(sequence, frame, min_aa_length))
    
    orfs.sort(key=lambda orf: orf.aa_length, reverse=True)
    logger.debug(f"Found {len(orfs)} ORFs >= {min_aa_length} aa in {len(sequence)} bp")
    return orfs


def translate_orf(sequence: str, orf: ORF) -> str:
    """Protein encoded by an ORF, including the stop '*' when present."""
    return translate(sequence[orf.start:orf.end], orf.strand.value, stop_at_stop=True)
