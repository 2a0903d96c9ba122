"""Tests for six-frame ORF detection."""

import random

import pytest

from vseq_engine.analysis.orf_finder import find_all_orfs, find_orfs_in_frame, translate_orf
from vseq_engine.core.translation import reverse_complement
from vseq_engine.models import Strand


ORF_41 = "ATG" + "AAA" * 40 + "TAA"


def test_single_forward_orf():
    orfs = find_all_orfs(ORF_41, min_aa_length=30)
    
    assert len(orfs) == 1
    orf = orfs[0]
    assert orf.frame == 1
    assert orf.strand == Strand.FORWARD
    assert (orf.start, orf.end) == (0, 126)
    assert orf.length == 126
    assert orf.aa_length == 41
    assert translate_orf(ORF_41, orf) == "M" + "K" * 40 + "*"


def test_minimum_length_is_inclusive():
    assert len(find_all_orfs(ORF_41, min_aa_length=41)) == 1
    assert find_all_orfs(ORF_41, min_aa_length=42) == []


def test_reverse_strand_orf():
    seq = "CC" + reverse_complement(ORF_41)
    orfs = find_all_orfs(seq, min_aa_length=30)
    
    assert len(orfs) == 1
    orf = orfs[0]
    assert orf.frame == -1
    assert orf.strand == Strand.REVERSE
    assert (orf.start, orf.end) == (2, 128)
    assert translate_orf(seq, orf) == "M" + "K" * 40 + "*"


def test_offset_frame():
    seq = "GC" + ORF_41
    orfs = find_orfs_in_frame(seq, 3, min_aa_length=30)
    
    assert [(o.start, o.end) for o in orfs] == [(2, 128)]
    assert find_orfs_in_frame(seq, 1, min_aa_length=30) == []


def test_orf_without_stop_runs_to_last_full_codon():
    seq = "ATG" + "AAA" * 10 + "AA"
    orfs = find_all_orfs(seq, min_aa_length=5)
    
    assert len(orfs) == 1
    assert (orfs[0].start, orfs[0].end) == (0, 33)
    assert orfs[0].aa_length == 11
    assert orfs[0].length % 3 == 0


def test_nested_start_codons_are_not_reported():
    seq = "ATG" + "ATG" * 5 + "AAA" * 5 + "TAG"
    orfs = find_orfs_in_frame(seq, 1, min_aa_length=1)
    
    assert len(orfs) == 1
    assert orfs[0].aa_length == 11


def test_results_sorted_longest_first():
    short = "ATG" + "AAA" * 5 + "TAA"
    seq = short + "C" + ORF_41
    orfs = find_all_orfs(seq, min_aa_length=5)
    
    lengths = [o.aa_length for o in orfs]
    assert lengths == sorted(lengths, reverse=True)
    assert lengths[0] == 41


def test_invalid_frame():
    with pytest.raises(ValueError):
        find_orfs_in_frame(ORF_41, 4, min_aa_length=1)


def test_empty_sequence():
    assert find_all_orfs("", min_aa_length=0) == []


def test_orf_frame_consistency():
    rng = random.Random(2024)
    seq = "".join(rng.choice("ACGT") for _ in range(3000))
    
    for orf in find_all_orfs(seq, min_aa_length=10):
        assert 0 <= orf.start < orf.end <= len(seq)
        assert orf.length == orf.end - orf.start
        assert orf.length % 3 == 0
        assert orf.aa_length >= 10
        protein = translate_orf(seq, orf)
        assert protein.startswith("M")
        assert "*" not in protein[:-1]
