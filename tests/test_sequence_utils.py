"""Tests for composition statistics and feature extraction."""

import pytest

from vseq_engine.core.readers import parse_genbank
from vseq_engine.core.sequence_utils import (
    calculate_gc_content,
    clean_sequence,
    estimate_tm,
    extract_feature_sequence,
    sequence_stats,
)
from vseq_engine.models import Feature, Sequence, Strand


def test_clean_sequence():
    assert clean_sequence("  acg t\n12 nnx-") == "ACGTNN"


def test_estimate_tm_short_selection():
    # Wallace rule: 2 per A/T, 4 per G/C
    assert estimate_tm("ACGTN acgt") == 24.0


def test_estimate_tm_long_selection():
    # 20 nt, 10 GC: 50 + 0.1 * (50 * 20)
    assert estimate_tm("GC" * 5 + "AT" * 5) == pytest.approx(150.0)


def test_estimate_tm_empty():
    assert estimate_tm("NNN") == 0.0


def test_gc_content():
    assert calculate_gc_content("GGCC") == 100.0
    assert calculate_gc_content("ATGC") == 50.0
    assert calculate_gc_content("") == 0.0


def test_sequence_stats(genbank_text):
    record = parse_genbank(genbank_text)
    stats = sequence_stats(record)
    
    assert stats.length == 60
    assert sum(stats.counts.values()) == 60
    assert stats.counts["G"] == 4
    assert stats.counts["C"] == 3
    assert stats.gc_content == pytest.approx(7 / 60 * 100)
    assert stats.mw_ssdna == 60 * 330
    assert stats.mw_dsdna == 60 * 649
    assert stats.feature_types == {"gene": 1, "CDS": 1}


def test_sequence_stats_counts_other_symbols():
    stats = sequence_stats(Sequence(name="x", sequence="ACGTNRY"))
    
    assert stats.counts["N"] == 1
    assert stats.counts["other"] == 2


class TestFeatureExtraction:
    """Test feature sub-sequence extraction."""
    
    def setup_method(self):
        self.record = Sequence(name="ring", sequence="AACCGGTTAC", circular=True)
    
    def test_forward_feature(self):
        feature = Feature(start=3, end=6, type="misc_feature")
        assert extract_feature_sequence(self.record, feature) == "CCGG"
    
    def test_reverse_feature(self):
        feature = Feature(start=1, end=3, type="misc_feature", strand=Strand.REVERSE)
        assert extract_feature_sequence(self.record, feature) == "GTT"
    
    def test_feature_through_origin(self):
        feature = Feature(start=9, end=2, type="misc_feature")
        assert extract_feature_sequence(self.record, feature) == "ACAA"
    
    def test_wrapping_feature_on_linear_sequence(self):
        linear = Sequence(name="line", sequence="AACCGGTTAC")
        feature = Feature(start=9, end=2, type="misc_feature")
        assert extract_feature_sequence(linear, feature) == ""
    
    def test_feature_is_clipped_to_sequence(self):
        feature = Feature(start=8, end=50, type="misc_feature")
        assert extract_feature_sequence(self.record, feature) == "TAC"
