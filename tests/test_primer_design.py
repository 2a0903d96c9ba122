"""Tests for primer scoring and pair design."""

import random

import pytest

from vseq_engine.analysis.primer_design import (
    PrimerOptions,
    _pair_rank,
    calculate_gc_percent,
    calculate_tm,
    design_primers,
    forward_candidates,
    has_gc_clamp,
    reverse_candidates,
    score_self_complementarity,
)
from vseq_engine.core.translation import reverse_complement
from vseq_engine.exceptions import ConfigurationError
from vseq_engine.models import Strand


OPEN_OPTIONS = PrimerOptions(min_tm=0, max_tm=100, min_gc=0, max_gc=100, max_tm_difference=100)


def _template(length=300, seed=5):
    rng = random.Random(seed)
    return "".join(rng.choice("ACGT") for _ in range(length))


class TestPrimerScoring:
    """Test single-primer properties."""
    
    def test_wallace_rule_for_short_oligos(self):
        assert calculate_tm("ATGC") == 12.0
        assert calculate_tm("GGGGGGGGGGGGG") == 52.0
    
    def test_salt_adjusted_formula(self):
        assert calculate_tm("GC" * 10) == pytest.approx(64.9 + 41 * (20 - 16.4) / 20)
        assert calculate_tm("A" * 14) == pytest.approx(64.9 + 41 * (0 - 16.4) / 14)
    
    def test_empty_primer(self):
        assert calculate_tm("") == 0.0
        assert calculate_gc_percent("") == 0.0
    
    def test_gc_percent(self):
        assert calculate_gc_percent("atgc") == 50.0
    
    @pytest.mark.parametrize("seq,expected", [
        ("AAAG", True),
        ("AAGA", True),
        ("AATA", False),
        ("aaac", True),
    ])
    def test_gc_clamp(self, seq, expected):
        assert has_gc_clamp(seq) is expected
    
    def test_self_complementarity(self):
        assert score_self_complementarity("GAATTC") == pytest.approx(0.75)
        assert score_self_complementarity("GGGGCCCC") == 1.0
        assert score_self_complementarity("GGGGGCCCCC") == 1.0
        assert score_self_complementarity("AAAAAAAA") == 0.0
        assert score_self_complementarity("") == 0.0


class TestCandidates:
    """Test candidate generation."""
    
    def test_forward_candidates(self):
        seq = _template()
        candidates = forward_candidates(seq, 40, OPEN_OPTIONS)
        
        assert [p.length for p in candidates] == list(range(18, 26))
        for primer in candidates:
            assert primer.start == 40
            assert primer.sequence == seq[40:primer.end]
            assert primer.strand == Strand.FORWARD
            assert primer.name == f"Forward {primer.length}bp"
    
    def test_reverse_candidates(self):
        seq = _template()
        candidates = reverse_candidates(seq, 200, OPEN_OPTIONS)
        
        assert len(candidates) == 8
        for primer in candidates:
            assert primer.end == 200
            assert primer.sequence == reverse_complement(seq[primer.start:200])
            assert primer.strand == Strand.REVERSE
    
    def test_candidates_stop_at_sequence_edges(self):
        seq = _template(30)
        
        assert [p.length for p in forward_candidates(seq, 10, OPEN_OPTIONS)] == [18, 19, 20]
        assert [p.length for p in reverse_candidates(seq, 19, OPEN_OPTIONS)] == [18, 19]


class TestDesign:
    """Test pair design and ranking."""
    
    def test_all_combinations_with_open_limits(self):
        seq = _template()
        pairs = design_primers(seq, 50, 250, OPEN_OPTIONS)
        
        assert len(pairs) == 64
        for pair in pairs:
            assert pair.forward.start == 50
            assert pair.reverse.end == 250
            assert pair.product_size == 200
    
    def test_pairs_are_ranked(self):
        pairs = design_primers(_template(), 50, 250, OPEN_OPTIONS)
        ranks = [_pair_rank(pair) for pair in pairs]
        
        assert ranks == sorted(ranks)
    
    def test_default_limits_are_respected(self):
        options = PrimerOptions()
        for seed in range(5):
            for pair in design_primers(_template(seed=seed), 20, 260):
                for primer in (pair.forward, pair.reverse):
                    assert options.min_tm <= primer.tm <= options.max_tm
                    assert options.min_gc <= primer.gc_percent <= options.max_gc
                assert pair.tm_difference <= options.max_tm_difference
    
    def test_tm_difference_limit(self):
        options = PrimerOptions(min_tm=0, max_tm=100, min_gc=0, max_gc=100, max_tm_difference=0.0)
        seq = "GC" * 20 + "AT" * 100 + "GC" * 20
        
        # Reverse primers from the GC tail are far hotter than AT-rich ones
        for pair in design_primers(seq, 40, 240, options):
            assert pair.forward.tm == pair.reverse.tm
    
    @pytest.mark.parametrize("start,end", [(100, 100), (120, 80), (500, 600)])
    def test_empty_region(self, start, end):
        assert design_primers(_template(), start, end) == []
    
    def test_region_is_clamped(self):
        seq = _template(100)
        pairs = design_primers(seq, -10, 1000, OPEN_OPTIONS)
        
        assert pairs
        assert all(p.forward.start == 0 and p.reverse.end == 100 for p in pairs)


def test_invalid_options():
    with pytest.raises(ConfigurationError):
        PrimerOptions(min_length=30, max_length=20)
    with pytest.raises(ConfigurationError):
        PrimerOptions(min_tm=70, max_tm=60)
    with pytest.raises(ConfigurationError):
        PrimerOptions(min_gc=70, max_gc=60)
    with pytest.raises(ConfigurationError):
        PrimerOptions(max_tm_difference=-1)
