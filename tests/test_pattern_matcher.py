"""Tests for pattern similarity strategies."""

import math

import pytest

from air_gestures.config.settings import (
    InvalidConfiguration,
    MatchStrategy,
    PatternMatcherConfig,
)
from air_gestures.gestures.pattern import Direction, Pattern, PatternSegment
from air_gestures.gestures.pattern_builder import PatternBuilder
from air_gestures.gestures.pattern_matcher import PatternMatcher, SegmentScorer
from air_gestures.utils.gesture_utils import ShiftUtils

ALL_STRATEGIES = list(MatchStrategy)


def make(*segments, k=8):
    return Pattern([PatternSegment(Direction(index, k), weight) for index, weight in segments])


def matcher(strategy, **kwargs):
    return PatternMatcher(PatternMatcherConfig(strategy=strategy, **kwargs))


SQUARE = make((1, 1.0), (3, 0.5), (5, 0.8), (7, 0.6))


class TestDegenerate:
    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_both_empty(self, strategy):
        result = matcher(strategy).compare(Pattern.empty(), Pattern.empty())
        assert result.similarity == 1.0
        assert result.is_match

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_one_empty(self, strategy):
        m = matcher(strategy)
        assert m.match(Pattern.empty(), SQUARE) == 0.0
        assert m.match(SQUARE, Pattern.empty()) == 0.0
        assert not m.is_match(SQUARE, Pattern.empty())

    def test_jitter_gesture_against_stored(self):
        jitter = PatternBuilder().build(ShiftUtils.from_pairs([(0.001, 0.001)] * 10))
        m = PatternMatcher()
        assert m.match(jitter, SQUARE) == 0.0
        assert m.match(jitter, Pattern.empty()) == 1.0


class TestSegmentScorer:
    def setup_method(self):
        self.scorer = SegmentScorer(PatternMatcherConfig())

    def test_direction_similarity_decays_with_distance(self):
        base = PatternSegment(Direction(1, 8), 1.0)
        scores = [
            self.scorer.direction_similarity(base, PatternSegment(Direction(i, 8), 1.0))
            for i in (1, 2, 3, 4, 5)
        ]
        assert scores[0] == 1.0
        assert scores[1] == pytest.approx(math.exp(-0.5))
        assert scores == sorted(scores, reverse=True)
        assert scores[4] == pytest.approx(math.exp(-2.0))

    def test_direction_similarity_wraps(self):
        a = PatternSegment(Direction(1, 8), 1.0)
        b = PatternSegment(Direction(8, 8), 1.0)
        assert self.scorer.direction_similarity(a, b) == pytest.approx(math.exp(-0.5))

    def test_different_discretization_never_similar(self):
        a = PatternSegment(Direction(1, 8), 1.0)
        b = PatternSegment(Direction(1, 4), 1.0)
        assert self.scorer.direction_similarity(a, b) == 0.0

    def test_magnitude_similarity(self):
        a = PatternSegment(Direction(1, 8), 1.0)
        b = PatternSegment(Direction(1, 8), 0.5)
        assert self.scorer.magnitude_similarity(a, b) == pytest.approx(math.exp(-0.25 / 0.1))

    def test_position_similarity(self):
        a = PatternSegment(Direction(1, 8), 1.0)
        b = PatternSegment(Direction(1, 8), 0.5)
        assert self.scorer.position_similarity(a, 0, b, 0) == 1.0
        assert self.scorer.position_similarity(a, 2, b, 2) == 1.0
        expected = math.exp(-2 / 3) * (0.5 + 0.5 * 0.75)
        assert self.scorer.position_similarity(a, 0, b, 2) == pytest.approx(expected)

    def test_matrix_shape(self):
        matrix = self.scorer.similarity_matrix(SQUARE, make((1, 1.0), (3, 0.5)))
        assert matrix.shape == (4, 2)
        assert matrix[0, 0] == 1.0


class TestSequenceAlignment:
    def setup_method(self):
        self.matcher = matcher(MatchStrategy.SEQUENCE_ALIGNMENT)

    def test_self_similarity(self):
        for pattern in (SQUARE, make((2, 1.0)), make((1, 1.0), (4, 0.1), (6, 0.33))):
            assert self.matcher.match(pattern, pattern) == 1.0

    def test_single_segment_neighbour(self):
        expected = 0.7 * math.exp(-0.5) + 0.3
        assert self.matcher.match(make((1, 1.0)), make((2, 1.0))) == pytest.approx(expected)

    def test_extra_segment_tolerated(self):
        base = make((1, 1.0), (3, 0.5))
        extra = make((1, 1.0), (5, 0.3), (3, 0.5))
        unrelated = make((5, 1.0), (7, 0.5))
        assert self.matcher.match(base, extra) > self.matcher.match(base, unrelated)

    def test_symmetric(self):
        a = make((1, 1.0), (3, 0.5))
        b = make((1, 0.9), (2, 0.4), (3, 0.6))
        assert self.matcher.match(a, b) == pytest.approx(self.matcher.match(b, a))

    def test_similarity_clamped(self):
        similarity = self.matcher.match(make((1, 1.0)), make((5, 0.1), (7, 1.0), (3, 0.2)))
        assert 0.0 <= similarity <= 1.0

    def test_is_match_uses_threshold(self):
        strict = matcher(MatchStrategy.SEQUENCE_ALIGNMENT, similarity_threshold=0.8)
        assert self.matcher.is_match(make((1, 1.0)), make((2, 1.0)))
        assert not strict.is_match(make((1, 1.0)), make((2, 1.0)))


class TestDTW:
    def setup_method(self):
        self.matcher = matcher(MatchStrategy.DTW)

    def test_self_similarity(self):
        assert self.matcher.match(SQUARE, SQUARE) == 1.0

    def test_single_segment_neighbour(self):
        base = 0.7 * math.exp(-0.5) + 0.3
        expected = math.exp(-(1.0 - base))
        assert self.matcher.match(make((1, 1.0)), make((2, 1.0))) == pytest.approx(expected)

    def test_repeated_segment_warps(self):
        a = make((1, 1.0), (3, 1.0))
        b = make((1, 1.0), (3, 1.0), (1, 1.0))
        c = make((5, 1.0), (7, 1.0), (5, 1.0))
        assert self.matcher.match(a, b) > self.matcher.match(a, c)

    def test_symmetric(self):
        a = make((1, 1.0), (3, 0.5))
        b = make((1, 0.9), (2, 0.4), (3, 0.6))
        assert self.matcher.match(a, b) == pytest.approx(self.matcher.match(b, a))


class TestCyclicShift:
    def setup_method(self):
        self.matcher = matcher(MatchStrategy.CYCLIC_SHIFT)

    def test_identical(self):
        result = self.matcher.compare(SQUARE, SQUARE)
        assert result.is_match
        assert result.similarity == 1.0
        assert result.error_score == 0.0
        assert result.shift == 0

    def test_rotation_found(self):
        rotated = make((3, 0.5), (5, 0.8), (7, 0.6), (1, 1.0))
        result = self.matcher.compare(SQUARE, rotated)
        assert result.is_match
        assert result.similarity == 1.0
        assert result.shift == 3
        assert result.errors.order_errors == 1
        assert result.error_score == pytest.approx(1.5 / 4)

    def test_rotation_symmetric(self):
        rotated = make((3, 0.5), (5, 0.8), (7, 0.6), (1, 1.0))
        forward = self.matcher.compare(SQUARE, rotated)
        backward = self.matcher.compare(rotated, SQUARE)
        assert forward.error_score == backward.error_score
        assert (forward.shift + backward.shift) % len(SQUARE) == 0

    def test_weight_error(self):
        result = self.matcher.compare(make((1, 1.0), (3, 0.5)), make((1, 1.0), (3, 0.75)))
        assert result.shift == 0
        assert result.errors.weight_errors == 1
        assert result.errors.direction_errors == 0
        assert result.similarity == 0.5
        assert not result.is_match

    def test_weight_within_tolerance(self):
        assert self.matcher.is_match(make((1, 1.0), (3, 0.5)), make((1, 1.0), (3, 0.55)))

    def test_length_mismatch_compares_positionally(self):
        shorter = make((1, 1.0), (3, 0.5), (5, 0.8))
        result = self.matcher.compare(SQUARE, shorter)
        assert result.errors.length_mismatch
        assert result.errors.missing_segments == 1
        assert result.similarity == 0.75
        assert result.error_score == pytest.approx((3.0 + 2.0) / 4)
        assert result.is_match

    def test_min_pattern_size(self):
        m = matcher(MatchStrategy.CYCLIC_SHIFT, min_pattern_size=3)
        pattern = make((1, 1.0), (3, 0.5))
        assert m.match(pattern, pattern) == 1.0
        assert not m.is_match(pattern, pattern)

    def test_error_ceiling(self):
        m = matcher(MatchStrategy.CYCLIC_SHIFT, max_total_error_score=0.1)
        rotated = make((3, 0.5), (5, 0.8), (7, 0.6), (1, 1.0))
        assert not m.is_match(SQUARE, rotated)


class TestConfiguration:
    def test_default_strategy_is_alignment(self):
        assert PatternMatcher().config.strategy is MatchStrategy.SEQUENCE_ALIGNMENT

    def test_unknown_strategy(self):
        with pytest.raises(InvalidConfiguration):
            PatternMatcherConfig(strategy='fastest')

    def test_zero_weights_rejected(self):
        with pytest.raises(InvalidConfiguration):
            PatternMatcherConfig(direction_weight=0, magnitude_weight=0)
