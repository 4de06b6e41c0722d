"""
Pattern Matching for Air Gestures

Scores how similar two patterns are. Three strategies are available and
selected through ``PatternMatcherConfig.strategy``:

- Sequence alignment: edit-distance style dynamic programming over a
  segment similarity matrix, tolerant to extra or missing segments.
- DTW: dynamic time warping over the same matrix turned into costs.
- Cyclic shift: strict segment-by-segment comparison over every rotation
  of equally long patterns, accepted through error-score thresholds.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from ..config.settings import GestureConfig, MatchStrategy, PatternMatcherConfig
from .pattern import Pattern, PatternSegment

logger = logging.getLogger(__name__)


@dataclass
class MatchErrors:
    """Per-category mismatch counts collected by the cyclic shift strategy."""
    weight_errors: int = 0
    direction_errors: int = 0
    length_mismatch: bool = False
    order_errors: int = 0
    missing_segments: int = 0

    @property
    def total_errors(self) -> int:
        return self.weight_errors + self.direction_errors + self.order_errors + self.missing_segments


@dataclass(frozen=True)
class MatchResult:
    """Outcome of comparing two patterns."""
    is_match: bool
    similarity: float
    error_score: float
    errors: MatchErrors = field(default_factory=MatchErrors)
    shift: int = 0


class SegmentScorer:
    """Per-pair segment similarity and the similarity matrix built from it."""

    def __init__(self, config: PatternMatcherConfig):
        self.direction_weight = config.direction_weight
        self.magnitude_weight = config.magnitude_weight

    def direction_similarity(self, seg1: PatternSegment, seg2: PatternSegment) -> float:
        d1, d2 = seg1.direction, seg2.direction
        if d1.discretization != d2.discretization:
            return 0.0
        if d1.index == d2.index:
            return 1.0
        return math.exp(-d1.cyclic_distance(d2) / 2.0)

    def magnitude_similarity(self, seg1: PatternSegment, seg2: PatternSegment) -> float:
        diff = seg1.weight - seg2.weight
        return math.exp(-(diff * diff) / GestureConfig.MAGNITUDE_VARIANCE)

    def position_similarity(self, seg1: PatternSegment, pos1: int,
                            seg2: PatternSegment, pos2: int) -> float:
        # Segments at the same position are never penalized
        if pos1 == pos2:
            return 1.0
        avg_weight = (seg1.weight + seg2.weight) / 2.0
        decay = math.exp(-abs(pos1 - pos2) / (max(pos1, pos2) + 1))
        return decay * (0.5 + 0.5 * avg_weight)

    def segment_similarity(self, seg1: PatternSegment, pos1: int,
                           seg2: PatternSegment, pos2: int) -> float:
        """Similarity of two segments in [0, 1]."""
        base = (
            self.direction_similarity(seg1, seg2) * self.direction_weight +
            self.magnitude_similarity(seg1, seg2) * self.magnitude_weight
        ) / (self.direction_weight + self.magnitude_weight)
        return base * self.position_similarity(seg1, pos1, seg2, pos2)

    def similarity_matrix(self, pattern1: Pattern, pattern2: Pattern) -> np.ndarray:
        matrix = np.zeros((len(pattern1), len(pattern2)))
        for i, seg1 in enumerate(pattern1):
            for j, seg2 in enumerate(pattern2):
                matrix[i, j] = self.segment_similarity(seg1, i, seg2, j)
        return matrix


class SequenceAlignmentStrategy:
    """Global alignment with a fixed gap penalty for inserted or missing segments."""

    def __init__(self, config: PatternMatcherConfig):
        self.config = config
        self.scorer = SegmentScorer(config)

    def compare(self, pattern1: Pattern, pattern2: Pattern) -> MatchResult:
        matrix = self.scorer.similarity_matrix(pattern1, pattern2)
        n, m = matrix.shape
        gap = self.config.gap_penalty

        dp = np.zeros((n + 1, m + 1))
        for i in range(1, n + 1):
            dp[i, 0] = dp[i - 1, 0] - gap
        for j in range(1, m + 1):
            dp[0, j] = dp[0, j - 1] - gap

        for i in range(1, n + 1):
            for j in range(1, m + 1):
                dp[i, j] = max(
                    dp[i - 1, j - 1] + matrix[i - 1, j - 1],
                    dp[i - 1, j] - gap,
                    dp[i, j - 1] - gap
                )

        similarity = float(dp[n, m]) / min(n, m)
        similarity = min(1.0, max(0.0, similarity))

        return MatchResult(
            is_match=similarity >= self.config.similarity_threshold,
            similarity=similarity,
            error_score=1.0 - similarity
        )


class DTWStrategy:
    """Dynamic time warping over segment dissimilarity."""

    def __init__(self, config: PatternMatcherConfig):
        self.config = config
        self.scorer = SegmentScorer(config)

    def compare(self, pattern1: Pattern, pattern2: Pattern) -> MatchResult:
        cost = 1.0 - self.scorer.similarity_matrix(pattern1, pattern2)
        n, m = cost.shape

        dtw = np.full((n + 1, m + 1), np.inf)
        dtw[0, 0] = 0.0

        for i in range(1, n + 1):
            for j in range(1, m + 1):
                dtw[i, j] = cost[i - 1, j - 1] + min(
                    dtw[i - 1, j],
                    dtw[i, j - 1],
                    dtw[i - 1, j - 1]
                )

        distance = float(dtw[n, m])
        similarity = math.exp(-distance / max(n, m))

        return MatchResult(
            is_match=similarity >= self.config.similarity_threshold,
            similarity=similarity,
            error_score=distance
        )


class CyclicShiftStrategy:
    """
    Strict threshold matching over every rotation of the second pattern.

    Each compared pair of segments may produce a direction error and a
    weight error. The rotation itself costs an order error equal to its
    distance from the unrotated alignment, so comparing A with B and B
    with A finds mirrored rotations with the same error score.
    """

    def __init__(self, config: PatternMatcherConfig):
        self.config = config

    def compare(self, pattern1: Pattern, pattern2: Pattern) -> MatchResult:
        if len(pattern1) != len(pattern2):
            return self._compare_direct(pattern1, pattern2)

        n = len(pattern1)
        if n == 0:
            return MatchResult(True, 1.0, 0.0)

        best: Optional[MatchResult] = None
        for shift in range(n):
            errors = MatchErrors()
            matched = 0

            for i in range(n):
                if self._compare_segments(pattern1[i], pattern2[(i + shift) % n], errors):
                    matched += 1

            errors.order_errors = min(shift, n - shift)
            result = self._result(errors, pattern1, pattern2, matched / n, shift)

            if best is None or result.error_score < best.error_score:
                best = result

        return best

    def _compare_direct(self, pattern1: Pattern, pattern2: Pattern) -> MatchResult:
        """Positional comparison for patterns of different length."""
        n1, n2 = len(pattern1), len(pattern2)
        errors = MatchErrors(length_mismatch=True, missing_segments=abs(n1 - n2))
        matched = 0

        for i in range(min(n1, n2)):
            if self._compare_segments(pattern1[i], pattern2[i], errors):
                matched += 1

        return self._result(errors, pattern1, pattern2, matched / max(n1, n2))

    def _compare_segments(self, seg1: PatternSegment, seg2: PatternSegment,
                          errors: MatchErrors) -> bool:
        is_match = True

        if seg1.direction != seg2.direction:
            errors.direction_errors += 1
            is_match = False

        if abs(seg1.weight - seg2.weight) > self.config.acceptable_diff:
            errors.weight_errors += 1
            is_match = False

        return is_match

    def _result(self, errors: MatchErrors, pattern1: Pattern, pattern2: Pattern,
                similarity: float, shift: int = 0) -> MatchResult:
        config = self.config
        error_score = self._error_score(errors, pattern1, pattern2)

        is_match = (
            error_score <= config.max_total_error_score and
            similarity >= config.min_similarity_score and
            len(pattern1) >= config.min_pattern_size and
            len(pattern2) >= config.min_pattern_size
        )

        return MatchResult(is_match, similarity, error_score, errors, shift)

    def _error_score(self, errors: MatchErrors, pattern1: Pattern, pattern2: Pattern) -> float:
        config = self.config
        score = 0.0

        score += errors.weight_errors * config.weight_error_weight
        score += errors.direction_errors * config.direction_error_weight

        if errors.length_mismatch:
            score += abs(len(pattern1) - len(pattern2)) * config.length_error_weight

        score += errors.order_errors * config.order_error_weight
        score += errors.missing_segments * config.missing_segment_weight

        max_size = max(len(pattern1), len(pattern2))
        if max_size > 0:
            score /= max_size

        return score


STRATEGIES: Dict[MatchStrategy, type] = {
    MatchStrategy.CYCLIC_SHIFT: CyclicShiftStrategy,
    MatchStrategy.SEQUENCE_ALIGNMENT: SequenceAlignmentStrategy,
    MatchStrategy.DTW: DTWStrategy,
}


class PatternMatcher:
    """Compares patterns with the strategy chosen in the configuration."""

    def __init__(self, config: Optional[PatternMatcherConfig] = None):
        self.config = config or PatternMatcherConfig()
        self.strategy = STRATEGIES[self.config.strategy](self.config)

    @property
    def threshold(self) -> float:
        """Minimum similarity an accepted match must reach."""
        if self.config.strategy is MatchStrategy.CYCLIC_SHIFT:
            return self.config.min_similarity_score
        return self.config.similarity_threshold

    def compare(self, pattern1: Pattern, pattern2: Pattern) -> MatchResult:
        """
        Compare two patterns.

        Args:
            pattern1: Candidate pattern
            pattern2: Stored pattern

        Returns:
            MatchResult with similarity in [0, 1] and the match decision
        """
        if pattern1.is_empty and pattern2.is_empty:
            return MatchResult(True, 1.0, 0.0)
        if pattern1.is_empty or pattern2.is_empty:
            errors = MatchErrors(length_mismatch=True,
                                 missing_segments=max(len(pattern1), len(pattern2)))
            return MatchResult(False, 0.0, math.inf, errors)

        result = self.strategy.compare(pattern1, pattern2)
        logger.debug("%s: %r vs %r -> %.3f", self.config.strategy.value,
                     pattern1, pattern2, result.similarity)
        return result

    def match(self, pattern1: Pattern, pattern2: Pattern) -> float:
        """Similarity of two patterns in [0, 1]."""
        return self.compare(pattern1, pattern2).similarity

    def is_match(self, pattern1: Pattern, pattern2: Pattern) -> bool:
        return self.compare(pattern1, pattern2).is_match
