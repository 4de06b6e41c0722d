"""
Configuration settings for air gesture recognition.
"""

from dataclasses import dataclass
from enum import Enum


class InvalidConfiguration(ValueError):
    """Raised when a recognizer component is constructed with bad settings."""


class GestureConfig:
    """Configuration constants for air gesture recognition."""

    # Number of discrete directions (must be a multiple of 4)
    DISCRETIZATION = 8

    # Pattern building
    MIN_SHIFT_MAGNITUDE = 0.002
    MIN_SEGMENT_WEIGHT = 0.03
    NOISE_FILTER_THRESHOLD = 0.5
    OUTLIER_IQR_FACTOR = 1.5
    OUTLIER_MIN_SAMPLES = 3

    # Segment similarity
    DIRECTION_WEIGHT = 0.7
    MAGNITUDE_WEIGHT = 0.3
    MAGNITUDE_VARIANCE = 0.1
    GAP_PENALTY = 0.1

    # Recognition
    SIMILARITY_THRESHOLD = 0.7

    # Persistence
    PATTERN_STORE_FILE = 'air_patterns.json'


class MatchStrategy(Enum):
    """Available pattern similarity strategies."""
    CYCLIC_SHIFT = 'cyclic_shift'
    SEQUENCE_ALIGNMENT = 'sequence_alignment'
    DTW = 'dtw'


@dataclass(frozen=True)
class PatternBuilderConfig:
    """Thresholds used while turning raw shifts into a pattern."""
    min_shift_magnitude: float = GestureConfig.MIN_SHIFT_MAGNITUDE
    min_segment_weight: float = GestureConfig.MIN_SEGMENT_WEIGHT
    noise_filter_threshold: float = GestureConfig.NOISE_FILTER_THRESHOLD
    merge_similar_directions: bool = True
    filter_outliers: bool = True

    def __post_init__(self):
        if self.min_shift_magnitude < 0:
            raise InvalidConfiguration("min_shift_magnitude must be non-negative")
        if self.min_segment_weight <= 0:
            raise InvalidConfiguration("min_segment_weight must be positive")
        if not 0.0 <= self.noise_filter_threshold <= 1.0:
            raise InvalidConfiguration("noise_filter_threshold must be within [0, 1]")


@dataclass(frozen=True)
class PatternMatcherConfig:
    """
    Algorithm choice and coefficients for pattern matching.

    The alignment and DTW strategies use the similarity weights and
    ``similarity_threshold``; the cyclic shift strategy uses the error
    weights and thresholds below them.
    """
    strategy: MatchStrategy = MatchStrategy.SEQUENCE_ALIGNMENT

    # Segment similarity
    direction_weight: float = GestureConfig.DIRECTION_WEIGHT
    magnitude_weight: float = GestureConfig.MAGNITUDE_WEIGHT
    gap_penalty: float = GestureConfig.GAP_PENALTY
    similarity_threshold: float = GestureConfig.SIMILARITY_THRESHOLD

    # Cyclic shift matching
    acceptable_diff: float = 0.1
    min_pattern_size: int = 1
    weight_error_weight: float = 1.0
    direction_error_weight: float = 2.0
    length_error_weight: float = 3.0
    order_error_weight: float = 1.5
    missing_segment_weight: float = 2.0
    max_total_error_score: float = 5.0
    min_similarity_score: float = 0.7

    def __post_init__(self):
        if not isinstance(self.strategy, MatchStrategy):
            raise InvalidConfiguration(f"Unknown match strategy: {self.strategy!r}")
        if self.direction_weight + self.magnitude_weight <= 0:
            raise InvalidConfiguration("direction_weight + magnitude_weight must be positive")
        if self.gap_penalty < 0:
            raise InvalidConfiguration("gap_penalty must be non-negative")
