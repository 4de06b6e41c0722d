"""
Pattern Builder for Air Gestures

Turns the raw shift sequence recorded between button press and release into
a normalized pattern: noise is filtered out, shifts are aggregated into
directional segments, near-identical neighbouring directions are merged and
the segment weights are scaled so the strongest segment weighs 1.0.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from ..config.settings import GestureConfig, PatternBuilderConfig
from ..utils.gesture_utils import MagnitudeStats, ShiftSample
from .discretizer import Discretizer
from .pattern import Pattern, PatternSegment

logger = logging.getLogger(__name__)


class PatternBuilder:
    """Builds patterns from shift sequences."""

    def __init__(self, discretizer: Optional[Discretizer] = None,
                 config: Optional[PatternBuilderConfig] = None):
        """
        Initialize the pattern builder.

        Args:
            discretizer: Direction discretizer (8 directions by default)
            config: Noise and merge thresholds
        """
        self.discretizer = discretizer or Discretizer()
        self.config = config or PatternBuilderConfig()

    def build(self, shifts: Sequence[ShiftSample]) -> Pattern:
        """
        Build a pattern from an ordered shift sequence.

        Args:
            shifts: Motion deltas in capture order

        Returns:
            The normalized pattern, empty when the gesture is too weak
        """
        if not shifts:
            return Pattern.empty()

        filtered = self._filter_noise(shifts)
        if not filtered:
            logger.debug("All %d shifts filtered as noise", len(shifts))
            return Pattern.empty()

        segments = self._aggregate_to_segments(filtered)

        if self.config.merge_similar_directions:
            segments = self._merge_similar_segments(segments)

        pattern = self._normalize_and_filter(segments)
        logger.debug("Built %r from %d shifts (%d after filtering)",
                     pattern, len(shifts), len(filtered))
        return pattern

    def _filter_noise(self, shifts: Sequence[ShiftSample]) -> List[ShiftSample]:
        """Drop jitter and, if enabled, magnitude outliers."""
        min_shift = self.config.min_shift_magnitude

        if self.config.filter_outliers:
            threshold = MagnitudeStats.outlier_threshold(
                shifts,
                GestureConfig.OUTLIER_IQR_FACTOR,
                GestureConfig.OUTLIER_MIN_SAMPLES
            )
        else:
            threshold = float('inf')

        filtered = []
        for shift in shifts:
            if abs(shift.dx) < min_shift and abs(shift.dy) < min_shift:
                continue
            if shift.magnitude > threshold:
                continue
            filtered.append(shift)

        return filtered

    def _aggregate_to_segments(self, shifts: List[ShiftSample]) -> List[PatternSegment]:
        """Accumulate consecutive shifts into directional segments."""
        segments: List[PatternSegment] = []

        for shift in shifts:
            direction = self.discretizer.direction_for(shift)
            weight = shift.magnitude

            if not segments:
                segments.append(PatternSegment(direction, weight))
                continue

            last = segments[-1]
            if direction.index == last.direction.index:
                segments[-1] = replace(last, weight=last.weight + weight)
            elif self.config.merge_similar_directions and last.direction.is_similar(direction):
                # Neighbouring sector: treat as jitter around the current direction
                damped = weight * self.config.noise_filter_threshold
                segments[-1] = replace(last, weight=last.weight + damped)
            else:
                segments.append(PatternSegment(direction, weight))

        return segments

    def _merge_similar_segments(self, segments: List[PatternSegment]) -> List[PatternSegment]:
        """Second pass merging adjacent segments with similar directions."""
        if len(segments) <= 1:
            return segments

        result: List[PatternSegment] = []
        current = segments[0]

        for segment in segments[1:]:
            if current.direction.is_similar(segment.direction):
                damped = segment.weight * self.config.noise_filter_threshold
                current = replace(current, weight=current.weight + damped)
            else:
                result.append(current)
                current = segment

        result.append(current)
        return result

    def _normalize_and_filter(self, segments: List[PatternSegment]) -> Pattern:
        """Scale weights by the strongest segment and drop weak segments."""
        min_weight = self.config.min_segment_weight

        while True:
            max_weight = max((s.weight for s in segments), default=0.0)
            if max_weight < min_weight:
                return Pattern.empty()

            normalized = []
            for segment in segments:
                weight = segment.weight / max_weight
                if weight >= min_weight:
                    normalized.append(PatternSegment(segment.direction, weight))

            coalesced = self._coalesce_repeats(normalized)
            if len(coalesced) == len(normalized):
                return Pattern(normalized)

            # Dropping a weak segment joined two runs of the same direction
            segments = coalesced

    def _coalesce_repeats(self, segments: List[PatternSegment]) -> List[PatternSegment]:
        result: List[PatternSegment] = []
        for segment in segments:
            if result and result[-1].direction.index == segment.direction.index:
                result[-1] = replace(result[-1], weight=result[-1].weight + segment.weight)
            else:
                result.append(segment)
        return result
