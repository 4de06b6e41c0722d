"""
Air Gesture Recognizer

Records named gestures into a pattern store and recognizes new gestures by
comparing them against every stored pattern.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from ..storage.pattern_store import PatternStore
from ..utils.gesture_utils import ShiftSample
from .pattern import Pattern
from .pattern_builder import PatternBuilder
from .pattern_matcher import PatternMatcher

logger = logging.getLogger(__name__)


@dataclass
class RecognitionResult:
    """Similarities against every stored pattern and the best match, if any."""
    all_similarities: List[Tuple[str, float]]
    best_match: Optional[Tuple[str, float]]
    threshold: float
    time_ms: float = 0.0

    @property
    def is_recognized(self) -> bool:
        return self.best_match is not None

    @property
    def recognized_name(self) -> Optional[str]:
        return self.best_match[0] if self.best_match else None

    @property
    def similarity_score(self) -> Optional[float]:
        return self.best_match[1] if self.best_match else None


class PatternRecognizer:
    """
    Record and recognize air gestures against a pattern store.

    Whether a stored pattern is a candidate is decided by the matcher, so
    the threshold and any strategy specific acceptance rules come from its
    configuration.
    """

    def __init__(self, builder: Optional[PatternBuilder] = None,
                 matcher: Optional[PatternMatcher] = None,
                 store: Optional[PatternStore] = None):
        self.builder = builder or PatternBuilder()
        self.matcher = matcher or PatternMatcher()
        self.store = store if store is not None else PatternStore()

    @property
    def similarity_threshold(self) -> float:
        return self.matcher.threshold

    def make_pattern(self, shifts: Sequence[ShiftSample]) -> Pattern:
        return self.builder.build(shifts)

    def record(self, name: str, shifts: Sequence[ShiftSample]) -> Pattern:
        """
        Build a pattern from a gesture and store it under ``name``.

        Raises:
            ValueError: If the name is blank or taken, or the gesture is empty
        """
        if not name or not name.strip():
            raise ValueError("Pattern name cannot be blank")

        pattern = self.builder.build(shifts)
        if pattern.is_empty:
            raise ValueError("Pattern is empty after processing")

        if not self.store.save_pattern(name, pattern):
            raise ValueError(f"Pattern '{name}' already exists")

        logger.info("Stored pattern '%s': %r", name, pattern)
        return pattern

    def recognize(self, gesture: Union[Pattern, Sequence[ShiftSample]]) -> RecognitionResult:
        """
        Find the stored pattern most similar to a gesture.

        Args:
            gesture: A built pattern or the raw shifts of a gesture

        Returns:
            RecognitionResult with every similarity and the most similar
            pattern the matcher accepted
        """
        t0 = time.time() * 1000

        pattern = gesture if isinstance(gesture, Pattern) else self.builder.build(gesture)

        if pattern.is_empty:
            # An empty gesture only resembles other empty patterns; never report it
            return RecognitionResult([], None, self.similarity_threshold,
                                     time.time() * 1000 - t0)

        similarities = []
        best_match = None
        for name, stored in self.store.get_all_patterns():
            result = self.matcher.compare(pattern, stored)
            similarities.append((name, result.similarity))
            if not result.is_match:
                continue
            if best_match is None or result.similarity > best_match[1]:
                best_match = (name, result.similarity)

        return RecognitionResult(similarities, best_match, self.similarity_threshold,
                                 time.time() * 1000 - t0)

    def delete(self, name: str) -> bool:
        return self.store.delete_pattern(name)

    def pattern_names(self) -> List[str]:
        return self.store.names()


# Global instances
_builder = None
_matcher = None


def make_pattern(shifts: Sequence[ShiftSample]) -> Pattern:
    """Build a pattern with the default builder."""
    global _builder
    if _builder is None:
        _builder = PatternBuilder()
    return _builder.build(shifts)


def match_patterns(pattern1: Pattern, pattern2: Pattern) -> float:
    """Similarity of two patterns with the default matcher."""
    global _matcher
    if _matcher is None:
        _matcher = PatternMatcher()
    return _matcher.match(pattern1, pattern2)
