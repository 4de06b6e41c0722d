"""
Air Gestures Package
Recognition of gestures drawn in the air from 2D motion deltas.
"""

from .core.session import GestureSession
from .gestures.pattern_builder import PatternBuilder
from .gestures.pattern_matcher import PatternMatcher
from .gestures.recognizer import PatternRecognizer
from .storage.pattern_store import PatternStore

__version__ = "1.0.0"
__all__ = ["GestureSession", "PatternBuilder", "PatternMatcher", "PatternRecognizer", "PatternStore"]
