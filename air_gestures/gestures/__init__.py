"""
Gesture pattern building and matching.

This module provides functionality for turning air motion into symbolic
direction patterns and for comparing those patterns with each other.
"""

from .pattern import Direction, PatternSegment, Pattern
from .discretizer import Discretizer
from .pattern_builder import PatternBuilder
from .pattern_matcher import MatchErrors, MatchResult, PatternMatcher
from .recognizer import PatternRecognizer, RecognitionResult, make_pattern, match_patterns

__all__ = [
    'Direction',
    'PatternSegment',
    'Pattern',
    'Discretizer',
    'PatternBuilder',
    'MatchErrors',
    'MatchResult',
    'PatternMatcher',
    'PatternRecognizer',
    'RecognitionResult',
    'make_pattern',
    'match_patterns'
]
