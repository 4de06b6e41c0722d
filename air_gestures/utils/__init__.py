"""
Utilities package for air gesture processing.

This package provides the motion sample type and shared helpers used by
the pattern builder, the matcher and the gesture session.
"""

from .gesture_utils import (
    ShiftSample,
    ShiftUtils,
    MagnitudeStats,
    DataValidator
)
from .logger import PatternLogger

__all__ = [
    'ShiftSample',
    'ShiftUtils',
    'MagnitudeStats',
    'DataValidator',
    'PatternLogger'
]
