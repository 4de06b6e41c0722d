"""
Shared utilities for air gesture processing.

This module provides the raw motion sample type and the helpers used to
convert and screen motion data before it is turned into a pattern.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class ShiftSample:
    """One instantaneous 2D motion delta."""
    dx: float
    dy: float

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.dx * self.dx + self.dy * self.dy)

    @property
    def angle(self) -> float:
        """Angle of the delta in radians, within (-pi, pi]."""
        return math.atan2(self.dy, self.dx)

    def __repr__(self):
        return f"ShiftSample({self.dx:.4f}, {self.dy:.4f})"


class ShiftUtils:
    """Utility class for building and converting shift sequences."""

    @staticmethod
    def from_pairs(pairs: Iterable[Tuple[float, float]]) -> List[ShiftSample]:
        """Convert (dx, dy) tuples to ShiftSample objects."""
        return [ShiftSample(float(dx), float(dy)) for dx, dy in pairs]

    @staticmethod
    def from_dicts(deltas: Iterable[Dict[str, float]]) -> List[ShiftSample]:
        """Convert dicts with 'dx' and 'dy' keys to ShiftSample objects."""
        return [ShiftSample(float(d['dx']), float(d['dy'])) for d in deltas]


class MagnitudeStats:
    """Quartile statistics over a batch of shift magnitudes."""

    @staticmethod
    def outlier_threshold(shifts: Sequence[ShiftSample], factor: float = 1.5,
                          min_samples: int = 3) -> float:
        """
        Upper magnitude bound ``Q3 + factor * IQR`` for a batch of shifts.

        Quartiles are taken by index into the sorted magnitudes rather than
        interpolated. Batches smaller than ``min_samples`` have no bound.

        Returns:
            The threshold, or ``math.inf`` when the batch is too small
        """
        if len(shifts) < min_samples:
            return math.inf

        magnitudes = np.sort(np.array([s.magnitude for s in shifts], dtype=float))
        q1 = magnitudes[int(len(magnitudes) * 0.25)]
        q3 = magnitudes[int(len(magnitudes) * 0.75)]
        return float(q3 + factor * (q3 - q1))


class DataValidator:
    """Utility class for validating motion data."""

    @staticmethod
    def validate_shift_data(deltas: List[Dict[str, float]]) -> bool:
        """Validate that delta data has the required structure."""
        if not isinstance(deltas, list):
            return False

        for delta in deltas:
            if not isinstance(delta, dict):
                return False
            if 'dx' not in delta or 'dy' not in delta:
                return False
            try:
                dx = float(delta['dx'])
                dy = float(delta['dy'])
            except (ValueError, TypeError):
                return False
            if math.isnan(dx) or math.isnan(dy):
                return False

        return True
