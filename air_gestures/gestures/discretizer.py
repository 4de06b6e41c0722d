"""
Direction discretization for motion shifts.
"""

import math

from ..config.settings import GestureConfig, InvalidConfiguration
from ..utils.gesture_utils import ShiftSample
from .pattern import Direction


class Discretizer:
    """
    Maps the angle of a shift onto one of ``k`` direction sectors.

    Sector 1 straddles angle 0 (the positive x axis); indices grow with the
    angle counter-clockwise up to ``k / 2 + 1`` at pi and continue clockwise
    from ``k`` back down through the negative angles.
    """

    def __init__(self, k: int = GestureConfig.DISCRETIZATION):
        if k <= 0 or k % 4 != 0:
            raise InvalidConfiguration(f"k must be a positive multiple of 4, got {k}")
        self.k = k
        self.half_segment = math.pi / k

    def direction_for(self, shift: ShiftSample) -> Direction:
        """Return the direction sector containing the shift's angle."""
        angle = shift.angle
        r = int(abs(angle) / self.half_segment)
        k = self.k

        if r == 0:
            index = 1
        elif r == k - 1:
            index = k // 2 + 1
        elif angle > 0:
            index = (r - 1) // 2 + 2
        else:
            index = k - (r - 1) // 2

        return Direction(index, k)
