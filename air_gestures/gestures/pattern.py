"""
Symbolic gesture patterns.

A pattern is the ordered list of directional segments a gesture passed
through, each carrying the share of motion spent in that direction.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Direction:
    """One of ``discretization`` equally spaced directions, indexed from 1."""
    index: int
    discretization: int

    def cyclic_distance(self, other: 'Direction') -> int:
        """Number of steps between two directions around the circle."""
        diff = abs(self.index - other.index)
        return min(diff, self.discretization - diff)

    def is_similar(self, other: 'Direction') -> bool:
        """True for the same direction or a direct neighbour."""
        if self.index == other.index:
            return True
        diff = abs(self.index - other.index)
        return diff == 1 or diff == self.discretization - 1

    def to_dict(self) -> Dict[str, int]:
        return {'index': self.index, 'discretization': self.discretization}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Direction':
        return cls(int(data['index']), int(data['discretization']))


@dataclass(frozen=True)
class PatternSegment:
    """A run of motion in one direction with its accumulated weight."""
    direction: Direction
    weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {'direction': self.direction.to_dict(), 'weight': self.weight}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PatternSegment':
        return cls(Direction.from_dict(data['direction']), float(data['weight']))


class Pattern:
    """Ordered, finalized sequence of pattern segments."""

    def __init__(self, segments: Optional[List[PatternSegment]] = None):
        self._segments: Tuple[PatternSegment, ...] = tuple(segments or ())

    @classmethod
    def empty(cls) -> 'Pattern':
        return cls([])

    @property
    def segments(self) -> Tuple[PatternSegment, ...]:
        return self._segments

    @property
    def is_empty(self) -> bool:
        return not self._segments

    @property
    def directions(self) -> List[int]:
        return [s.direction.index for s in self._segments]

    @property
    def weights(self) -> List[float]:
        return [s.weight for s in self._segments]

    def __len__(self):
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __getitem__(self, item):
        return self._segments[item]

    def __eq__(self, other):
        if not isinstance(other, Pattern):
            return False
        return self._segments == other._segments

    def __hash__(self):
        return hash(tuple((s.direction, s.weight) for s in self._segments))

    def __repr__(self):
        parts = ", ".join(f"{s.direction.index}:{s.weight:.2f}" for s in self._segments)
        return f"Pattern([{parts}])"

    def to_records(self) -> List[Dict[str, Any]]:
        """Serialize to an ordered list of segment records."""
        return [s.to_dict() for s in self._segments]

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]]) -> 'Pattern':
        return cls([PatternSegment.from_dict(r) for r in records])
