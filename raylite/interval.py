"""
Numeric intervals.

Used both as the acceptance window for ray parameters during hit
testing and as the clamp range for color output.
"""

from __future__ import annotations
from typing import Generic, TypeVar

T = TypeVar('T', int, float)


class Interval(Generic[T]):
    """A range ``[min, max]`` over an ordered scalar type.

    ``min <= max`` is expected but not enforced; an interval with
    ``min > max`` is empty for :meth:`contains` and :meth:`surrounds`,
    and :meth:`clamp` on it is undefined.
    """

    __slots__ = ('min', 'max')

    def __init__(self, min: T, max: T):
        self.min = min
        self.max = max

    def size(self) -> T:
        return self.max - self.min

    def contains(self, value: T) -> bool:
        """Inclusive test: ``min <= value <= max``."""
        return self.min <= value <= self.max

    def surrounds(self, value: T) -> bool:
        """Exclusive test: ``min < value < max``."""
        return self.min < value < self.max

    def clamp(self, value: T) -> T:
        """Saturate ``value`` into ``[min, max]``."""
        if value < self.min:
            return self.min
        if value > self.max:
            return self.max
        return value

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"


EMPTY: Interval[float] = Interval(float('inf'), float('-inf'))
UNIVERSE: Interval[float] = Interval(float('-inf'), float('inf'))
