"""
Habitica Calculator - Stat Vector
=================================
The two stats that affect party damage: intelligence and strength.

Perception and constitution are left out because they do not change the
damage a player or party can deal.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Union

Scalar = Union[int, float]


@dataclass(frozen=True)
class Stats:
    """
    Immutable (INT, STR) pair.

    Arithmetic:
        Stats + Stats  -> component-wise sum
        Stats + scalar -> scalar added to both components
        Stats * scalar -> both components scaled

    Used both for raw attributes and as a buff delta on top of a baseline.
    """
    int_: float = 0.0
    str_: float = 0.0

    @classmethod
    def zero(cls) -> 'Stats':
        """Stats with every component at zero."""
        return cls(0.0, 0.0)

    def __add__(self, other: Union['Stats', Scalar]) -> 'Stats':
        if isinstance(other, Stats):
            return Stats(self.int_ + other.int_, self.str_ + other.str_)
        if isinstance(other, Real):
            return Stats(self.int_ + other, self.str_ + other)
        return NotImplemented

    def __radd__(self, other: Scalar) -> 'Stats':
        # sum() starts from 0
        if isinstance(other, Real):
            return self + other
        return NotImplemented

    def __mul__(self, other: Scalar) -> 'Stats':
        if isinstance(other, Real):
            return Stats(self.int_ * other, self.str_ * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> 'Stats':
        return self.__mul__(other)

    def total(self) -> float:
        """Sum of both components (e.g. points allocated)."""
        return self.int_ + self.str_

    def __str__(self) -> str:
        return f"[Int: {self.int_:.1f}, Str: {self.str_:.1f}]"
