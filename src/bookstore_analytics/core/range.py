"""Inclusive integer interval."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Range:
    """Closed interval ``[lower, upper]`` over integers.

    Used to bound year selectors: ``PurchaseIndex.years()`` returns the
    span of years that hold purchases.
    """

    lower: int
    upper: int

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(
                f"Range lower bound {self.lower} exceeds upper bound {self.upper}"
            )

    @classmethod
    def single(cls, value: int) -> Range:
        """Degenerate range containing only *value*."""
        return cls(value, value)

    def lower_bound(self) -> int:
        return self.lower

    def upper_bound(self) -> int:
        return self.upper

    def contains(self, value: int) -> bool:
        return self.lower <= value <= self.upper

    def extend(self, value: int) -> Range:
        """Smallest range covering both this range and *value*."""
        if self.contains(value):
            return self
        return Range(min(self.lower, value), max(self.upper, value))

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.contains(value)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.lower, self.upper + 1))

    def __len__(self) -> int:
        return self.upper - self.lower + 1
