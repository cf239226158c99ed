"""
Board
=====

The rectangular grid the bike rides on.

A Board is created once per run from the configured dimensions
and never changes afterwards. Positions are zero indexed, so a
7x7 board accepts x and y in 0..6:

    (0,6) ┌───────────────┐ (6,6)
          │               │
          │   valid cells │
          │               │
    (0,0) └───────────────┘ (6,0)

A board with a zero dimension is legal but has no valid cells.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class BoardError(ValueError):
    """Raised when a Board is built with invalid dimensions."""


@dataclass(frozen=True)
class Board:
    """Bounded rectangle of valid integer coordinates.

    Attributes
    ----------
    width : int
        Number of columns (x axis). Must be >= 0.
    height : int
        Number of rows (y axis). Must be >= 0.
    """
    width: int
    height: int
    min_x: int = field(default=0, init=False)
    min_y: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise BoardError(
                f"Invalid board dimension ({self.width}, {self.height})"
            )

    @property
    def max_x(self) -> int:
        return self.width - 1

    @property
    def max_y(self) -> int:
        return self.height - 1

    def validate_position(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies on this board."""
        return (self.min_x <= x <= self.max_x
                and self.min_y <= y <= self.max_y)

    def __contains__(self, position) -> bool:
        x, y = position
        return self.validate_position(x, y)
