"""
Bike
====

Position and heading state for the bike, validated against a Board.

State Machine
-------------
The bike has two macro-states:

    ┌──────────┐   place(x, y, dir)   ┌──────────┐
    │ Unplaced │ ───────────────────► │  Placed  │ ◄─┐ move / rotate /
    └──────────┘                      └──────────┘ ──┘ place again

Freshly built bikes are Unplaced: position and heading are both
None. move(), rotate_left(), rotate_right() and report() raise
UnplacedError until a place() succeeds. Once placed, the bike
never goes back to Unplaced.

set_position() and set_direction() are public primitives and may
each be called on their own, so position and heading are stored
as two optional fields. is_placed tells whether both are present.

Placement is not transactional. place() sets the position first
and the direction second; when the direction is rejected the new
position has already been stored and the old heading is kept.

Headings
--------
Headings are ordered clockwise, NORTH → EAST → SOUTH → WEST, and
rotation moves one step along that cycle with wraparound:

    rotate_right: index + 1 (mod 4)
    rotate_left:  index - 1 (mod 4)

Each heading carries the unit vector used by move():

    NORTH ( 0, +1)    EAST (+1,  0)
    SOUTH ( 0, -1)    WEST (-1,  0)

Error Taxonomy
--------------
    BikeError               base class, caught by the dispatcher
    ├── InvalidPositionError   target cell is off the board
    ├── InvalidDirectionError  unknown compass direction name
    └── UnplacedError          operation needs a placed bike
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from bike_commands.board import Board

logger = logging.getLogger(__name__)


# ─── Errors ─────────────────────────────────────────────────────────

class BikeError(Exception):
    """Base class for recoverable bike failures."""


class InvalidPositionError(BikeError):
    """The requested cell is not on the board."""


class InvalidDirectionError(BikeError):
    """The direction name is not one of north/east/south/west."""


class UnplacedError(BikeError):
    """The operation needs a placed bike."""


# ─── Domain Model ───────────────────────────────────────────────────

class Heading(Enum):
    """Compass heading with its unit displacement (dx, dy)."""
    NORTH = (0, 1)
    EAST = (1, 0)
    SOUTH = (0, -1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def display_name(self) -> str:
        return self.name.lower()

    @property
    def index(self) -> int:
        """Position in the clockwise cycle, NORTH=0 .. WEST=3."""
        return _CYCLE.index(self)

    def rotated(self, turns: int) -> Heading:
        """Heading after `turns` clockwise quarter turns (negative = anticlockwise)."""
        return _CYCLE[(self.index + turns) % len(_CYCLE)]

    @classmethod
    def from_name(cls, name: str) -> Heading:
        """Look up a heading by name, ignoring case.

        Raises
        ------
        InvalidDirectionError
            If the name is not a compass direction.
        """
        lowered = name.lower()
        for heading in cls:
            if heading.display_name == lowered:
                return heading
        raise InvalidDirectionError(f"Invalid direction {lowered}")


_CYCLE = (Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST)


@dataclass(frozen=True)
class Position:
    """A cell on the board."""
    x: int
    y: int

    def translate(self, heading: Heading, steps: int = 1) -> Position:
        return Position(self.x + heading.dx * steps,
                        self.y + heading.dy * steps)

    def __iter__(self) -> Iterator[int]:
        return iter((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


# ─── Bike ───────────────────────────────────────────────────────────

class Bike:
    """A bike on a Board.

    The Board is borrowed, never modified. Every position the bike
    holds has passed board.validate_position().
    """

    def __init__(self, board: Board):
        self.board = board
        self.position: Optional[Position] = None
        self.heading: Optional[Heading] = None

    @property
    def is_placed(self) -> bool:
        return self.position is not None and self.heading is not None

    def set_position(self, x: int, y: int) -> None:
        """Move the bike to (x, y) without touching the heading.

        Raises
        ------
        InvalidPositionError
            If (x, y) is off the board.
        """
        if not self.board.validate_position(x, y):
            raise InvalidPositionError(f"Invalid position ({x}, {y})")
        self.position = Position(x, y)

    def set_direction(self, direction: str) -> None:
        """Face the named compass direction (case-insensitive).

        Raises
        ------
        InvalidDirectionError
            If the name is not north, east, south or west.
        """
        self.heading = Heading.from_name(direction)

    def place(self, x: int, y: int, direction: str) -> None:
        """Put the bike at (x, y) facing `direction`.

        Position is applied before direction, and a rejected
        direction does not undo the new position.
        """
        self.set_position(x, y)
        self.set_direction(direction)
        logger.debug(f"Placed at {self.position} facing {self.heading.name}")

    def move(self, steps: int = 1) -> None:
        """Ride `steps` cells along the current heading.

        Zero steps is a no-op and negative steps ride backwards.
        An off-board target leaves the bike where it was.

        Raises
        ------
        UnplacedError
            If the bike has no heading yet.
        InvalidPositionError
            If the target cell is off the board.
        """
        if self.heading is None or self.position is None:
            raise UnplacedError("Bike cannot move if unplaced.")

        target = self.position.translate(self.heading, steps)
        if target not in self.board:
            raise InvalidPositionError(
                f"Bike cannot move to invalid position {target}"
            )

        self.set_position(target.x, target.y)
        logger.debug(f"Moved {steps} step(s) to {self.position}")

    def rotate_left(self) -> None:
        """Turn a quarter anticlockwise."""
        if self.heading is None:
            raise UnplacedError("Bike cannot rotate left if unplaced.")
        self.heading = self.heading.rotated(-1)
        logger.debug(f"Rotated left to {self.heading.name}")

    def rotate_right(self) -> None:
        """Turn a quarter clockwise."""
        if self.heading is None:
            raise UnplacedError("Bike cannot rotate right if unplaced.")
        self.heading = self.heading.rotated(1)
        logger.debug(f"Rotated right to {self.heading.name}")

    def report(self) -> str:
        """Current state as "x,y,HEADING", e.g. "1,1,WEST"."""
        if self.position is None or self.heading is None:
            raise UnplacedError("Bike cannot report if unplaced.")
        return f"{self.position.x},{self.position.y},{self.heading.name}"
