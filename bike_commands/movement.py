"""
Bike Commands
=============

One Command handler per instruction in a command file.

    PLACE X,Y,F     Put the bike at (X, Y) facing F
    FORWARD [N]     Ride N cells forward (default 1)
    TURN_LEFT       Quarter turn anticlockwise
    TURN_RIGHT      Quarter turn clockwise
    GPS_REPORT      Print "X,Y,F"

Argument Rules
--------------
PLACE needs at least three arguments and the first two must be
integers. Anything less is skipped without calling the bike and
without a diagnostic. Extra arguments are ignored.

FORWARD takes an optional step count. A non-numeric count falls
back to one step rather than skipping the command:

    FORWARD        →  move(1)
    FORWARD 3      →  move(3)
    FORWARD -2     →  move(-2)   rides backwards
    FORWARD abc    →  move(1)

The turn and report commands ignore any arguments.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from bike_commands.bike import Bike
from bike_commands.dispatcher import Command, CommandResult

DEFAULT_STEPS = 1

# ASCII digits with an optional sign. int() alone would also take
# "1_0" and non-ASCII digits.
_INT_PATTERN = re.compile(r'\s*[+-]?[0-9]+\s*')


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse a decimal integer argument, or return None if it isn't one."""
    if text is None or _INT_PATTERN.fullmatch(text) is None:
        return None
    return int(text)


def bike_state(bike: Bike) -> dict:
    """Position and heading snapshot for CommandResult.details."""
    return {
        "position": None if bike.position is None else (bike.position.x, bike.position.y),
        "heading": None if bike.heading is None else bike.heading.name,
    }


class PlaceCommand(Command):

    @property
    def name(self) -> str:
        return "place"

    @property
    def help_text(self) -> str:
        return "PLACE X,Y,F — Put the bike at (X, Y) facing NORTH/EAST/SOUTH/WEST"

    def execute(self, bike: Bike, args: Optional[Sequence[str]]) -> CommandResult:
        if not args or len(args) < 3:
            return CommandResult(command=self.name, skipped=True,
                                 summary="PLACE needs X,Y,F")

        x = parse_int(args[0])
        y = parse_int(args[1])
        if x is None or y is None:
            return CommandResult(command=self.name, skipped=True,
                                 summary=f"PLACE coordinates are not integers: {args[0]},{args[1]}")

        bike.place(x, y, args[2])
        return CommandResult(
            command=self.name,
            summary=f"Placed at {bike.position} facing {bike.heading.name}",
            details=bike_state(bike),
        )


class ForwardCommand(Command):

    @property
    def name(self) -> str:
        return "forward"

    @property
    def help_text(self) -> str:
        return "FORWARD [N] — Ride N cells along the current heading (default 1)"

    def execute(self, bike: Bike, args: Optional[Sequence[str]]) -> CommandResult:
        steps = parse_int(args[0]) if args else None
        if steps is None:
            steps = DEFAULT_STEPS

        bike.move(steps)
        return CommandResult(
            command=self.name,
            summary=f"Moved {steps} to {bike.position}",
            details=bike_state(bike),
        )


class TurnLeftCommand(Command):

    @property
    def name(self) -> str:
        return "turn_left"

    @property
    def help_text(self) -> str:
        return "TURN_LEFT — Quarter turn anticlockwise"

    def execute(self, bike: Bike, args: Optional[Sequence[str]]) -> CommandResult:
        bike.rotate_left()
        return CommandResult(
            command=self.name,
            summary=f"Now facing {bike.heading.name}",
            details=bike_state(bike),
        )


class TurnRightCommand(Command):

    @property
    def name(self) -> str:
        return "turn_right"

    @property
    def help_text(self) -> str:
        return "TURN_RIGHT — Quarter turn clockwise"

    def execute(self, bike: Bike, args: Optional[Sequence[str]]) -> CommandResult:
        bike.rotate_right()
        return CommandResult(
            command=self.name,
            summary=f"Now facing {bike.heading.name}",
            details=bike_state(bike),
        )


class GpsReportCommand(Command):
    """Reports the bike state to the output sink."""

    @property
    def name(self) -> str:
        return "gps_report"

    @property
    def help_text(self) -> str:
        return "GPS_REPORT — Print the bike position and heading as X,Y,F"

    def execute(self, bike: Bike, args: Optional[Sequence[str]]) -> CommandResult:
        report = bike.report()
        return CommandResult(
            command=self.name,
            summary=report,
            details=bike_state(bike),
            output=report,
        )


ALL_COMMANDS = (
    PlaceCommand,
    ForwardCommand,
    TurnLeftCommand,
    TurnRightCommand,
    GpsReportCommand,
)
