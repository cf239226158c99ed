"""
Bike Driving Command System
===========================

Drives a bike around a bounded rectangular board from a file of
text commands.

Architecture Overview
---------------------
    ┌──────────────┐   (name, args)   ┌──────────────┐    ┌──────────┐
    │ command_file │ ───────────────► │  Command     │───►│   Bike   │
    │ (tokenizer)  │                  │  Dispatcher  │    │  ┌─────┐ │
    └──────────────┘                  └──────┬───────┘    │  │Board│ │
                                             │            │  └─────┘ │
                                        ┌────▼────┐       └──────────┘
                                        │ Command │──► GPS_REPORT line
                                        │ Result  │──► Ignored "..." line
                                        └─────────┘

The tokenizer reads the file. The dispatcher maps each command name
to a Command handler, which checks the argument list and calls the
bike. Bike failures are caught in the dispatcher and reported as
"Ignored" lines; the run always continues with the next command.

Usage
-----
    from bike_commands import Board, Bike, create_dispatcher
    from bike_commands.command_file import read_command_file

    bike = Bike(Board(7, 7))
    dispatcher = create_dispatcher(bike)
    dispatcher.run(read_command_file("commands.txt"))

Module Structure
----------------
    bike_commands/
    ├── __init__.py          ← This file. create_dispatcher() factory.
    ├── board.py             ← Board, BoardError.
    ├── bike.py              ← Heading, Position, Bike, BikeError family.
    ├── dispatcher.py        ← CommandDispatcher, Command ABC, CommandResult.
    ├── movement.py          ← PLACE, FORWARD, TURN_LEFT, TURN_RIGHT, GPS_REPORT.
    └── command_file.py      ← Command file tokenizer.
"""

from bike_commands.board import Board, BoardError
from bike_commands.bike import (
    Bike,
    BikeError,
    Heading,
    InvalidDirectionError,
    InvalidPositionError,
    Position,
    UnplacedError,
)
from bike_commands.dispatcher import Command, CommandDispatcher, CommandResult, Sink
from bike_commands.movement import ALL_COMMANDS


def create_dispatcher(bike: Bike, output: Sink = print, errors: Sink = print) -> CommandDispatcher:
    """Build a dispatcher for `bike` with every bike command registered."""
    dispatcher = CommandDispatcher(bike, output=output, errors=errors)
    for command_class in ALL_COMMANDS:
        dispatcher.register(command_class())
    return dispatcher


def list_commands() -> list[tuple[str, str]]:
    """(name, help_text) for every bike command, without a bike of your own."""
    return create_dispatcher(Bike(Board(0, 0))).list_commands()


__all__ = [
    'Board',
    'BoardError',
    'Bike',
    'BikeError',
    'Heading',
    'InvalidDirectionError',
    'InvalidPositionError',
    'Position',
    'UnplacedError',
    'Command',
    'CommandDispatcher',
    'CommandResult',
    'create_dispatcher',
    'list_commands',
]
