"""
Command Dispatcher
==================

The central routing table for bike commands.

Role in the System
------------------
The tokenizer hands over a (name, args) pair for every line of the
command file. The dispatcher lower-cases the name, finds the
registered Command and runs it against the bike it owns. Unknown
names return None: no state change and no diagnostic.

    Command file line: "PLACE 1,2,NORTH"
                  ↓
    Tokenizer → ("PLACE", ["1", "2", "NORTH"])
                  ↓
    Dispatcher looks up "place" → PlaceCommand
                  ↓
    PlaceCommand.execute(bike, ["1", "2", "NORTH"]) → CommandResult
                  ↓
    run() emits output lines and ignored-command diagnostics

Failure Policy
--------------
Every BikeError raised while a command runs is caught here, in
dispatch(), and becomes a CommandResult with `error` set. When the
whole sequence is processed by run(), such results are reported as

    Ignored "<command>": <error detail>

and processing continues with the next command. Domain errors never
escape the dispatcher, so a malformed command file degrades to a
list of diagnostics plus a bike in its last valid state.

Classes
-------
CommandResult
    Structured outcome of one command.

Command (ABC)
    Base class for bike command handlers.
    Required: name, help_text, execute(bike, args).
    Optional: aliases.

CommandDispatcher
    Registry and router bound to one Bike.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from bike_commands.bike import Bike, BikeError

logger = logging.getLogger(__name__)

# A sink receives one line of text (print by default).
Sink = Callable[[str], None]


@dataclass
class CommandResult:
    """Structured output from a command execution.

    Attributes
    ----------
    command : str
        The command name that produced this result (e.g., "forward").

    summary : str
        Human-readable description of what happened, for logs.

    details : dict
        Bike state after the command: position and heading.

    error : str or None
        Set when the bike rejected the command. Holds the detail
        text of the BikeError, e.g. "Bike cannot move if unplaced."

    output : str or None
        A line for the output sink. Only gps_report sets it.

    skipped : bool
        True when the arguments were malformed and the bike was
        never called. Skipped commands produce no diagnostic.
    """
    command: str
    summary: str = ""
    details: dict = field(default_factory=dict)
    error: Optional[str] = None
    output: Optional[str] = None
    skipped: bool = False

    @property
    def is_error(self) -> bool:
        """Check if this result represents an error."""
        return self.error is not None

    def format_ignored(self) -> str:
        return f'Ignored "{self.command}": {self.error}'


class Command(ABC):
    """Base class for all bike commands.

    Each subclass validates and coerces its own argument list, then
    calls one Bike operation. BikeErrors are left to propagate; the
    dispatcher turns them into error results.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Primary command name (lowercase)."""
        ...

    @property
    def aliases(self) -> list[str]:
        """Alternative names that also trigger this command."""
        return []

    @property
    @abstractmethod
    def help_text(self) -> str:
        """One-line usage description."""
        ...

    @abstractmethod
    def execute(self, bike: Bike, args: Optional[Sequence[str]]) -> CommandResult:
        """Validate arguments and run the command against `bike`.

        Parameters
        ----------
        bike : Bike
            The bike to drive.
        args : sequence of str or None
            Comma-separated arguments from the command line, or None
            when the line had no argument token.

        Returns
        -------
        CommandResult

        Raises
        ------
        BikeError
            When the bike rejects the operation.
        """
        ...


class CommandDispatcher:
    """Routes (name, args) pairs to registered command handlers.

    The dispatcher owns one Bike for the duration of a run and is
    not thread safe; commands are processed strictly in order.

    Usage
    -----
        bike = Bike(Board(7, 7))
        dispatcher = CommandDispatcher(bike)
        dispatcher.register(PlaceCommand())
        dispatcher.register(ForwardCommand())

        dispatcher.run(read_command_file("commands.txt"))
    """

    def __init__(self, bike: Bike, output: Sink = print, errors: Sink = print):
        self.bike = bike
        self.output = output
        self.errors = errors
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a command handler.

        Raises
        ------
        ValueError
            If the command name or any alias collides with an
            already-registered name.
        """
        for key in [command.name] + command.aliases:
            key = key.lower()
            if key in self._commands:
                raise ValueError(
                    f"Command name collision: '{key}' is already registered "
                    f"to '{self._commands[key].name}'"
                )
            self._commands[key] = command

    def dispatch(self, name: str,
                 args: Optional[Sequence[str]] = None) -> Optional[CommandResult]:
        """Run a single command.

        Returns
        -------
        CommandResult or None
            None if the name is not a registered command. Otherwise
            the command's result, with `error` set if the bike
            raised a BikeError.
        """
        cmd_name = name.lower()

        command = self._commands.get(cmd_name)
        if command is None:
            return None

        try:
            return command.execute(self.bike, args)
        except BikeError as e:
            logger.debug(f"{cmd_name} rejected: {e}")
            return CommandResult(command=cmd_name, error=str(e))

    def run(self, commands: Iterable[tuple[str, Optional[Sequence[str]]]]) -> list[CommandResult]:
        """Process a whole command sequence, in order.

        Report lines go to the output sink and ignored-command
        diagnostics to the error sink. Unknown commands are dropped
        without a result.
        """
        results = []
        for name, args in commands:
            result = self.dispatch(name, args)
            if result is None:
                logger.debug(f"Unknown command {name!r} skipped")
                continue

            if result.is_error:
                self.errors(result.format_ignored())
            else:
                logger.debug(f"{result.command}: {result.summary}")
                if result.output is not None:
                    self.output(result.output)

            results.append(result)
        return results

    def list_commands(self) -> list[tuple[str, str]]:
        """Return (name, help_text) for all registered commands.

        Deduplicates aliases so each command appears once.
        Sorted alphabetically by name.
        """
        seen = set()
        result = []
        for cmd in self._commands.values():
            if cmd.name not in seen:
                seen.add(cmd.name)
                result.append((cmd.name, cmd.help_text))
        return sorted(result, key=lambda x: x[0])
