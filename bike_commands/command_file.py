"""
Command file reader.

Turns a text file of bike commands into (name, args) pairs for
CommandDispatcher.run(). One command per line:

    PLACE 1,2,NORTH      →  ("PLACE", ["1", "2", "NORTH"])
    FORWARD              →  ("FORWARD", None)
    FORWARD 3            →  ("FORWARD", ["3"])

The first whitespace-delimited token is the command name and the
second is split on commas. Anything after the second token is
ignored, and blank lines are skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

ParsedCommand = tuple[str, Optional[list[str]]]


class CommandFileError(OSError):
    """Raised when the command file cannot be read."""


def parse_line(line: str) -> Optional[ParsedCommand]:
    """Split one line into (name, args), or None for a blank line."""
    tokens = line.split()
    if not tokens:
        return None

    name = tokens[0]
    args = tokens[1].split(",") if len(tokens) > 1 else None
    return name, args


def parse_commands(text: str) -> list[ParsedCommand]:
    commands = []
    for line in text.splitlines():
        parsed = parse_line(line)
        if parsed is not None:
            commands.append(parsed)
    return commands


def read_command_file(path: Union[str, Path]) -> list[ParsedCommand]:
    """Read and tokenize a command file.

    Raises
    ------
    CommandFileError
        If the path does not exist, is not a file, or cannot be read.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise CommandFileError(f"{file_path} is not a valid input file")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CommandFileError(f"Could not read {file_path}: {e}") from e

    commands = parse_commands(text)
    logger.debug(f"Read {len(commands)} command(s) from {file_path}")
    return commands
