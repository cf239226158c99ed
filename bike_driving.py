#!/usr/bin/env python3
"""
Bike Driving

Reads a file of bike commands and drives a bike around a board.

	python3 bike_driving.py commands.txt [-v]

Every GPS_REPORT prints the bike state as "X,Y,F". Commands the bike
cannot carry out print an Ignored line and the run carries on:

	Ignored "forward": Bike cannot move if unplaced.

Exit codes:
	0  commands processed (or --help / --create-config)
	1  missing or unreadable input file, invalid configuration or board
"""

import sys
import logging
from typing import Optional

from config_manager import BikeDrivingConfig, create_argument_parser, setup_configuration
from bike_commands import Bike, Board, BoardError, create_dispatcher
from bike_commands.command_file import CommandFileError, read_command_file

logger = logging.getLogger(__name__)


# Global debug configuration
class DebugConfig:
	"""Centralized debug configuration"""
	VERBOSE = False
	QUIET = False

	@classmethod
	def set_mode(cls, verbose=False, quiet=False):
		cls.VERBOSE = verbose
		cls.QUIET = quiet

		# Set up logging based on mode
		if verbose:
			logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')
		elif quiet:
			logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')
		else:
			logging.basicConfig(level=logging.INFO, format='%(message)s')

	@classmethod
	def debug_print(cls, message, force=False):
		"""Print message only in verbose mode or if forced"""
		if cls.VERBOSE or force:
			print(message)

	@classmethod
	def system_print(cls, message):
		"""Print important system messages (always shown)"""
		print(message)


def abort(message: str) -> int:
	"""Print an ABORT message followed by usage, return the failure exit code"""
	DebugConfig.system_print(f"ABORT: {message}\n")
	create_argument_parser().print_usage()
	return 1


def run(config: BikeDrivingConfig, input_file: str) -> int:
	"""
	Drive the bike through every command in input_file

	Returns:
		Process exit code
	"""
	try:
		commands = read_command_file(input_file)
	except CommandFileError as e:
		return abort(str(e))

	try:
		board = Board(config.board.width, config.board.height)
	except BoardError as e:
		DebugConfig.system_print(f"✗ Error: {e}")
		return 1

	bike = Bike(board)
	dispatcher = create_dispatcher(bike)

	logger.debug(f"Board {board.width}x{board.height}, {len(commands)} command(s)")
	dispatcher.run(commands)
	return 0


def main(argv: Optional[list] = None) -> int:
	config, should_exit, config_manager, args = setup_configuration(argv)

	if should_exit:
		return 0 if config is not None else 1

	DebugConfig.set_mode(verbose=config.console.verbose, quiet=config.console.quiet)
	DebugConfig.debug_print("VERBOSE")

	if not args.input_file:
		return abort("You must specify an input file")

	return run(config, args.input_file)


# ===================================================================
# MAIN PROGRAM
# ===================================================================

if __name__ == "__main__":
	sys.exit(main())
