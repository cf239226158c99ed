#!/usr/bin/env python3
"""
Configuration system for Bike Driving
Supports YAML files, CLI overrides, and programmatic access
"""

import yaml
import argparse
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from copy import deepcopy
import logging

from bike_commands import list_commands


DEFAULT_BOARD_WIDTH = 7
DEFAULT_BOARD_HEIGHT = 7


@dataclass
class BoardConfig:
	"""Board dimensions (cells along each axis)"""
	width: int = DEFAULT_BOARD_WIDTH
	height: int = DEFAULT_BOARD_HEIGHT

	def to_dict(self) -> Dict[str, Any]:
		return {
			'width': self.width,
			'height': self.height
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'BoardConfig':
		return cls(
			width=data.get('width', DEFAULT_BOARD_WIDTH),
			height=data.get('height', DEFAULT_BOARD_HEIGHT)
		)


@dataclass
class ConsoleConfig:
	"""Console messages logging level configuration"""
	verbose: bool = False
	quiet: bool = False

	def to_dict(self) -> Dict[str, Any]:
		return {
			'verbose': self.verbose,
			'quiet': self.quiet
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'ConsoleConfig':
		return cls(
			verbose=data.get('verbose', False),
			quiet=data.get('quiet', False)
		)


@dataclass
class BikeDrivingConfig:
	"""Complete configuration for a bike driving run"""
	board: BoardConfig = field(default_factory=BoardConfig)
	console: ConsoleConfig = field(default_factory=ConsoleConfig)

	# Metadata
	config_version: str = "1.0"
	description: str = "Bike Driving Configuration"

	def to_dict(self) -> Dict[str, Any]:
		"""Convert to dictionary for YAML serialization"""
		return {
			'config_version': self.config_version,
			'description': self.description,
			'board': self.board.to_dict(),
			'console': self.console.to_dict(),
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'BikeDrivingConfig':
		"""Create from dictionary (YAML loading)"""
		config = cls()

		if 'config_version' in data:
			config.config_version = str(data['config_version'])
		if 'description' in data:
			config.description = data['description']

		if isinstance(data.get('board'), dict):
			config.board = BoardConfig.from_dict(data['board'])

		if isinstance(data.get('console'), dict):
			config.console = ConsoleConfig.from_dict(data['console'])

		return config


class ConfigurationManager:
	"""
	Manages configuration loading, merging, and validation
	"""

	def __init__(self):
		self.config = None
		self.config_file_path = None

		self.logger = logging.getLogger(__name__)

		# Standard config file locations (in order of preference)
		self.config_search_paths = [
			Path.cwd() / "bike_driving.yaml",  # Current directory
			Path.cwd() / "config" / "bike_driving.yaml",  # Config subdirectory
			Path.home() / ".config" / "bike_driving" / "config.yaml",  # User config
			Path("/etc/bike_driving/config.yaml"),  # System config (Linux)
		]

	def load_config(self, config_file: Optional[str] = None) -> BikeDrivingConfig:
		"""
		Load configuration from file with fallback chain

		Args:
			config_file: Specific config file path, or None for auto-discovery

		Returns:
			Loaded configuration object (defaults if nothing was found)
		"""
		if config_file:
			# Use specified file
			config_path = Path(config_file)
			if config_path.exists():
				self.config = self._load_yaml_file(config_path)
				self.config_file_path = config_path
				self.logger.info(f"Loaded config from: {config_path}")
			else:
				self.logger.warning(f"Config file not found: {config_path}")
				self.logger.info("Using default configuration")
		else:
			# Auto-discover config file
			for path in self.config_search_paths:
				if path.exists():
					self.config = self._load_yaml_file(path)
					self.config_file_path = path
					self.logger.info(f"Auto-discovered config: {path}")
					break
			else:
				self.logger.info("No config file found, using defaults")

		if self.config is None:
			self.config = BikeDrivingConfig()

		return self.config

	def _load_yaml_file(self, file_path: Path) -> BikeDrivingConfig:
		"""Load configuration from YAML file"""
		try:
			with open(file_path, 'r') as f:
				yaml_data = yaml.safe_load(f) or {}

			if not isinstance(yaml_data, dict):
				self.logger.error(f"Config file {file_path} does not contain a mapping")
				return BikeDrivingConfig()

			return BikeDrivingConfig.from_dict(yaml_data)

		except (OSError, yaml.YAMLError) as e:
			self.logger.error(f"Error loading config file {file_path}: {e}")
			return BikeDrivingConfig()

	def merge_cli_args(self, args: argparse.Namespace) -> BikeDrivingConfig:
		"""
		Merge CLI arguments into configuration (CLI takes precedence)

		Args:
			args: Parsed command line arguments

		Returns:
			Updated configuration
		"""
		if self.config is None:
			self.config = BikeDrivingConfig()

		# Board settings
		if getattr(args, 'width', None) is not None:
			self.config.board.width = args.width
		if getattr(args, 'height', None) is not None:
			self.config.board.height = args.height

		# Console settings
		if getattr(args, 'verbose', False):
			self.config.console.verbose = True
		if getattr(args, 'quiet', False):
			self.config.console.quiet = True

		return self.config

	def save_config(self, file_path: Optional[str] = None) -> bool:
		"""
		Save current configuration to YAML file

		Args:
			file_path: Target file path, or None to use loaded file path

		Returns:
			True if saved successfully
		"""
		if file_path:
			target_path = Path(file_path)
		elif self.config_file_path:
			target_path = self.config_file_path
		else:
			target_path = Path("bike_driving.yaml")

		try:
			target_path.parent.mkdir(parents=True, exist_ok=True)

			with open(target_path, 'w') as f:
				f.write("# Bike Driving Configuration\n")
				f.write("# Generated configuration file\n")
				f.write(f"# Version: {self.config.config_version}\n\n")

				yaml.dump(self.config.to_dict(), f,
						 default_flow_style=False,
						 sort_keys=False,
						 indent=2)

			self.logger.info(f"Configuration saved to: {target_path}")
			return True

		except OSError as e:
			self.logger.error(f"Error saving config to {target_path}: {e}")
			return False

	def create_sample_config(self, file_path: str = "bike_driving_sample.yaml") -> bool:
		"""Create a sample configuration file with comments"""
		try:
			with open(file_path, 'w') as f:
				f.write(self._generate_sample_yaml())

			self.logger.info(f"Sample configuration created: {file_path}")
			return True

		except OSError as e:
			self.logger.error(f"Error creating sample config: {e}")
			return False

	def _generate_sample_yaml(self) -> str:
		"""Generate sample YAML with comments"""
		return f"""# Bike Driving Configuration File

# =============================================================================
# BOARD SETTINGS
# =============================================================================
board:
  width: {DEFAULT_BOARD_WIDTH}                        # Cells along x (valid x: 0 .. width-1)
  height: {DEFAULT_BOARD_HEIGHT}                       # Cells along y (valid y: 0 .. height-1)
                                  # Zero is allowed but leaves no valid cells

# =============================================================================
# CONSOLE MESSAGES LOGGING LEVEL
# =============================================================================
console:
  verbose: false                  # Debug logging of every bike move
  quiet: false                    # Warnings only
                                  # Ignored-command lines are always printed

# =============================================================================
# CONFIGURATION METADATA
# =============================================================================
config_version: "1.0"
description: "Bike Driving Configuration"
"""

	def validate_config(self) -> tuple[bool, list[str]]:
		"""
		Validate configuration for common issues

		Returns:
			(is_valid, list_of_errors)
		"""
		errors = []

		for axis in ('width', 'height'):
			value = getattr(self.config.board, axis)
			if not isinstance(value, int) or isinstance(value, bool):
				errors.append(f"Board {axis} must be an integer, got {value!r}")
			elif value < 0:
				errors.append(f"Invalid board {axis}: {value}. Must be 0 or more")

		if self.config.console.verbose and self.config.console.quiet:
			errors.append("Console cannot be both verbose and quiet")

		return len(errors) == 0, errors

	def get_config(self) -> BikeDrivingConfig:
		"""Get current configuration"""
		return deepcopy(self.config)


def _commands_epilog() -> str:
	"""Command reference for --help, built from the registered commands"""
	lines = ["", "Commands (one per line in input_file):"]
	lines += [f"  {help_text}" for _, help_text in list_commands()]
	return "\n".join(lines) + "\n"


def create_argument_parser():
	"""Argument parser for the bike driving CLI"""
	parser = argparse.ArgumentParser(
		description='Drive a bike around a board from a file of commands',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog=_commands_epilog() + """
Examples:
  %(prog)s commands.txt                    # Run on the default 7x7 board
  %(prog)s commands.txt -v                 # Debug logging of every move
  %(prog)s commands.txt --width 5 --height 5
  %(prog)s -c my_config.yaml commands.txt  # Use specific config file
  %(prog)s --create-config sample.yaml     # Create sample config file

Configuration:
  Configuration is loaded in this order (later overrides earlier):
  1. Built-in defaults
  2. Configuration file (YAML)
  3. Command line arguments

  Config file search order:
  - bike_driving.yaml (current directory)
  - config/bike_driving.yaml
  - ~/.config/bike_driving/config.yaml
  - /etc/bike_driving/config.yaml
		"""
	)

	# Positional arguments
	parser.add_argument(
		'input_file',
		nargs='?',
		help='The filepath containing bike commands to be processed'
	)

	# Configuration file handling
	config_group = parser.add_argument_group('Configuration')
	config_group.add_argument(
		'-c', '--config',
		type=str,
		help='Configuration file path (YAML format)'
	)
	config_group.add_argument(
		'--create-config',
		type=str,
		metavar='FILE',
		help='Create sample configuration file and exit'
	)
	config_group.add_argument(
		'--save-config',
		type=str,
		metavar='FILE',
		help='Save current configuration to file'
	)

	# Board settings
	board_group = parser.add_argument_group('Board Settings')
	board_group.add_argument(
		'--width',
		type=int,
		help=f'Board width in cells (default: {DEFAULT_BOARD_WIDTH})'
	)
	board_group.add_argument(
		'--height',
		type=int,
		help=f'Board height in cells (default: {DEFAULT_BOARD_HEIGHT})'
	)

	# Debug settings
	debug_group = parser.add_argument_group('Debug Options')
	debug_group.add_argument(
		'-v', '--verbose',
		action='store_true',
		help='Display bike debug output'
	)
	debug_group.add_argument(
		'-q', '--quiet',
		action='store_true',
		help='Quiet mode (warnings only)'
	)

	return parser


def setup_configuration(argv=None) -> tuple[Optional[BikeDrivingConfig], bool, Optional[ConfigurationManager], argparse.Namespace]:
	"""
	Setup configuration system with CLI integration

	Args:
		argv: Command line arguments (None for sys.argv)

	Returns:
		(config_object, should_exit, config_manager, parsed_args)
		config_object is None when the run should stop with an error
	"""
	parser = create_argument_parser()
	args = parser.parse_args(argv)

	manager = ConfigurationManager()

	# Handle special commands first
	if args.create_config:
		if manager.create_sample_config(args.create_config):
			print(f"Sample configuration created: {args.create_config}")
			print(f"Edit the file and run again with: -c {args.create_config}")
			return BikeDrivingConfig(), True, manager, args
		return None, True, manager, args

	# Load configuration, then let CLI arguments override it
	manager.load_config(args.config)
	config = manager.merge_cli_args(args)

	is_valid, errors = manager.validate_config()
	if not is_valid:
		print("Configuration errors:")
		for error in errors:
			print(f"  ✗ {error}")
		return None, True, manager, args

	# Save config if requested
	if args.save_config:
		if manager.save_config(args.save_config):
			print(f"Configuration saved to: {args.save_config}")

	return config, False, manager, args

