"""CLI command implementations for the cutplan application.

This package contains subcommands for the cutplan CLI, including:
- validate: Validate a configuration file
"""

from cutplan.cli.commands.validate import validate_command

__all__ = ["validate_command"]
