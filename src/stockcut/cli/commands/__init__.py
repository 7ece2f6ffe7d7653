"""CLI command implementations for stockcut.

- validate: Validate a job file
- output_handlers: Text/JSON rendering shared by the optimize commands
"""

from stockcut.cli.commands.validate import validate_command

__all__ = ["validate_command"]
