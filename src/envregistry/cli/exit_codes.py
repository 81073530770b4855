"""
Standardized exit codes for envregistry CLI commands.

Scripts can rely on these codes to tell a broken source apart from a source
that loads but lacks required variables.
"""

from typing import Optional

import typer


EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2


class CliExit(typer.Exit):
    """
    Standardized CLI exit exception that extends typer.Exit with consistent codes.

    Usage:
        raise CliExit.success()
        raise CliExit.error("Cannot read source")
        raise CliExit.config_error("Configuration variable 'db.host' is missing")
    """

    def __init__(self, code: int, message: Optional[str] = None):
        self.message = message
        super().__init__(code)
        if message:
            typer.echo(message, err=code != EXIT_SUCCESS)

    @classmethod
    def success(cls, message: Optional[str] = None) -> "CliExit":
        """Create a success exit."""
        return cls(EXIT_SUCCESS, message)

    @classmethod
    def error(cls, message: Optional[str] = None) -> "CliExit":
        """Create an error exit."""
        return cls(EXIT_ERROR, message)

    @classmethod
    def config_error(cls, message: Optional[str] = None) -> "CliExit":
        """Create a configuration error exit (missing required variables)."""
        return cls(EXIT_CONFIG_ERROR, message)
