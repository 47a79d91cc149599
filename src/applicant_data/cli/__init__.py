"""CLI package - Typer-based command-line interface.

Usage:
    python -m applicant_data.cli --help
    applicant-data read answers.json applicant.name.first_name
"""

from applicant_data.cli._app import app

# Register command modules (side-effect imports)
import applicant_data.cli.cmd_document  # noqa: F401
import applicant_data.cli.cmd_merge  # noqa: F401

__all__ = ["app"]
