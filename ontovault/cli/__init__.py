"""
ontovault command line

Commands implement SupportsCliCommand and report failures by raising
CliCommandException with one of the exit codes below.
"""

from ontovault.cli.reference import SupportsCliCommand
from ontovault.cli.exceptions import CliCommandException

DEFAULT_DOCS_URL = "https://github.com/opencaesar/oml2obsidian"

# Process exit codes
EXIT_OK = 0
EXIT_PROJECTION_FAILED = 1
EXIT_INVALID_ARGUMENTS = 2

__all__ = [
    "SupportsCliCommand",
    "CliCommandException",
    "DEFAULT_DOCS_URL",
    "EXIT_OK",
    "EXIT_PROJECTION_FAILED",
    "EXIT_INVALID_ARGUMENTS",
]
