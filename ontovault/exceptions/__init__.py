"""
ontovault exceptions

Every error raised by ontovault derives from OntoVaultError. All of them are
fatal for a projection run: the CLI reports the message and exits non-zero.
"""

from ontovault.exceptions.exceptions import (
    OntoVaultError,
    ModelLoadError,
    PrefixConflictError,
    SchemaConflictError,
    OutputWriteError,
    OutputReadError,
)

__all__ = [
    "OntoVaultError",
    "ModelLoadError",
    "PrefixConflictError",
    "SchemaConflictError",
    "OutputWriteError",
    "OutputReadError",
]
