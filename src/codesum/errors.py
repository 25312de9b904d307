# src/codesum/errors.py
from pathlib import Path
from typing import Optional, Union

class CodesumError(Exception):
    """Base class for every error this package reports."""

    def __init__(self, path: Union[str, Path, None], cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        super().__init__(str(self))

    def _describe(self) -> str:
        return "error"

    def __str__(self) -> str:
        message = f"{self._describe()}: {self.path}"
        if self.cause is not None:
            message += f" ({self.cause})"
        return message

class FatalPathError(CodesumError):
    """The aggregation root cannot be resolved to an absolute path."""

    def _describe(self) -> str:
        return "Cannot resolve root path"

class TraversalEntryError(CodesumError):
    """A single traversal step failed; the walk carries on without it."""

    def _describe(self) -> str:
        return "Error walking entry"

class UnknownEntryTypeError(CodesumError):
    """An entry whose file type cannot be classified."""

    def _describe(self) -> str:
        return "Skipping entry of unknown file type"

class FileReadError(CodesumError):
    """A regular file could not be read in full as UTF-8 text."""

    def _describe(self) -> str:
        return "Error reading file"
