"""Error taxonomy for file operations.

Every failure a file operation can report is one of the ErrorKind members.
OS errors are classified into this closed set at the filesystem boundary and
never passed through raw, so callers can branch on a fixed vocabulary.

Operations return a Result rather than raising. A Result can be compared
directly against an ErrorKind constant:

    >>> result = File("missing.txt").open_read()
    >>> result == ErrorKind.FILE_COULD_NOT_BE_OPENED
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CATEGORY = "filekeeper"


class ErrorKind(Enum):
    """Domain error kinds.

    Values are 1-based so that zero never denotes an error. This is a plain
    Enum rather than an IntEnum: a kind never compares equal to an errno value.
    """

    NO_PATH_SPECIFIED = 1
    FILE_DOES_NOT_EXIST = 2
    FILE_EXISTS_AT_TARGET_PATH = 3
    FILE_COULD_NOT_BE_OPENED = 4
    FILE_COULD_NOT_BE_CLOSED = 5
    ERROR_WRITING_TO_FILE = 6

    @property
    def code(self) -> int:
        """Numeric code of this kind."""
        return self.value

    @property
    def message(self) -> str:
        """Human-readable message for this kind."""
        return _MESSAGES[self]

    @property
    def category(self) -> str:
        """Name of the category all kinds belong to."""
        return CATEGORY

    def __str__(self) -> str:
        return self.message


_MESSAGES = {
    ErrorKind.NO_PATH_SPECIFIED: "No file path specified",
    ErrorKind.FILE_DOES_NOT_EXIST: "File does not exist",
    ErrorKind.FILE_EXISTS_AT_TARGET_PATH: "File exists at target path",
    ErrorKind.FILE_COULD_NOT_BE_OPENED: "File could not be opened",
    ErrorKind.FILE_COULD_NOT_BE_CLOSED: "File could not be closed",
    ErrorKind.ERROR_WRITING_TO_FILE: "Error writing to file",
}


class FilekeeperError(Exception):
    """Base exception for filekeeper."""

    pass


class FileOperationError(FilekeeperError):
    """Raised by Result.raise_for_error() for callers that prefer exceptions."""

    def __init__(self, kind: ErrorKind, path: str = ""):
        self.kind = kind
        self.path = path
        detail = f": {path}" if path else ""
        super().__init__(f"{kind.message}{detail}")


@dataclass(frozen=True, eq=False)
class Result:
    """Outcome of a single file operation.

    Attributes:
        error: The domain error kind, or None on success
        cause: The OS error the kind was classified from, kept for diagnostics only
    """

    error: ErrorKind | None = None
    cause: OSError | None = None

    @classmethod
    def success(cls) -> Result:
        """Build a result carrying no error."""
        return cls()

    @classmethod
    def failure(cls, kind: ErrorKind, cause: OSError | None = None) -> Result:
        """Build a result carrying one error kind."""
        return cls(error=kind, cause=cause)

    @property
    def ok(self) -> bool:
        """Return True if the operation succeeded."""
        return self.error is None

    @property
    def message(self) -> str:
        """Message of the carried error, or an empty string on success."""
        return self.error.message if self.error is not None else ""

    def raise_for_error(self, path: str = "") -> None:
        """Raise FileOperationError if this result carries an error."""
        if self.error is not None:
            raise FileOperationError(self.error, path) from self.cause

    def __bool__(self) -> bool:
        return self.ok

    def __eq__(self, other: object) -> bool:
        # Only domain-to-domain comparison is defined; an OSError (even our own
        # cause) is a different category and never equal.
        if isinstance(other, ErrorKind):
            return self.error is other
        if isinstance(other, Result):
            return self.error is other.error
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.error)

    def __repr__(self) -> str:
        if self.error is None:
            return "Result(ok)"
        return f"Result({self.error.name})"


def classify_os_error(exc: OSError, default: ErrorKind) -> ErrorKind:
    """Map an OS error into the closed set of error kinds.

    Args:
        exc: The error raised by the filesystem
        default: Kind to use when the error has no more specific meaning

    Returns:
        The matching ErrorKind
    """
    if isinstance(exc, FileNotFoundError):
        return ErrorKind.FILE_DOES_NOT_EXIST
    if isinstance(exc, FileExistsError):
        return ErrorKind.FILE_EXISTS_AT_TARGET_PATH
    return default
