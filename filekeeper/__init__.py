"""Filekeeper - owned file handles with explicit error kinds.

This package provides:
- File: an exclusive handle on one path with open/read/append/close,
  no-replace rename, remove, and temp files that delete themselves on dispose
- ErrorKind and Result: a closed set of error kinds returned instead of raised
- Whole-file helpers and a caller-side retry wrapper
"""

__version__ = "0.1.0"

from filekeeper.domain.errors import ErrorKind, FileOperationError, Result
from filekeeper.domain.models import FileInfo, FileMode
from filekeeper.file import File

__all__ = [
    "ErrorKind",
    "File",
    "FileInfo",
    "FileMode",
    "FileOperationError",
    "Result",
]
