"""Utility functions built on file handles."""

from filekeeper.utils.file_ops import read_text, write_new_file
from filekeeper.utils.retry import retry_file_operation

__all__ = [
    "read_text",
    "retry_file_operation",
    "write_new_file",
]
