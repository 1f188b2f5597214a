"""Filesystem abstraction.

Decouples file handles from the operating system so that the handle logic can
be exercised against simulated failures.
"""

import os
from typing import BinaryIO, Protocol


class Filesystem(Protocol):
    """Protocol for the OS primitives a file handle relies on.

    Every method raises OSError (or a subclass) on failure; classifying those
    errors into domain error kinds is the caller's job.
    """

    def exists(self, path: str) -> bool:
        """Return True if something exists at path."""
        ...

    def temp_directory(self) -> str:
        """Return the directory temp files are created in by default."""
        ...

    def create_temp(self, prefix: str, directory: str | None = None) -> str:
        """Atomically create a new, uniquely named, empty file.

        Args:
            prefix: Leading part of the generated file name
            directory: Directory to create the file in (default: temp_directory())

        Returns:
            Path of the created file
        """
        ...

    def open(self, path: str, mode: str) -> BinaryIO:
        """Open path in a binary mode ('rb', 'wb' or 'ab')."""
        ...

    def rename_no_replace(self, source: str, destination: str) -> None:
        """Move source to destination without replacing an existing destination.

        Raises:
            FileExistsError: If destination exists and the platform detected it
        """
        ...

    def remove(self, path: str) -> None:
        """Delete the file at path."""
        ...

    def stat(self, path: str) -> os.stat_result:
        """Return OS metadata for path."""
        ...
