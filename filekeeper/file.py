"""Owned file handle with deterministic cleanup of temp files.

A File binds a path, an open mode and, while open, a binary stream. Handles
made by File.create_temp() own the file they reserved and delete it on
dispose(), unless the file has been renamed or released since.

Operations never raise for filesystem failures. Each one returns a Result and
also records it, so the outcome can be inspected later via last_error.

Example:
    >>> with File.create_temp("report") as f:
    ...     result = f.append("hello")
    ...     result = f.open_read()
    ...     text = f.read_all()
    >>> text
    'hello'

Skipping dispose() (or the with-block) on a temp handle leaks the temp file.
"""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from typing import BinaryIO

from filekeeper.config.settings import FileSettings, get_settings
from filekeeper.domain.errors import ErrorKind, Result, classify_os_error
from filekeeper.domain.filesystem import Filesystem
from filekeeper.domain.models import FileInfo, FileMode
from filekeeper.infrastructure.local_filesystem import LocalFilesystem

logger = logging.getLogger(__name__)


class File:
    """Exclusive handle on one filesystem path.

    Handles cannot be copied. Use take() to move ownership to a new handle,
    which leaves this one unbound.

    Not thread-safe: calls on the same handle must be serialized by the caller.
    """

    def __init__(
        self,
        path: str | os.PathLike = "",
        *,
        filesystem: Filesystem | None = None,
        settings: FileSettings | None = None,
    ):
        """Bind a handle to path. The filesystem is not touched.

        Args:
            path: File path; empty leaves the handle unbound
            filesystem: OS primitives to use (default: LocalFilesystem)
            settings: Settings override (default: get_settings())
        """
        self._settings = settings if settings is not None else get_settings()
        self._fs = filesystem if filesystem is not None else LocalFilesystem(self._settings.temp_dir)
        self._path = os.fspath(path)
        self._mode = FileMode.CLOSED
        self._stream: BinaryIO | None = None
        self._ephemeral = False
        self._last_result = (
            Result.success() if self._path else Result.failure(ErrorKind.NO_PATH_SPECIFIED)
        )

    @classmethod
    def create_temp(
        cls,
        pattern: str,
        directory: str | os.PathLike | None = None,
        *,
        filesystem: Filesystem | None = None,
        settings: FileSettings | None = None,
    ) -> File:
        """Reserve a new, uniquely named file and return a handle owning it.

        The file is named ``<pattern>.<random>`` and created atomically, so two
        callers can never be handed the same path.

        Args:
            pattern: Leading part of the file name
            directory: Where to create the file (default: settings.temp_dir or
                the OS temp directory)
            filesystem: OS primitives to use (default: LocalFilesystem)
            settings: Settings override (default: get_settings())

        Returns:
            An ephemeral handle, or an unbound handle (path == "") if the file
            could not be reserved
        """
        if settings is None:
            settings = get_settings()
        if filesystem is None:
            filesystem = LocalFilesystem(settings.temp_dir)
        target_dir = os.fspath(directory) if directory is not None else None

        try:
            path = filesystem.create_temp(f"{pattern}.", directory=target_dir)
        except OSError as e:
            logger.warning(f"Could not reserve temp file for pattern '{pattern}': {e}")
            return cls(filesystem=filesystem, settings=settings)

        handle = cls(path, filesystem=filesystem, settings=settings)
        handle._ephemeral = True
        logger.debug(f"Reserved temp file {path}")
        return handle

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        """Path currently bound to this handle ("" when unbound)."""
        return self._path

    @property
    def mode(self) -> FileMode:
        return self._mode

    @property
    def is_open(self) -> bool:
        return self._mode is not FileMode.CLOSED

    @property
    def is_ephemeral(self) -> bool:
        """True if dispose() will delete the file."""
        return self._ephemeral

    @property
    def last_error(self) -> ErrorKind | None:
        """Error kind from the most recent operation, or None if it succeeded."""
        return self._last_result.error

    @property
    def last_result(self) -> Result:
        return self._last_result

    def _record(self, result: Result) -> Result:
        self._last_result = result
        return result

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------

    def open_read(self) -> Result:
        """Open the file for binary reading, closing it first if open.

        Returns:
            Result; FILE_COULD_NOT_BE_OPENED if the handle is unbound or the OS
            refuses, FILE_COULD_NOT_BE_CLOSED if the previous stream would not close
        """
        return self._open("rb", FileMode.OPEN_FOR_READ)

    def open_write(self, append: bool = True) -> Result:
        """Open the file for binary writing, closing it first if open.

        Args:
            append: Keep existing contents and write at the end; when False the
                file is truncated

        Returns:
            Result, as for open_read()
        """
        return self._open("ab" if append else "wb", FileMode.OPEN_FOR_WRITE)

    def _open(self, os_mode: str, target: FileMode) -> Result:
        if self._mode is not FileMode.CLOSED:
            closed = self.close()
            if not closed:
                return closed

        if not self._path:
            return self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED))

        try:
            self._stream = self._fs.open(self._path, os_mode)
        except OSError as e:
            logger.debug(f"Could not open {self._path} ({os_mode}): {e}")
            return self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED, e))

        self._mode = target
        logger.debug(f"Opened {self._path} ({target.value})")
        return self._record(Result.success())

    def close(self) -> Result:
        """Close the stream if one is open.

        Closing a handle that is not open (including an unbound one) succeeds.
        The handle is CLOSED afterwards even if the OS reports a failure.

        Returns:
            Result; FILE_COULD_NOT_BE_CLOSED if the OS close failed
        """
        stream, self._stream = self._stream, None
        self._mode = FileMode.CLOSED

        if stream is None:
            return self._record(Result.success())

        try:
            stream.close()
        except OSError as e:
            logger.debug(f"Could not close {self._path}: {e}")
            return self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_CLOSED, e))

        return self._record(Result.success())

    # ------------------------------------------------------------------
    # Read / write
    # ------------------------------------------------------------------

    def read_bytes(self) -> bytes:
        """Return the whole file, reading from the start every time.

        Returns b"" and sets last_error to FILE_COULD_NOT_BE_OPENED if the
        handle is not open for reading.
        """
        if self._mode is not FileMode.OPEN_FOR_READ or self._stream is None:
            self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED))
            return b""

        try:
            self._stream.seek(0)
            data = self._stream.read()
        except OSError as e:
            logger.debug(f"Could not read {self._path}: {e}")
            self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED, e))
            return b""

        self._record(Result.success())
        return data

    def read_all(self) -> str:
        """Return the whole file decoded as text. Repeatable.

        Returns "" (with last_error set) if the handle is not open for reading.
        """
        data = self.read_bytes()
        if not self._last_result:
            return ""
        try:
            return data.decode(self._settings.encoding, errors=self._settings.text_errors)
        except UnicodeError as e:
            logger.debug(f"Could not decode {self._path}: {e}")
            self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED, e))
            return ""

    def append(self, text: str) -> Result:
        """Write text at the end of the file.

        Writes through the open stream if the handle is open for writing.
        Otherwise the file is opened in append mode just for this write and
        closed again; a handle open for reading is closed first.

        Returns:
            Result; FILE_COULD_NOT_BE_OPENED or ERROR_WRITING_TO_FILE on failure
        """
        try:
            data = text.encode(self._settings.encoding, errors=self._settings.text_errors)
        except UnicodeError as e:
            return self._record(Result.failure(ErrorKind.ERROR_WRITING_TO_FILE, e))

        if self._mode is FileMode.OPEN_FOR_WRITE and self._stream is not None:
            return self._record(self._write(self._stream, data))

        if self._mode is not FileMode.CLOSED:
            closed = self.close()
            if not closed:
                return closed

        if not self._path:
            return self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED))

        try:
            stream = self._fs.open(self._path, "ab")
        except OSError as e:
            logger.debug(f"Could not open {self._path} for append: {e}")
            return self._record(Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED, e))

        result = self._write(stream, data)
        try:
            stream.close()
        except OSError as e:
            # Buffered bytes are flushed on close, so this is a write failure.
            if result:
                result = Result.failure(ErrorKind.ERROR_WRITING_TO_FILE, e)

        return self._record(result)

    def _write(self, stream: BinaryIO, data: bytes) -> Result:
        try:
            stream.write(data)
            stream.flush()
        except OSError as e:
            logger.debug(f"Could not write to {self._path}: {e}")
            return Result.failure(ErrorKind.ERROR_WRITING_TO_FILE, e)
        return Result.success()

    # ------------------------------------------------------------------
    # Rename / remove
    # ------------------------------------------------------------------

    def rename(self, destination: str | os.PathLike) -> Result:
        """Move the file to destination, closing the handle first.

        Refuses to replace an existing file. The existence check and the move
        are separate OS calls; where hard links are unavailable another
        process can still create destination in between.

        On success the handle follows the file and is no longer ephemeral.

        Returns:
            Result; FILE_EXISTS_AT_TARGET_PATH leaves the file where it was
        """
        destination = os.fspath(destination)

        closed = self.close()
        if not closed:
            return closed

        if not self._path or not destination:
            return self._record(Result.failure(ErrorKind.NO_PATH_SPECIFIED))

        if self._fs.exists(destination):
            return self._record(Result.failure(ErrorKind.FILE_EXISTS_AT_TARGET_PATH))

        try:
            self._fs.rename_no_replace(self._path, destination)
        except OSError as e:
            kind = classify_os_error(e, ErrorKind.FILE_COULD_NOT_BE_OPENED)
            logger.debug(f"Could not rename {self._path} to {destination}: {e}")
            return self._record(Result.failure(kind, e))

        logger.debug(f"Renamed {self._path} to {destination}")
        self._path = destination
        self._ephemeral = False
        return self._record(Result.success())

    def remove(self) -> Result:
        """Delete the file, closing the handle first.

        The handle stops being ephemeral whatever the outcome.

        Returns:
            Result; FILE_DOES_NOT_EXIST if there was nothing to delete
        """
        closed = self.close()
        if not closed:
            logger.warning(f"Removing {self._path} after failed close: {closed.message}")

        self._ephemeral = False

        if not self._path:
            return self._record(Result.failure(ErrorKind.NO_PATH_SPECIFIED))

        try:
            self._fs.remove(self._path)
        except OSError as e:
            kind = classify_os_error(e, ErrorKind.FILE_COULD_NOT_BE_OPENED)
            return self._record(Result.failure(kind, e))

        logger.debug(f"Removed {self._path}")
        return self._record(Result.success())

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        """Return True if the bound path exists."""
        return bool(self._path) and self._fs.exists(self._path)

    def stat(self) -> FileInfo | None:
        """Return metadata for the bound file, or None (with last_error set)."""
        if not self._path:
            self._record(Result.failure(ErrorKind.NO_PATH_SPECIFIED))
            return None

        try:
            st = self._fs.stat(self._path)
        except OSError as e:
            kind = classify_os_error(e, ErrorKind.FILE_COULD_NOT_BE_OPENED)
            self._record(Result.failure(kind, e))
            return None

        self._record(Result.success())
        return FileInfo(
            path=self._path,
            size_bytes=st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime, tz=UTC),
            is_ephemeral=self._ephemeral,
        )

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    def take(self) -> File:
        """Move everything this handle owns into a new handle.

        This handle is left unbound, closed and not ephemeral, so the file is
        cleaned up at most once.
        """
        other = type(self)(filesystem=self._fs, settings=self._settings)
        other._path = self._path
        other._mode = self._mode
        other._stream = self._stream
        other._ephemeral = self._ephemeral
        other._last_result = self._last_result

        self._path = ""
        self._mode = FileMode.CLOSED
        self._stream = None
        self._ephemeral = False
        self._last_result = Result.failure(ErrorKind.NO_PATH_SPECIFIED)
        return other

    def release(self) -> str:
        """Stop treating the file as temporary and return its path."""
        self._ephemeral = False
        return self._path

    def dispose(self) -> Result:
        """Close the handle and delete the file if it is ephemeral.

        Safe to call more than once.

        Returns:
            The first failure among close and delete, or success
        """
        result = self.close()
        if self._ephemeral:
            removed = self.remove()
            if not removed:
                logger.warning(f"Could not delete temp file {self._path}: {removed.message}")
            if result:
                result = removed
        return self._record(result)

    def __enter__(self) -> File:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()
        return False

    def __copy__(self):
        raise TypeError("File handles cannot be copied; use take() to move ownership")

    def __deepcopy__(self, memo):
        raise TypeError("File handles cannot be copied; use take() to move ownership")

    def __repr__(self) -> str:
        return (
            f"File(path={self._path!r}, mode={self._mode.value}, "
            f"ephemeral={self._ephemeral})"
        )
