"""Local filesystem implementation backed by os and tempfile."""

import errno
import logging
import os
import tempfile
from typing import BinaryIO

logger = logging.getLogger(__name__)

# Errors from os.link that mean "hard links are not available here", as
# opposed to a genuine failure of the move itself.
_LINK_UNSUPPORTED = {errno.EXDEV, errno.EPERM, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP}


class LocalFilesystem:
    """Filesystem operations on the local machine.

    All methods are thin, blocking wrappers around single OS calls and raise
    OSError on failure.
    """

    def __init__(self, temp_dir: str | os.PathLike | None = None):
        """Initialize the filesystem.

        Args:
            temp_dir: Directory for temp files (default: the OS temp directory)
        """
        self._temp_dir = os.fspath(temp_dir) if temp_dir is not None else None

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def temp_directory(self) -> str:
        if self._temp_dir is not None:
            return self._temp_dir
        return tempfile.gettempdir()

    def create_temp(self, prefix: str, directory: str | None = None) -> str:
        """Reserve a unique file using mkstemp (O_CREAT | O_EXCL).

        The name is ``<prefix><random>``; uniqueness holds across threads and
        processes because creation fails if the name is already taken.
        """
        fd, path = tempfile.mkstemp(prefix=prefix, dir=directory or self.temp_directory())
        os.close(fd)
        return path

    def open(self, path: str, mode: str) -> BinaryIO:
        if mode not in ("rb", "wb", "ab"):
            raise ValueError(f"Unsupported mode: {mode!r}")
        return open(path, mode)  # noqa: SIM115

    def rename_no_replace(self, source: str, destination: str) -> None:
        """Move source to destination, refusing to replace an existing file.

        Uses link + unlink where hard links are supported, which fails
        atomically with FileExistsError if destination appears. Otherwise falls
        back to os.rename, which may replace a destination created after the
        caller's existence check.
        """
        try:
            os.link(source, destination)
        except FileExistsError:
            raise
        except OSError as e:
            if e.errno not in _LINK_UNSUPPORTED:
                raise
            logger.debug(f"Hard links unavailable ({e.strerror}), falling back to rename")
            os.rename(source, destination)
            return

        try:
            os.unlink(source)
        except OSError:
            try:
                os.unlink(destination)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove link {destination}: {cleanup_error}")
            raise

    def remove(self, path: str) -> None:
        os.remove(path)

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)
