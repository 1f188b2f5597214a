"""File operation utilities built on File handles.

Provides whole-file helpers for callers that do not want to drive the
open/read/close cycle themselves.
"""

import os
from pathlib import Path

from filekeeper.config.settings import FileSettings
from filekeeper.domain.errors import ErrorKind, Result
from filekeeper.domain.filesystem import Filesystem
from filekeeper.file import File


def write_new_file(
    file_path: str | os.PathLike,
    text: str,
    *,
    filesystem: Filesystem | None = None,
    settings: FileSettings | None = None,
) -> Result:
    """Create file_path with text, never replacing an existing file.

    Text is written to a temp file in the target's directory, then renamed
    into place. The target is never in a partially written state, and the
    temp file is deleted if anything fails.

    Args:
        file_path: Path of the file to create
        text: Contents to write
        filesystem: OS primitives to use (default: LocalFilesystem)
        settings: Settings override

    Returns:
        Result; FILE_EXISTS_AT_TARGET_PATH if file_path already exists

    Example:
        >>> from pathlib import Path
        >>> write_new_file(Path("notes.txt"), "first draft").ok
        True
    """
    target = Path(file_path)
    with File.create_temp(
        f".{target.name}", directory=target.parent, filesystem=filesystem, settings=settings
    ) as scratch:
        if not scratch.path:
            return Result.failure(ErrorKind.FILE_COULD_NOT_BE_OPENED)

        result = scratch.append(text)
        if not result:
            return result

        # On success the handle is no longer ephemeral, so the with-block
        # leaves the renamed file alone.
        return scratch.rename(target)


def read_text(
    file_path: str | os.PathLike,
    *,
    filesystem: Filesystem | None = None,
    settings: FileSettings | None = None,
) -> tuple[str, Result]:
    """Read a whole file as text.

    Args:
        file_path: Path of the file to read
        filesystem: OS primitives to use (default: LocalFilesystem)
        settings: Settings override

    Returns:
        Tuple of (text, result); text is "" when result is a failure
    """
    f = File(file_path, filesystem=filesystem, settings=settings)
    opened = f.open_read()
    if not opened:
        return "", opened

    text = f.read_all()
    read = f.last_result
    closed = f.close()

    if not read:
        return "", read
    if not closed:
        return "", closed
    return text, closed
