"""Tests for whole-file helpers."""

import errno

from filekeeper.domain.errors import ErrorKind
from filekeeper.utils.file_ops import read_text, write_new_file


def test_write_new_file(tmp_path, settings):
    """Test a new file is created with the text and no leftovers."""
    target = tmp_path / "out" / "report.txt"
    target.parent.mkdir()

    result = write_new_file(target, "first draft", settings=settings)

    assert result.ok
    assert target.read_text() == "first draft"
    assert [p.name for p in target.parent.iterdir()] == ["report.txt"]


def test_write_new_file_refuses_existing(tmp_path, settings):
    """Test an existing file is left alone and the temp file is cleaned up."""
    target = tmp_path / "out" / "report.txt"
    target.parent.mkdir()
    target.write_text("original")

    result = write_new_file(target, "replacement", settings=settings)

    assert result == ErrorKind.FILE_EXISTS_AT_TARGET_PATH
    assert target.read_text() == "original"
    assert [p.name for p in target.parent.iterdir()] == ["report.txt"]


def test_write_new_file_missing_directory(tmp_path, settings):
    """Test a missing parent directory is reported, not raised."""
    result = write_new_file(tmp_path / "missing" / "report.txt", "text", settings=settings)

    assert result == ErrorKind.FILE_COULD_NOT_BE_OPENED


def test_write_new_file_write_failure(tmp_path, mock_filesystem, settings):
    """Test a failed write leaves no file behind."""
    target = tmp_path / "out" / "report.txt"
    target.parent.mkdir()
    mock_filesystem.open.side_effect = OSError(errno.ENOSPC, "No space left on device")

    result = write_new_file(target, "text", filesystem=mock_filesystem, settings=settings)

    assert result == ErrorKind.FILE_COULD_NOT_BE_OPENED
    assert list(target.parent.iterdir()) == []


def test_read_text(existing_file, settings):
    """Test reading a whole file."""
    text, result = read_text(existing_file, settings=settings)

    assert result.ok
    assert text == "Hello World\n"


def test_read_text_missing(tmp_path, settings):
    """Test reading a missing file."""
    text, result = read_text(tmp_path / "ghost.txt", settings=settings)

    assert text == ""
    assert result == ErrorKind.FILE_COULD_NOT_BE_OPENED
