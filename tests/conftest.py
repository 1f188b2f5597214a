"""Configure tests."""

import errno
from unittest.mock import MagicMock, Mock

import pytest

from filekeeper.config.settings import FileSettings, get_settings
from filekeeper.infrastructure.local_filesystem import LocalFilesystem


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make sure no test sees settings cached by another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path):
    """Settings with temp files redirected into the test directory."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return FileSettings(_env_file=None, temp_dir=scratch)


@pytest.fixture
def existing_file(tmp_path):
    """Create a file with known contents."""
    path = tmp_path / "fileExists.txt"
    path.write_bytes(b"Hello World\n")
    return path


@pytest.fixture
def mock_filesystem(settings):
    """Filesystem that behaves like the real one until a method is overridden."""
    real = LocalFilesystem(settings.temp_dir)
    return Mock(spec=LocalFilesystem, wraps=real)


def make_failing_stream(data: bytes = b"", fail_on: str = "close") -> MagicMock:
    """Helper to create a stream whose given method raises an I/O error.

    Args:
        data: Bytes returned by read()
        fail_on: Name of the method that should fail ('close', 'write', 'flush', 'read')

    Returns:
        MagicMock standing in for a binary file object
    """
    stream = MagicMock()
    stream.read.return_value = data
    getattr(stream, fail_on).side_effect = OSError(errno.EIO, "Input/output error")
    return stream
