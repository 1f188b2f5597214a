"""Unit tests for temp files and ownership of their cleanup."""

from pathlib import Path

from filekeeper.domain.errors import ErrorKind
from filekeeper.file import File


def test_create_temp(settings):
    """Test the temp file exists as soon as the handle is returned."""
    f = File.create_temp("abc123", settings=settings)

    path = Path(f.path)
    assert path.exists()
    assert path.parent == settings.temp_dir
    assert path.name.startswith("abc123.")
    assert path.read_bytes() == b""
    assert f.is_ephemeral
    assert not f.is_open
    f.dispose()


def test_create_temp_is_unique(settings):
    """Test the same pattern never yields the same path twice."""
    first = File.create_temp("abc123", settings=settings)
    second = File.create_temp("abc123", settings=settings)

    assert first.path != second.path
    assert Path(first.path).exists()
    assert Path(second.path).exists()
    first.dispose()
    second.dispose()


def test_create_temp_in_directory(tmp_path, settings):
    """Test an explicit directory overrides the configured one."""
    target = tmp_path / "elsewhere"
    target.mkdir()

    f = File.create_temp("job", directory=target, settings=settings)

    assert Path(f.path).parent == target
    f.dispose()


def test_create_temp_failure_returns_unbound_handle(tmp_path, settings):
    """Test a reservation failure is reported through an empty path."""
    f = File.create_temp("abc123", directory=tmp_path / "does-not-exist", settings=settings)

    assert f.path == ""
    assert not f.is_ephemeral
    assert f.open_read() == ErrorKind.FILE_COULD_NOT_BE_OPENED


def test_dispose_deletes_ephemeral_file(settings):
    """Test disposal removes the temp file and it cannot be reopened."""
    f = File.create_temp("abc123", settings=settings)
    path = f.path

    assert f.dispose()

    assert not Path(path).exists()
    assert not f.is_ephemeral
    assert File(path, settings=settings).open_read() == ErrorKind.FILE_COULD_NOT_BE_OPENED


def test_dispose_closes_open_stream(settings):
    """Test disposal closes the handle before deleting."""
    f = File.create_temp("abc123", settings=settings)
    f.open_write()

    assert f.dispose()
    assert not f.is_open
    assert not Path(f.path).exists()


def test_dispose_is_idempotent(settings):
    """Test disposing twice does nothing the second time."""
    f = File.create_temp("abc123", settings=settings)

    assert f.dispose()
    assert f.dispose()


def test_dispose_keeps_regular_file(existing_file, settings):
    """Test disposing a handle that does not own its file leaves it alone."""
    f = File(existing_file, settings=settings)
    f.open_read()

    assert f.dispose()
    assert existing_file.exists()


def test_with_block_deletes_temp_file(settings):
    """Test leaving the with-block cleans up."""
    with File.create_temp("abc123", settings=settings) as f:
        path = Path(f.path)
        assert path.exists()

    assert not path.exists()


def test_rename_releases_ownership(tmp_path, settings):
    """Test a renamed temp file survives disposal."""
    destination = tmp_path / "kept.txt"

    with File.create_temp("abc123", settings=settings) as f:
        f.append("keep")
        assert f.rename(destination)
        assert not f.is_ephemeral

    assert destination.read_text() == "keep"


def test_failed_rename_keeps_ownership(tmp_path, settings):
    """Test a temp file that could not be moved is still cleaned up."""
    destination = tmp_path / "occupied.txt"
    destination.write_text("taken")

    with File.create_temp("abc123", settings=settings) as f:
        path = Path(f.path)
        assert f.rename(destination) == ErrorKind.FILE_EXISTS_AT_TARGET_PATH
        assert f.is_ephemeral

    assert not path.exists()
    assert destination.read_text() == "taken"


def test_remove_clears_ephemeral(settings):
    """Test removal ends cleanup responsibility."""
    f = File.create_temp("abc123", settings=settings)

    assert f.remove()
    assert not f.is_ephemeral
    # Nothing left to clean up, so disposal succeeds without deleting anything.
    assert f.dispose()


def test_release_keeps_file(settings):
    """Test release() hands the file over to the caller."""
    f = File.create_temp("abc123", settings=settings)

    path = f.release()
    f.dispose()

    assert path == f.path
    assert Path(path).exists()


def test_take_transfers_cleanup(settings):
    """Test only the handle that took ownership deletes the file."""
    source = File.create_temp("abc123", settings=settings)
    path = Path(source.path)

    moved = source.take()

    assert moved.is_ephemeral
    assert not source.is_ephemeral

    source.dispose()
    assert path.exists()

    moved.dispose()
    assert not path.exists()


def test_stat_reports_ephemeral(settings):
    """Test metadata carries the ownership flag."""
    with File.create_temp("abc123", settings=settings) as f:
        f.append("12345")
        info = f.stat()

    assert info.is_ephemeral
    assert info.size_bytes == 5
