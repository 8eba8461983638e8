import gzip
from pathlib import Path

import pytest

from bibledb.errors import CleanupError
from bibledb.etl.artifacts import cleanup_files, compress_database, format_file_size, reduction_percent


def test_compress_database_round_trip(tmp_path):
    source = tmp_path / "bible.db"
    source.write_bytes(b"SQLite format 3\x00" + b"verse " * 5000)
    target = tmp_path / "bible.db.gz"
    target.write_bytes(b"stale")

    result = compress_database(source, target)

    assert gzip.decompress(target.read_bytes()) == source.read_bytes()
    assert result.original_size == source.stat().st_size
    assert result.compressed_size == target.stat().st_size
    assert result.compressed_size < result.original_size
    assert result.reduction_percent == pytest.approx((1 - result.compressed_size / result.original_size) * 100)


@pytest.mark.parametrize("size, expected", [
    (0, "0 B"),
    (512, "512 B"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (5 * 1024 * 1024, "5 MB"),
    (3 * 1024 ** 3, "3 GB"),
    (2048 * 1024 ** 3, "2048 GB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_reduction_percent_zero_base():
    assert reduction_percent(0, 10) == 0.0
    assert reduction_percent(200, 50) == 75.0


def test_cleanup_files_ignores_missing(tmp_path):
    existing = tmp_path / "temp.db"
    existing.write_text("x")

    cleanup_files([existing, tmp_path / "missing.db"])

    assert not existing.exists()


def flaky_unlink(failures):
    real_unlink = Path.unlink
    calls = []

    def unlink(self, *args, **kwargs):
        calls.append(self)
        if len(calls) <= failures:
            raise PermissionError("file is locked")
        return real_unlink(self, *args, **kwargs)

    return unlink


def test_cleanup_files_retries_with_backoff(tmp_path, monkeypatch):
    target = tmp_path / "temp.db"
    target.write_text("x")
    monkeypatch.setattr(Path, "unlink", flaky_unlink(failures=2))
    delays = []

    cleanup_files([target], attempts=5, base_delay=0.5, sleep=delays.append)

    assert not target.exists()
    assert delays == [0.5, 1.0]


def test_cleanup_files_gives_up(tmp_path, monkeypatch, caplog):
    target = tmp_path / "temp.db"
    target.write_text("x")
    monkeypatch.setattr(Path, "unlink", flaky_unlink(failures=100))
    delays = []

    with pytest.raises(CleanupError) as exc_info:
        cleanup_files([target], attempts=5, base_delay=0.5, sleep=delays.append)

    assert exc_info.value.attempts == 5
    assert isinstance(exc_info.value.__cause__, PermissionError)
    assert delays == [0.5, 1.0, 1.5, 2.0]
    assert caplog.text.count("Could not delete temp file") == 5
