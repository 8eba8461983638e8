import gzip
import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from bibledb.errors import CleanupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompressionResult:
    source_path: Path
    compressed_path: Path
    original_size: int
    compressed_size: int

    @property
    def reduction_percent(self) -> float:
        return reduction_percent(self.original_size, self.compressed_size)


def reduction_percent(before: int, after: int) -> float:
    if before <= 0:
        return 0.0
    return (1.0 - after / before) * 100


def format_file_size(size: int) -> str:
    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    order = 0
    while value >= 1024 and order < len(units) - 1:
        order += 1
        value /= 1024

    return f"{round(value, 2):g} {units[order]}"


def compress_database(source_path: str | Path, compressed_path: str | Path) -> CompressionResult:
    """Write a gzip copy of source_path at maximum compression, replacing any old copy."""
    source_path = Path(source_path)
    compressed_path = Path(compressed_path)
    compressed_path.unlink(missing_ok=True)

    with open(source_path, "rb") as source, gzip.open(compressed_path, "wb", compresslevel=9) as target:
        shutil.copyfileobj(source, target)

    result = CompressionResult(
        source_path=source_path,
        compressed_path=compressed_path,
        original_size=source_path.stat().st_size,
        compressed_size=compressed_path.stat().st_size,
    )
    logger.info(
        "Compression: %s -> %s (%.1f%% reduction)",
        format_file_size(result.original_size),
        format_file_size(result.compressed_size),
        result.reduction_percent,
    )
    return result


def cleanup_files(
    paths: Iterable[str | Path],
    attempts: int = 5,
    base_delay: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Delete each existing path, retrying while the OS still holds the file.

    Waits base_delay * attempt between tries. Engines are disposed before
    this runs, so a retry only covers the OS releasing the file late.
    Raises CleanupError once the last attempt fails.
    """
    for path in map(Path, paths):
        for attempt in range(1, attempts + 1):
            if not path.exists():
                break
            try:
                path.unlink()
                break
            except OSError as e:
                logger.warning("Could not delete temp file %s (attempt %s/%s): %s", path, attempt, attempts, e)
                if attempt == attempts:
                    raise CleanupError(path, attempts) from e

                sleep(base_delay * attempt)
