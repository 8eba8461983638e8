import logging
import os
from dataclasses import dataclass
from pathlib import Path

from bibledb.config import Settings
from .artifacts import CompressionResult, cleanup_files, compress_database
from .loader import IngestTotals, convert_json_to_sqlite
from .optimize import optimize_database
from .stats import ConversionStats, collect_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    db_path: Path
    compressed_path: Path
    totals: IngestTotals
    compression: CompressionResult
    stats: ConversionStats


def convert(json_dir: str | Path, output_dir: str | Path, settings: Settings | None = None) -> ConversionResult:
    """Run the whole conversion: ingest, index, optimize, move, compress, report.

    Work happens on a temporary database that only replaces the final one
    once it is fully optimized. The temporary file is removed whatever the
    outcome.
    """
    settings = settings or Settings()
    output_dir = Path(output_dir)
    temp_db = settings.temp_db_path(output_dir)
    final_db = settings.final_db_path(output_dir)
    compressed_db = settings.compressed_db_path(output_dir)

    def cleanup(*paths):
        cleanup_files(paths, attempts=settings.cleanup_attempts, base_delay=settings.cleanup_base_delay)

    try:
        logger.info("Starting Bible database conversion...")
        cleanup(temp_db, final_db)

        logger.info("Converting JSON files to SQLite database...")
        totals = convert_json_to_sqlite(json_dir, temp_db, settings)

        logger.info("Optimizing database structure...")
        optimize_database(temp_db)

        os.replace(temp_db, final_db)

        logger.info("Creating compressed database...")
        compression = compress_database(final_db, compressed_db)

        stats = collect_statistics(json_dir, final_db, compressed_db)

        logger.info("Database conversion completed successfully!")
    except Exception:
        logger.exception("Conversion failed")
        raise
    finally:
        cleanup(temp_db)

    return ConversionResult(
        db_path=final_db,
        compressed_path=compressed_db,
        totals=totals,
        compression=compression,
        stats=stats,
    )
