from dataclasses import dataclass
from pathlib import Path

from sqlmodel import Session

from bibledb.db_session import open_engine
from bibledb.services.sql_service import count_rows
from .artifacts import format_file_size, reduction_percent
from .reader import JSON_PATTERN


@dataclass(frozen=True)
class ConversionStats:
    books: int
    verses: int
    translations: int
    search_entries: int
    json_size: int
    db_size: int
    compressed_size: int

    @property
    def json_to_db_reduction(self) -> float:
        return reduction_percent(self.json_size, self.db_size)

    @property
    def json_to_compressed_reduction(self) -> float:
        return reduction_percent(self.json_size, self.compressed_size)

    @property
    def db_to_compressed_reduction(self) -> float:
        return reduction_percent(self.db_size, self.compressed_size)


def collect_statistics(json_dir: str | Path, db_path: str | Path, compressed_path: str | Path) -> ConversionStats:
    """Read-only summary of the finished database and its artifacts."""
    with open_engine(db_path) as engine:
        with Session(engine) as session:
            counts = count_rows(session)

    json_size = sum(path.stat().st_size for path in Path(json_dir).glob(JSON_PATTERN) if path.is_file())

    return ConversionStats(
        books=counts["books"],
        verses=counts["verses"],
        translations=counts["translations"],
        search_entries=counts["search_entries"],
        json_size=json_size,
        db_size=Path(db_path).stat().st_size,
        compressed_size=Path(compressed_path).stat().st_size,
    )


def render_statistics(stats: ConversionStats) -> str:
    lines = [
        "CONVERSION STATISTICS",
        "================================",
        f"Books:           {stats.books:,}",
        f"Verses:          {stats.verses:,}",
        f"Translations:    {stats.translations:,}",
        f"Search entries:  {stats.search_entries:,}",
        "",
        "FILE SIZES",
        "================================",
        f"Original JSON:   {format_file_size(stats.json_size)}",
        f"SQLite DB:       {format_file_size(stats.db_size)}",
        f"Compressed:      {format_file_size(stats.compressed_size)}",
        "",
        "COMPRESSION RATIOS",
        "================================",
        f"JSON -> SQLite:       {stats.json_to_db_reduction:.1f}% reduction",
        f"JSON -> Compressed:   {stats.json_to_compressed_reduction:.1f}% reduction",
        f"SQLite -> Compressed: {stats.db_to_compressed_reduction:.1f}% reduction",
    ]
    return "\n".join(lines)
