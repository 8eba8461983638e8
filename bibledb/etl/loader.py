import logging
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import ValidationError
from sqlmodel import Session

from bibledb.config import Settings
from bibledb.db_session import open_engine
from bibledb.errors import BookFileError
from bibledb.schema import BookEntry
from bibledb.services.sql_model import create_schema
from bibledb.services.sql_service import build_search_index, insert_book, insert_translation
from .reader import list_book_files, read_book_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestTotals:
    """Running counters carried from one file to the next."""

    next_order: int = 1
    books: int = 0
    verses: int = 0
    files: int = 0
    skipped_files: int = 0
    search_entries: int = 0


def load_book_file(path: Path, translation_id: int, totals: IngestTotals, session: Session) -> IngestTotals:
    """Insert every book of one file. The caller owns the transaction.

    A book entry that fails validation or has no chapter list is skipped;
    the other books of the file are still loaded.
    """
    try:
        books = read_book_file(path)
    except BookFileError as e:
        logger.warning("%s", e)
        return replace(totals, files=totals.files + 1, skipped_files=totals.skipped_files + 1)

    next_order = totals.next_order
    books_loaded = 0
    verses_loaded = 0

    for position, raw_entry in enumerate(books, start=1):
        try:
            entry = BookEntry.model_validate(raw_entry)
        except ValidationError as e:
            logger.warning("Invalid book data in file: %s (entry %s, %s error(s))", path, position, e.error_count())
            continue

        if entry.chapters is None:
            logger.warning("Invalid book data in file: %s (entry %s has no chapters)", path, position)
            continue

        book, verses_processed = insert_book(entry, next_order, translation_id, session)
        logger.info("Processed %s: %s verses", book.name, f"{verses_processed:,}")

        next_order += 1
        books_loaded += 1
        verses_loaded += verses_processed

    return replace(
        totals,
        next_order=next_order,
        books=totals.books + books_loaded,
        verses=totals.verses + verses_loaded,
        files=totals.files + 1,
    )


def convert_json_to_sqlite(json_dir: str | Path, db_path: str | Path, settings: Settings | None = None) -> IngestTotals:
    """Build a fresh database at db_path from every book file in json_dir.

    Each file is committed in its own transaction. A storage error rolls that
    file back and aborts the run; no later file is processed.
    """
    settings = settings or Settings()
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with open_engine(db_path) as engine:
        create_schema(engine)

        json_files = list_book_files(json_dir)
        logger.info("Found %s JSON files to process", len(json_files))

        with Session(engine) as session:
            with session.begin():
                translation_id = insert_translation(
                    settings.translation_code,
                    settings.translation_name,
                    settings.translation_language,
                    session,
                )

            totals = IngestTotals()
            for json_file in json_files:
                logger.info("Processing file: %s...", json_file.stem)
                with session.begin():
                    totals = load_book_file(json_file, translation_id, totals, session)

            logger.info("Building full-text search index...")
            with session.begin():
                search_entries = build_search_index(translation_id, session)
            totals = replace(totals, search_entries=search_entries)

    logger.info(
        "Processed %s books from %s files with %s verses",
        totals.books, totals.files, f"{totals.verses:,}",
    )
    return totals
