from typing import Any, Sequence

from sqlalchemy import func, text
from sqlmodel import select, Session

from bibledb.schema import BookEntry
from .sql_model import Book, Translation, Verse, VerseText, VERSE_SEARCH_TABLE, determine_testament


def insert_translation(code: str, name: str, language: str, session: Session) -> int:
    translation = Translation(code=code, name=name, language=language)
    session.add(translation)
    session.flush()

    return translation.id


def insert_book(entry: BookEntry, order_num: int, translation_id: int, session: Session) -> tuple[Book, int]:
    """Insert one book with all of its verses and verse texts.

    Must run inside the caller's transaction; nothing is committed here.
    Returns the new book and the number of verses written for it.
    """
    book = Book(
        name=entry.book_name,
        testament=int(determine_testament(entry.book_name)),
        order_num=order_num,
        chapter_count=len(entry.chapters),
    )
    session.add(book)
    session.flush()

    verses_processed = 0
    for chapter in entry.chapters:
        if not chapter.verses:
            continue

        verses = [
            Verse(book_id=book.id, chapter=chapter.chapter_number, verse=verse.verse_number)
            for verse in chapter.verses
        ]
        session.add_all(verses)
        session.flush()

        session.add_all([
            VerseText(verse_id=row.id, translation_id=translation_id, text=verse.text)
            for row, verse in zip(verses, chapter.verses)
        ])
        session.flush()
        verses_processed += len(verses)

    return book, verses_processed


BUILD_SEARCH_INDEX_SQL = text(f"""
    INSERT INTO {VERSE_SEARCH_TABLE}(reference, text, translation)
    SELECT
        b.Name || ' ' || v.Chapter || ':' || v.Verse AS reference,
        vt.Text AS text,
        t.Code AS translation
    FROM VerseText vt
    JOIN Verses v ON vt.VerseId = v.Id
    JOIN Books b ON v.BookId = b.Id
    JOIN Translations t ON vt.TranslationId = t.Id
    WHERE vt.TranslationId = :translation_id
""")


def build_search_index(translation_id: int, session: Session) -> int:
    """Fill VerseSearch for one translation. The table must be empty for it beforehand."""
    result = session.exec(BUILD_SEARCH_INDEX_SQL, params={"translation_id": translation_id})
    return result.rowcount


def search_verses(query: str, session: Session, limit: int = 10) -> list[tuple[str, str, str]]:
    stmt = text(f"""
        SELECT reference, text, translation FROM {VERSE_SEARCH_TABLE}
        WHERE {VERSE_SEARCH_TABLE} MATCH :query
        ORDER BY rank
        LIMIT :limit
    """)

    return [tuple(row) for row in session.exec(stmt, params={"query": query, "limit": limit})]


def get_translation(code: str, session: Session) -> Translation | None:
    stmt = select(Translation).where(Translation.code == code)

    return session.exec(stmt).first()


def get_book(name: str, session: Session) -> Book | None:
    stmt = select(Book).where(Book.name == name)

    return session.exec(stmt).first()


def list_books(session: Session) -> Sequence[Book]:
    stmt = select(Book).order_by(Book.order_num)
    return session.exec(stmt).all()


def get_verse(book: Book, chapter: int, verse: int, session: Session) -> Verse | None:
    stmt = (select(Verse)
            .where(Verse.book_id == book.id)
            .where(Verse.chapter == chapter)
            .where(Verse.verse == verse))

    return session.exec(stmt).first()


def get_verse_text(translation: Translation, verse: Verse, session: Session) -> VerseText | None:
    stmt = (select(VerseText)
            .where(VerseText.translation_id == translation.id)
            .where(VerseText.verse_id == verse.id))

    return session.exec(stmt).first()


def count_rows(session: Session) -> dict[str, Any]:
    counts = {
        "books": session.exec(select(func.count()).select_from(Book)).one(),
        "verses": session.exec(select(func.count()).select_from(Verse)).one(),
        "translations": session.exec(select(func.count()).select_from(Translation)).one(),
    }
    counts["search_entries"] = session.exec(
        text(f"SELECT COUNT(*) FROM {VERSE_SEARCH_TABLE}")
    ).scalar_one()

    return counts
