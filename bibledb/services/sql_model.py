from enum import IntEnum

from sqlalchemy import Column, ForeignKey, Index, Integer, Text
from sqlalchemy.engine import Engine
from sqlmodel import Field, SQLModel


class Testament(IntEnum):
    OLD_TESTAMENT = 1
    NEW_TESTAMENT = 2


OLD_TESTAMENT_BOOKS = frozenset(name.casefold() for name in (
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel", "1 Kings", "2 Kings",
    "1 Chronicles", "2 Chronicles", "Ezra", "Nehemiah", "Esther",
    "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song of Solomon",
    "Isaiah", "Jeremiah", "Lamentations", "Ezekiel", "Daniel",
    "Hosea", "Joel", "Amos", "Obadiah", "Jonah", "Micah", "Nahum",
    "Habakkuk", "Zephaniah", "Haggai", "Zechariah", "Malachi",
))


def determine_testament(book_name: str | None) -> Testament:
    """Unknown names fall through to the New Testament."""
    if book_name and book_name.casefold() in OLD_TESTAMENT_BOOKS:
        return Testament.OLD_TESTAMENT
    return Testament.NEW_TESTAMENT


class Book(SQLModel, table=True):
    __tablename__ = "Books"
    __table_args__ = (Index("idx_book_order", "OrderNum"),)

    id: int | None = Field(default=None, sa_column=Column("Id", Integer, primary_key=True))
    name: str = Field(sa_column=Column("Name", Text(collation="NOCASE"), nullable=False))
    testament: int = Field(sa_column=Column("Testament", Integer, nullable=False))
    order_num: int = Field(sa_column=Column("OrderNum", Integer, nullable=False))
    chapter_count: int = Field(
        default=0,
        sa_column=Column("ChapterCount", Integer, nullable=False, server_default="0"),
    )


class Verse(SQLModel, table=True):
    __tablename__ = "Verses"
    __table_args__ = (Index("idx_verse_lookup", "BookId", "Chapter", "Verse"),)

    id: int | None = Field(default=None, sa_column=Column("Id", Integer, primary_key=True))
    book_id: int = Field(sa_column=Column("BookId", Integer, ForeignKey("Books.Id"), nullable=False))
    chapter: int = Field(sa_column=Column("Chapter", Integer, nullable=False))
    verse: int = Field(sa_column=Column("Verse", Integer, nullable=False))


class Translation(SQLModel, table=True):
    __tablename__ = "Translations"

    id: int | None = Field(default=None, sa_column=Column("Id", Integer, primary_key=True))
    code: str = Field(sa_column=Column("Code", Text, nullable=False, unique=True))
    name: str = Field(sa_column=Column("Name", Text, nullable=False))
    language: str = Field(
        default="en",
        sa_column=Column("Language", Text, nullable=False, server_default="en"),
    )


class VerseText(SQLModel, table=True):
    __tablename__ = "VerseText"
    # keyed by (VerseId, TranslationId) with no rowid
    __table_args__ = (
        Index("idx_verse_text", "TranslationId", "VerseId"),
        {"sqlite_with_rowid": False},
    )

    verse_id: int = Field(
        sa_column=Column("VerseId", Integer, ForeignKey("Verses.Id"), primary_key=True)
    )
    translation_id: int = Field(
        sa_column=Column("TranslationId", Integer, ForeignKey("Translations.Id"), primary_key=True)
    )
    text: str = Field(sa_column=Column("Text", Text, nullable=False))


VERSE_SEARCH_TABLE = "VerseSearch"

VERSE_SEARCH_DDL = f"""
CREATE VIRTUAL TABLE {VERSE_SEARCH_TABLE} USING fts5(
    reference UNINDEXED,
    text,
    translation UNINDEXED
)
"""

TABLES = [Book.__table__, Verse.__table__, Translation.__table__, VerseText.__table__]


def create_schema(engine: Engine) -> None:
    """Create the relational tables, their indexes and the VerseSearch table.

    Runs against an empty database only; existing objects make it fail.
    """
    SQLModel.metadata.create_all(engine, tables=TABLES, checkfirst=False)
    with engine.begin() as conn:
        conn.exec_driver_sql(VERSE_SEARCH_DDL)
