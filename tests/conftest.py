"""
Shared fixtures for the converter tests.
"""
import json
from pathlib import Path

import pytest
from sqlmodel import Session

from bibledb.db_session import create_sqlite_engine
from bibledb.services.sql_model import create_schema


def make_book(name, chapters):
    """chapters: {chapter_number: [verse text, ...]}"""
    return {
        "BookName": name,
        "lstChapters": [
            {
                "ChapterNumber": number,
                "Verses": [
                    {"VerseNumber": i, "ChapterVerse": text}
                    for i, text in enumerate(verses, start=1)
                ],
            }
            for number, verses in chapters.items()
        ],
    }


@pytest.fixture
def json_dir(tmp_path) -> Path:
    path = tmp_path / "json"
    path.mkdir()
    return path


@pytest.fixture
def write_json(json_dir):
    def _write(file_name, payload):
        path = json_dir / file_name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def genesis_payload():
    return [{
        "BookName": "Genesis",
        "lstChapters": [{
            "ChapterNumber": 1,
            "Verses": [{"VerseNumber": 1, "ChapterVerse": "In the beginning..."}],
        }],
    }]


@pytest.fixture
def engine(tmp_path):
    engine = create_sqlite_engine(tmp_path / "test.db")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session
