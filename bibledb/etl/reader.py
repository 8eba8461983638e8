import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bibledb.errors import BookFileError
from bibledb.schema import BookFile

logger = logging.getLogger(__name__)

JSON_PATTERN = "*.json"


def list_book_files(json_dir: str | Path) -> list[Path]:
    """Visible *.json files in the directory, sorted by file name.

    The order decides the global book order, so file names must follow the
    canonical book order (e.g. "01_Genesis.json").
    """
    files = [
        path for path in Path(json_dir).glob(JSON_PATTERN)
        if path.is_file() and not path.name.startswith(".")
    ]
    return sorted(files, key=lambda path: path.name)


def read_book_file(path: str | Path) -> list[Any]:
    """Decode one file into its raw book entries.

    Raises BookFileError unless the file parses to a non-empty array.
    Each entry is validated later by the loader.
    """
    path = Path(path)
    raw = path.read_bytes()

    try:
        books = BookFile.validate_python(json.loads(raw))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BookFileError(path, f"not valid JSON: {e}") from e
    except ValidationError as e:
        raise BookFileError(path, f"unexpected structure: {e.error_count()} error(s)") from e

    if not books:
        raise BookFileError(path, "no books")

    return books
