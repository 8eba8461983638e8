from contextlib import contextmanager
from pathlib import Path

from sqlalchemy.pool import NullPool
from sqlmodel import create_engine


def create_sqlite_engine(db_path: str | Path):
    # NullPool: closing a connection releases the file handle straight away
    return create_engine(f"sqlite:///{Path(db_path)}", poolclass=NullPool)


@contextmanager
def open_engine(db_path: str | Path):
    engine = create_sqlite_engine(db_path)
    try:
        yield engine
    finally:
        engine.dispose()
