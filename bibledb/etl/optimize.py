import logging
from pathlib import Path

from bibledb.db_session import open_engine

logger = logging.getLogger(__name__)

OPTIMIZE_STATEMENTS = ("VACUUM", "ANALYZE", "PRAGMA optimize")


def optimize_database(db_path: str | Path) -> None:
    """Compact the file and refresh planner statistics.

    Opens its own connection; the ingestion connection must already be closed.
    """
    with open_engine(db_path) as engine:
        # VACUUM cannot run inside a transaction
        with engine.connect().execution_options(isolation_level="AUTOCOMMIT") as conn:
            for statement in OPTIMIZE_STATEMENTS:
                logger.debug("Running %s", statement)
                conn.exec_driver_sql(statement)

    logger.info("Database optimization completed")
