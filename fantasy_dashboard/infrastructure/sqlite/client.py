"""
SQLite database handle for league results.

One SqliteDatabase is created per application and shared by every request.
It owns a single connection and serializes access to it with a lock, so
the replace-all writes and the aggregate reads never interleave.

Using the repository pattern means most code never touches this module
directly - it goes through ResultsRepository and StatsRepository which own
the SQL.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any, Generator, Sequence

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS weekly_results (
        year INTEGER,
        week INTEGER,
        team TEXT,
        opponent TEXT,
        points REAL,
        opp_points REAL,
        result TEXT,
        season_type TEXT,
        coach TEXT,
        opp_coach TEXT,
        pair TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS coach_lookup (
        roster_name TEXT,
        canonical_coach TEXT
    )
    """,
)

READ_ONLY_PREFIXES = ("SELECT", "WITH")


class DatabaseError(Exception):
    """Raised when a SQLite operation fails."""
    pass


class SqliteDatabase:
    """
    Shared SQLite connection with transaction and query helpers.

    Writes go through transaction(); reads go through fetch_all().
    Both hold the same re-entrant lock.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.RLock()

    def create_schema(self) -> None:
        """Create tables if they don't exist. Safe to call repeatedly."""
        with self.transaction() as cursor:
            for statement in SCHEMA_STATEMENTS:
                cursor.execute(statement)
        logger.info("Database tables created")

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Cursor, None, None]:
        """
        Run statements as one transaction.

        Commits when the block exits normally and rolls back on any
        exception. sqlite3 errors are re-raised as DatabaseError.

        Usage:
            with database.transaction() as cursor:
                cursor.execute("DELETE FROM coach_lookup")
                cursor.executemany(...)
        """
        with self._lock:
            cursor = self._conn.cursor()
            try:
                yield cursor
                self._conn.commit()
            except sqlite3.Error as e:
                self._conn.rollback()
                logger.error(
                    "Transaction failed, rolled back",
                    extra={"error": str(e)}
                )
                raise DatabaseError(str(e)) from e
            except Exception:
                self._conn.rollback()
                raise
            finally:
                cursor.close()

    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """
        Execute a read-only query and return rows as dicts.

        Only SELECT (or WITH ... SELECT) statements are accepted. Filters
        must be passed in `params`, never formatted into `query`.
        """
        if not query.lstrip().upper().startswith(READ_ONLY_PREFIXES):
            raise ValueError("fetch_all only runs read-only SELECT statements")

        with self._lock:
            cursor = self._conn.cursor()
            try:
                cursor.execute(query, tuple(params))
                return [dict(row) for row in cursor.fetchall()]
            except sqlite3.Error as e:
                logger.error(
                    "Query failed",
                    extra={"query": " ".join(query.split())[:100], "error": str(e)}
                )
                raise DatabaseError(str(e)) from e
            finally:
                cursor.close()

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.debug("Closed SQLite connection")


def create_sqlite_database(path: str = ":memory:") -> SqliteDatabase:
    """
    Open the application database.

    The connection is shared across FastAPI's worker threads, so
    check_same_thread is off; SqliteDatabase's lock does the serializing.
    """
    try:
        connection = sqlite3.connect(path, check_same_thread=False)
    except sqlite3.Error as e:
        raise DatabaseError(f"Could not open database {path}: {e}") from e

    logger.info("Opened SQLite database", extra={"path": path})
    return SqliteDatabase(connection)
