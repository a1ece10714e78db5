"""
SQLite persistence for league results.

One in-memory (or file-backed) database per process, created at startup.
"""

from .client import DatabaseError, SqliteDatabase, create_sqlite_database
from .repositories import ResultsRepository, StatsRepository

__all__ = [
    "DatabaseError",
    "SqliteDatabase",
    "create_sqlite_database",
    "ResultsRepository",
    "StatsRepository",
]
