"""
Repository pattern implementations for SQLite.

Repositories translate between domain records and database rows.
"""

from .results import ResultsRepository
from .stats import StatsRepository

__all__ = ["ResultsRepository", "StatsRepository"]
