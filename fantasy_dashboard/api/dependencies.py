"""
FastAPI dependency injection.

Dependencies provide instances of repositories, the ingestion pipeline and
configuration to route handlers. Using dependency injection means:
- Routes don't instantiate their own dependencies (easier to test)
- Dependencies can be overridden in tests
- The database handle has one owner: the application

The SQLite database is created in the application lifespan and kept on
app.state. Every request gets repositories bound to that same handle.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..config.settings import Settings, get_settings
from ..core.league.ingestion import IngestionPipeline
from ..infrastructure.sqlite.client import SqliteDatabase
from ..infrastructure.sqlite.repositories import ResultsRepository, StatsRepository


def get_database(request: Request) -> SqliteDatabase:
    """The application-owned database handle created at startup."""
    return request.app.state.database


def get_results_repository(
    database: Annotated[SqliteDatabase, Depends(get_database)],
) -> ResultsRepository:
    return ResultsRepository(database)


def get_stats_repository(
    database: Annotated[SqliteDatabase, Depends(get_database)],
) -> StatsRepository:
    return StatsRepository(database)


def get_ingestion_pipeline(request: Request) -> IngestionPipeline:
    """
    Provide the ingestion pipeline built at startup.

    The pipeline carries the configured sheet names and writes through
    the shared ResultsRepository.
    """
    return request.app.state.pipeline


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
SettingsDep = Annotated[Settings, Depends(get_settings)]
DatabaseDep = Annotated[SqliteDatabase, Depends(get_database)]
ResultsRepositoryDep = Annotated[ResultsRepository, Depends(get_results_repository)]
StatsRepositoryDep = Annotated[StatsRepository, Depends(get_stats_repository)]
IngestionPipelineDep = Annotated[IngestionPipeline, Depends(get_ingestion_pipeline)]
