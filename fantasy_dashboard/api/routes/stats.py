"""
League statistics endpoints.

Read-only views over the uploaded results:
- /standings: overall (or single-season) record per coach
- /head-to-head: record of each coach against each opponent
- /weekly-performance: game-by-game rows for one coach and/or season
- /yearly-summary: record per coach per season
- /coaches, /years: filter values for the dashboard
- /coach-lookup: the roster name -> coach mapping as uploaded

Only regular-season games count towards the aggregates.

Values come back as they were uploaded. A year or week cell that held text
("TBD") is stored and returned as text, so the row models accept either.

Handlers are plain functions: FastAPI runs them in its threadpool, so a
read that waits on an upload's transaction never blocks the event loop.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from ...infrastructure.sqlite.client import DatabaseError
from ..dependencies import ResultsRepositoryDep, SettingsDep, StatsRepositoryDep
from ..errors import database_error, parse_coach, parse_year

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------

class RecordRow(BaseModel):
    """Win/loss record and scoring shared by every aggregate."""
    games: int = Field(description="Regular-season games played")
    wins: int
    losses: int
    ties: int
    points_for: Optional[float] = Field(None, description="Total points scored")
    points_against: Optional[float] = Field(None, description="Total points conceded")
    win_pct: float = Field(description="wins / games, rounded to 3 decimals")


class StandingRow(RecordRow):
    """One coach's line in the standings table."""
    coach: Optional[str] = None
    avg_points_for: Optional[float] = None
    avg_points_against: Optional[float] = None


class HeadToHeadRow(RecordRow):
    """One coach's record against one opponent coach."""
    coach: Optional[str] = None
    opp_coach: Optional[str] = None


class YearlySummaryRow(RecordRow):
    """One coach's record in one season."""
    year: Union[int, str, None] = None
    coach: Optional[str] = None
    avg_points: Optional[float] = Field(None, description="Same as avg_points_for")
    avg_points_for: Optional[float] = None
    avg_points_against: Optional[float] = None


class WeeklyPerformanceRow(BaseModel):
    """A single game from the coach's side."""
    year: Union[int, str, None] = None
    week: Union[int, str, None] = None
    points: Union[float, str, None] = None
    opp_points: Union[float, str, None] = None
    result: Optional[str] = None
    opponent: Optional[str] = None
    opp_coach: Optional[str] = None


class CoachLookupRow(BaseModel):
    roster_name: Optional[str] = None
    canonical_coach: Optional[str] = None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/standings",
    response_model=list[StandingRow],
    status_code=status.HTTP_200_OK,
    summary="Standings",
    description="Regular-season record per coach, best win percentage first",
)
def get_standings(
    settings: SettingsDep,
    stats: StatsRepositoryDep,
    year: Optional[str] = Query("all", description="Season year, or 'all'"),
) -> list[dict]:
    season = parse_year(year)
    try:
        return stats.standings(year=season)
    except DatabaseError as e:
        raise database_error(e, settings, "standings")


@router.get(
    "/head-to-head",
    response_model=list[HeadToHeadRow],
    status_code=status.HTTP_200_OK,
    summary="Head-to-head records",
)
def get_head_to_head(
    settings: SettingsDep,
    stats: StatsRepositoryDep,
) -> list[dict]:
    try:
        return stats.head_to_head()
    except DatabaseError as e:
        raise database_error(e, settings, "head_to_head")


@router.get(
    "/weekly-performance",
    response_model=list[WeeklyPerformanceRow],
    status_code=status.HTTP_200_OK,
    summary="Game-by-game results",
    description="Regular-season games ordered by year then week",
)
def get_weekly_performance(
    settings: SettingsDep,
    stats: StatsRepositoryDep,
    coach: Optional[str] = Query(None, description="Coach name, or 'all'"),
    year: Optional[str] = Query("all", description="Season year, or 'all'"),
) -> list[dict]:
    season = parse_year(year)
    try:
        return stats.weekly_performance(coach=parse_coach(coach), year=season)
    except DatabaseError as e:
        raise database_error(e, settings, "weekly_performance")


@router.get(
    "/yearly-summary",
    response_model=list[YearlySummaryRow],
    status_code=status.HTTP_200_OK,
    summary="Season-by-season records",
    description="Per coach per season. avg_points repeats avg_points_for for older dashboard clients.",
)
def get_yearly_summary(
    settings: SettingsDep,
    stats: StatsRepositoryDep,
) -> list[dict]:
    try:
        return stats.yearly_summary()
    except DatabaseError as e:
        raise database_error(e, settings, "yearly_summary")


@router.get(
    "/coaches",
    response_model=list[str],
    status_code=status.HTTP_200_OK,
    summary="Distinct coaches",
)
def get_coaches(
    settings: SettingsDep,
    stats: StatsRepositoryDep,
) -> list[str]:
    try:
        return stats.coaches()
    except DatabaseError as e:
        raise database_error(e, settings, "coaches")


@router.get(
    "/years",
    response_model=list[Union[int, str]],
    status_code=status.HTTP_200_OK,
    summary="Distinct seasons",
)
def get_years(
    settings: SettingsDep,
    stats: StatsRepositoryDep,
) -> list[Union[int, str]]:
    try:
        return stats.years()
    except DatabaseError as e:
        raise database_error(e, settings, "years")


@router.get(
    "/coach-lookup",
    response_model=list[CoachLookupRow],
    status_code=status.HTTP_200_OK,
    summary="Roster name to coach mapping",
    description="The coach_lookup sheet as last uploaded. Not applied to the aggregates.",
)
def get_coach_lookup(
    settings: SettingsDep,
    results: ResultsRepositoryDep,
) -> list[CoachLookupRow]:
    try:
        entries = results.coach_lookup()
    except DatabaseError as e:
        raise database_error(e, settings, "coach_lookup")

    return [
        CoachLookupRow(roster_name=entry.roster_name, canonical_coach=entry.canonical_coach)
        for entry in entries
    ]
