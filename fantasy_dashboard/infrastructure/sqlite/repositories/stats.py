"""
Aggregate league statistics computed in SQL.

Every aggregate counts regular-season games only; playoff and consolation
rows are stored but excluded here. Filters (year, coach) are always bound
parameters, never formatted into the query text.

Rounding: point totals and averages to 2 decimals, win percentage to 3.
win_pct divides by COUNT(*), which is at least 1 for any group that exists.
"""

import logging
from typing import Any, Optional, Union

from fantasy_dashboard.core.league.models import REGULAR_SEASON, GameResult

from ..client import SqliteDatabase

logger = logging.getLogger(__name__)

_WINS = f"SUM(CASE WHEN result = '{GameResult.WIN.value}' THEN 1 ELSE 0 END)"
_LOSSES = f"SUM(CASE WHEN result = '{GameResult.LOSS.value}' THEN 1 ELSE 0 END)"
_TIES = f"SUM(CASE WHEN result = '{GameResult.TIE.value}' THEN 1 ELSE 0 END)"

RECORD_COLUMNS = f"""
    COUNT(*) AS games,
    {_WINS} AS wins,
    {_LOSSES} AS losses,
    {_TIES} AS ties,
    ROUND(SUM(points), 2) AS points_for,
    ROUND(SUM(opp_points), 2) AS points_against
"""

AVERAGE_COLUMNS = """
    ROUND(AVG(points), 2) AS avg_points_for,
    ROUND(AVG(opp_points), 2) AS avg_points_against
"""

WIN_PCT_COLUMN = f"ROUND(CAST({_WINS} AS REAL) / COUNT(*), 3) AS win_pct"

Row = dict[str, Any]


class StatsRepository:
    """
    Read-only aggregate queries over weekly_results.

    Each method returns plain row dicts, ordered the way the dashboard
    displays them.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def standings(self, year: Optional[int] = None) -> list[Row]:
        """Per-coach record, best win percentage first."""
        conditions, params = self._regular_season_filter(year=year)
        return self._db.fetch_all(f"""
            SELECT
                coach,
                {RECORD_COLUMNS},
                {AVERAGE_COLUMNS},
                {WIN_PCT_COLUMN}
            FROM weekly_results
            WHERE {conditions}
            GROUP BY coach
            ORDER BY win_pct DESC, points_for DESC
        """, params)

    def head_to_head(self) -> list[Row]:
        """Record of every coach against every opponent they have faced."""
        conditions, params = self._regular_season_filter()
        return self._db.fetch_all(f"""
            SELECT
                coach,
                opp_coach,
                {RECORD_COLUMNS},
                {WIN_PCT_COLUMN}
            FROM weekly_results
            WHERE {conditions}
            GROUP BY coach, opp_coach
            ORDER BY coach, win_pct DESC
        """, params)

    def weekly_performance(
        self,
        coach: Optional[str] = None,
        year: Optional[int] = None,
    ) -> list[Row]:
        """Game-by-game rows, not aggregated, in calendar order."""
        conditions, params = self._regular_season_filter(year=year, coach=coach)
        return self._db.fetch_all(f"""
            SELECT
                year,
                week,
                points,
                opp_points,
                result,
                opponent,
                opp_coach
            FROM weekly_results
            WHERE {conditions}
            ORDER BY year, week
        """, params)

    def yearly_summary(self) -> list[Row]:
        """
        Per-season record for each coach.

        avg_points duplicates avg_points_for; older dashboards read that name.
        """
        conditions, params = self._regular_season_filter()
        return self._db.fetch_all(f"""
            SELECT
                year,
                coach,
                {RECORD_COLUMNS},
                ROUND(AVG(points), 2) AS avg_points,
                {AVERAGE_COLUMNS},
                {WIN_PCT_COLUMN}
            FROM weekly_results
            WHERE {conditions}
            GROUP BY year, coach
            ORDER BY year, win_pct DESC
        """, params)

    def coaches(self) -> list[str]:
        rows = self._db.fetch_all("""
            SELECT DISTINCT coach
            FROM weekly_results
            WHERE coach IS NOT NULL
            ORDER BY coach
        """)
        return [row["coach"] for row in rows]

    def years(self) -> list[Union[int, str]]:
        """Distinct years. A text cell such as "TBD" comes back as text."""
        rows = self._db.fetch_all("""
            SELECT DISTINCT year
            FROM weekly_results
            WHERE year IS NOT NULL
            ORDER BY year
        """)
        return [row["year"] for row in rows]

    @staticmethod
    def _regular_season_filter(
        year: Optional[int] = None,
        coach: Optional[str] = None,
    ) -> tuple[str, list[Any]]:
        """Build the WHERE clause and its bound parameters."""
        conditions = ["season_type = ?"]
        params: list[Any] = [REGULAR_SEASON]

        if coach is not None:
            conditions.append("coach = ?")
            params.append(coach)

        if year is not None:
            conditions.append("year = ?")
            params.append(year)

        return " AND ".join(conditions), params
