"""
SQLite repository for raw league records.

Tables are only ever replaced wholesale: delete everything, insert the new
batch. Each replace runs in one transaction, so readers see either the old
table or the new one, never an empty gap between them.
"""

import logging
from typing import Sequence

from fantasy_dashboard.core.league.models import CoachLookup, WeeklyResult

from ..client import SqliteDatabase

logger = logging.getLogger(__name__)

INSERT_WEEKLY_RESULT = """
    INSERT INTO weekly_results
    (year, week, team, opponent, points, opp_points, result, season_type, coach, opp_coach, pair)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

INSERT_COACH_LOOKUP = """
    INSERT INTO coach_lookup (roster_name, canonical_coach)
    VALUES (?, ?)
"""


class ResultsRepository:
    """
    Repository for weekly results and the coach lookup table.

    - replace_weekly_results / replace_coach_lookup: replace one table
    - replace_all: replace both tables in a single transaction (uploads)
    - coach_lookup / canonical_coach_map: read the name mapping back
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def replace_weekly_results(self, records: Sequence[WeeklyResult]) -> None:
        with self._db.transaction() as cursor:
            self._replace_weekly_results(cursor, records)

    def replace_coach_lookup(self, records: Sequence[CoachLookup]) -> None:
        with self._db.transaction() as cursor:
            self._replace_coach_lookup(cursor, records)

    def replace_all(
        self,
        weekly_results: Sequence[WeeklyResult],
        coach_lookup: Sequence[CoachLookup],
    ) -> None:
        """
        Replace both tables together.

        If either insert fails, neither table changes.
        """
        with self._db.transaction() as cursor:
            self._replace_weekly_results(cursor, weekly_results)
            self._replace_coach_lookup(cursor, coach_lookup)

        logger.info(
            "Replaced league data",
            extra={
                "weekly_results": len(weekly_results),
                "coach_mappings": len(coach_lookup),
            }
        )

    def coach_lookup(self) -> list[CoachLookup]:
        rows = self._db.fetch_all("""
            SELECT roster_name, canonical_coach
            FROM coach_lookup
            ORDER BY roster_name
        """)
        return [CoachLookup(**row) for row in rows]

    def canonical_coach_map(self) -> dict[str, str]:
        """
        Roster name -> canonical coach.

        Nothing applies this to weekly_results yet; aggregates group by
        the coach column exactly as it was uploaded.
        """
        return {
            entry.roster_name: entry.canonical_coach
            for entry in self.coach_lookup()
            if entry.roster_name is not None
        }

    def counts(self) -> dict[str, int]:
        """Row count per table."""
        rows = self._db.fetch_all("""
            SELECT
                (SELECT COUNT(*) FROM weekly_results) AS weekly_results,
                (SELECT COUNT(*) FROM coach_lookup) AS coach_lookup
        """)
        return rows[0]

    # -----------------------------------------------------------------------
    # Private helpers
    # -----------------------------------------------------------------------

    def _replace_weekly_results(self, cursor, records: Sequence[WeeklyResult]) -> None:
        cursor.execute("DELETE FROM weekly_results")
        cursor.executemany(INSERT_WEEKLY_RESULT, [record.as_row() for record in records])

    def _replace_coach_lookup(self, cursor, records: Sequence[CoachLookup]) -> None:
        cursor.execute("DELETE FROM coach_lookup")
        cursor.executemany(INSERT_COACH_LOOKUP, [record.as_row() for record in records])
