"""
Domain records for league results.

These records represent the rows the league spreadsheet carries. They have
no dependencies on the database or the web layer. Values are stored as the
spreadsheet delivered them: ingestion does not coerce or validate, so a
field typed `int` here may hold a numeric string or None in practice.
"""

from dataclasses import astuple, dataclass
from enum import Enum
from typing import Any, Optional

REGULAR_SEASON = "Regular"


class GameResult(Enum):
    """Outcome of one matchup from one team's side."""
    WIN = "W"
    LOSS = "L"
    TIE = "T"


@dataclass
class WeeklyResult:
    """
    One team's performance in one week of one season.

    Every matchup appears twice: once from each team's side. The two
    rows share the same `pair` value.
    """
    year: Optional[int] = None
    week: Optional[int] = None
    team: Optional[str] = None
    opponent: Optional[str] = None
    points: Optional[float] = None
    opp_points: Optional[float] = None
    result: Optional[str] = None
    season_type: Optional[str] = None
    coach: Optional[str] = None
    opp_coach: Optional[str] = None
    pair: Optional[str] = None

    @property
    def is_regular_season(self) -> bool:
        return self.season_type == REGULAR_SEASON

    def as_row(self) -> tuple[Any, ...]:
        """Column values in table order, for bulk inserts."""
        return astuple(self)


@dataclass
class CoachLookup:
    """
    Maps a roster display name to the coach it belongs to.

    Team names change between seasons; the canonical coach is the stable
    identity behind them.
    """
    roster_name: Optional[str] = None
    canonical_coach: Optional[str] = None

    def as_row(self) -> tuple[Any, ...]:
        return astuple(self)
