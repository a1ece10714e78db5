"""
Map spreadsheet rows onto league records.

League workbooks have been exported with different header casings over the
years (`Year` in one file, `year` in the next, `Opp Points` in a hand-edited
one). Each canonical field lists the header spellings it accepts, in
priority order. The first spelling present with a non-empty value wins.

Values pass through untouched: no type coercion, no validation. A row that
is missing a field produces a record with None in that field.
"""

from typing import Any, Iterable, Mapping, Optional

from .models import CoachLookup, WeeklyResult

Row = Mapping[str, Any]

WEEKLY_RESULT_ALIASES: dict[str, tuple[str, ...]] = {
    "year": ("Year", "year"),
    "week": ("Week", "week"),
    "team": ("Team", "team"),
    "opponent": ("Opponent", "opponent"),
    "points": ("Points", "points"),
    "opp_points": ("Opp_Points", "opp_points", "Opp Points"),
    "result": ("Result", "result"),
    "season_type": ("Season_Type", "season_type", "Season Type"),
    "coach": ("Coach", "coach"),
    "opp_coach": ("Opp_Coach", "opp_coach", "Opp Coach"),
    "pair": ("Pair", "pair"),
}

COACH_LOOKUP_ALIASES: dict[str, tuple[str, ...]] = {
    "roster_name": ("Roster_Name", "roster_name", "Roster Name"),
    "canonical_coach": ("Canonical_Coach", "canonical_coach", "Canonical Coach"),
}


def pick_field(row: Row, spellings: Iterable[str]) -> Optional[Any]:
    """Return the value of the first spelling present in `row`, else None."""
    for spelling in spellings:
        value = row.get(spelling)
        if value is not None:
            return value
    return None


def _canonical_fields(row: Row, aliases: Mapping[str, tuple[str, ...]]) -> dict[str, Any]:
    return {field: pick_field(row, spellings) for field, spellings in aliases.items()}


def normalize_weekly_result(row: Row) -> WeeklyResult:
    return WeeklyResult(**_canonical_fields(row, WEEKLY_RESULT_ALIASES))


def normalize_coach_lookup(row: Row) -> CoachLookup:
    return CoachLookup(**_canonical_fields(row, COACH_LOOKUP_ALIASES))


def normalize_weekly_results(rows: Iterable[Row]) -> list[WeeklyResult]:
    return [normalize_weekly_result(row) for row in rows]


def normalize_coach_lookups(rows: Iterable[Row]) -> list[CoachLookup]:
    return [normalize_coach_lookup(row) for row in rows]
