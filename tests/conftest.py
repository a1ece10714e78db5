"""
Shared fixtures for the league dashboard tests.

The league fixture is small enough to check by hand:

    2022 wk1   X 100 - 90 Y        (regular)
    2022 wk2   X  80 - 80 Z        (regular, tie)
    2023 wk1   X 100 - 90 Y        (regular, teams A/B, pair AB1)
    2023 wk2   Y 110 - 95 Z        (regular)
    2023 wk15  X 120 - 70 Y        (playoff, excluded from aggregates)

Every matchup is stored twice, once from each side.
"""

from pathlib import Path

import pandas as pd
import pytest

from fantasy_dashboard.infrastructure.sqlite.client import create_sqlite_database

WEEKLY_HEADERS = [
    "Year", "Week", "Team", "Opponent", "Points", "Opp_Points",
    "Result", "Season_Type", "Coach", "Opp_Coach", "Pair",
]


def matchup(year, week, team, opponent, coach, opp_coach, points, opp_points,
            pair, season_type="Regular"):
    """Both rows of one game, with capitalised headers."""
    if points > opp_points:
        result, opp_result = "W", "L"
    elif points < opp_points:
        result, opp_result = "L", "W"
    else:
        result = opp_result = "T"

    return [
        {
            "Year": year, "Week": week, "Team": team, "Opponent": opponent,
            "Points": points, "Opp_Points": opp_points, "Result": result,
            "Season_Type": season_type, "Coach": coach, "Opp_Coach": opp_coach,
            "Pair": pair,
        },
        {
            "Year": year, "Week": week, "Team": opponent, "Opponent": team,
            "Points": opp_points, "Opp_Points": points, "Result": opp_result,
            "Season_Type": season_type, "Coach": opp_coach, "Opp_Coach": coach,
            "Pair": pair,
        },
    ]


def write_workbook(path: Path, sheets: dict[str, list[dict]]) -> Path:
    """Write `sheets` (name -> rows) to an .xlsx file."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, rows in sheets.items():
            frame = pd.DataFrame(rows) if rows else pd.DataFrame(columns=WEEKLY_HEADERS)
            frame.to_excel(writer, sheet_name=name, index=False)
    return path


@pytest.fixture
def make_matchup():
    return matchup


@pytest.fixture
def make_workbook(tmp_path):
    """Factory: make_workbook({"weekly_results": rows}) -> path of a new .xlsx."""
    def _make(sheets: dict[str, list[dict]], name: str = "upload.xlsx") -> Path:
        return write_workbook(tmp_path / name, sheets)
    return _make


@pytest.fixture
def mirror_rows() -> list[dict]:
    """The two sides of a single 2023 week 1 game: X beats Y 100-90."""
    return matchup(2023, 1, "A", "B", "X", "Y", 100, 90, "AB1")


@pytest.fixture
def league_rows() -> list[dict]:
    return (
        matchup(2022, 1, "A", "B", "X", "Y", 100, 90, "AB0")
        + matchup(2022, 2, "A", "C", "X", "Z", 80, 80, "AC0")
        + matchup(2023, 1, "A", "B", "X", "Y", 100, 90, "AB1")
        + matchup(2023, 2, "B", "C", "Y", "Z", 110, 95, "BC1")
        + matchup(2023, 15, "A", "B", "X", "Y", 120, 70, "ABP", season_type="Playoff")
    )


@pytest.fixture
def coach_lookup_rows() -> list[dict]:
    return [
        {"Roster_Name": "Team Alpha", "Canonical_Coach": "X"},
        {"Roster_Name": "Bravo Bombers", "Canonical_Coach": "Y"},
    ]


@pytest.fixture
def league_workbook(tmp_path, league_rows, coach_lookup_rows) -> Path:
    return write_workbook(
        tmp_path / "league.xlsx",
        {"weekly_results": league_rows, "coach_lookup": coach_lookup_rows},
    )


@pytest.fixture
def database():
    """A fresh in-memory database with the schema created."""
    db = create_sqlite_database(":memory:")
    db.create_schema()
    yield db
    db.close()
