#!/usr/bin/env python3
"""
Load a league workbook and print the standings.

Runs the same ingestion the API uses, without starting the server. Handy
for checking a workbook before uploading it, or for building a SQLite file
other tools can query.

Usage:
    python scripts/load_workbook.py fantasy_results_2019_2024_v26.xlsx
    python scripts/load_workbook.py results.xlsx --year 2023
    python scripts/load_workbook.py results.xlsx --database league.db

Sheet names come from the same settings the server uses
(WEEKLY_RESULTS_SHEET, COACH_LOOKUP_SHEET in the environment or .env).
"""

import sys
from pathlib import Path

# Add project root to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from fantasy_dashboard.config.settings import get_settings
from fantasy_dashboard.core.league.ingestion import IngestionPipeline
from fantasy_dashboard.infrastructure.spreadsheet.loader import WorkbookParseError, open_workbook
from fantasy_dashboard.infrastructure.sqlite.client import DatabaseError, create_sqlite_database
from fantasy_dashboard.infrastructure.sqlite.repositories import ResultsRepository, StatsRepository

STANDINGS_COLUMNS = [
    ("coach", 20),
    ("games", 6),
    ("wins", 5),
    ("losses", 7),
    ("ties", 5),
    ("points_for", 11),
    ("points_against", 15),
    ("win_pct", 8),
]


def format_standings(rows: list[dict]) -> str:
    """Render standings rows as a fixed-width text table."""
    header = "".join(name.ljust(width) for name, width in STANDINGS_COLUMNS)
    lines = [header, "-" * len(header)]
    for row in rows:
        lines.append("".join(
            str(row.get(name) if row.get(name) is not None else "").ljust(width)
            for name, width in STANDINGS_COLUMNS
        ))
    return "\n".join(lines)


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description='Load a league workbook and print standings')
    parser.add_argument('workbook', help='Path to the .xlsx workbook')
    parser.add_argument('--year', type=int, default=None, help='Only show standings for this season')
    parser.add_argument('--database', default=':memory:', help='SQLite file to write (default: in-memory)')
    args = parser.parse_args(argv)

    load_dotenv()
    settings = get_settings()

    database = create_sqlite_database(args.database)
    try:
        database.create_schema()

        pipeline = IngestionPipeline(
            store=ResultsRepository(database),
            open_workbook=open_workbook,
            weekly_results_sheet=settings.weekly_results_sheet,
            coach_lookup_sheet=settings.coach_lookup_sheet,
        )

        print(f"Loading workbook: {args.workbook}")
        try:
            summary = pipeline.ingest(args.workbook)
        except FileNotFoundError:
            print(f"ERROR: Cannot find {args.workbook}")
            return 1
        except WorkbookParseError as e:
            print(f"ERROR: {e}")
            return 1

        print(f"Sheets found: {', '.join(summary.sheets_found) or 'none'}")
        print(f"Weekly results: {summary.weekly_results}")
        print(f"Coach mappings: {summary.coach_mappings}")

        standings = StatsRepository(database).standings(year=args.year)
        season = args.year if args.year is not None else 'all seasons'
        print(f"\n=== Standings ({season}) ===")
        print(format_standings(standings))

    except DatabaseError as e:
        print(f"ERROR: Database failure: {e}")
        return 1

    finally:
        database.close()

    return 0


if __name__ == '__main__':
    sys.exit(main())
