"""Tests for the offline workbook loader script."""

import sqlite3

from fantasy_dashboard.config.settings import get_settings
from scripts.load_workbook import format_standings, main


class TestLoadWorkbookScript:

    def test_prints_summary_and_standings(self, league_workbook, capsys):
        assert main([str(league_workbook)]) == 0

        output = capsys.readouterr().out
        assert "Weekly results: 10" in output
        assert "Coach mappings: 2" in output
        assert "=== Standings (all seasons) ===" in output
        lines = output.splitlines()
        standings = lines[lines.index("=== Standings (all seasons) ===") + 3:]
        assert [line.split()[0] for line in standings] == ["X", "Y", "Z"]

    def test_year_filter(self, league_workbook, capsys):
        assert main([str(league_workbook), "--year", "2022"]) == 0
        assert "=== Standings (2022) ===" in capsys.readouterr().out

    def test_writes_database_file(self, league_workbook, tmp_path):
        db_path = tmp_path / "league.db"

        assert main([str(league_workbook), "--database", str(db_path)]) == 0

        with sqlite3.connect(db_path) as conn:
            count = conn.execute("SELECT COUNT(*) FROM weekly_results").fetchone()[0]
        assert count == 10

    def test_missing_workbook(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.xlsx")]) == 1
        assert "Cannot find" in capsys.readouterr().out

    def test_invalid_workbook(self, tmp_path, capsys):
        path = tmp_path / "bad.xlsx"
        path.write_text("not excel")

        assert main([str(path)]) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_sheet_names_come_from_settings(self, make_workbook, mirror_rows, monkeypatch, capsys):
        path = make_workbook({"Games": mirror_rows})
        monkeypatch.setenv("WEEKLY_RESULTS_SHEET", "Games")
        get_settings.cache_clear()
        try:
            assert main([str(path)]) == 0
        finally:
            get_settings.cache_clear()

        output = capsys.readouterr().out
        assert "Sheets found: Games" in output
        assert "Weekly results: 2" in output

    def test_format_standings_blanks_missing_values(self):
        table = format_standings([{"coach": "X", "games": 1, "points_for": None}])
        assert table.splitlines()[2].startswith("X")
