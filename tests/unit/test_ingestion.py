"""
Tests for the ingestion pipeline.

Most tests run the real loader against a real in-memory database; a
recording fake store covers the cases where we only care what was passed.
"""

import pytest

from fantasy_dashboard.core.league.ingestion import IngestionPipeline, IngestionSummary
from fantasy_dashboard.infrastructure.spreadsheet.loader import WorkbookParseError, open_workbook
from fantasy_dashboard.infrastructure.sqlite.repositories import ResultsRepository, StatsRepository


class RecordingStore:
    """Fake store that remembers each replace_all call."""

    def __init__(self):
        self.calls = []

    def replace_all(self, weekly_results, coach_lookup):
        self.calls.append((list(weekly_results), list(coach_lookup)))


@pytest.fixture
def results(database):
    return ResultsRepository(database)


@pytest.fixture
def pipeline(results):
    return IngestionPipeline(store=results, open_workbook=open_workbook)


class TestIngest:

    def test_loads_both_sheets(self, pipeline, results, league_workbook):
        summary = pipeline.ingest(league_workbook)

        assert summary == IngestionSummary(
            weekly_results=10,
            coach_mappings=2,
            sheets_found=["weekly_results", "coach_lookup"],
        )
        assert results.counts() == {"weekly_results": 10, "coach_lookup": 2}

    def test_reingest_replaces_instead_of_appending(self, pipeline, results, league_workbook):
        pipeline.ingest(league_workbook)
        pipeline.ingest(league_workbook)

        assert results.counts() == {"weekly_results": 10, "coach_lookup": 2}

    def test_missing_coach_lookup_sheet(self, pipeline, results, database,
                                        league_workbook, make_workbook, mirror_rows):
        pipeline.ingest(league_workbook)

        summary = pipeline.ingest(make_workbook({"weekly_results": mirror_rows}))

        assert summary.sheets_found == ["weekly_results"]
        assert results.counts() == {"weekly_results": 2, "coach_lookup": 0}
        assert StatsRepository(database).coaches() == ["X", "Y"]

    def test_missing_weekly_results_sheet_empties_table(self, pipeline, results,
                                                        league_workbook, make_workbook,
                                                        coach_lookup_rows):
        pipeline.ingest(league_workbook)

        pipeline.ingest(make_workbook({"coach_lookup": coach_lookup_rows}))

        assert results.counts() == {"weekly_results": 0, "coach_lookup": 2}

    def test_custom_sheet_names(self, results, make_workbook, mirror_rows):
        pipeline = IngestionPipeline(
            store=results,
            open_workbook=open_workbook,
            weekly_results_sheet="Games",
            coach_lookup_sheet="Coaches",
        )

        summary = pipeline.ingest(make_workbook({"Games": mirror_rows}))

        assert summary.weekly_results == 2
        assert summary.sheets_found == ["Games"]

    def test_rows_are_normalized_before_storing(self, make_workbook):
        store = RecordingStore()
        pipeline = IngestionPipeline(store=store, open_workbook=open_workbook)
        path = make_workbook({
            "weekly_results": [{"year": 2021, "coach": "Sam", "Opp Points": 88}],
        })

        pipeline.ingest(path)

        (weekly, lookup), = store.calls
        assert weekly[0].year == 2021
        assert weekly[0].coach == "Sam"
        assert weekly[0].opp_points == 88
        assert lookup == []

    def test_missing_file_propagates(self, pipeline, tmp_path):
        with pytest.raises(FileNotFoundError):
            pipeline.ingest(tmp_path / "missing.xlsx")

    def test_invalid_file_propagates_and_writes_nothing(self, tmp_path):
        store = RecordingStore()
        pipeline = IngestionPipeline(store=store, open_workbook=open_workbook)
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"\x00\x01 definitely not a zip")

        with pytest.raises(WorkbookParseError):
            pipeline.ingest(path)

        assert store.calls == []


class TestLoadSeed:

    def test_loads_existing_seed(self, pipeline, results, league_workbook):
        summary = pipeline.load_seed(league_workbook)

        assert summary.weekly_results == 10
        assert results.counts()["weekly_results"] == 10

    def test_missing_seed_is_not_an_error(self, pipeline, results, tmp_path):
        assert pipeline.load_seed(tmp_path / "fantasy_results.xlsx") is None
        assert results.counts() == {"weekly_results": 0, "coach_lookup": 0}

    def test_no_seed_configured(self, pipeline):
        assert pipeline.load_seed(None) is None
        assert pipeline.load_seed("") is None

    def test_unreadable_seed_is_logged_not_raised(self, pipeline, results, tmp_path, caplog):
        path = tmp_path / "seed.xlsx"
        path.write_text("garbage")

        assert pipeline.load_seed(path) is None
        assert results.counts() == {"weekly_results": 0, "coach_lookup": 0}
        assert "Failed to load seed workbook" in caplog.text
