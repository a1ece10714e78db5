"""
Workbook ingestion: spreadsheet -> normalized records -> store.

The pipeline is used twice:
1. At startup, to load an optional seed workbook (failures are logged, not raised)
2. On upload, to replace everything with the uploaded workbook

Both recognised sheets are read before anything is written, and the store
replaces both tables together. A workbook that lacks one of the sheets
empties the corresponding table.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, ContextManager, Optional, Protocol, Sequence, Union

from .models import CoachLookup, WeeklyResult
from .normalizer import normalize_coach_lookups, normalize_weekly_results

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SheetSource(Protocol):
    """An opened workbook that can hand back rows by sheet name."""

    @property
    def sheet_names(self) -> list[str]: ...

    def read_sheet(self, name: str) -> Optional[list[dict[str, Any]]]: ...


class ResultsStore(Protocol):
    """Where normalized records end up."""

    def replace_all(
        self,
        weekly_results: Sequence[WeeklyResult],
        coach_lookup: Sequence[CoachLookup],
    ) -> None: ...


WorkbookOpener = Callable[[PathLike], ContextManager[SheetSource]]


@dataclass
class IngestionSummary:
    """What one ingestion run wrote."""
    weekly_results: int = 0
    coach_mappings: int = 0
    sheets_found: list[str] = field(default_factory=list)


class IngestionPipeline:
    """
    Loads a league workbook into the results store.

    The workbook opener and the store are injected so the pipeline
    never touches pandas or SQLite directly.
    """

    def __init__(
        self,
        store: ResultsStore,
        open_workbook: WorkbookOpener,
        weekly_results_sheet: str = "weekly_results",
        coach_lookup_sheet: str = "coach_lookup",
    ) -> None:
        self._store = store
        self._open_workbook = open_workbook
        self._weekly_results_sheet = weekly_results_sheet
        self._coach_lookup_sheet = coach_lookup_sheet

    def ingest(self, path: PathLike) -> IngestionSummary:
        """
        Replace the store's contents with the workbook at `path`.

        Raises whatever the opener or the store raises: FileNotFoundError,
        WorkbookParseError, DatabaseError. Nothing is written unless both
        sheets were read successfully.
        """
        with self._open_workbook(path) as workbook:
            weekly_rows = workbook.read_sheet(self._weekly_results_sheet)
            lookup_rows = workbook.read_sheet(self._coach_lookup_sheet)

        sheets_found = [
            name
            for name, rows in (
                (self._weekly_results_sheet, weekly_rows),
                (self._coach_lookup_sheet, lookup_rows),
            )
            if rows is not None
        ]

        weekly_results = normalize_weekly_results(weekly_rows or [])
        coach_lookup = normalize_coach_lookups(lookup_rows or [])

        logger.info(
            "Processing workbook",
            extra={
                "path": str(path),
                "sheets_found": sheets_found,
                "weekly_results": len(weekly_results),
                "coach_mappings": len(coach_lookup),
            }
        )

        self._store.replace_all(weekly_results, coach_lookup)

        return IngestionSummary(
            weekly_results=len(weekly_results),
            coach_mappings=len(coach_lookup),
            sheets_found=sheets_found,
        )

    def load_seed(self, path: Optional[PathLike]) -> Optional[IngestionSummary]:
        """
        Load the startup seed workbook if there is one.

        The service is useful without seed data (users can upload), so a
        missing or broken seed file is logged and the tables stay empty.
        """
        if not path:
            logger.info("No seed workbook configured")
            return None

        if not Path(path).exists():
            logger.warning(
                "Seed workbook not found, starting with empty tables",
                extra={"path": str(path)}
            )
            return None

        try:
            summary = self.ingest(path)
        except Exception as e:
            logger.warning(
                "Failed to load seed workbook, starting with empty tables",
                extra={"path": str(path), "error": str(e)}
            )
            return None

        logger.info(
            "Seed workbook loaded",
            extra={
                "path": str(path),
                "weekly_results": summary.weekly_results,
                "coach_mappings": summary.coach_mappings,
            }
        )
        return summary
