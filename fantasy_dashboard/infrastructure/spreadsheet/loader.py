"""
Excel workbook reading via pandas and openpyxl.

A workbook is opened once and sheets are read from it by name. Rows come
back as plain dicts keyed by header, the shape the normalizer expects:
- Header cells are whitespace-stripped
- Empty cells are None, never NaN
- numpy scalars are unwrapped and timestamps become ISO strings, so every
  value can be bound straight into SQLite

Everything else is left as pandas inferred it. A column of numbers
with one text cell stays text.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


class WorkbookParseError(Exception):
    """Raised when a file is not a readable spreadsheet."""
    pass


def _to_python(value: Any) -> Any:
    """Unwrap pandas/numpy scalars into plain Python values."""
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, np.generic):
        return value.item()
    return value


class Workbook:
    """
    An opened Excel workbook.

    Use as a context manager so the underlying file handle is released:

        with open_workbook(path) as workbook:
            rows = workbook.read_sheet("weekly_results")
    """

    def __init__(self, excel_file: pd.ExcelFile, path: Path) -> None:
        self._excel = excel_file
        self._path = path

    @property
    def sheet_names(self) -> list[str]:
        return [str(name) for name in self._excel.sheet_names]

    def read_sheet(self, name: str) -> Optional[list[dict[str, Any]]]:
        """
        Read one sheet into a list of row dicts.

        Returns None when the workbook has no sheet called `name`.
        A sheet with a header row and no data returns an empty list.
        """
        if name not in self.sheet_names:
            logger.debug(
                "Sheet not present in workbook",
                extra={"path": str(self._path), "sheet": name}
            )
            return None

        try:
            df = self._excel.parse(name)
        except Exception as e:
            raise WorkbookParseError(f"Could not read sheet '{name}': {e}") from e

        df.columns = [str(column).strip() for column in df.columns]
        df = df.astype(object).where(pd.notna(df), None)

        rows = [
            {key: _to_python(value) for key, value in record.items()}
            for record in df.to_dict(orient="records")
        ]

        logger.debug(
            "Read sheet",
            extra={"path": str(self._path), "sheet": name, "rows": len(rows)}
        )
        return rows

    def close(self) -> None:
        self._excel.close()

    def __enter__(self) -> "Workbook":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_workbook(path: Union[str, Path]) -> Workbook:
    """
    Open an .xlsx workbook for reading.

    Raises:
        FileNotFoundError: if nothing exists at `path`
        WorkbookParseError: if the file is not a valid spreadsheet
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Workbook not found: {path}")

    try:
        excel_file = pd.ExcelFile(path, engine="openpyxl")
    except Exception as e:
        logger.error(
            "Failed to open workbook",
            extra={"path": str(path), "error": str(e)}
        )
        raise WorkbookParseError(f"Not a valid spreadsheet: {path.name}") from e

    logger.debug(
        "Opened workbook",
        extra={"path": str(path), "sheets": [str(s) for s in excel_file.sheet_names]}
    )
    return Workbook(excel_file, path)
