"""
Spreadsheet integration for league workbooks.

Reads .xlsx files with pandas (openpyxl engine) into plain row dicts.
"""

from .loader import Workbook, WorkbookParseError, open_workbook

__all__ = [
    "Workbook",
    "WorkbookParseError",
    "open_workbook",
]
