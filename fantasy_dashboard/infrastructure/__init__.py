"""
Infrastructure layer - external engine integrations.

Each subdirectory wraps an external dependency:
- spreadsheet: Excel workbook reading (pandas + openpyxl)
- sqlite: Embedded database persistence and aggregate queries

These wrappers translate between external formats and our domain records.
"""
