"""
Fantasy League Dashboard - standings and head-to-head stats for a fantasy football league.

This package contains the complete application:
- core: Framework-agnostic league records, normalization and ingestion
- infrastructure: Spreadsheet loading and SQLite persistence
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
