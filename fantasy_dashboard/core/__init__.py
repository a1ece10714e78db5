"""
Core business logic for the league dashboard.

This module is framework-agnostic - it doesn't import FastAPI, SQLite,
or pandas. Ingestion talks to the spreadsheet and the database through
small protocols, so it can be tested with plain Python fakes.
"""
