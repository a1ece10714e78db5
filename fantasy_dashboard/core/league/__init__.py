"""
League results logic.

Contains the domain records, header normalization and the ingestion pipeline.
"""

from .ingestion import IngestionPipeline, IngestionSummary
from .models import REGULAR_SEASON, CoachLookup, GameResult, WeeklyResult
from .normalizer import (
    normalize_coach_lookup,
    normalize_coach_lookups,
    normalize_weekly_result,
    normalize_weekly_results,
)

__all__ = [
    "REGULAR_SEASON",
    "CoachLookup",
    "GameResult",
    "WeeklyResult",
    "IngestionPipeline",
    "IngestionSummary",
    "normalize_coach_lookup",
    "normalize_coach_lookups",
    "normalize_weekly_result",
    "normalize_weekly_results",
]
