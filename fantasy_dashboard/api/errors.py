"""
Translate domain failures into HTTP errors.

Every error response body is {"error": <message>}; the handlers in
main.py render HTTPException.detail under that key.
"""

import logging
from typing import Optional

from fastapi import HTTPException, status

from ..config.settings import Settings
from ..infrastructure.sqlite.client import DatabaseError

logger = logging.getLogger(__name__)

GENERIC_DATABASE_ERROR = "Database query failed"


def database_error(
    error: DatabaseError,
    settings: Settings,
    operation: str,
) -> HTTPException:
    """
    Build the 500 response for a failed database call.

    The SQLite message is only passed through when EXPOSE_DATABASE_ERRORS
    is set; it is always logged.
    """
    logger.error(
        "Database operation failed",
        extra={"operation": operation, "error": str(error)}
    )
    detail = str(error) if settings.expose_database_errors else GENERIC_DATABASE_ERROR
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


def parse_year(value: Optional[str]) -> Optional[int]:
    """
    Parse a `year` query parameter.

    "all" (or nothing) means no filter. Anything else must be an integer.
    """
    if value is None or value.strip().lower() in ("", "all"):
        return None
    try:
        return int(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="year must be an integer or 'all'",
        )


def parse_coach(value: Optional[str]) -> Optional[str]:
    """Parse a `coach` query parameter; "all" (or nothing) means no filter."""
    if value is None or value == "" or value == "all":
        return None
    return value
