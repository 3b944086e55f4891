# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - ApplicationError: base class for errors raised outside the HTTP layer
# - Month arithmetic for schedule windows and edit locks
# - Portuguese date formatting for cards and listings
# =============================================================================

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }


# =============================================================================
# Month Utilities
# =============================================================================

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def first_of_month(value: date) -> date:
    """Return the first day of the month containing `value`."""
    return value.replace(day=1)


def parse_month(month: str) -> date:
    """
    Parse a "YYYY-MM" string into the first day of that month.

    Raises:
        ValueError: If the string isn't a valid year-month
    """
    match = _MONTH_RE.match(month or "")
    if not match:
        raise ValueError(f"Invalid month: {month!r}")
    year, mon = int(match.group(1)), int(match.group(2))
    if not 1 <= mon <= 12:
        raise ValueError(f"Invalid month: {month!r}")
    return date(year, mon, 1)


def month_bounds(month: str) -> tuple[date, date]:
    """
    Half-open date window for a month: [first day, first day of next month).

    Example:
        month_bounds("2024-12") -> (date(2024, 12, 1), date(2025, 1, 1))
    """
    start = parse_month(month)
    if start.month == 12:
        end = date(start.year + 1, 1, 1)
    else:
        end = date(start.year, start.month + 1, 1)
    return start, end


def current_month(today: date | None = None) -> str:
    """The "YYYY-MM" string for today (or the given day)."""
    return (today or date.today()).strftime("%Y-%m")


def to_date(value: date | str) -> date:
    """Accept a date or an ISO "YYYY-MM-DD" string (as PostgREST returns it)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


# =============================================================================
# Portuguese Formatting
# =============================================================================

MONTH_NAMES_PT = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

WEEKDAY_NAMES_PT = [
    "segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
    "sexta-feira", "sábado", "domingo",
]


def format_long_date_pt(value: date | str) -> str:
    """
    Format a date the way the schedule cards show it.

    Example:
        format_long_date_pt("2024-05-12") -> "12 de maio de 2024"
    """
    d = to_date(value)
    return f"{d.day:02d} de {MONTH_NAMES_PT[d.month - 1]} de {d.year}"


def format_short_date_pt(value: date | str) -> str:
    """dd/MM/yyyy"""
    return to_date(value).strftime("%d/%m/%Y")


def weekday_pt(value: date | str) -> str:
    return WEEKDAY_NAMES_PT[to_date(value).weekday()]
