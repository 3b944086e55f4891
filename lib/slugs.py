# =============================================================================
# lib/slugs.py - Public Link Slugs
# =============================================================================
# Turns free text into the URL-safe identifier used in /p/<slug> links.
#
# Rules:
# - lower-case
# - diacritics stripped (NFD decomposition, combining marks dropped)
# - every run of characters outside [a-z0-9] becomes a single "-"
# - no leading/trailing "-"
#
# normalize_slug is pure and total: any input yields a string (maybe empty).
# =============================================================================

from __future__ import annotations

import re
import unicodedata
from enum import Enum

SLUG_MIN_LENGTH = 3

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class SlugAvailability(str, Enum):
    """
    Result of an availability check.

    - unknown: candidate too short to be checked (never hits the table)
    - available: no other profile holds the slug
    - taken: another profile already holds the slug
    """
    UNKNOWN = "unknown"
    AVAILABLE = "available"
    TAKEN = "taken"


def normalize_slug(text: str | None) -> str:
    """
    Produce a candidate slug from user-entered text.

    Example:
        normalize_slug("São João!") -> "sao-joao"
        normalize_slug("  --Maria  das Dores--") -> "maria-das-dores"
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM.sub("-", stripped).strip("-")


def is_checkable(slug: str) -> bool:
    """True when a normalized slug is long enough to query availability."""
    return len(slug) >= SLUG_MIN_LENGTH


def is_valid_slug(slug: str) -> bool:
    """Full validity: normalized shape plus minimum length."""
    return is_checkable(slug) and bool(SLUG_PATTERN.match(slug))


def public_profile_path(slug: str) -> str:
    return f"/p/{slug}"
