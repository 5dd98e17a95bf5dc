"""Runtime settings for the ledger pipeline.

Values come from environment variables (a local ``.env`` is loaded by the CLI
via ``python-dotenv`` before settings are read). Unset, unparsable, or
non-positive values fall back to the defaults below.

- ``WL_GAP_THRESHOLD``: largest column gap kept on one row (default 10).
- ``WL_MIN_OVERLAP_DAYS``: in-month days a week needs to be counted for that
  month (default 4, i.e. weeks with 3 or fewer days are skipped).
- ``WL_MAX_OCCURRENCES``: cap for open-ended recurring submissions
  (default 104, two years of weekly entries).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_GAP_THRESHOLD = 10
DEFAULT_MIN_OVERLAP_DAYS = 4
DEFAULT_MAX_OCCURRENCES = 104


@dataclass(frozen=True, slots=True)
class LedgerSettings:
    gap_threshold: int = DEFAULT_GAP_THRESHOLD
    min_overlap_days: int = DEFAULT_MIN_OVERLAP_DAYS
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES

    def __post_init__(self) -> None:
        if self.gap_threshold < 0:
            raise ValueError("gap_threshold must be >= 0")
        if not 1 <= self.min_overlap_days <= 7:
            raise ValueError("min_overlap_days must be within 1..7")
        if self.max_occurrences < 1:
            raise ValueError("max_occurrences must be >= 1")


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(name)
    try:
        value = int(raw) if raw else None
    except ValueError:
        value = None
    if value is None or value < minimum:
        return default
    return value


def load_settings() -> LedgerSettings:
    """Build :class:`LedgerSettings` from the current environment."""

    return LedgerSettings(
        gap_threshold=_env_int("WL_GAP_THRESHOLD", DEFAULT_GAP_THRESHOLD, minimum=0),
        min_overlap_days=min(
            7, _env_int("WL_MIN_OVERLAP_DAYS", DEFAULT_MIN_OVERLAP_DAYS)
        ),
        max_occurrences=_env_int("WL_MAX_OCCURRENCES", DEFAULT_MAX_OCCURRENCES),
    )


__all__ = ["LedgerSettings", "load_settings"]
