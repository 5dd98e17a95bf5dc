"""Calendar partitioning: turn a (year, month) into Sunday-start week buckets.

A calendar week that straddles a month boundary belongs to the month holding
most of its days. With the default ``min_overlap_days=4`` a week contributing
3 or fewer days to the month is skipped (the neighbouring month counts it),
otherwise the full Sunday..Saturday week is emitted for the month even though
its ``end`` may fall in the next month.

Helpers for column headers (``month_name``, ``ordinal_label``) live here too.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from .config import DEFAULT_MIN_OVERLAP_DAYS
from .models import WeekInterval

_MONTH_NAMES: tuple[str, ...] = tuple(calendar.month_name)[1:]


def week_bounds(day: date) -> tuple[date, date]:
    """Return the (Sunday, Saturday) bounds of the week containing ``day``."""

    # date.weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def build_month_weeks(
    year: int,
    month: int,
    *,
    min_overlap_days: int = DEFAULT_MIN_OVERLAP_DAYS,
) -> list[WeekInterval]:
    """Return the week intervals attributed to ``month`` of ``year``.

    Parameters
    ----------
    year, month:
        Calendar year and 1-based month.
    min_overlap_days:
        Days of a week that must fall inside the month for the week to be
        emitted for it.

    Returns
    -------
    list[WeekInterval]
        Full-week intervals in chronological order with ordinals ``1..k``.
    """

    if not 1 <= month <= 12:
        raise ValueError(f"month must be within 1..12, got {month}")

    month_start, month_end = month_bounds(year, month)
    weeks: list[WeekInterval] = []
    cursor = month_start

    while cursor <= month_end:
        week_start, week_end = week_bounds(cursor)
        overlap_start = max(week_start, month_start)
        overlap_end = min(week_end, month_end)
        overlap_days = (overlap_end - overlap_start).days + 1

        if overlap_days >= min_overlap_days:
            weeks.append(WeekInterval(start=week_start, end=week_end, ordinal=len(weeks) + 1))

        cursor = week_end + timedelta(days=1)

    return weeks


def month_name(month_index: int) -> str:
    """Full English month name for a 0-based month index (0 is January).

    Out-of-range indices give ``"Unknown"``.
    """

    if 0 <= month_index < 12:
        return _MONTH_NAMES[month_index]
    return "Unknown"


def ordinal_label(n: int) -> str:
    """``1 -> "1st"``, ``2 -> "2nd"``, ``3 -> "3rd"``, everything else ``"Nth"``."""

    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n, "th")
    return f"{n}{suffix}"


__all__ = [
    "build_month_weeks",
    "month_bounds",
    "month_name",
    "ordinal_label",
    "week_bounds",
]
