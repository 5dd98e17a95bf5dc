"""Column builder: expand the transactions' date span into week columns."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date

from .calendar_weeks import build_month_weeks
from .config import DEFAULT_MIN_OVERLAP_DAYS
from .logging_setup import get_logger
from .models import Column

_logger = get_logger("weekly_ledger.columns")


def iter_months(first: date, last: date) -> Iterator[tuple[int, int]]:
    """Yield ``(year, month)`` from ``first``'s month through ``last``'s month."""

    year, month = first.year, first.month
    while (year, month) <= (last.year, last.month):
        yield year, month
        month += 1
        if month > 12:
            year, month = year + 1, 1


def build_columns(
    dates: Iterable[date],
    *,
    min_overlap_days: int = DEFAULT_MIN_OVERLAP_DAYS,
) -> list[Column] | None:
    """Build the chronological column sequence covering ``dates``.

    Returns ``None`` when ``dates`` is empty; callers treat that as "no data".
    Week intervals of adjacent months are not assumed to be disjoint.
    """

    all_dates = list(dates)
    if not all_dates:
        return None

    min_date, max_date = min(all_dates), max(all_dates)

    columns: list[Column] = []
    for year, month in iter_months(min_date, max_date):
        for week in build_month_weeks(year, month, min_overlap_days=min_overlap_days):
            columns.append(
                Column(
                    key=f"{year}-{month:02d}-wk{week.ordinal}",
                    year=year,
                    month=month - 1,
                    interval=week,
                )
            )

    _logger.debug(
        "build_columns:done first=%s last=%s columns=%d",
        min_date.isoformat(),
        max_date.isoformat(),
        len(columns),
    )
    return columns


__all__ = ["build_columns", "iter_months"]
