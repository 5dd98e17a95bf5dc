"""Expand a submission (amount + frequency + bounds) into dated records.

Frequencies:
- ``one-time``: a single record on the start date
- ``weekly`` / ``bi-weekly``: every 7 / 14 days
- ``monthly``: the start day in each following month, clamped to the month's
  last day (Jan 31 -> Feb 28 -> Mar 31). The overflow is never rolled into
  the next month, so Jan 31 does not become Mar 3, and each date is counted
  from the start date so a clamp does not carry over.

Expansion stops at whichever of ``end_date`` (inclusive) or ``repeat_count``
is reached first. Without either bound the expansion is capped at
``max_occurrences``.
"""

from __future__ import annotations

import calendar
import itertools
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta

from .config import DEFAULT_MAX_OCCURRENCES
from .logging_setup import get_logger
from .models import Frequency, IncomeRecord, SpendingRecord, SubmissionRequest

_logger = get_logger("weekly_ledger.recurrence")

_STEP_DAYS = {Frequency.WEEKLY: 7, Frequency.BI_WEEKLY: 14}


def add_months(d: date, n: int) -> date:
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last))


def occurrence_dates(
    start: date, frequency: Frequency, *, until: date | None = None
) -> Iterator[date]:
    """Yield occurrence dates from ``start`` (never past ``until`` when set)."""

    if frequency is Frequency.ONE_TIME:
        if until is None or start <= until:
            yield start
        return

    for n in itertools.count():
        if frequency is Frequency.MONTHLY:
            current = add_months(start, n)
        else:
            current = start + timedelta(days=_STEP_DAYS[frequency] * n)
        if until is not None and current > until:
            return
        yield current


@dataclass(slots=True)
class SubmissionCounter:
    """Allocates submission ids for requests that do not carry one.

    Callers own the counter; start it above any id already in use.
    """

    next_id: int = 1

    def allocate(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value

    def reserve(self, used: int) -> None:
        if used >= self.next_id:
            self.next_id = used + 1


def expand_submission(
    request: SubmissionRequest,
    *,
    submission_id: int | None = None,
    counter: SubmissionCounter | None = None,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
) -> list[IncomeRecord] | list[SpendingRecord]:
    """Expand ``request`` into one record per occurrence, sharing one id.

    The id is taken from ``submission_id``, then ``request.submission_id``,
    then allocated from ``counter``; with none of these the records carry no
    id.
    """

    sid = submission_id if submission_id is not None else request.submission_id
    if sid is None and counter is not None:
        sid = counter.allocate()
    elif sid is not None and counter is not None:
        counter.reserve(sid)

    limit = request.repeat_count
    if request.frequency is not Frequency.ONE_TIME and limit is None and request.end_date is None:
        _logger.warning(
            "expand_submission:unbounded frequency=%s start=%s capped_at=%d",
            request.frequency.value,
            request.start_date.isoformat(),
            max_occurrences,
        )
        limit = max_occurrences

    dates = occurrence_dates(request.start_date, request.frequency, until=request.end_date)
    if limit is not None:
        dates = itertools.islice(dates, limit)

    if request.is_income:
        return [
            IncomeRecord(
                submission_id=sid,
                date=d,
                amount=request.amount,
                frequency=request.frequency.value,
            )
            for d in dates
        ]
    return [
        SpendingRecord(
            submission_id=sid,
            date=d,
            amount=request.amount,
            frequency=request.frequency.value,
            category=request.category,
        )
        for d in dates
    ]


__all__ = [
    "SubmissionCounter",
    "add_months",
    "expand_submission",
    "occurrence_dates",
]
