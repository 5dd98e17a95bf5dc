"""Per-column aggregates and the blank-row filter.

Aggregates are computed from the lifted rows *before* blank rows are dropped,
so a hidden row whose values net to zero still counts in its columns.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from itertools import accumulate

from .models import ZERO, AggregateSeries, Category, Row


def aggregate(rows: Sequence[Row], column_count: int) -> AggregateSeries:
    """Compute income/spending totals, net and running balance per column."""

    income = [ZERO] * column_count
    spending = [ZERO] * column_count
    for row in rows:
        assert len(row.values) == column_count, f"row {row.label!r} has wrong length"
        target = income if row.category is Category.INCOME else spending
        for i, value in enumerate(row.values):
            target[i] += value

    net = [inc - spent for inc, spent in zip(income, spending, strict=True)]
    running: list[Decimal] = list(accumulate(net))

    return AggregateSeries(
        total_income=tuple(income),
        total_spending=tuple(spending),
        net=tuple(net),
        running_balance=tuple(running),
    )


def drop_blank_rows(rows: Sequence[Row]) -> list[Row]:
    """Return ``rows`` without those whose values sum to zero."""

    return [row for row in rows if not row.is_blank()]


__all__ = ["aggregate", "drop_blank_rows"]
