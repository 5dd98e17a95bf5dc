"""Row builder: map one submission's transactions onto the week columns.

Amounts are summed per column. The populated columns are then walked in
order and a new row is started whenever the jump from the previous populated
column exceeds ``gap_threshold``, so a submission that pauses for a long time
shows up as separate streaks instead of one row smeared across a wide blank
band.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from .config import DEFAULT_GAP_THRESHOLD
from .logging_setup import get_logger
from .models import ZERO, Category, Column, Row, Transaction

_logger = get_logger("weekly_ledger.rows")


def row_label(category: Category, submission_ordinal: int, row_ordinal: int) -> str:
    """``"Income #1.1"`` for income, ``"Spent #2.1 (bill)"`` otherwise."""

    if category is Category.INCOME:
        return f"Income #{submission_ordinal}.{row_ordinal}"
    return f"Spent #{submission_ordinal}.{row_ordinal} ({category.value})"


def sum_by_column(
    transactions: Iterable[Transaction], columns: Sequence[Column]
) -> tuple[dict[int, Decimal], int]:
    """Return ``(column index -> summed amount, unmatched transaction count)``.

    A transaction is added to every column whose interval contains its date.
    """

    sums: dict[int, Decimal] = {}
    unmatched = 0
    for tx in transactions:
        matched = False
        for idx, col in enumerate(columns):
            if col.interval.contains(tx.date):
                sums[idx] = sums.get(idx, ZERO) + tx.amount
                matched = True
        if not matched:
            unmatched += 1
    return sums, unmatched


def split_on_gaps(
    points: Sequence[tuple[int, Decimal]], *, gap_threshold: int
) -> list[list[tuple[int, Decimal]]]:
    """Split sorted ``(index, amount)`` points into runs with gaps <= threshold."""

    runs: list[list[tuple[int, Decimal]]] = []
    prev: int | None = None
    for idx, amount in points:
        if prev is None or idx - prev > gap_threshold:
            runs.append([])
        runs[-1].append((idx, amount))
        prev = idx
    return runs


def build_rows(
    transactions: Iterable[Transaction],
    columns: Sequence[Column],
    category: Category,
    submission_ordinal: int,
    *,
    gap_threshold: int = DEFAULT_GAP_THRESHOLD,
) -> list[Row]:
    """Build the dense rows for one submission.

    Parameters
    ----------
    transactions:
        All transactions of a single submission.
    columns:
        The global column sequence.
    category:
        Category stamped on every produced row.
    submission_ordinal:
        1-based position of the submission among its side (income or
        spending), used in the row label.
    gap_threshold:
        Largest jump between populated column indices kept on one row.

    Returns
    -------
    list[Row]
        Zero or more rows, each of length ``len(columns)``.
    """

    sums, unmatched = sum_by_column(transactions, columns)
    if unmatched:
        _logger.warning(
            "build_rows:unbucketed submission=%d category=%s transactions=%d",
            submission_ordinal,
            category.value,
            unmatched,
        )

    rows: list[Row] = []
    for row_ordinal, run in enumerate(
        split_on_gaps(sorted(sums.items()), gap_threshold=gap_threshold), start=1
    ):
        values = [ZERO] * len(columns)
        for idx, amount in run:
            values[idx] = amount
        rows.append(
            Row(
                label=row_label(category, submission_ordinal, row_ordinal),
                category=category,
                values=values,
            )
        )
    return rows


__all__ = ["build_rows", "row_label", "split_on_gaps", "sum_by_column"]
