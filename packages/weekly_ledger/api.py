"""Public pipeline API for the ``weekly_ledger`` package.

:func:`build_ledger` runs the whole bucketing pipeline once:

columns (global date span) -> submission groups -> rows -> lift ->
aggregates -> blank-row filter.

Each stage lives in its own module and can be used on its own; this module
only wires them together with one set of :class:`~weekly_ledger.config.LedgerSettings`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeAlias

from .aggregate import aggregate, drop_blank_rows
from .columns import build_columns
from .config import LedgerSettings, load_settings
from .grouping import group_by_submission
from .lift import lift_up
from .logging_setup import get_logger
from .models import (
    Category,
    Column,
    IncomeRecord,
    LedgerTable,
    Row,
    SpendingRecord,
    Transaction,
)
from .rows import build_rows

_logger = get_logger("weekly_ledger.api")

IncomeInput: TypeAlias = IncomeRecord | Transaction
SpendingInput: TypeAlias = SpendingRecord | Transaction


def _as_transactions(
    items: Iterable[IncomeRecord | SpendingRecord | Transaction],
) -> list[Transaction]:
    out: list[Transaction] = []
    for item in items:
        if isinstance(item, Transaction):
            out.append(item)
        elif isinstance(item, IncomeRecord):
            out.append(item.to_transaction())
        else:
            raise TypeError(
                f"expected IncomeRecord, SpendingRecord or Transaction, got {type(item).__name__}"
            )
    return out


def _rows_for_side(
    transactions: Sequence[Transaction],
    columns: Sequence[Column],
    *,
    income: bool,
    settings: LedgerSettings,
) -> list[Row]:
    rows: list[Row] = []
    for ordinal, group in enumerate(group_by_submission(transactions), start=1):
        category = Category.INCOME if income else Category.parse_spending(group.category)
        rows.extend(
            build_rows(
                group.transactions,
                columns,
                category,
                ordinal,
                gap_threshold=settings.gap_threshold,
            )
        )
    return rows


def build_ledger(
    income: Iterable[IncomeInput],
    spending: Iterable[SpendingInput],
    *,
    settings: LedgerSettings | None = None,
) -> LedgerTable | None:
    """Bucket income and spending into week columns and aggregate them.

    Parameters
    ----------
    income:
        Income records (or already-built transactions, whose category is
        forced to ``income``).
    spending:
        Spending records or transactions. A submission's category is the one
        carried by its first transaction.
    settings:
        Pipeline settings; defaults to :func:`~weekly_ledger.config.load_settings`.

    Returns
    -------
    LedgerTable | None
        ``None`` when both inputs are empty ("no data"), otherwise the
        columns, the lifted rows with blank rows removed (income rows first,
        then spending rows, each in submission order), and the per-column
        aggregates.
    """

    settings = settings or load_settings()
    income_tx = [
        tx if tx.category is Category.INCOME else _force_income(tx)
        for tx in _as_transactions(income)
    ]
    spending_tx = _as_transactions(spending)

    columns = build_columns(
        [tx.date for tx in (*income_tx, *spending_tx)],
        min_overlap_days=settings.min_overlap_days,
    )
    if columns is None:
        _logger.info("build_ledger:no_data")
        return None

    rows = _rows_for_side(income_tx, columns, income=True, settings=settings)
    rows += _rows_for_side(spending_tx, columns, income=False, settings=settings)

    lift_up(rows)
    aggregates = aggregate(rows, len(columns))
    visible = drop_blank_rows(rows)

    _logger.info(
        "build_ledger:done income=%d spending=%d columns=%d rows=%d hidden_rows=%d",
        len(income_tx),
        len(spending_tx),
        len(columns),
        len(visible),
        len(rows) - len(visible),
    )
    return LedgerTable(columns=tuple(columns), rows=tuple(visible), aggregates=aggregates)


def _force_income(tx: Transaction) -> Transaction:
    return Transaction(
        submission_id=tx.submission_id,
        date=tx.date,
        amount=tx.amount,
        category=Category.INCOME,
    )


__all__ = ["build_ledger"]
