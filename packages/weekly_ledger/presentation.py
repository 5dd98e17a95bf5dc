"""Shape a :class:`~weekly_ledger.models.LedgerTable` for tabular display.

Nothing here draws anything. The view orders rows by category priority,
merges columns under month headers, and labels each week column with its
ordinal. It also provides plain serializations (JSON-ready dict and
tab-separated lines) used by the CLI.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal
from itertools import groupby
from typing import Any

from .calendar_weeks import month_name, ordinal_label
from .models import CATEGORY_ORDER, AggregateSeries, Column, LedgerTable, Row

_PRIORITY = {category: i for i, category in enumerate(CATEGORY_ORDER)}


@dataclass(frozen=True, slots=True)
class MonthHeader:
    """One merged header cell; ``month`` is 0-based like :attr:`Column.month`."""

    year: int
    month: int
    title: str
    span: int


@dataclass(frozen=True, slots=True)
class TableView:
    month_headers: tuple[MonthHeader, ...]
    week_labels: tuple[str, ...]
    columns: tuple[Column, ...]
    rows: tuple[Row, ...]
    aggregates: AggregateSeries


def order_rows(rows: Sequence[Row]) -> list[Row]:
    """Stable sort: income, debt, bill, sub, other."""

    return sorted(rows, key=lambda r: _PRIORITY[r.category])


def month_headers(columns: Sequence[Column]) -> list[MonthHeader]:
    headers: list[MonthHeader] = []
    for (year, month), cols in groupby(columns, key=lambda c: (c.year, c.month)):
        headers.append(
            MonthHeader(
                year=year,
                month=month,
                title=f"{month_name(month)} {year}",
                span=len(list(cols)),
            )
        )
    return headers


def assemble_view(table: LedgerTable) -> TableView:
    return TableView(
        month_headers=tuple(month_headers(table.columns)),
        week_labels=tuple(ordinal_label(c.ordinal) for c in table.columns),
        columns=table.columns,
        rows=tuple(order_rows(table.rows)),
        aggregates=table.aggregates,
    )


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


def _summary_lines(agg: AggregateSeries) -> list[tuple[str, Sequence[Decimal]]]:
    return [
        ("Total Income", agg.total_income),
        ("Total Spent", agg.total_spending),
        ("Net Week", agg.net),
        ("Balance", agg.running_balance),
    ]


def view_to_dict(view: TableView) -> dict[str, Any]:
    """JSON-ready representation; amounts are 2-decimal strings."""

    agg = view.aggregates
    return {
        "months": [
            {"year": h.year, "month": h.month, "title": h.title, "span": h.span}
            for h in view.month_headers
        ],
        "columns": [
            {
                "key": c.key,
                "year": c.year,
                "month": c.month,
                "ordinal": c.ordinal,
                "label": label,
                "start": c.interval.start.isoformat(),
                "end": c.interval.end.isoformat(),
            }
            for c, label in zip(view.columns, view.week_labels, strict=True)
        ],
        "rows": [
            {
                "label": r.label,
                "category": r.category.value,
                "values": [_money(v) for v in r.values],
            }
            for r in view.rows
        ],
        "totals": {
            "totalIncome": [_money(v) for v in agg.total_income],
            "totalSpending": [_money(v) for v in agg.total_spending],
            "net": [_money(v) for v in agg.net],
            "runningBalance": [_money(v) for v in agg.running_balance],
        },
    }


def iter_tsv_lines(view: TableView) -> Iterator[str]:
    """Yield the table as tab-separated lines: month row, week row, data rows."""

    month_cells: list[str] = []
    for h in view.month_headers:
        month_cells.extend([h.title] + [""] * (h.span - 1))
    yield "\t".join(["", *month_cells])
    yield "\t".join(["", *view.week_labels])
    for row in view.rows:
        yield "\t".join([row.label, *(_money(v) for v in row.values)])
    for label, values in _summary_lines(view.aggregates):
        yield "\t".join([label, *(_money(v) for v in values)])


__all__ = [
    "MonthHeader",
    "TableView",
    "assemble_view",
    "iter_tsv_lines",
    "month_headers",
    "order_rows",
    "view_to_dict",
]
