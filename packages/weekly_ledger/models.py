"""Data models for ``weekly_ledger``.

Two layers live here:

- Core value types used by the pipeline (``Transaction``, ``WeekInterval``,
  ``Column``, ``Row``, ``AggregateSeries``, ``LedgerTable``). These are plain
  dataclasses; the core does not re-validate them.
- Input records (``IncomeRecord``, ``SpendingRecord``, ``SubmissionRequest``)
  validated with pydantic at the ingestion boundary. Field aliases follow the
  camelCase keys of the JSON input (``submissionId``, ``startDate`` ...).
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

ZERO = Decimal("0")

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Category(StrEnum):
    """Row classification. Declaration order is the display priority."""

    INCOME = "income"
    DEBT = "debt"
    BILL = "bill"
    SUB = "sub"
    OTHER = "other"

    @classmethod
    def parse_spending(cls, value: Any) -> Category:
        """Map a raw spending category to a member, falling back to ``OTHER``.

        ``income`` is not a spending category and also maps to ``OTHER``.
        """

        if isinstance(value, Category):
            return value if value is not Category.INCOME else cls.OTHER
        if isinstance(value, str):
            try:
                parsed = cls(value.strip().lower())
            except ValueError:
                return cls.OTHER
            return parsed if parsed is not Category.INCOME else cls.OTHER
        return cls.OTHER


CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)


class Frequency(StrEnum):
    ONE_TIME = "one-time"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"


# ---------------------------------------------------------------------------
# Core value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single dated income or spending entry.

    ``submission_id`` ties together the entries expanded from one submission;
    ``None`` means the entry carries no id and is grouped under the fallback
    key.
    """

    submission_id: int | None
    date: dt.date
    amount: Decimal
    category: Category


@dataclass(frozen=True, slots=True)
class WeekInterval:
    """One Sunday..Saturday week attributed to a month.

    ``start``/``end`` are the full week bounds (inclusive) even when part of
    the week spills into a neighbouring month. ``ordinal`` counts the weeks
    emitted for the owning month, starting at 1.
    """

    start: dt.date
    end: dt.date
    ordinal: int

    def contains(self, day: dt.date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True, slots=True)
class Column:
    """A calendar-week column of the ledger matrix.

    ``month`` is the 0-based month index that owns the week (0 is January);
    :attr:`calendar_month` gives the 1-based month used by :class:`datetime.date`.
    """

    key: str
    year: int
    month: int
    interval: WeekInterval

    @property
    def calendar_month(self) -> int:
        return self.month + 1

    @property
    def ordinal(self) -> int:
        return self.interval.ordinal


@dataclass(slots=True)
class Row:
    """A labelled, dense row of per-column amounts (mutable during lifting)."""

    label: str
    category: Category
    values: list[Decimal] = field(default_factory=list)

    def total(self) -> Decimal:
        return sum(self.values, ZERO)

    def is_blank(self) -> bool:
        """True when the values net to zero, even if some are nonzero."""

        return self.total() == 0


@dataclass(frozen=True, slots=True)
class AggregateSeries:
    """Per-column totals derived from the final rows."""

    total_income: tuple[Decimal, ...]
    total_spending: tuple[Decimal, ...]
    net: tuple[Decimal, ...]
    running_balance: tuple[Decimal, ...]


@dataclass(frozen=True, slots=True)
class LedgerTable:
    """Output of one pipeline run: columns, visible rows, and aggregates."""

    columns: tuple[Column, ...]
    rows: tuple[Row, ...]
    aggregates: AggregateSeries


# ---------------------------------------------------------------------------
# Input records (validated at the ingestion boundary)
# ---------------------------------------------------------------------------


class IncomeRecord(BaseModel):
    """An income entry as submitted by a form or loaded from a file."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", str_strip_whitespace=True, frozen=True
    )

    submission_id: int | None = Field(default=None, alias="submissionId")
    date: dt.date
    amount: Decimal = Field(allow_inf_nan=False)
    frequency: str | None = None

    def to_transaction(self) -> Transaction:
        return Transaction(
            submission_id=self.submission_id,
            date=self.date,
            amount=self.amount,
            category=Category.INCOME,
        )


class SpendingRecord(IncomeRecord):
    """A spending entry; ``category`` is also accepted under the key ``type``."""

    category: Category = Field(
        default=Category.OTHER,
        validation_alias=AliasChoices("category", "type"),
    )

    @field_validator("category", mode="before")
    @classmethod
    def _fallback_category(cls, v: Any) -> Category:
        return Category.parse_spending(v)

    def to_transaction(self) -> Transaction:
        return Transaction(
            submission_id=self.submission_id,
            date=self.date,
            amount=self.amount,
            category=self.category,
        )


class SubmissionRequest(BaseModel):
    """A recurring (or one-time) submission to be expanded into records.

    Expansion stops at whichever of ``end_date`` (inclusive) or
    ``repeat_count`` is reached first.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", str_strip_whitespace=True)

    kind: Literal["income", "spending"] = "income"
    amount: Decimal = Field(allow_inf_nan=False)
    frequency: Frequency = Frequency.ONE_TIME
    start_date: dt.date = Field(alias="startDate")
    end_date: dt.date | None = Field(default=None, alias="endDate")
    repeat_count: int | None = Field(default=None, alias="repeatCount", ge=1)
    category: Category = Field(
        default=Category.OTHER,
        validation_alias=AliasChoices("category", "type"),
    )
    submission_id: int | None = Field(default=None, alias="submissionId")

    @field_validator("category", mode="before")
    @classmethod
    def _fallback_category(cls, v: Any) -> Category:
        return Category.parse_spending(v)

    @model_validator(mode="after")
    def _check_dates(self) -> SubmissionRequest:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self

    @property
    def is_income(self) -> bool:
        return self.kind == "income"


__all__ = [
    "CATEGORY_ORDER",
    "ZERO",
    "AggregateSeries",
    "Category",
    "Column",
    "Frequency",
    "IncomeRecord",
    "LedgerTable",
    "Row",
    "SpendingRecord",
    "SubmissionRequest",
    "Transaction",
    "WeekInterval",
]
