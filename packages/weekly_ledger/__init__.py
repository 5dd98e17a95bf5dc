"""Public interface for the ``weekly_ledger`` package.

Re-exports the pipeline entry point, the individual stages, and the public
models. There is no runtime logic here.
"""

from .aggregate import aggregate, drop_blank_rows
from .api import build_ledger
from .calendar_weeks import build_month_weeks, month_name, ordinal_label
from .columns import build_columns, iter_months
from .config import LedgerSettings, load_settings
from .grouping import NO_SUBMISSION_ID, SubmissionGroup, group_by_submission
from .lift import lift_up
from .models import (
    AggregateSeries,
    Category,
    Column,
    Frequency,
    IncomeRecord,
    LedgerTable,
    Row,
    SpendingRecord,
    SubmissionRequest,
    Transaction,
    WeekInterval,
)
from .presentation import MonthHeader, TableView, assemble_view
from .recurrence import SubmissionCounter, expand_submission
from .rows import build_rows

__all__ = [
    # Pipeline
    "build_ledger",
    "build_month_weeks",
    "build_columns",
    "iter_months",
    "group_by_submission",
    "build_rows",
    "lift_up",
    "aggregate",
    "drop_blank_rows",
    "assemble_view",
    "expand_submission",
    # Helpers
    "month_name",
    "ordinal_label",
    "load_settings",
    "NO_SUBMISSION_ID",
    # Models / types
    "AggregateSeries",
    "Category",
    "Column",
    "Frequency",
    "IncomeRecord",
    "LedgerSettings",
    "LedgerTable",
    "MonthHeader",
    "Row",
    "SpendingRecord",
    "SubmissionCounter",
    "SubmissionGroup",
    "SubmissionRequest",
    "TableView",
    "Transaction",
    "WeekInterval",
]
