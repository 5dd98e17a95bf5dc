"""Load income/spending records from JSON or CSV files.

JSON document shape (every key optional)::

    {
      "income":      [{"submissionId": 1, "date": "2025-01-01", "amount": 1000,
                       "frequency": "weekly"}],
      "spending":    [{"submissionId": 2, "date": "2025-01-08", "amount": 200, "category": "bill"}],
      "submissions": [{"kind": "spending", "amount": 50, "frequency": "monthly",
                       "startDate": "2025-01-15", "repeatCount": 3, "category": "sub"}]
    }

``submissions`` are expanded with :func:`~weekly_ledger.recurrence.expand_submission`
and appended to the matching side. Submissions without an id get fresh ids
above every id already present in the document.

CSV files carry one side each, with header
``submissionId,date,amount[,frequency][,category]`` (``type`` is accepted as a
legacy alias of ``category``).

This is the validating boundary: malformed records raise ``ValueError`` with
the record position; the pipeline downstream does not re-validate.
"""

from __future__ import annotations

import csv
import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Literal, TypeAlias, TypeVar

from pydantic import ValidationError

from .config import DEFAULT_MAX_OCCURRENCES
from .logging_setup import get_logger
from .models import IncomeRecord, SpendingRecord, SubmissionRequest
from .recurrence import SubmissionCounter, expand_submission

_logger = get_logger("weekly_ledger.ingest")

Side: TypeAlias = Literal["income", "spending"]

T = TypeVar("T", bound=IncomeRecord)

_CSV_REQUIRED = {"date", "amount"}


@dataclass(slots=True)
class LedgerInput:
    income: list[IncomeRecord] = field(default_factory=list)
    spending: list[SpendingRecord] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.income and not self.spending


def _validate_many(
    model: type[T], items: Iterable[Any], *, where: str
) -> list[T]:
    out: list[T] = []
    for i, raw in enumerate(items):
        if not isinstance(raw, Mapping):
            raise ValueError(f"{where}[{i}]: expected an object, got {type(raw).__name__}")
        try:
            out.append(model.model_validate(raw))
        except ValidationError as e:
            raise ValueError(f"{where}[{i}]: {e}") from e
    return out


def _list_field(doc: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = doc.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def parse_ledger(
    doc: Mapping[str, Any], *, max_occurrences: int = DEFAULT_MAX_OCCURRENCES
) -> LedgerInput:
    """Validate a decoded JSON document into a :class:`LedgerInput`."""

    if not isinstance(doc, Mapping):
        raise ValueError("ledger document must be a JSON object")

    ledger = LedgerInput(
        income=_validate_many(IncomeRecord, _list_field(doc, "income"), where="income"),
        spending=_validate_many(SpendingRecord, _list_field(doc, "spending"), where="spending"),
    )

    requests: list[SubmissionRequest] = []
    for i, raw in enumerate(_list_field(doc, "submissions")):
        try:
            requests.append(SubmissionRequest.model_validate(raw))
        except ValidationError as e:
            raise ValueError(f"submissions[{i}]: {e}") from e

    if requests:
        counter = SubmissionCounter()
        for rec in (*ledger.income, *ledger.spending):
            if rec.submission_id is not None:
                counter.reserve(rec.submission_id)
        for req in requests:
            if req.submission_id is not None:
                counter.reserve(req.submission_id)
        for req in requests:
            records = expand_submission(req, counter=counter, max_occurrences=max_occurrences)
            if req.is_income:
                ledger.income.extend(records)
            else:
                ledger.spending.extend(records)  # type: ignore[arg-type]

    _logger.debug(
        "parse_ledger:done income=%d spending=%d submissions=%d",
        len(ledger.income),
        len(ledger.spending),
        len(requests),
    )
    return ledger


def load_ledger_json(
    path: str | PathLike[str], *, max_occurrences: int = DEFAULT_MAX_OCCURRENCES
) -> LedgerInput:
    """Read and validate a ledger JSON file.

    Raises ``FileNotFoundError``/``PermissionError`` for I/O problems,
    ``json.JSONDecodeError`` for malformed JSON, and ``ValueError`` for
    schema violations.
    """

    with Path(path).open(encoding="utf-8") as f:
        doc = json.load(f)
    return parse_ledger(doc, max_occurrences=max_occurrences)


def load_records_csv(
    path: str | PathLike[str], kind: Side
) -> list[IncomeRecord] | list[SpendingRecord]:
    """Read one side of the ledger from a CSV file."""

    model: type[IncomeRecord] = IncomeRecord if kind == "income" else SpendingRecord
    with Path(path).open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        headers = set(reader.fieldnames or [])
        if not headers:
            raise csv.Error(f"CSV appears to have no header row: {path}")
        missing = sorted(_CSV_REQUIRED - headers)
        if missing:
            raise csv.Error(f"CSV header is missing required columns: {', '.join(missing)}")
        rows = [
            {k: (v if v != "" else None) for k, v in row.items() if k is not None}
            for row in reader
        ]
    return _validate_many(model, rows, where=f"{kind} csv row")


def ledger_to_dict(ledger: LedgerInput) -> dict[str, Any]:
    """JSON-ready dict using the camelCase input keys."""

    return {
        "income": [r.model_dump(mode="json", by_alias=True) for r in ledger.income],
        "spending": [r.model_dump(mode="json", by_alias=True) for r in ledger.spending],
    }


__all__ = [
    "LedgerInput",
    "ledger_to_dict",
    "load_ledger_json",
    "load_records_csv",
    "parse_ledger",
]
