# ruff: noqa: I001
"""CLI for the ``weekly_ledger`` package.

Command handlers (``cmd_table``, ``cmd_expand``, ``cmd_weeks``) are plain
functions returning a process exit code so they can be called directly; the
Typer commands below are thin wrappers around them. The root callback loads a
local ``.env`` with ``python-dotenv`` (never overriding variables already set)
and configures package logging before any command runs.
"""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .logging_setup import configure_logging


class OutputFormat(str, Enum):
    json = "json"
    tsv = "tsv"


# ---- Command handlers --------------------------------------------------------


def _load_input(
    input_path: Path | None,
    income_csv: Path | None,
    spending_csv: Path | None,
    *,
    max_occurrences: int,
):
    """Load the ledger from JSON or CSV inputs; returns ``LedgerInput``."""

    from .ingest import LedgerInput, load_ledger_json, load_records_csv

    if input_path is not None:
        if income_csv is not None or spending_csv is not None:
            raise ValueError("use either --input or --income-csv/--spending-csv, not both")
        return load_ledger_json(input_path, max_occurrences=max_occurrences)

    if income_csv is None and spending_csv is None:
        raise ValueError("provide --input or at least one of --income-csv/--spending-csv")

    ledger = LedgerInput()
    if income_csv is not None:
        ledger.income = load_records_csv(income_csv, "income")
    if spending_csv is not None:
        ledger.spending = load_records_csv(spending_csv, "spending")  # type: ignore[assignment]
    return ledger


def _report_load_error(e: Exception) -> int:
    """Print a concise message for an input loading failure and return 1."""

    import csv
    import json

    if isinstance(e, FileNotFoundError):
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
    elif isinstance(e, PermissionError):
        print(f"Error: Permission denied: {e.filename}", file=sys.stderr)
    elif isinstance(e, json.JSONDecodeError):
        print(f"Error: Failed to parse JSON: {e}", file=sys.stderr)
    elif isinstance(e, csv.Error):
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
    else:
        print(f"Error: Invalid input: {e}", file=sys.stderr)
    return 1


def cmd_table(
    *,
    input_path: Path | None = None,
    income_csv: Path | None = None,
    spending_csv: Path | None = None,
    output_format: OutputFormat = OutputFormat.json,
) -> int:
    """Build the weekly ledger table and print it to stdout.

    Behavior
    --------
    - Loads records from ``input_path`` (JSON, may include ``submissions`` to
      expand) or from one/two single-side CSV files.
    - Runs :func:`weekly_ledger.api.build_ledger` and assembles the display
      view (category-ordered rows, month headers, week ordinals).
    - Prints JSON (default) or tab-separated lines. When there is nothing to
      show, prints ``No data yet``.

    Errors are written to stderr and the function returns ``1``.
    """

    import csv
    import json

    from .api import build_ledger
    from .config import load_settings
    from .presentation import assemble_view, iter_tsv_lines, view_to_dict

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: Invalid settings: {e}", file=sys.stderr)
        return 1

    try:
        ledger = _load_input(
            input_path, income_csv, spending_csv, max_occurrences=settings.max_occurrences
        )
    except (OSError, csv.Error, ValueError) as e:
        return _report_load_error(e)

    table = build_ledger(ledger.income, ledger.spending, settings=settings)
    if table is None:
        print("No data yet")
        return 0

    view = assemble_view(table)
    if output_format is OutputFormat.tsv:
        for line in iter_tsv_lines(view):
            print(line)
    else:
        print(json.dumps(view_to_dict(view), indent=2))
    return 0


def cmd_expand(input_path: Path, *, output_path: Path | None = None) -> int:
    """Expand the ``submissions`` of a ledger JSON file into dated records.

    The result keeps any ``income``/``spending`` records already present and
    is written as JSON to ``output_path`` (or stdout when omitted).
    """

    import json

    from .config import load_settings
    from .ingest import ledger_to_dict, load_ledger_json

    try:
        settings = load_settings()
        ledger = load_ledger_json(input_path, max_occurrences=settings.max_occurrences)
    except (OSError, ValueError) as e:
        return _report_load_error(e)

    text = json.dumps(ledger_to_dict(ledger), indent=2)
    if output_path is None:
        print(text)
        return 0

    try:
        output_path.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        print(f"Error: Failed to write '{output_path}': {e}", file=sys.stderr)
        return 1
    print(
        f"Wrote {len(ledger.income)} income and {len(ledger.spending)} spending records "
        f"to {output_path}"
    )
    return 0


def cmd_weeks(year: int, month: int) -> int:
    """Print the week partition of one month, one week per line."""

    from .calendar_weeks import build_month_weeks, month_name, ordinal_label
    from .config import load_settings

    try:
        settings = load_settings()
        weeks = build_month_weeks(year, month, min_overlap_days=settings.min_overlap_days)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{month_name(month - 1)} {year}")
    for w in weeks:
        print(f"{ordinal_label(w.ordinal)}\t{w.start.isoformat()}\t{w.end.isoformat()}")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Bucket income and spending into calendar-week columns with running "
        "balances. Loads a local .env before running."
    ),
)


def _exit_with(code: int) -> None:
    if code:
        raise typer.Exit(code)


@app.command("table")
def table_cmd(
    input_path: Annotated[
        Path | None,
        typer.Option(
            "--input", help="Ledger JSON file (income, spending, submissions).", dir_okay=False
        ),
    ] = None,
    income_csv: Annotated[
        Path | None, typer.Option("--income-csv", help="Income CSV file.", dir_okay=False)
    ] = None,
    spending_csv: Annotated[
        Path | None, typer.Option("--spending-csv", help="Spending CSV file.", dir_okay=False)
    ] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", help="Output format.")
    ] = OutputFormat.json,
) -> None:
    """Build and print the weekly ledger table."""

    _exit_with(
        cmd_table(
            input_path=input_path,
            income_csv=income_csv,
            spending_csv=spending_csv,
            output_format=output_format,
        )
    )


@app.command("expand")
def expand_cmd(
    input_path: Annotated[
        Path, typer.Option("--input", help="Ledger JSON file with submissions.", dir_okay=False)
    ],
    output_path: Annotated[
        Path | None,
        typer.Option(
            "--output", help="Write the expanded ledger here instead of stdout.", dir_okay=False
        ),
    ] = None,
) -> None:
    """Expand recurring submissions into dated income/spending records."""

    _exit_with(cmd_expand(input_path, output_path=output_path))


@app.command("weeks")
def weeks_cmd(
    year: Annotated[int, typer.Option("--year", help="Calendar year.")],
    month: Annotated[int, typer.Option("--month", min=1, max=12, help="Calendar month (1-12).")],
) -> None:
    """Show which Sunday-start weeks a month owns."""

    _exit_with(cmd_weeks(year, month))


@app.callback()
def _root() -> None:
    """Load ``.env`` from the current directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    app()
