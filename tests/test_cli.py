import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from weekly_ledger.cli import app

runner = CliRunner()


def _write_ledger(tmp_path: Path, doc: dict) -> Path:
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


SCENARIO = {
    "submissions": [
        {"amount": 1000, "frequency": "weekly", "startDate": "2025-01-01", "repeatCount": 3},
        {
            "kind": "spending",
            "amount": 200,
            "frequency": "weekly",
            "startDate": "2025-01-08",
            "repeatCount": 2,
            "category": "bill",
        },
    ]
}


def test_weeks_lists_the_partition_of_a_month():
    result = runner.invoke(app, ["weeks", "--year", "2025", "--month", "2"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        "February 2025",
        "1st\t2025-02-02\t2025-02-08",
        "2nd\t2025-02-09\t2025-02-15",
        "3rd\t2025-02-16\t2025-02-22",
        "4th\t2025-02-23\t2025-03-01",
    ]


def test_weeks_rejects_out_of_range_month():
    result = runner.invoke(app, ["weeks", "--year", "2025", "--month", "13"])
    assert result.exit_code != 0


def test_table_prints_json(tmp_path: Path):
    path = _write_ledger(tmp_path, SCENARIO)
    result = runner.invoke(app, ["table", "--input", str(path)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [r["label"] for r in data["rows"]] == ["Income #1.1", "Spent #1.1 (bill)"]
    assert data["totals"]["runningBalance"][-1] == "2600.00"
    assert data["months"][0]["title"] == "January 2025"
    assert {c["month"] for c in data["columns"]} == {0}


def test_table_prints_tsv(tmp_path: Path):
    path = _write_ledger(tmp_path, SCENARIO)
    result = runner.invoke(app, ["table", "--input", str(path), "--format", "tsv"])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    # month row, week row, two data rows, four summary rows
    assert len(lines) == 8
    assert lines[-1] == "Balance\t1000.00\t1800.00\t2600.00\t2600.00\t2600.00"


def test_table_from_csv_files(tmp_path: Path):
    income = tmp_path / "income.csv"
    income.write_text("submissionId,date,amount\n1,2025-03-03,50\n", encoding="utf-8")
    spending = tmp_path / "spending.csv"
    spending.write_text(
        "submissionId,date,amount,category\n1,2025-03-04,20,debt\n", encoding="utf-8"
    )
    result = runner.invoke(
        app, ["table", "--income-csv", str(income), "--spending-csv", str(spending)]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [r["label"] for r in data["rows"]] == ["Income #1.1", "Spent #1.1 (debt)"]
    assert data["totals"]["net"][0] == "30.00"


def test_table_without_data(tmp_path: Path):
    path = _write_ledger(tmp_path, {})
    result = runner.invoke(app, ["table", "--input", str(path)])
    assert result.exit_code == 0
    assert result.stdout.strip() == "No data yet"


def test_table_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["table", "--input", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "Error: File not found" in result.output


def test_table_bad_json(tmp_path: Path):
    path = tmp_path / "ledger.json"
    path.write_text("{", encoding="utf-8")
    result = runner.invoke(app, ["table", "--input", str(path)])
    assert result.exit_code == 1
    assert "Error: Failed to parse JSON" in result.output


def test_table_invalid_record(tmp_path: Path):
    path = _write_ledger(tmp_path, {"income": [{"date": "2025-01-01", "amount": "x"}]})
    result = runner.invoke(app, ["table", "--input", str(path)])
    assert result.exit_code == 1
    assert "Error: Invalid input: income[0]" in result.output


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["--input", "a.json", "--income-csv", "b.csv"],
    ],
)
def test_table_requires_exactly_one_input_kind(args: list[str]):
    result = runner.invoke(app, ["table", *args])
    assert result.exit_code == 1
    assert "Error: Invalid input" in result.output


def test_table_reads_gap_threshold_from_dotenv(tmp_path: Path):
    Path(".env").write_text("WL_GAP_THRESHOLD=1\n", encoding="utf-8")
    path = _write_ledger(
        tmp_path,
        {
            "spending": [
                {"submissionId": 1, "date": "2025-01-01", "amount": 1},
                {"submissionId": 1, "date": "2025-01-22", "amount": 1},
                {"submissionId": 2, "date": "2025-01-01", "amount": 3},
            ]
        },
    )
    result = runner.invoke(app, ["table", "--input", str(path)])
    assert result.exit_code == 0, result.output
    labels = [r["label"] for r in json.loads(result.stdout)["rows"]]
    assert labels == ["Spent #1.1 (other)", "Spent #1.2 (other)"]


def test_expand_writes_output_file(tmp_path: Path):
    path = _write_ledger(tmp_path, SCENARIO)
    out = tmp_path / "expanded.json"
    result = runner.invoke(app, ["expand", "--input", str(path), "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert f"Wrote 3 income and 2 spending records to {out}" in result.stdout
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [r["date"] for r in data["income"]] == ["2025-01-01", "2025-01-08", "2025-01-15"]
    assert {r["submissionId"] for r in data["spending"]} == {2}


def test_expand_to_stdout(tmp_path: Path):
    path = _write_ledger(tmp_path, SCENARIO)
    result = runner.invoke(app, ["expand", "--input", str(path)])
    assert result.exit_code == 0, result.output
    assert len(json.loads(result.stdout)["spending"]) == 2
