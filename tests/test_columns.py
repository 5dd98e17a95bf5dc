from datetime import date

from weekly_ledger.columns import build_columns, iter_months


def test_empty_dates_mean_no_data():
    assert build_columns([]) is None
    assert build_columns(iter(())) is None


def test_iter_months_crosses_year_boundary():
    assert list(iter_months(date(2024, 11, 30), date(2025, 2, 1))) == [
        (2024, 11),
        (2024, 12),
        (2025, 1),
        (2025, 2),
    ]
    assert list(iter_months(date(2025, 3, 9), date(2025, 3, 1))) == []


def test_single_month_columns():
    cols = build_columns([date(2025, 1, 15), date(2025, 1, 1), date(2025, 1, 8)])
    assert cols is not None
    assert [c.key for c in cols] == [
        "2025-01-wk1",
        "2025-01-wk2",
        "2025-01-wk3",
        "2025-01-wk4",
        "2025-01-wk5",
    ]
    assert {(c.year, c.month) for c in cols} == {(2025, 0)}
    assert cols[0].calendar_month == 1
    assert cols[0].interval.start == date(2024, 12, 29)


def test_multi_month_columns_are_chronological_with_per_month_ordinals():
    cols = build_columns([date(2025, 2, 10), date(2024, 12, 3)])
    assert cols is not None
    assert [(c.year, c.month) for c in cols] == (
        [(2024, 11)] * 4 + [(2025, 0)] * 5 + [(2025, 1)] * 4
    )
    assert [c.ordinal for c in cols] == [1, 2, 3, 4, 1, 2, 3, 4, 5, 1, 2, 3, 4]
    starts = [c.interval.start for c in cols]
    assert starts == sorted(starts)
    assert len({c.key for c in cols}) == len(cols)


def test_min_overlap_days_passes_through():
    cols = build_columns([date(2025, 1, 20)], min_overlap_days=7)
    assert cols is not None
    assert len(cols) == 3
