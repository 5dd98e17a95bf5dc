import logging

import pytest

from weekly_ledger.config import LedgerSettings, load_settings
from weekly_ledger.logging_setup import _parse_level


def test_defaults_without_environment():
    assert load_settings() == LedgerSettings(
        gap_threshold=10, min_overlap_days=4, max_occurrences=104
    )


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WL_GAP_THRESHOLD", "0")
    monkeypatch.setenv("WL_MIN_OVERLAP_DAYS", "7")
    monkeypatch.setenv("WL_MAX_OCCURRENCES", "12")
    assert load_settings() == LedgerSettings(
        gap_threshold=0, min_overlap_days=7, max_occurrences=12
    )


@pytest.mark.parametrize("raw", ["", "abc", "-3", "1.5"])
def test_unusable_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv("WL_GAP_THRESHOLD", raw)
    monkeypatch.setenv("WL_MAX_OCCURRENCES", raw)
    settings = load_settings()
    assert settings.gap_threshold == 10
    assert settings.max_occurrences == 104


def test_overlap_days_are_capped_at_a_week(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WL_MIN_OVERLAP_DAYS", "9")
    assert load_settings().min_overlap_days == 7


@pytest.mark.parametrize(
    "kwargs",
    [
        {"gap_threshold": -1},
        {"min_overlap_days": 0},
        {"min_overlap_days": 8},
        {"max_occurrences": 0},
    ],
)
def test_settings_validate_their_ranges(kwargs):
    with pytest.raises(ValueError):
        LedgerSettings(**kwargs)


def test_log_level_resolution(monkeypatch: pytest.MonkeyPatch):
    assert _parse_level(logging.DEBUG) == logging.DEBUG
    assert _parse_level("warning") == logging.WARNING
    assert _parse_level(None) == logging.INFO
    monkeypatch.setenv("WEEKLY_LEDGER_LOG_LEVEL", "error")
    assert _parse_level(None) == logging.ERROR
    assert _parse_level("nonsense") == logging.ERROR
    monkeypatch.setenv("WEEKLY_LEDGER_LOG_LEVEL", "nonsense")
    assert _parse_level(None) == logging.INFO
