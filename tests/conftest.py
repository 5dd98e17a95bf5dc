"""Pytest configuration for test isolation.

Pipeline settings and the log level are read from ``WL_*`` /
``WEEKLY_LEDGER_LOG_LEVEL`` environment variables (and the CLI also loads a
``.env`` from the working directory). To keep tests hermetic, every test runs
with those variables cleared and with the working directory set to its own
temporary directory so no stray ``.env`` is picked up.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

_ENV_VARS = (
    "WL_GAP_THRESHOLD",
    "WL_MIN_OVERLAP_DAYS",
    "WL_MAX_OCCURRENCES",
    "WEEKLY_LEDGER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(os.fspath(workdir))
