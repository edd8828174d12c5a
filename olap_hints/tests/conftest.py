"""Shared fixtures for codec tests.

Every test starts from default settings and an empty profile collector so
that environment variables or calls from one test cannot leak into another.
"""

from __future__ import annotations

import os

import pytest

from olap_hints.config import reset_settings
from olap_hints.telemetry.profiling import ProfileCollector


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    for name in list(os.environ):
        if name.upper().startswith("OLAP_HINTS_"):
            monkeypatch.delenv(name)
    # Keep a stray .env in the invoking directory out of Settings().
    monkeypatch.chdir(tmp_path)
    reset_settings()
    ProfileCollector.reset()
    yield
    reset_settings()
    ProfileCollector.reset()
