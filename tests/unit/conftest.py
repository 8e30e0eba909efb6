"""Shared fixtures for unit tests."""

import pytest

from fluentassert import AssertionResult, assertion_results_collector
from fluentassert.config import ENV_PREFIX


@pytest.fixture
def collected_results():
    """Collect every assertion result produced during the test."""
    sink: list[AssertionResult] = []
    with assertion_results_collector(sink):
        yield sink


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no fluentassert environment overrides."""
    for name in ("MAX_ITEMS", "MAX_STRING", "NULL_REPR"):
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(f"{ENV_PREFIX}{name}", "")
        monkeypatch.delenv(f"{ENV_PREFIX}{name}")
    monkeypatch.chdir(tmp_path)
    return tmp_path
