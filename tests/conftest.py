"""
Shared pytest fixtures and configuration for recordkit tests.

This module provides:
- Settings cache isolation between tests
- Deterministic timestamps for golden comparisons
- A fully populated ancestor record for merge and diff tests

Usage:
    Fixtures are auto-discovered by pytest. Sample record types are imported
    from ``tests._support.records``.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from recordkit.core.settings import reset_settings
from tests._support.records import SampleRecord, SampleSubrecord


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Clear cached settings and RECORDKIT_* overrides around each test.

    The working directory moves to a temp dir so a developer's ``.env``
    cannot leak into the run.
    """
    for key in list(os.environ):
        if key.startswith("RECORDKIT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    """Deterministic timestamp for golden comparisons."""
    return datetime(2024, 1, 15, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def parent_record(fixed_now: datetime) -> SampleRecord:
    """A fully populated ancestor record."""
    return SampleRecord(
        bool_val=True,
        bool_optional_val=True,
        float_val=82471.1419,
        int_val=12,
        string_val="parent",
        subrecord_val=SampleSubrecord(map_val={"key1": "val1"}),
        time_val=fixed_now,
        time_optional_val=fixed_now,
    )
