"""Shared test fixtures and data loading for range-selection.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference range: "stay", Wed 2024-01-10 through Mon 2024-01-15.
Reference clock: Sat 2024-01-20 09:30.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
CONFIGS_DIR = FIXTURES_DIR / "configs"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")

NOW = datetime.fromisoformat(_reference["now"])
BASE_RANGE: dict = _reference["base_range"]


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def dt(value: str | None) -> datetime | None:
    """ISO string -> datetime, passing None through.

    >>> dt("2024-01-10T08:00:00")
    datetime(2024, 1, 10, 8, 0)
    """
    return datetime.fromisoformat(value) if value is not None else None


def make_range(spec: dict | None = None):
    """Build a DateRange from a scenario spec (defaults to the base range)."""
    from range_selection.types import DateRange

    spec = BASE_RANGE if spec is None else spec
    return DateRange(
        start_date=dt(spec.get("start_date")),
        end_date=dt(spec.get("end_date")),
        key=spec.get("key"),
        disabled=spec.get("disabled", False),
        color=spec.get("color"),
    )


def make_policy(spec: dict | None):
    """Build a SelectionPolicy from a scenario spec."""
    from range_selection.types import SelectionPolicy

    spec = spec or {}
    return SelectionPolicy(
        move_range_on_first_selection=spec.get("move_range_on_first_selection", False),
        retain_end_date_on_first_selection=spec.get(
            "retain_end_date_on_first_selection", False
        ),
        max_date=dt(spec.get("max_date")),
    )


def make_bound(value):
    """Scenario bound (ISO datetime, 'HH:MM', minutes or null) -> raw bound."""
    from range_selection.schema import parse_bound

    return parse_bound(value)


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def config_path(name: str) -> Path:
    """Path of data/fixtures/configs/{name}.json."""
    return CONFIGS_DIR / f"{name}.json"


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def base_range():
    """The reference 'stay' range, 2024-01-10 to 2024-01-15 at midnight."""
    return make_range()


@pytest.fixture
def three_ranges():
    """Two enabled ranges around a disabled one."""
    from range_selection.types import DateRange

    return [
        DateRange(dt("2024-01-10T09:00:00"), dt("2024-01-15T17:30:00"), key="a"),
        DateRange(key="b", disabled=True),
        DateRange(dt("2024-01-20T00:00:00"), dt("2024-01-25T00:00:00")),
    ]
