"""Data loading utilities for range-selector configuration files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from range_selection.schema import (
    parse_bound,
    parse_datetime,
    validate_bounds,
    validate_disabled_dates,
    validate_focus,
    validate_policy,
    validate_ranges,
)
from range_selection.selector import DEFAULT_RANGE_COLORS, DateRangeSelector
from range_selection.types import DateRange, SelectionPolicy

LOGGER = logging.getLogger("range_selection.loaders")


def _read(path: Path) -> dict:
    with open(path) as f:
        return json.load(f)


def _raise_if_errors(errors: list[str], source: str) -> None:
    if errors:
        raise ValueError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _optional_datetime(value):
    return parse_datetime(value) if value is not None else None


def _build_ranges(raw: list[dict]) -> list[DateRange]:
    return [
        DateRange(
            start_date=_optional_datetime(entry.get("start_date")),
            end_date=_optional_datetime(entry.get("end_date")),
            key=entry.get("key"),
            disabled=entry.get("disabled", False),
            color=entry.get("color"),
        )
        for entry in raw
    ]


def load_ranges_json(path: str | Path) -> list[DateRange]:
    """Load a range collection from a JSON file.

    Accepts either a bare list of ranges or an object with a "ranges" key:
    [
        {"key": "stay", "start_date": "2024-01-10", "end_date": "2024-01-15"},
        ...
    ]

    Raises ValueError if validation fails.
    """
    path = Path(path)
    data = _read(path)
    raw = data.get("ranges", []) if isinstance(data, dict) else data

    _raise_if_errors(validate_ranges(raw), path.name)
    return _build_ranges(raw)


def load_selector_json(path: str | Path, **callbacks) -> DateRangeSelector:
    """Build a DateRangeSelector from a JSON configuration file.

    The JSON file has the format:
    {
        "ranges": [ {...}, ... ],
        "policy": {"move_range_on_first_selection": false,
                   "retain_end_date_on_first_selection": true,
                   "max_date": "2024-12-31"},
        "disabled_dates": ["2024-01-12", ...],
        "min_time": "2024-01-10T08:00" | "08:00" | 480,
        "max_time": ...,
        "focused_range": [0, 0],
        "range_colors": ["#3d91ff", ...]
    }

    Only "ranges" is required. ``callbacks`` (on_change,
    on_range_focus_change, on_preview_change, clock) are passed through to
    the selector.

    Raises ValueError if validation fails.
    """
    path = Path(path)
    data = _read(path)
    if not isinstance(data, dict):
        _raise_if_errors([f"expected an object, got {type(data).__name__}"], path.name)

    raw_ranges = data.get("ranges", [])
    policy = data.get("policy", {})
    disabled = data.get("disabled_dates", [])

    errors = validate_ranges(raw_ranges)
    errors.extend(validate_policy(policy))
    errors.extend(validate_bounds(data))
    errors.extend(validate_disabled_dates(disabled))
    if "focused_range" in data and isinstance(raw_ranges, list):
        errors.extend(validate_focus(data["focused_range"], len(raw_ranges)))
    _raise_if_errors(errors, path.name)

    ranges = _build_ranges(raw_ranges)
    LOGGER.debug("Loaded %d range(s) from %s", len(ranges), path)

    focus = data.get("focused_range")
    return DateRangeSelector(
        ranges,
        policy=SelectionPolicy(
            move_range_on_first_selection=policy.get("move_range_on_first_selection", False),
            retain_end_date_on_first_selection=policy.get(
                "retain_end_date_on_first_selection", False
            ),
            max_date=_optional_datetime(policy.get("max_date")),
        ),
        disabled_dates=[parse_datetime(d) for d in disabled],
        min_time=parse_bound(data.get("min_time")),
        max_time=parse_bound(data.get("max_time")),
        focused_range=tuple(focus) if focus is not None else None,
        range_colors=data.get("range_colors", DEFAULT_RANGE_COLORS),
        **callbacks,
    )
