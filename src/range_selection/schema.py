"""Input validation for range-selector configuration."""

from __future__ import annotations

from datetime import datetime, time

_RANGE_KEYS = {"key", "start_date", "end_date", "disabled", "color"}
_POLICY_KEYS = {
    "move_range_on_first_selection",
    "retain_end_date_on_first_selection",
    "max_date",
}


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string. Dates become midnight."""
    return datetime.fromisoformat(value)


def parse_bound(value: str | int | None) -> datetime | time | int | None:
    """Parse a JSON time bound: ISO datetime, 'HH:MM' string, or int minutes.

    Returns a datetime, time, int or None for coerce_bound() to resolve.
    """
    if value is None or isinstance(value, int):
        return value
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return time.fromisoformat(value)


def _check_datetime(value, label: str, errors: list[str]) -> None:
    if value is None:
        return
    try:
        parse_datetime(value)
    except (ValueError, TypeError):
        errors.append(f"{label}: invalid datetime '{value}'")


def validate_ranges(ranges: list[dict]) -> list[str]:
    """Validate range entries. Returns list of error messages (empty = valid).

    Checks:
    - Each entry is an object with only known fields
    - Dates are ISO-8601 strings or null
    - disabled is boolean, key and color are strings
    - Keys are unique
    """
    errors: list[str] = []
    if not isinstance(ranges, list):
        return [f"ranges must be a list, got {type(ranges).__name__}"]

    seen_keys: set[str] = set()
    for i, entry in enumerate(ranges):
        if not isinstance(entry, dict):
            errors.append(f"Range {i}: expected object, got {entry!r}")
            continue

        unknown = set(entry) - _RANGE_KEYS
        if unknown:
            errors.append(f"Range {i}: unknown field(s) {sorted(unknown)}")

        for field in ("start_date", "end_date"):
            _check_datetime(entry.get(field), f"Range {i}, {field}", errors)

        if not isinstance(entry.get("disabled", False), bool):
            errors.append(f"Range {i}: 'disabled' must be boolean")

        for field in ("key", "color"):
            if entry.get(field) is not None and not isinstance(entry[field], str):
                errors.append(f"Range {i}: '{field}' must be a string")

        key = entry.get("key") or f"range{i + 1}"
        if key in seen_keys:
            errors.append(f"Range {i}: duplicate key '{key}'")
        seen_keys.add(key)

    return errors


def validate_policy(policy: dict) -> list[str]:
    """Validate a selection policy object. Returns list of error messages."""
    if not isinstance(policy, dict):
        return [f"policy must be an object, got {type(policy).__name__}"]

    errors: list[str] = []
    unknown = set(policy) - _POLICY_KEYS
    if unknown:
        errors.append(f"Policy: unknown option(s) {sorted(unknown)}")

    for flag in ("move_range_on_first_selection", "retain_end_date_on_first_selection"):
        if flag in policy and not isinstance(policy[flag], bool):
            errors.append(f"Policy: '{flag}' must be boolean")

    _check_datetime(policy.get("max_date"), "Policy, max_date", errors)
    return errors


def validate_bounds(config: dict) -> list[str]:
    """Validate min_time/max_time. Returns list of error messages.

    Checks:
    - Each bound is an ISO datetime, an 'HH:MM' time, or minutes 0-1440
    - When both are datetimes (or both wall-clock), min_time <= max_time
    """
    errors: list[str] = []
    parsed = {}
    for name in ("min_time", "max_time"):
        value = config.get(name)
        if isinstance(value, bool):
            errors.append(f"{name}: must not be boolean")
            continue
        if isinstance(value, int) and not 0 <= value <= 24 * 60:
            errors.append(f"{name}: minute offset {value} outside 0-1440")
            continue
        try:
            parsed[name] = parse_bound(value)
        except (ValueError, TypeError):
            errors.append(f"{name}: invalid bound '{value}'")

    low, high = parsed.get("min_time"), parsed.get("max_time")
    if low is not None and high is not None and type(low) is type(high):
        if low > high:
            errors.append(f"min_time {low} is after max_time {high}")
    return errors


def validate_disabled_dates(dates: list) -> list[str]:
    """Validate the disabled-date list. Returns list of error messages."""
    if not isinstance(dates, list):
        return [f"disabled_dates must be a list, got {type(dates).__name__}"]

    errors: list[str] = []
    for i, value in enumerate(dates):
        if value is None:
            errors.append(f"Disabled date {i}: must not be null")
            continue
        _check_datetime(value, f"Disabled date {i}", errors)
    return errors


def validate_focus(focus, range_count: int) -> list[str]:
    """Validate a [range_index, endpoint] pair against the range count."""
    if (
        not isinstance(focus, list)
        or len(focus) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in focus)
    ):
        return [f"focused_range: expected [index, 0|1], got {focus!r}"]

    errors: list[str] = []
    index, endpoint = focus
    if not 0 <= index < range_count:
        errors.append(f"focused_range: index {index} outside 0-{range_count - 1}")
    if endpoint not in (0, 1):
        errors.append(f"focused_range: endpoint must be 0 or 1, got {endpoint}")
    return errors
