"""RangeSelectionEngine: turn one picked date into the next range state.

Every function here is pure. Inputs are snapshots and are never mutated;
results are fresh values the caller merges back by range key.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import date, datetime, time, timedelta
from typing import Iterable, Mapping, Sequence

from range_selection.focus import next_range_index
from range_selection.types import (
    DateRange,
    Endpoint,
    FocusPointer,
    SelectionPolicy,
    SelectionResult,
)

LOGGER = logging.getLogger("range_selection.selection")

_ONE_DAY = timedelta(days=1)
_RANGE_FIELDS = frozenset(f.name for f in fields(DateRange))

DatePick = datetime | date | None
RangePick = DateRange | tuple[datetime | date | None, datetime | date | None]


def _as_datetime(value: date | datetime | None) -> datetime | None:
    """Normalise a bare date to midnight so it compares with datetimes."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time(0, 0))


def _calendar_days(later: datetime, earlier: datetime | None) -> int:
    """Difference in calendar days, ignoring time of day."""
    if earlier is None:
        return 0
    return (later.date() - earlier.date()).days


def _target(ranges: Sequence[DateRange], index: int) -> DateRange | None:
    if 0 <= index < len(ranges):
        return ranges[index]
    return None


def _pair(pick: RangePick) -> tuple[datetime | None, datetime | None]:
    """Split a bulk pick (DateRange or (start, end) pair) into two dates."""
    if isinstance(pick, DateRange):
        return _as_datetime(pick.start_date), _as_datetime(pick.end_date)
    start, end = pick
    return _as_datetime(start), _as_datetime(end)


def _first_pick_end(
    pick: datetime | None,
    start_date: datetime | None,
    end_date: datetime | None,
    policy: SelectionPolicy,
    now: datetime,
) -> datetime:
    """End date implied by a start pick, before the max_date clamp.

    Precedence: move (keep duration) > retain (keep old end) > collapse.
    """
    anchor = pick if pick is not None else now
    if policy.move_range_on_first_selection:
        day_offset = _calendar_days(end_date or now, start_date)
        return anchor + timedelta(days=day_offset)
    if policy.retain_end_date_on_first_selection:
        if end_date is None or end_date < anchor:
            return anchor
        return end_date
    return anchor


def _conflicts(
    disabled_dates: Iterable[date | datetime],
    start_date: datetime | None,
    end_date: datetime | None,
) -> list[datetime]:
    """Disabled instants inside [start_date, end_date], bounds inclusive."""
    if start_date is None or end_date is None:
        return []
    found: list[datetime] = []
    for disabled in disabled_dates:
        instant = _as_datetime(disabled)
        if start_date <= instant <= end_date:
            found.append(instant)
    return found


def compute_selection(
    pick: DatePick | RangePick,
    focus: FocusPointer | tuple[int, int],
    ranges: Sequence[DateRange],
    policy: SelectionPolicy | None = None,
    disabled_dates: Iterable[date | datetime] = (),
    *,
    is_single_value: bool = True,
    now: datetime | None = None,
) -> SelectionResult | None:
    """Compute the range and focus that follow one pick.

    Args:
        pick: A datetime in single-value mode; a DateRange or
            (start, end) pair when ``is_single_value`` is False.
        focus: The range/endpoint currently receiving picks.
        ranges: Current snapshot of every range.
        policy: First-pick behaviour and max_date ceiling.
        disabled_dates: Instants that must not fall inside the result.
        is_single_value: False for drag/bulk selection.
        now: Stand-in for absent dates. Defaults to the wall clock.

    Returns:
        A SelectionResult, or None when the focus points at no range.
    """
    focus = FocusPointer.of(focus)
    policy = policy or SelectionPolicy()
    selected = _target(ranges, focus.range_index)
    if selected is None:
        LOGGER.debug("No range at index %d; selection ignored", focus.range_index)
        return None
    if now is None:
        now = datetime.now()

    start_date = _as_datetime(selected.start_date)
    end_date = _as_datetime(selected.end_date)
    next_focus: FocusPointer | None = None

    if not is_single_value:
        start_date, end_date = _pair(pick)
    elif focus.endpoint is Endpoint.START:
        pick = _as_datetime(pick)
        end_date = _first_pick_end(pick, start_date, end_date, policy, now)
        start_date = pick
        if policy.max_date is not None:
            end_date = min(end_date, _as_datetime(policy.max_date))
        next_focus = FocusPointer(focus.range_index, Endpoint.END)
    else:
        end_date = _as_datetime(pick)

    is_start_date_selected = focus.endpoint is Endpoint.START
    if start_date is not None and end_date is not None and end_date < start_date:
        is_start_date_selected = not is_start_date_selected
        start_date, end_date = end_date, start_date

    conflicts = _conflicts(disabled_dates, start_date, end_date)
    if conflicts:
        if is_start_date_selected:
            start_date = max(conflicts) + _ONE_DAY
        else:
            end_date = min(conflicts) - _ONE_DAY
        LOGGER.debug(
            "Repaired range %d around %d disabled date(s): %s - %s",
            focus.range_index, len(conflicts), start_date, end_date,
        )

    if next_focus is None:
        next_focus = FocusPointer(
            next_range_index(ranges, focus.range_index), Endpoint.START
        )

    return SelectionResult(
        was_valid=not conflicts,
        start_date=start_date,
        end_date=end_date,
        next_focus=next_focus,
    )


# ----------------------------------------------------------------------
# Committing results back into a range collection
# ----------------------------------------------------------------------

def range_key(rng: DateRange, index: int) -> str:
    """Identity of a range within a patch: its key, else ``range<N>``."""
    return rng.key or f"range{index + 1}"


def merge_range(prior: DateRange, **overrides) -> DateRange:
    """Return ``prior`` with the given fields replaced.

    Raises TypeError for field names DateRange does not have.
    """
    unknown = set(overrides) - _RANGE_FIELDS
    if unknown:
        raise TypeError(
            f"Unknown DateRange field(s): {', '.join(sorted(unknown))}"
        )
    return replace(prior, **overrides)


def preserve_time(previous: datetime | None, new: datetime | None) -> datetime | None:
    """Carry the hour and minute of ``previous`` onto ``new``."""
    if previous is None or new is None:
        return new
    return new.replace(hour=previous.hour, minute=previous.minute)


def apply_selection(result: SelectionResult, prior: DateRange) -> DateRange:
    """Merge a result into its range, keeping previously chosen times.

    Carried times can invert a same-day range (start 17:00, end 08:00);
    the bounds are then swapped again so start <= end still holds.
    """
    start_date = preserve_time(_as_datetime(prior.start_date), result.start_date)
    end_date = preserve_time(_as_datetime(prior.end_date), result.end_date)
    if start_date is not None and end_date is not None and end_date < start_date:
        start_date, end_date = end_date, start_date
    return merge_range(prior, start_date=start_date, end_date=end_date)


def build_patch(
    ranges: Sequence[DateRange],
    focus: FocusPointer | tuple[int, int],
    result: SelectionResult | None,
) -> dict[str, DateRange]:
    """Sparse ``{key: range}`` patch for the focused range. Empty on no-op."""
    focus = FocusPointer.of(focus)
    prior = _target(ranges, focus.range_index)
    if prior is None or result is None:
        return {}
    return {range_key(prior, focus.range_index): apply_selection(result, prior)}


def merge_patch(
    ranges: Sequence[DateRange], patch: Mapping[str, DateRange]
) -> list[DateRange]:
    """Replace every range whose key appears in ``patch``; keep the rest."""
    return [
        patch.get(range_key(rng, i), rng) for i, rng in enumerate(ranges)
    ]
