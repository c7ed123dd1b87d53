"""TimeConstraintEvaluator: which hours/minutes a wheel picker may offer.

Bounds come in two explicit forms, resolved once by coerce_bound():

    AbsoluteBound(at)     full datetime floor/ceiling, compared as a datetime
    ClockOffset(minutes)  wall-clock floor/ceiling, minutes from midnight,
                          applied to every day
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum

LOGGER = logging.getLogger("range_selection.time_constraints")

MINUTES_PER_DAY = 24 * 60


class TimeUnit(str, Enum):
    """Field of a datetime driven by one wheel."""

    HOUR = "hour"
    MINUTE = "minute"

    @property
    def size(self) -> int:
        """Number of wheel positions."""
        return 24 if self is TimeUnit.HOUR else 60


@dataclass(frozen=True)
class AbsoluteBound:
    """Earliest/latest selectable instant."""

    at: datetime

    def is_before(self, instant: datetime) -> bool:
        return instant < self.at

    def is_after(self, instant: datetime) -> bool:
        return instant > self.at


@dataclass(frozen=True)
class ClockOffset:
    """Earliest/latest selectable wall-clock time, in minutes from midnight."""

    minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.minutes <= MINUTES_PER_DAY:
            raise ValueError(
                f"ClockOffset minutes must be within 0..{MINUTES_PER_DAY}, "
                f"got {self.minutes}"
            )

    def is_before(self, instant: datetime) -> bool:
        return _minute_of_day(instant) < self.minutes

    def is_after(self, instant: datetime) -> bool:
        return _minute_of_day(instant) > self.minutes


TimeBound = AbsoluteBound | ClockOffset
BoundInput = TimeBound | datetime | time | int | None


def _minute_of_day(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def coerce_bound(value: BoundInput) -> TimeBound | None:
    """Resolve a caller-supplied bound into its explicit variant.

    datetime -> AbsoluteBound; time or int minutes -> ClockOffset;
    None -> None. Anything else raises TypeError.
    """
    if value is None or isinstance(value, (AbsoluteBound, ClockOffset)):
        return value
    if isinstance(value, datetime):
        return AbsoluteBound(value)
    if isinstance(value, time):
        return ClockOffset(value.hour * 60 + value.minute)
    if isinstance(value, int) and not isinstance(value, bool):
        return ClockOffset(value)
    raise TypeError(
        f"time bound must be a datetime, time, minute offset or None, "
        f"got {type(value).__name__}"
    )


def _check_value(value: int, unit: TimeUnit) -> None:
    if not 0 <= value < unit.size:
        raise ValueError(
            f"{unit.value} must be within 0..{unit.size - 1}, got {value}"
        )


def _out_of_bounds(
    instant: datetime, min_bound: TimeBound | None, max_bound: TimeBound | None
) -> bool:
    if min_bound is not None and min_bound.is_before(instant):
        return True
    return max_bound is not None and max_bound.is_after(instant)


def is_within_bounds(
    value: datetime, min_time: BoundInput = None, max_time: BoundInput = None
) -> bool:
    """Whether ``value`` lies inside both bounds (inclusive)."""
    return not _out_of_bounds(value, coerce_bound(min_time), coerce_bound(max_time))


def _candidate_at(date: datetime, candidate: int, unit: TimeUnit) -> datetime:
    """Start of ``date``'s day with the candidate hour, or its hour and the candidate minute."""
    if unit is TimeUnit.HOUR:
        return date.replace(hour=candidate, minute=0, second=0, microsecond=0)
    return date.replace(minute=candidate, second=0, microsecond=0)


def is_time_disabled(
    candidate: int,
    date: datetime | None,
    min_time: BoundInput = None,
    max_time: BoundInput = None,
    unit: TimeUnit | str = TimeUnit.HOUR,
) -> bool:
    """Whether wheel position ``candidate`` is unavailable for ``date``.

    True when the candidate instant falls strictly before ``min_time`` or
    strictly after ``max_time``. With no date or no bounds nothing is
    disabled.
    """
    unit = TimeUnit(unit)
    min_bound = coerce_bound(min_time)
    max_bound = coerce_bound(max_time)
    if date is None or (min_bound is None and max_bound is None):
        return False
    _check_value(candidate, unit)
    return _out_of_bounds(_candidate_at(date, candidate, unit), min_bound, max_bound)


def apply_time_pick(
    date: datetime | None,
    value: int,
    field: TimeUnit | str,
    min_time: BoundInput = None,
    max_time: BoundInput = None,
    *,
    now: datetime | None = None,
) -> datetime | None:
    """Replace one field of ``date``; None when the result is out of bounds.

    A None result means "no change": the caller keeps its prior value.
    An absent date is taken to be ``now``.

    Raises ValueError if ``value`` is not a valid wheel position.
    """
    field = TimeUnit(field)
    _check_value(value, field)
    min_bound = coerce_bound(min_time)
    max_bound = coerce_bound(max_time)

    base = date if date is not None else (now or datetime.now())
    picked = base.replace(**{field.value: value})
    if _out_of_bounds(picked, min_bound, max_bound):
        LOGGER.debug("Rejected %s=%d: %s outside bounds", field.value, value, picked)
        return None
    return picked


@dataclass(frozen=True)
class WheelItem:
    """One selectable position on an hour or minute wheel."""

    value: int
    active: bool
    disabled: bool


def time_wheel(
    date: datetime | None,
    min_time: BoundInput = None,
    max_time: BoundInput = None,
    unit: TimeUnit | str = TimeUnit.HOUR,
    *,
    disabled: bool = False,
    now: datetime | None = None,
) -> list[WheelItem]:
    """Every wheel position for ``date`` with its active/disabled state.

    ``disabled`` greys out the whole wheel (e.g. a disabled range).
    """
    unit = TimeUnit(unit)
    min_bound = coerce_bound(min_time)
    max_bound = coerce_bound(max_time)
    current = date if date is not None else (now or datetime.now())
    current_value = getattr(current, unit.value)

    return [
        WheelItem(
            value=v,
            active=v == current_value,
            disabled=disabled or is_time_disabled(v, date, min_bound, max_bound, unit),
        )
        for v in range(unit.size)
    ]
