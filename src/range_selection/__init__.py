"""range-selection: Pure state machine behind multi-range date/time pickers."""

import logging

from range_selection.focus import initial_focus, next_range_index
from range_selection.loaders import load_ranges_json, load_selector_json
from range_selection.selection import (
    apply_selection,
    build_patch,
    compute_selection,
    merge_patch,
    merge_range,
    preserve_time,
    range_key,
)
from range_selection.selector import DEFAULT_RANGE_COLORS, DateRangeSelector
from range_selection.time_constraints import (
    AbsoluteBound,
    ClockOffset,
    TimeBound,
    TimeUnit,
    WheelItem,
    apply_time_pick,
    coerce_bound,
    is_time_disabled,
    is_within_bounds,
    time_wheel,
)
from range_selection.types import (
    DateRange,
    Endpoint,
    FocusPointer,
    Preview,
    SelectionPolicy,
    SelectionResult,
)

logging.getLogger("range_selection").addHandler(logging.NullHandler())

__all__ = [
    "AbsoluteBound",
    "ClockOffset",
    "DEFAULT_RANGE_COLORS",
    "DateRange",
    "DateRangeSelector",
    "Endpoint",
    "FocusPointer",
    "Preview",
    "SelectionPolicy",
    "SelectionResult",
    "TimeBound",
    "TimeUnit",
    "WheelItem",
    "apply_selection",
    "apply_time_pick",
    "build_patch",
    "coerce_bound",
    "compute_selection",
    "initial_focus",
    "is_time_disabled",
    "is_within_bounds",
    "load_ranges_json",
    "load_selector_json",
    "merge_patch",
    "merge_range",
    "next_range_index",
    "preserve_time",
    "range_key",
    "time_wheel",
]
