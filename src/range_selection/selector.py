"""DateRangeSelector: a thin stateful shell over the pure selection core.

It holds the range snapshot, the focus and the hover preview, and reports
every change through callbacks. All decisions are delegated to
compute_selection(), next_range_index() and the time-constraint functions.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Mapping, Sequence

from range_selection.focus import initial_focus
from range_selection.selection import (
    DatePick,
    RangePick,
    build_patch,
    compute_selection,
    merge_patch,
    merge_range,
    range_key,
)
from range_selection.time_constraints import (
    BoundInput,
    TimeUnit,
    WheelItem,
    apply_time_pick,
    coerce_bound,
    is_within_bounds,
    time_wheel,
)
from range_selection.types import (
    DateRange,
    FocusPointer,
    Preview,
    SelectionPolicy,
    SelectionResult,
)

LOGGER = logging.getLogger("range_selection.selector")

DEFAULT_RANGE_COLORS = ("#3d91ff", "#3ecf8e", "#fed14c")

ChangeCallback = Callable[[Mapping[str, DateRange]], None]
FocusCallback = Callable[[FocusPointer], None]
PreviewCallback = Callable[[Preview | None], None]


def _check_unique_keys(ranges: Sequence[DateRange]) -> None:
    """Patches are keyed by range identity, so identities must not collide.

    Raises ValueError if an explicit key equals another range's key or
    positional ``range<N>`` default.
    """
    seen: set[str] = set()
    for i, rng in enumerate(ranges):
        key = range_key(rng, i)
        if key in seen:
            raise ValueError(f"Range {i}: duplicate key '{key}'")
        seen.add(key)


class DateRangeSelector:
    """Single-writer owner of one multi-range picker's state.

    Commits require an ``on_change`` sink: without one every pick is a
    no-op, since nothing would receive the change.
    """

    def __init__(
        self,
        ranges: Sequence[DateRange],
        *,
        policy: SelectionPolicy | None = None,
        disabled_dates: Iterable[date | datetime] = (),
        min_time: BoundInput = None,
        max_time: BoundInput = None,
        focused_range: FocusPointer | tuple[int, int] | None = None,
        range_colors: Sequence[str] = DEFAULT_RANGE_COLORS,
        on_change: ChangeCallback | None = None,
        on_range_focus_change: FocusCallback | None = None,
        on_preview_change: PreviewCallback | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.ranges: list[DateRange] = list(ranges)
        _check_unique_keys(self.ranges)
        self.policy = policy or SelectionPolicy()
        self.disabled_dates = tuple(disabled_dates)
        self.min_time = coerce_bound(min_time)
        self.max_time = coerce_bound(max_time)
        self.range_colors = tuple(range_colors)
        self.on_change = on_change
        self.on_range_focus_change = on_range_focus_change
        self.on_preview_change = on_preview_change
        self._clock = clock

        if focused_range is None:
            self.focused_range = initial_focus(self.ranges)
        else:
            self.focused_range = FocusPointer.of(focused_range)
        self.preview: Preview | None = None

    @property
    def selected_range(self) -> DateRange | None:
        index = self.focused_range.range_index
        if 0 <= index < len(self.ranges):
            return self.ranges[index]
        return None

    # ------------------------------------------------------------------
    # Date picks
    # ------------------------------------------------------------------

    def calc_new_selection(
        self, value: DatePick | RangePick, is_single_value: bool = True
    ) -> SelectionResult | None:
        """Proposed result for ``value`` without committing it."""
        if self.on_change is None:
            return None
        return compute_selection(
            value,
            self.focused_range,
            self.ranges,
            self.policy,
            self.disabled_dates,
            is_single_value=is_single_value,
            now=self._clock(),
        )

    def set_selection(
        self, value: DatePick | RangePick, is_single_value: bool = True
    ) -> dict[str, DateRange]:
        """Commit a pick, advance the focus and clear the preview.

        Returns the patch that was emitted (empty on no-op).
        """
        focus = self.focused_range
        result = self.calc_new_selection(value, is_single_value)
        patch = build_patch(self.ranges, focus, result)
        if not patch:
            return {}

        self._commit(patch)
        self.focused_range = result.next_focus
        self._set_preview(None)
        if self.on_range_focus_change is not None:
            self.on_range_focus_change(result.next_focus)
        return patch

    def update_range(self, value: RangePick) -> dict[str, DateRange]:
        """Commit a drag selection spanning ``value`` (start, end)."""
        return self.set_selection(value, is_single_value=False)

    def update_preview(self, value: DatePick) -> Preview | None:
        """Show what picking ``value`` would produce; None clears the preview."""
        if value is None:
            return self._set_preview(None)
        result = self.calc_new_selection(value)
        if result is None:
            return self._set_preview(None)
        index = self.focused_range.range_index
        return self._set_preview(
            Preview(result.start_date, result.end_date, self._color_for(index))
        )

    def handle_range_focus_change(
        self, focus: FocusPointer | tuple[int, int]
    ) -> None:
        self.focused_range = FocusPointer.of(focus)
        if self.on_range_focus_change is not None:
            self.on_range_focus_change(self.focused_range)

    # ------------------------------------------------------------------
    # Time picks
    # ------------------------------------------------------------------

    def handle_time_change(
        self, value: datetime, is_start: bool
    ) -> dict[str, DateRange]:
        """Commit ``value`` as the focused range's start or end.

        Values outside min_time/max_time are dropped.
        """
        selected = self.selected_range
        if selected is None or self.on_change is None:
            return {}
        if not is_within_bounds(value, self.min_time, self.max_time):
            LOGGER.debug("Time %s outside bounds; keeping previous value", value)
            return {}

        field = "start_date" if is_start else "end_date"
        key = range_key(selected, self.focused_range.range_index)
        patch = {key: merge_range(selected, **{field: value})}
        self._commit(patch)
        return patch

    def pick_time(
        self, value: int, unit: TimeUnit | str, is_start: bool
    ) -> dict[str, DateRange]:
        """Apply one wheel click to the focused range's start or end.

        Clicks on a disabled range's wheel are ignored.
        """
        selected = self.selected_range
        if selected is None or selected.disabled:
            return {}
        current = selected.start_date if is_start else selected.end_date
        picked = apply_time_pick(
            current, value, unit, self.min_time, self.max_time, now=self._clock()
        )
        if picked is None:
            return {}
        return self.handle_time_change(picked, is_start)

    def time_wheel(self, unit: TimeUnit | str, is_start: bool) -> list[WheelItem]:
        """Wheel positions for the focused range's start or end."""
        selected = self.selected_range
        if selected is None:
            return []
        current = selected.start_date if is_start else selected.end_date
        return time_wheel(
            current,
            self.min_time,
            self.max_time,
            unit,
            disabled=selected.disabled,
            now=self._clock(),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, patch: Mapping[str, DateRange]) -> None:
        LOGGER.debug("Committing ranges: %s", ", ".join(patch))
        self.ranges = merge_patch(self.ranges, patch)
        self.on_change(patch)

    def _set_preview(self, preview: Preview | None) -> Preview | None:
        self.preview = preview
        if self.on_preview_change is not None:
            self.on_preview_change(preview)
        return preview

    def _color_for(self, index: int) -> str | None:
        selected = self.ranges[index]
        if selected.color:
            return selected.color
        if index < len(self.range_colors):
            return self.range_colors[index]
        return None
