"""FocusCursor: which range receives the next pick."""

from __future__ import annotations

from typing import Sequence

from range_selection.types import DateRange, Endpoint, FocusPointer


def next_range_index(ranges: Sequence[DateRange], current_index: int = -1) -> int:
    """Index of the next non-disabled range after ``current_index``.

    Scans forward, then wraps to the beginning. Falls back to 0 when every
    range is disabled or ``ranges`` is empty; callers must guard against an
    empty collection before dereferencing.
    """
    for i in range(current_index + 1, len(ranges)):
        if not ranges[i].disabled:
            return i
    for i, rng in enumerate(ranges):
        if not rng.disabled:
            return i
    return 0


def initial_focus(ranges: Sequence[DateRange]) -> FocusPointer:
    """Focus on the start of the first selectable range."""
    return FocusPointer(next_range_index(ranges), Endpoint.START)
