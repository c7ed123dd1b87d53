"""Shared types: DateRange, FocusPointer, SelectionPolicy, SelectionResult."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class Endpoint(IntEnum):
    """Which bound of a range receives the next pick."""

    START = 0
    END = 1


@dataclass(frozen=True)
class DateRange:
    """Immutable snapshot of one named range.

    Either date may be absent while the range is still being picked.
    """

    start_date: datetime | None = None
    end_date: datetime | None = None
    key: str | None = None
    disabled: bool = False
    color: str | None = None


@dataclass(frozen=True)
class FocusPointer:
    """The (range, endpoint) pair currently receiving the next pick."""

    range_index: int
    endpoint: Endpoint = Endpoint.START

    @classmethod
    def of(cls, value: FocusPointer | tuple[int, int]) -> FocusPointer:
        """Coerce a positional ``(index, 0|1)`` pair into a FocusPointer."""
        if isinstance(value, FocusPointer):
            return value
        index, endpoint = value
        return cls(int(index), Endpoint(endpoint))

    def as_tuple(self) -> tuple[int, int]:
        return (self.range_index, int(self.endpoint))


@dataclass(frozen=True)
class SelectionPolicy:
    """First-pick behaviour and the hard ceiling on end dates."""

    move_range_on_first_selection: bool = False
    retain_end_date_on_first_selection: bool = False
    max_date: datetime | None = None


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one pick. Fresh on every call.

    Invariants:
        - start_date <= end_date whenever both are present
        - was_valid is False iff a disabled date forced a repair
    """

    was_valid: bool
    start_date: datetime | None
    end_date: datetime | None
    next_focus: FocusPointer


@dataclass(frozen=True)
class Preview:
    """Proposed, uncommitted range shown during hover or drag."""

    start_date: datetime | None
    end_date: datetime | None
    color: str | None
