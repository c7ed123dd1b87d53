"""Tests for JSON configuration loading.

Test data loaded from: data/fixtures/configs/
"""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from conftest import NOW, config_path


class TestLoadRangesJson:

    def test_bare_list(self):
        from range_selection.loaders import load_ranges_json

        ranges = load_ranges_json(config_path("ranges_only"))
        assert len(ranges) == 2
        assert ranges[0].key == "stay"
        assert ranges[0].start_date == datetime(2024, 1, 10)
        assert ranges[0].end_date == datetime(2024, 1, 15)
        assert ranges[1].disabled is True
        assert ranges[1].start_date is None

    def test_object_with_ranges(self):
        from range_selection.loaders import load_ranges_json

        ranges = load_ranges_json(config_path("selector"))
        assert [r.key for r in ranges] == ["outbound", "blocked", None]
        assert ranges[0].color == "#aa0000"

    def test_invalid(self):
        from range_selection.loaders import load_ranges_json

        with pytest.raises(ValueError, match="invalid.json") as exc_info:
            load_ranges_json(config_path("invalid"))
        assert "duplicate key 'a'" in str(exc_info.value)


class TestLoadSelectorJson:

    def test_full_config(self):
        from range_selection.loaders import load_selector_json
        from range_selection.time_constraints import AbsoluteBound, ClockOffset
        from range_selection.types import Endpoint

        selector = load_selector_json(config_path("selector"))
        assert len(selector.ranges) == 3
        assert selector.policy.retain_end_date_on_first_selection is True
        assert selector.policy.move_range_on_first_selection is False
        assert selector.policy.max_date == datetime(2024, 12, 31)
        assert selector.disabled_dates == (datetime(2024, 1, 12), datetime(2024, 1, 13))
        assert selector.min_time == AbsoluteBound(datetime(2024, 1, 1, 8, 0))
        assert selector.max_time == ClockOffset(18 * 60)
        assert selector.focused_range.range_index == 0
        assert selector.focused_range.endpoint is Endpoint.END
        assert selector.range_colors == ("#111111", "#222222", "#333333")

    def test_callbacks_passed_through(self):
        from range_selection.loaders import load_selector_json

        changes: list = []
        selector = load_selector_json(
            config_path("selector"), on_change=changes.append, clock=lambda: NOW
        )
        patch = selector.set_selection(datetime(2024, 1, 16))

        # Disabled 2024-01-12/13 sit inside the proposed range: end is repaired.
        assert patch["outbound"].end_date == datetime(2024, 1, 11, 17, 30)
        assert changes == [patch]
        assert selector.focused_range.as_tuple() == (2, 0)

    def test_minimal_config(self, tmp_path):
        from range_selection.loaders import load_selector_json
        from range_selection.types import SelectionPolicy

        path = tmp_path / "minimal.json"
        path.write_text(json.dumps({"ranges": [{"key": "only"}]}))

        selector = load_selector_json(path)
        assert selector.policy == SelectionPolicy()
        assert selector.min_time is None
        assert selector.max_time is None
        assert selector.focused_range.as_tuple() == (0, 0)

    def test_invalid_lists_every_error(self):
        from range_selection.loaders import load_selector_json

        with pytest.raises(ValueError) as exc_info:
            load_selector_json(config_path("invalid"))
        message = str(exc_info.value)
        for fragment in (
            "invalid datetime 'not-a-date'",
            "duplicate key 'a'",
            "'disabled' must be boolean",
            "'move_range_on_first_selection' must be boolean",
            "unknown option(s) ['shift']",
            "Disabled date 0",
            "min_time: minute offset 2000",
            "focused_range: index 5",
            "endpoint must be 0 or 1",
        ):
            assert fragment in message

    def test_not_an_object(self, tmp_path):
        from range_selection.loaders import load_selector_json

        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="expected an object"):
            load_selector_json(path)
