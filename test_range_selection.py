from datetime import date, timedelta

import pytest

from range_selection import (
    MAX_RANGE_DAYS,
    WARNING_TEXT,
    RangeSelection,
    SelectionState,
    clamp_range,
    exceeds_cap,
    parse_preset,
    preset_range,
)

TODAY = date(2026, 10, 18)


class Recorder:
    def __init__(self):
        self.applied = []
        self.resets = 0

    def on_apply(self, rng):
        self.applied.append(rng)

    def on_reset(self):
        self.resets += 1


@pytest.fixture
def rec():
    return Recorder()


@pytest.fixture
def sel(rec):
    return RangeSelection(on_apply=rec.on_apply, on_reset=rec.on_reset)


def test_starts_empty(sel):
    assert sel.state is SelectionState.EMPTY
    assert sel.start is None and sel.end is None
    assert sel.preset is None
    assert not sel.warning


def test_first_click_sets_start(sel):
    sel.click(date(2026, 10, 5))
    assert sel.state is SelectionState.PARTIAL_START
    assert sel.start == date(2026, 10, 5)
    assert sel.end is None


@pytest.mark.parametrize("d1,d2", [
    (date(2026, 10, 5), date(2026, 10, 20)),
    (date(2026, 10, 20), date(2026, 10, 5)),
    (date(2026, 1, 31), date(2025, 12, 1)),
])
def test_second_click_orders_range(sel, d1, d2):
    sel.click(d1)
    sel.click(d2)
    assert sel.state is SelectionState.COMPLETE
    assert (sel.start, sel.end) == (min(d1, d2), max(d1, d2))


def test_clicking_start_twice_gives_single_day(sel):
    d = date(2026, 10, 5)
    sel.click(d)
    sel.click(d)
    assert (sel.start, sel.end) == (d, d)
    assert sel.applied_range() == (d, d)


def test_third_click_starts_new_selection(sel):
    sel.click(date(2026, 10, 1))
    sel.click(date(2026, 10, 10))
    sel.click(date(2026, 10, 7))
    assert sel.state is SelectionState.PARTIAL_START
    assert sel.start == date(2026, 10, 7)
    assert sel.end is None


@pytest.mark.parametrize("span,expected", [(0, False), (29, False), (30, False), (31, True), (90, True)])
def test_warning_iff_more_than_30_days(sel, span, expected):
    start = date(2026, 9, 1)
    sel.click(start + timedelta(days=span))
    sel.click(start)
    assert sel.warning is expected
    assert exceeds_cap(sel.start, sel.end) is expected


def test_new_selection_clears_warning(sel):
    sel.click(date(2026, 8, 1))
    sel.click(date(2026, 10, 1))
    assert sel.warning
    sel.click(date(2026, 10, 3))
    assert not sel.warning


def test_apply_unchanged_within_cap(sel, rec):
    sel.click(date(2026, 10, 1))
    sel.click(date(2026, 10, 31))
    assert sel.apply() == (date(2026, 10, 1), date(2026, 10, 31))
    assert rec.applied == [(date(2026, 10, 1), date(2026, 10, 31))]


def test_apply_clamps_to_last_30_days(sel, rec):
    sel.click(date(2026, 10, 31))
    sel.click(date(2026, 8, 1))
    emitted = sel.apply()
    assert emitted == (date(2026, 10, 1), date(2026, 10, 31))
    assert rec.applied == [emitted]
    # committed range itself is not modified
    assert sel.start == date(2026, 8, 1)


def test_apply_ignored_unless_complete(sel, rec):
    assert sel.apply() is None
    sel.click(date(2026, 10, 1))
    assert sel.apply() is None
    assert rec.applied == []


def test_apply_without_callback():
    sel = RangeSelection()
    sel.click(date(2026, 10, 1))
    sel.click(date(2026, 10, 2))
    assert sel.apply() == (date(2026, 10, 1), date(2026, 10, 2))
    sel.reset()
    assert sel.state is SelectionState.EMPTY


@pytest.mark.parametrize("days", [7, 15, 30])
def test_presets(sel, days):
    sel.choose_preset(days, today=TODAY)
    assert sel.state is SelectionState.COMPLETE
    assert sel.preset == days
    assert sel.end == TODAY
    assert (sel.end - sel.start).days == days - 1
    assert not sel.warning


def test_preset_15_overrides_any_prior_state(sel):
    sel.click(date(2026, 5, 1))
    sel.click(date(2026, 9, 1))
    assert sel.warning
    sel.choose_preset("15", today=TODAY)
    assert (sel.start, sel.end) == (TODAY - timedelta(days=14), TODAY)
    assert not sel.warning

    sel.reset()
    sel.click(date(2026, 5, 1))
    sel.choose_preset(15, today=TODAY)
    assert (sel.start, sel.end) == (date(2026, 10, 4), TODAY)


def test_empty_preset_only_clears_indicator(sel):
    sel.choose_preset(7, today=TODAY)
    sel.choose_preset("")
    assert sel.preset is None
    assert (sel.start, sel.end) == (TODAY - timedelta(days=6), TODAY)


def test_click_keeps_preset_indicator(sel):
    sel.choose_preset(30, today=TODAY)
    sel.click(date(2026, 10, 2))
    assert sel.preset == 30
    assert sel.state is SelectionState.PARTIAL_START


@pytest.mark.parametrize("bad", [5, "10", "abc", 0, 31.5, 7.9, "7.0", " 15 ", True, 15.0])
def test_invalid_preset_rejected(sel, bad):
    with pytest.raises(ValueError):
        sel.choose_preset(bad)


def test_reset_from_any_state(sel, rec):
    sel.reset()
    assert rec.resets == 1

    sel.click(date(2026, 10, 1))
    sel.reset()
    assert sel.state is SelectionState.EMPTY

    sel.click(date(2026, 7, 1))
    sel.click(date(2026, 10, 1))
    sel.choose_preset(7, today=TODAY)
    sel.reset()
    assert sel.state is SelectionState.EMPTY
    assert sel.preset is None
    assert not sel.warning
    assert rec.resets == 3
    assert sel.apply() is None
    assert rec.applied == []


def test_helpers():
    assert preset_range(7, TODAY) == (date(2026, 10, 12), TODAY)
    assert clamp_range(date(2026, 1, 1), date(2026, 3, 1)) == (date(2026, 1, 30), date(2026, 3, 1))
    assert clamp_range(date(2026, 1, 1), date(2026, 1, 31)) == (date(2026, 1, 1), date(2026, 1, 31))
    assert parse_preset(None) is None
    assert parse_preset("30") == 30
    assert str(MAX_RANGE_DAYS) in WARNING_TEXT
