"""Two-click range selection with presets and a 30-day cap (no UI dependencies)."""

import enum
import logging
from datetime import date, timedelta
from typing import Callable

log = logging.getLogger(__name__)

MAX_RANGE_DAYS = 30
PRESET_DAYS = (7, 15, 30)
WARNING_TEXT = (
    f"Selected range exceeds {MAX_RANGE_DAYS} days. "
    f"Only the last {MAX_RANGE_DAYS} will be applied."
)

DateRange = tuple[date, date]


class SelectionState(enum.Enum):
    EMPTY = "empty"
    PARTIAL_START = "partial_start"
    COMPLETE = "complete"


def exceeds_cap(start: date, end: date) -> bool:
    """True if the ordered range spans more than MAX_RANGE_DAYS days."""
    return (end - start).days > MAX_RANGE_DAYS


def clamp_range(start: date, end: date) -> DateRange:
    """Keep only the most recent MAX_RANGE_DAYS days, ending at ``end``."""
    if exceeds_cap(start, end):
        return end - timedelta(days=MAX_RANGE_DAYS), end
    return start, end


def preset_range(days: int, today: date | None = None) -> DateRange:
    """Return the last ``days`` days ending today, both ends inclusive."""
    today = today or date.today()
    return today - timedelta(days=days - 1), today


def parse_preset(value: int | str | None) -> int | None:
    """Normalise a preset choice: None / "" / 7 / "7" / 15 / "15" / 30 / "30"."""
    if value is None or value == "":
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value in PRESET_DAYS:
        return value
    if isinstance(value, str) and value in {str(n) for n in PRESET_DAYS}:
        return int(value)
    raise ValueError(f"invalid preset: {value!r} (expected one of {PRESET_DAYS})")


class RangeSelection:
    """Selection state owned by one picker instance.

    Holds the two endpoints, the preset indicator and the over-cap warning.
    ``on_apply`` receives the (possibly clamped) ordered pair; ``on_reset``
    is called with no arguments.
    """

    def __init__(self,
                 on_apply: Callable[[DateRange], None] | None = None,
                 on_reset: Callable[[], None] | None = None) -> None:
        self.on_apply = on_apply
        self.on_reset = on_reset
        self.start: date | None = None
        self.end: date | None = None
        self.preset: int | None = None
        self.warning = False

    @property
    def state(self) -> SelectionState:
        if self.start is None:
            return SelectionState.EMPTY
        if self.end is None:
            return SelectionState.PARTIAL_START
        return SelectionState.COMPLETE

    @property
    def is_complete(self) -> bool:
        return self.state is SelectionState.COMPLETE

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def click(self, d: date) -> None:
        """Handle a click on an in-month day cell."""
        if self.state is SelectionState.PARTIAL_START:
            lo, hi = min(self.start, d), max(self.start, d)
            self.start, self.end = lo, hi
            self.warning = exceeds_cap(lo, hi)
            log.debug("range committed: %s..%s (warning=%s)", lo, hi, self.warning)
        else:
            self.start, self.end = d, None
            self.warning = False
            log.debug("range started at %s", d)

    def choose_preset(self, value: int | str | None, today: date | None = None) -> None:
        """Select one of the "last N days" shortcuts, or clear the indicator."""
        days = parse_preset(value)
        self.preset = days
        if days is None:
            return
        self.start, self.end = preset_range(days, today)
        self.warning = False
        log.debug("preset %d days: %s..%s", days, self.start, self.end)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def applied_range(self) -> DateRange | None:
        """Return the range Apply would emit, or None if not complete."""
        if not self.is_complete:
            return None
        return clamp_range(self.start, self.end)

    def apply(self) -> DateRange | None:
        rng = self.applied_range()
        if rng is None:
            return None
        if rng != (self.start, self.end):
            log.info("range %s..%s clamped to %s..%s", self.start, self.end, *rng)
        if self.on_apply is not None:
            self.on_apply(rng)
        return rng

    def reset(self) -> None:
        self.start = None
        self.end = None
        self.preset = None
        self.warning = False
        if self.on_reset is not None:
            self.on_reset()
