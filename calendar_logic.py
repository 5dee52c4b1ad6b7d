"""Pure calendar grid calculations (no UI dependencies)."""

import calendar
from datetime import date, timedelta
from typing import NamedTuple

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
GRID_WEEKS = 6
GRID_CELLS = GRID_WEEKS * 7


class DayCell(NamedTuple):
    """One cell of the 6×7 grid."""

    date: date
    in_month: bool
    selected: bool
    in_range: bool


def grid_start(year: int, month: int) -> date:
    """Return the Monday on or before the 1st of the month."""
    first = date(year, month, 1)
    return first - timedelta(days=first.weekday())


def month_cells(year: int, month: int,
                start: date | None = None,
                end: date | None = None) -> list[DayCell]:
    """Return the 42 cells for the given month.

    Weeks start on Monday (ISO convention). Always 6 rows so the picker
    height stays constant; trailing cells spill into the next month.
    ``start``/``end`` are the selection endpoints: a cell is *selected* when
    it equals either one, and *in range* when both are set and the cell lies
    between them (inclusive).
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")

    first = grid_start(year, month)
    complete = start is not None and end is not None
    cells: list[DayCell] = []
    for i in range(GRID_CELLS):
        d = first + timedelta(days=i)
        cells.append(DayCell(
            date=d,
            in_month=d.month == month,
            selected=d == start or d == end,
            in_range=complete and start <= d <= end,
        ))
    return cells


def weeks(cells: list[DayCell]) -> list[list[DayCell]]:
    """Split a flat cell list into rows of 7."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def range_length(start: date, end: date) -> int:
    """Inclusive number of days between two ordered dates."""
    return (end - start).days + 1


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
