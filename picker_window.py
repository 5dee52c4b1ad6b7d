"""Single-month date range picker (tkinter) with presets, warning and Apply/Reset."""

import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk
from typing import Callable

from calendar_logic import (
    DAY_ABBR,
    GRID_WEEKS,
    DayCell,
    month_cells,
    month_title,
    next_month,
    prev_month,
    range_length,
)
from range_selection import PRESET_DAYS, WARNING_TEXT, DateRange, RangeSelection
from settings import load_settings, save_settings

log = logging.getLogger(__name__)

# Colours
PRIMARY = "#4F55FD"
BAND_BG = "#ECF1FC"
GRID_BG = "white"
OUT_FG = "#BDBDBD"
HEADER_FG = "#757575"
LABEL_FG = "#283952"
DISABLED_FG = "#91A2BB"
WARN_BG = "#FFF4E5"
WARN_FG = "#663C00"

NO_PRESET = "--"


class DateRangePicker:
    """Calendar widget: click two days to select a range, then Apply.

    The widget lives in ``self.frame``; pack or grid it into any parent.
    """

    def __init__(self, parent: tk.Misc,
                 on_apply: Callable[[DateRange], None] | None = None,
                 on_reset: Callable[[], None] | None = None) -> None:
        self.selection = RangeSelection(on_apply=on_apply, on_reset=on_reset)

        today = date.today()
        self.year = today.year
        self.month = today.month

        self._setup_fonts(parent)
        self.frame = tk.Frame(parent, bg=GRID_BG, padx=16, pady=16)

        # Canvas id -> cell shown in it (filled during _refresh)
        self._cell_for_widget: dict[int, DayCell] = {}
        self._canvases: list[tk.Canvas] = []

        self._build()
        self._refresh()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self, parent: tk.Misc) -> None:
        families = tkfont.families(parent)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(root=parent, family=base, size=10)
        self.font_bold = tkfont.Font(root=parent, family=base, size=10, weight="bold")
        self.font_header = tkfont.Font(root=parent, family=base, size=13, weight="bold")
        self.font_nav = tkfont.Font(root=parent, family=base, size=12, weight="bold")
        self.font_small = tkfont.Font(root=parent, family=base, size=9)

    # ------------------------------------------------------------------
    # Build widgets (once)
    # ------------------------------------------------------------------
    def _build(self) -> None:
        # Navigation row:  ◀  October 2026  Today  ▶
        nav = tk.Frame(self.frame, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 8))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2",
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self.navigate(-1))

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2",
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self.navigate(1))

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=PRIMARY,
            cursor="hand2",
        )
        btn_today.pack(side="right", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self.go_today())

        self.title_label = tk.Label(
            nav, font=self.font_header, bg=GRID_BG, fg="black",
        )
        self.title_label.pack(side="left", expand=True)

        # Weekday header + 6×7 cells
        grid = tk.Frame(self.frame, bg=GRID_BG)
        grid.pack()
        for col, abbr in enumerate(DAY_ABBR):
            tk.Label(
                grid, text=abbr, font=self.font_bold, bg=GRID_BG, fg=HEADER_FG, width=4,
            ).grid(row=0, column=col, pady=(0, 4))

        for r in range(GRID_WEEKS):
            for c in range(7):
                cell = tk.Canvas(
                    grid, width=44, height=40,
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=r + 1, column=c)
                # Bound once; the handler looks the date up in _cell_for_widget
                cell.bind("<Button-1>", self._on_cell_click)
                self._canvases.append(cell)

        # Warning banner (packed in/out by _refresh)
        self._warn_holder = tk.Frame(self.frame, bg=GRID_BG)
        self._warn_holder.pack(fill="x")
        self.warning_label = tk.Label(
            self._warn_holder, text=WARNING_TEXT, font=self.font_small,
            bg=WARN_BG, fg=WARN_FG, padx=10, pady=8, anchor="w",
            wraplength=300, justify="left",
        )

        self.footer_label = tk.Label(
            self.frame, font=self.font_small, bg=GRID_BG, fg="#555555",
        )
        self.footer_label.pack(pady=(8, 4))

        tk.Frame(self.frame, bg="#F1F6FD", height=1).pack(fill="x", pady=4)

        # Bottom row:  Last [--] days        Reset  Apply
        bottom = tk.Frame(self.frame, bg=GRID_BG)
        bottom.pack(fill="x", pady=(4, 0))

        tk.Label(bottom, text="Last", font=self.font_normal, bg=GRID_BG,
                 fg=LABEL_FG).pack(side="left")
        self.preset_var = tk.StringVar(value=NO_PRESET)
        options = [NO_PRESET] + [str(n) for n in PRESET_DAYS]
        self.preset_menu = tk.OptionMenu(
            bottom, self.preset_var, *options, command=self._on_preset,
        )
        self.preset_menu.configure(
            font=self.font_normal, bg=GRID_BG, fg=DISABLED_FG,
            highlightthickness=0, width=3,
        )
        self.preset_menu.pack(side="left", padx=4)
        tk.Label(bottom, text="days", font=self.font_normal, bg=GRID_BG,
                 fg=LABEL_FG).pack(side="left")

        self.apply_button = tk.Button(
            bottom, text="Apply", font=self.font_normal, fg=PRIMARY, bg=GRID_BG,
            disabledforeground=DISABLED_FG, padx=24, command=self.apply,
        )
        self.apply_button.pack(side="right")
        self.reset_button = tk.Button(
            bottom, text="Reset", font=self.font_bold, relief="flat",
            bg=GRID_BG, fg="#333333", command=self.reset,
        )
        self.reset_button.pack(side="right", padx=8)

    # ------------------------------------------------------------------
    # Refresh everything that depends on state
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        self.title_label.configure(text=month_title(self.year, self.month))

        sel = self.selection
        cells = month_cells(self.year, self.month, sel.start, sel.end)
        today = date.today()
        self._cell_for_widget.clear()
        for canvas, cell in zip(self._canvases, cells):
            self._draw_cell(canvas, cell, today)
            self._cell_for_widget[id(canvas)] = cell

        if sel.warning:
            self.warning_label.pack(fill="x", pady=(8, 0))
        else:
            self.warning_label.pack_forget()

        self.preset_var.set(str(sel.preset) if sel.preset else NO_PRESET)
        self.apply_button.configure(state="normal" if sel.is_complete else "disabled")
        self.footer_label.configure(text=self._footer_text())

    # ------------------------------------------------------------------
    # Day colour logic
    # ------------------------------------------------------------------
    @staticmethod
    def _day_colors(cell: DayCell, is_today: bool) -> tuple[str, str | None, str]:
        """Return (band background, circle fill or None, text colour)."""
        band = BAND_BG if cell.in_range and not cell.selected else GRID_BG
        if cell.selected:
            return band, PRIMARY, "white"
        if not cell.in_month:
            return band, None, OUT_FG
        if is_today:
            return band, None, PRIMARY
        return band, None, "black"

    def _draw_cell(self, canvas: tk.Canvas, cell: DayCell, today: date) -> None:
        canvas.delete("all")
        w = int(canvas["width"])
        h = int(canvas["height"])
        band, circle, fg = self._day_colors(cell, cell.date == today)
        canvas.configure(bg=band)
        if circle:
            r = min(w, h) // 2 - 2
            canvas.create_oval(w // 2 - r, h // 2 - r, w // 2 + r, h // 2 + r,
                               fill=circle, outline="")
        font = self.font_bold if cell.selected else self.font_normal
        canvas.create_text(w // 2, h // 2, text=str(cell.date.day), fill=fg, font=font)
        canvas.configure(cursor="hand2" if cell.in_month else "")

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today_str = f"Today: {date.today().strftime('%d.%m.%Y')}"
        sel = self.selection
        if not sel.is_complete:
            return today_str
        total_days = range_length(sel.start, sel.end)
        range_str = f"{sel.start.strftime('%d.%m')} → {sel.end.strftime('%d.%m')}"
        return f"{range_str}:  {total_days} day{'s' if total_days != 1 else ''}     {today_str}"

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _on_cell_click(self, event: tk.Event) -> None:
        cell = self._cell_for_widget.get(id(event.widget))
        if cell is not None:
            self.click_date(cell.date)

    def _on_preset(self, value: str) -> None:
        self.choose_preset(None if value == NO_PRESET else value)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def click_date(self, d: date) -> bool:
        """Click a day; days outside the displayed month are not clickable."""
        if (d.year, d.month) != (self.year, self.month):
            return False
        self.selection.click(d)
        self._refresh()
        return True

    def choose_preset(self, value: int | str | None) -> None:
        self.selection.choose_preset(value)
        self._refresh()

    def apply(self) -> DateRange | None:
        rng = self.selection.apply()
        if rng is None:
            log.debug("apply ignored: selection is %s", self.selection.state.value)
        return rng

    def reset(self) -> None:
        self.selection.reset()
        self._refresh()

    def navigate(self, direction: int) -> None:
        if direction < 0:
            self.year, self.month = prev_month(self.year, self.month)
        else:
            self.year, self.month = next_month(self.year, self.month)
        self._refresh()

    def go_today(self) -> None:
        today = date.today()
        self.year = today.year
        self.month = today.month
        self._refresh()


class PickerWindow:
    """Standalone top-level window hosting a DateRangePicker."""

    def __init__(self,
                 on_apply: Callable[[DateRange], None] | None = None,
                 on_reset: Callable[[], None] | None = None,
                 settings_file: str | None = None) -> None:
        self._settings_file = settings_file
        settings = load_settings(settings_file)
        self._saved_x: int | None = settings["window_x"]
        self._saved_y: int | None = settings["window_y"]

        self.root = tk.Tk()
        self.root.title("Select Date Range")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self.picker = DateRangePicker(self.root, on_apply=on_apply, on_reset=on_reset)
        self.picker.frame.pack()

        self.root.bind("<Escape>", lambda _e: self.picker.reset())
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.picker.go_today()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        if self.root.state() != "withdrawn":
            self._saved_x = self.root.winfo_x()
            self._saved_y = self.root.winfo_y()
            self._persist_position()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position: last saved spot, else bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        if self._saved_x is not None and self._saved_y is not None:
            x, y = self._saved_x, self._saved_y
        else:
            x = self.root.winfo_screenwidth() - self.root.winfo_reqwidth() - 12
            y = self.root.winfo_screenheight() - self.root.winfo_reqheight() - 60
        self.root.geometry(f"+{max(0, x)}+{max(0, y)}")

    def _persist_position(self) -> None:
        settings = load_settings(self._settings_file)
        settings["window_x"] = self._saved_x
        settings["window_y"] = self._saved_y
        save_settings(settings, self._settings_file)
