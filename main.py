"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import threading

from icon_gen import create_icon_image
from picker_window import PickerWindow
from range_selection import DateRange
from settings import load_settings, log_level, save_settings
from tray_icon import create_tray

log = logging.getLogger("date_range_picker")


def setup_logging(settings: dict) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(log_level(settings))


def make_host_callbacks(settings: dict, settings_file: str | None = None):
    """Return (on_apply, on_reset) that log the events and remember the last range."""
    fmt = settings["date_format"]

    def on_apply(date_range: DateRange) -> None:
        start, end = date_range
        log.info("Applied date range: %s - %s", start.strftime(fmt), end.strftime(fmt))
        stored = load_settings(settings_file)
        stored["last_applied"] = [start.isoformat(), end.isoformat()]
        save_settings(stored, settings_file)

    def on_reset() -> None:
        log.info("Date range reset")

    return on_apply, on_reset


def tray_title(settings: dict) -> str:
    last = settings.get("last_applied")
    if last:
        return f"Date Range Picker – last: {last[0]} → {last[1]}"
    return "Date Range Picker"


def main() -> None:
    settings = load_settings()
    setup_logging(settings)

    on_apply, on_reset = make_host_callbacks(settings)
    picker_win = PickerWindow(on_apply=on_apply, on_reset=on_reset)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        picker_win.root.after(0, picker_win.toggle)

    def on_tray_reset() -> None:
        picker_win.root.after(0, picker_win.picker.reset)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker_win.hide()
            picker_win.root.destroy()
        picker_win.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit,
                       on_reset=on_tray_reset, title=tray_title(settings))

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()
    log.debug("tray started")

    # tkinter main loop on the main thread
    picker_win.root.mainloop()


if __name__ == "__main__":
    main()
