import os
import tkinter as tk

import pytest

# Headless runs: let pystray load without a tray host
os.environ.setdefault("PYSTRAY_BACKEND", "dummy")


@pytest.fixture
def tk_root():
    try:
        root = tk.Tk()
    except tk.TclError as exc:
        pytest.skip(f"no display available: {exc}")
    root.withdraw()
    yield root
    root.destroy()


@pytest.fixture
def settings_file(tmp_path):
    return str(tmp_path / "settings.json")
