"""System-tray icon setup via pystray."""

from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_reset: Callable[[], None] | None = None,
    title: str = "Date Range Picker",
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Pick Date Range", lambda _icon, _item: on_show(), default=True),
    ]
    if on_reset is not None:
        items.append(MenuItem("Reset Selection", lambda _icon, _item: on_reset()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    return pystray.Icon("date-range-picker", icon_image, title, Menu(*items))
