"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

ICON_SIZE = 64
HEADER_H = 16
HEADER_COLOR = "#4F55FD"


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
    """Largest bold font for which ``text`` fits the box; default font as fallback."""
    font_size = 80
    while font_size > 10:
        try:
            font = ImageFont.truetype("segoeuib.ttf", font_size)
        except OSError:
            try:
                font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
            except OSError:
                return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= max_w and bbox[3] - bbox[1] <= max_h:
            return font
        font_size -= 1
    return font


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA image: a calendar leaf showing today's day of month."""
    today = today or date.today()
    size = ICON_SIZE
    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size - 1, HEADER_H - 1), fill=HEADER_COLOR)
    draw.rectangle((0, 0, size - 1, size - 1), outline=HEADER_COLOR, width=2)

    text = str(today.day)
    body_h = size - HEADER_H - 4
    font = _fit_font(draw, text, size - 8, body_h)

    # Centre the visible pixels in the area below the header
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = HEADER_H + (size - HEADER_H - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
