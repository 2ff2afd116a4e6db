"""
Single-line shrink-to-fit text rendering.

The font size starts at the region height and is reduced one pixel at a
time until the text's advance width fits the region width, or the floor
size is reached. The floor size is used even when the text still overflows.
"""

import logging
from typing import Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from manga_translator.imaging.fonts import MIN_FONT_PX, FontManager
from manga_translator.models.region import Rectangle

logger = logging.getLogger(__name__)

TEXT_COLOR = "black"


def measure_width(text: str, font: ImageFont.FreeTypeFont) -> float:
    return font.getlength(text)


def fit_font_size(
    text: str,
    max_width: int,
    start_size: int,
    fonts: FontManager,
    min_size: int = MIN_FONT_PX,
) -> Tuple[int, ImageFont.FreeTypeFont]:
    """
    Find the largest size <= start_size at which ``text`` fits ``max_width``.

    Returns:
        (size, font); size is never below ``min_size``.
    """
    size = max(int(start_size), min_size)
    font = fonts.get(size)
    while measure_width(text, font) > max_width and size > min_size:
        size -= 1
        font = fonts.get(size)
    return size, font


def text_origin(region: Rectangle, text: str, font: ImageFont.FreeTypeFont) -> Tuple[int, int]:
    """
    Left edge and baseline that center ``text`` inside ``region``.
    """
    ascent, descent = font.getmetrics()
    width = measure_width(text, font)
    x = region.x + int((region.width - width) / 2)
    y = region.y + int((region.height - (ascent + descent)) / 2) + ascent
    return x, y


def render_text(
    image: Image.Image,
    region: Rectangle,
    text: str,
    fonts: FontManager,
    min_size: int = MIN_FONT_PX,
    color: Union[str, Tuple[int, ...]] = TEXT_COLOR,
) -> int:
    """
    Draw ``text`` centered in ``region`` directly onto ``image``.

    Returns:
        The font size that was used.
    """
    if not text:
        raise ValueError("render_text requires non-empty text")

    size, font = fit_font_size(text, region.width, region.height, fonts, min_size)
    x, baseline = text_origin(region, text, font)

    draw = ImageDraw.Draw(image)
    draw.fontmode = "L"  # anti-aliased glyphs
    draw.text((x, baseline), text, font=font, fill=color, anchor="ls")

    logger.debug(f"Rendered {text!r} at {size}px in region {region.as_tuple()}")
    return size
