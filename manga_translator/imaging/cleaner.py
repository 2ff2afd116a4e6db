"""
Paint detected text regions out of an image.
"""

import logging
from typing import Iterable, Union, Tuple

from PIL import Image, ImageColor, ImageDraw

from manga_translator.models.region import Rectangle

logger = logging.getLogger(__name__)

DEFAULT_FILL = "white"


def clean_image(
    image: Image.Image,
    regions: Iterable[Rectangle],
    fill: Union[str, Tuple[int, ...]] = DEFAULT_FILL,
) -> Image.Image:
    """
    Return a copy of ``image`` with every region filled with a solid color.
    
    The source image is left untouched. Regions are painted in the order
    given; empty regions paint nothing.
    """
    cleaned = image.copy()
    if isinstance(fill, str):
        fill = ImageColor.getcolor(fill, cleaned.mode)
    
    draw = ImageDraw.Draw(cleaned)
    painted = 0
    for r in regions:
        if r.is_empty():
            continue
        # PIL rectangles include the end coordinate
        draw.rectangle([r.x, r.y, r.right - 1, r.bottom - 1], fill=fill)
        painted += 1
    
    logger.debug(f"Cleaned {painted} regions on {cleaned.size[0]}x{cleaned.size[1]} image")
    return cleaned
