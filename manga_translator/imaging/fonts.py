"""
Bold font discovery and a small size-keyed font cache.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from PIL import ImageFont

logger = logging.getLogger(__name__)

MIN_FONT_PX = 6


def discover_default_fonts() -> List[str]:
    candidates = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/liberation-sans/LiberationSans-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        "/Library/Fonts/Arial Bold.ttf",
        "C:\\Windows\\Fonts\\arialbd.ttf",
    ]
    return [p for p in candidates if os.path.exists(p)]


class FontManager:
    """
    Loads the first usable bold TrueType font at a given pixel size.

    When no font file can be found, Pillow's bundled scalable default
    font is used instead.
    """

    def __init__(self, font_paths: Optional[List[str]] = None) -> None:
        paths = [p for p in (font_paths or []) if p and os.path.exists(p)]
        self.font_paths = paths + [p for p in discover_default_fonts() if p not in paths]
        if not self.font_paths:
            logger.warning("No bold system font found, using Pillow's default font")
        self._cache: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}

    def get(self, size: int) -> ImageFont.FreeTypeFont:
        size = int(max(1, size))
        for fp in self.font_paths:
            key = (fp, size)
            if key in self._cache:
                return self._cache[key]
            try:
                font = ImageFont.truetype(fp, size=size)
            except OSError as e:
                logger.debug(f"Cannot load font {fp}: {e}")
                continue
            self._cache[key] = font
            return font

        key = ("<default>", size)
        if key not in self._cache:
            self._cache[key] = ImageFont.load_default(size=size)
        return self._cache[key]
