"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest
from PIL import Image

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from manga_translator.config import Settings  # noqa: E402
from manga_translator.imaging.fonts import FontManager  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        OCR_SPACE_API_KEY="test-key",
        OCR_API_URL="https://ocr.test/parse/image",
        TRANSLATE_API_URL="https://mt.test/get",
        LOG_DIR=None,
    )


@pytest.fixture(scope="session")
def fonts() -> FontManager:
    return FontManager()


@pytest.fixture
def gray_image() -> Image.Image:
    return Image.new("RGB", (100, 60), (128, 128, 128))
