"""
Image decode/encode helpers (Pillow).
"""

import io
import logging
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from manga_translator.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

# Register AVIF/HEIF support
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    logger.debug("AVIF/HEIF support enabled")
except ImportError:
    logger.debug("pillow-heif not installed, AVIF/HEIF input unavailable")


def to_rgb(img: Image.Image) -> Image.Image:
    """
    Normalize to RGB, flattening any transparency onto white.
    """
    if img.mode == "RGB":
        return img
    if img.mode in ("RGBA", "LA", "P"):
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background
    return img.convert("RGB")


def decode_image(image_bytes: bytes) -> Image.Image:
    """
    Decode raw bytes into an RGB image.
    
    Raises:
        DecodeError: when the bytes are not a readable image
    """
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e
    
    logger.info(f"Image format: {img.format}, size: {img.size}, mode: {img.mode}")
    return to_rgb(img)


def load_image(path: Union[str, Path]) -> Image.Image:
    """Read and decode an image file."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise DecodeError(f"Cannot read {path}: {e}") from e
    return decode_image(data)


def encode_image(img: Image.Image, fmt: str = "PNG") -> bytes:
    """
    Encode an image to bytes.
    
    Raises:
        EncodeError: when Pillow cannot write the format
    """
    output = io.BytesIO()
    try:
        img.save(output, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Cannot encode image as {fmt}: {e}") from e
    return output.getvalue()


def encode_jpeg(img: Image.Image, quality: int = 95) -> bytes:
    """JPEG bytes for upload to the OCR service."""
    output = io.BytesIO()
    try:
        to_rgb(img).save(output, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodeError(f"Cannot encode image as JPEG: {e}") from e
    return output.getvalue()


def save_image(img: Image.Image, path: Union[str, Path], fmt: str = "PNG") -> None:
    """Encode first, then write, so a failed encode never leaves a partial file."""
    data = encode_image(img, fmt)
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise EncodeError(f"Cannot write {path}: {e}") from e
    logger.info(f"Saved {fmt} image to {path} ({len(data)} bytes)")
