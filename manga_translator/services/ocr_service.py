"""
OCR.space client - text detection with word-level overlay.

API docs: https://ocr.space/ocrapi

The image is uploaded as JPEG; the raw response body is returned so the
region parser can pull out only the fields it needs.
"""

import logging
from typing import List, Optional

import httpx
from PIL import Image

from manga_translator.config import Settings, get_settings
from manga_translator.errors import ConfigurationError, TransportError
from manga_translator.models.region import TranslationUnit
from manga_translator.parsing.regions import parse_ocr_payload
from manga_translator.utils.image_utils import encode_jpeg

logger = logging.getLogger(__name__)

SERVICE_NAME = "OCR.space API"


class OcrSpaceClient:
    """
    OCR.space text detection.
    
    Usage:
        client = OcrSpaceClient(api_key="...")
        units = client.detect_text(image)
    """
    
    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.ocr.space/parse/image",
        language: str = "jpn",
        engine: int = 5,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            api_key: OCR.space API key
            api_url: endpoint URL
            language: OCR language hint (e.g. jpn, eng)
            engine: OCR engine number
            timeout: request timeout in seconds
            transport: optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.language = language
        self.engine = engine
        self.timeout = timeout
        self._transport = transport
    
    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "OcrSpaceClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.OCR_SPACE_API_KEY,
            api_url=settings.OCR_API_URL,
            language=settings.OCR_LANGUAGE,
            engine=settings.OCR_ENGINE,
            timeout=settings.OCR_TIMEOUT,
            **kwargs,
        )
    
    def _form_fields(self) -> dict:
        return {
            "apikey": self.api_key,
            "language": self.language,
            "OCREngine": str(self.engine),
            "isOverlayRequired": "true",
            "detectOrientation": "true",
            "scale": "true",
        }
    
    def recognize(self, jpeg_bytes: bytes) -> str:
        """
        Upload an image and return the raw response body.
        
        Raises:
            ConfigurationError: no API key configured
            TransportError: network failure or non-2xx status
        """
        if not self.api_key:
            raise ConfigurationError("OCR_SPACE_API_KEY is not set. Get a free key from https://ocr.space/")
        
        logger.info(f"Calling OCR.space API: {self.api_url} ({len(jpeg_bytes)} bytes)")
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    self.api_url,
                    data=self._form_fields(),
                    files={"file": ("image.jpg", jpeg_bytes, "image/jpeg")},
                )
        except httpx.TimeoutException as e:
            raise TransportError(SERVICE_NAME, None, f"timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            raise TransportError(SERVICE_NAME, None, str(e)) from e
        
        logger.debug(f"Raw OCR.space response: {response.text}")
        if not response.is_success:
            raise TransportError(SERVICE_NAME, response.status_code, response.text)
        return response.text
    
    def detect_text(self, image: Image.Image) -> List[TranslationUnit]:
        """Run OCR on a decoded image and return one unit per detected line."""
        payload = self.recognize(encode_jpeg(image))
        return parse_ocr_payload(payload)
