"""
MyMemory machine translation client.

API docs: https://mymemory.translated.net/doc/spec.php
"""

import logging
from typing import Optional

import httpx

from manga_translator.config import Settings, get_settings
from manga_translator.errors import TransportError
from manga_translator.parsing.regions import parse_translation_payload

logger = logging.getLogger(__name__)

SERVICE_NAME = "MyMemory API"


class MyMemoryTranslator:
    """
    Text translation through the free MyMemory endpoint.
    
    Usage:
        translator = MyMemoryTranslator()
        text = translator.translate("こんにちは", "ja", "en")
    """
    
    def __init__(
        self,
        api_url: str = "https://api.mymemory.translated.net/get",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport
    
    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "MyMemoryTranslator":
        settings = settings or get_settings()
        return cls(
            api_url=settings.TRANSLATE_API_URL,
            timeout=settings.TRANSLATE_TIMEOUT,
            **kwargs,
        )
    
    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """
        Translate one piece of text.
        
        Returns:
            The translated text, or "" when the response carries none.
        
        Raises:
            TransportError: network failure or non-2xx status
        """
        params = {"q": text, "langpair": f"{source_lang}|{target_lang}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(self.api_url, params=params)
        except httpx.TimeoutException as e:
            raise TransportError(SERVICE_NAME, None, f"timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            raise TransportError(SERVICE_NAME, None, str(e)) from e
        
        if not response.is_success:
            raise TransportError(SERVICE_NAME, response.status_code, response.text)
        return parse_translation_payload(response.text)
