"""
Error taxonomy for the translation pipeline.

Everything except MalformedLineError is fatal and aborts the run.
"""

from typing import Optional


class MangaTranslatorError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(MangaTranslatorError):
    """Settings are missing or unusable (e.g. no OCR API key)."""


class ProcessingError(MangaTranslatorError):
    """The OCR service explicitly reported that it failed to process the image."""

    def __init__(self, message: str):
        super().__init__(f"OCR.space API reported an error: {message}")
        self.message = message


class TransportError(MangaTranslatorError):
    """A collaborator HTTP call failed or returned a non-success status."""

    def __init__(self, service: str, status_code: Optional[int], body: str):
        if status_code is None:
            detail = f"{service} request failed: {body}"
        else:
            detail = f"{service} returned HTTP {status_code} with message: {body}"
        super().__init__(detail)
        self.service = service
        self.status_code = status_code
        self.body = body


class MalformedLineError(MangaTranslatorError):
    """A single OCR line could not be parsed. Recoverable: the line is skipped."""


class DecodeError(MangaTranslatorError):
    """Input bytes could not be decoded as an image."""


class EncodeError(MangaTranslatorError):
    """The output image could not be encoded or written."""
