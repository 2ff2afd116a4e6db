"""
Translation pipeline: detect -> translate -> clean -> render.

Decoding the input and encoding the result are left to the caller
(CLI or HTTP endpoint) so the pipeline works on in-memory images only.
"""

import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from PIL import Image

from manga_translator.config import Settings, get_settings
from manga_translator.imaging.cleaner import clean_image
from manga_translator.imaging.fonts import FontManager
from manga_translator.imaging.render import render_text
from manga_translator.models.region import TranslationUnit
from manga_translator.services.ocr_service import OcrSpaceClient
from manga_translator.services.translate_service import MyMemoryTranslator

logger = logging.getLogger(__name__)

# OCR artifacts commonly misread from speech-bubble borders and furigana
ARTIFACT_RE = re.compile(r"[/′:・C【】１２\-〃」]")


class TextDetector(Protocol):
    def detect_text(self, image: Image.Image) -> List[TranslationUnit]: ...


class Translator(Protocol):
    def translate(self, text: str, source_lang: str, target_lang: str) -> str: ...


@dataclass
class PipelineResult:
    status: str  # "processed" or "skipped"
    reason: str = ""
    units: List[TranslationUnit] = field(default_factory=list)
    image: Optional[Image.Image] = None
    time_ms: int = 0


def now_ms() -> int:
    return int(time.time() * 1000)


def clean_source_text(text: str) -> str:
    """Strip OCR artifact characters before translation."""
    return ARTIFACT_RE.sub("", text).strip()


class TranslationPipeline:
    """
    Runs one image through OCR, translation, cleaning and rendering.

    Any collaborator error aborts the run; nothing is returned for
    partially processed images.
    """

    def __init__(
        self,
        detector: TextDetector,
        translator: Translator,
        fonts: Optional[FontManager] = None,
        source_lang: str = "ja",
        target_lang: str = "en",
        concurrency: int = 1,
        min_font_px: int = 6,
    ) -> None:
        self.detector = detector
        self.translator = translator
        self.fonts = fonts or FontManager()
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.concurrency = max(1, concurrency)
        self.min_font_px = min_font_px

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TranslationPipeline":
        settings = settings or get_settings()
        return cls(
            detector=OcrSpaceClient.from_settings(settings),
            translator=MyMemoryTranslator.from_settings(settings),
            fonts=FontManager(settings.font_paths()),
            source_lang=settings.SOURCE_LANG,
            target_lang=settings.TARGET_LANG,
            concurrency=settings.TRANSLATE_CONCURRENCY,
            min_font_px=settings.MIN_FONT_PX,
        )

    def _translate_one(self, unit: TranslationUnit) -> str:
        text = clean_source_text(unit.original_text)
        if not text:
            return ""
        translated = self.translator.translate(text, self.source_lang, self.target_lang)
        logger.info(f"  '{unit.original_text}' -> '{translated}'")
        return translated

    def translate_units(self, units: List[TranslationUnit]) -> None:
        """Fill ``translated_text`` on every unit, preserving source order."""
        if self.concurrency == 1 or len(units) < 2:
            results = [self._translate_one(u) for u in units]
        else:
            with ThreadPoolExecutor(max_workers=self.concurrency) as executor:
                # map() yields in submission order; the first failure re-raises here
                results = list(executor.map(self._translate_one, units))

        for unit, translated in zip(units, results):
            unit.translated_text = translated

    def render_units(self, image: Image.Image, units: List[TranslationUnit]) -> Image.Image:
        """Clean every region, then draw the translations onto the cleaned copy."""
        cleaned = clean_image(image, [u.region for u in units])
        for unit in units:
            if unit.needs_render:
                render_text(cleaned, unit.region, unit.translated_text, self.fonts, self.min_font_px)
        return cleaned

    def run(self, image: Image.Image) -> PipelineResult:
        """
        Translate the text in ``image``.

        Returns:
            PipelineResult; ``status == "skipped"`` when no text was found.
        """
        t0 = now_ms()

        logger.info("Step 1: Detecting text...")
        units = self.detector.detect_text(image)
        if not units:
            logger.info("No text detected.")
            return PipelineResult(status="skipped", reason="no_text", time_ms=now_ms() - t0)
        logger.info(f"Detected {len(units)} text fragments.")

        logger.info("Step 2: Translating text...")
        self.translate_units(units)

        logger.info("Step 3: Cleaning original text and rendering translations...")
        out = self.render_units(image, units)

        return PipelineResult(
            status="processed",
            reason="ok",
            units=units,
            image=out,
            time_ms=now_ms() - t0,
        )
