"""
Bytes-in / bytes-out wrapper around the translation pipeline for the HTTP API.
"""

import base64
import logging
from typing import Optional

from manga_translator.config import get_settings
from manga_translator.models.translate import TranslateResultData, UnitModel
from manga_translator.services.pipeline import TranslationPipeline
from manga_translator.utils.image_utils import decode_image, encode_image

logger = logging.getLogger(__name__)


class ImageTranslateService:
    """
    Decodes an uploaded image, runs the pipeline and encodes the result as PNG.
    """
    
    def __init__(self, pipeline: TranslationPipeline) -> None:
        self.pipeline = pipeline
    
    def translate_image(
        self,
        image_bytes: bytes,
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
    ) -> TranslateResultData:
        """
        Translate the text in an encoded image.
        
        Raises:
            MangaTranslatorError: on any fatal pipeline error
        """
        image = decode_image(image_bytes)
        
        pipeline = self.pipeline
        if source_lang or target_lang:
            pipeline = TranslationPipeline(
                detector=pipeline.detector,
                translator=pipeline.translator,
                fonts=pipeline.fonts,
                source_lang=source_lang or pipeline.source_lang,
                target_lang=target_lang or pipeline.target_lang,
                concurrency=pipeline.concurrency,
                min_font_px=pipeline.min_font_px,
            )
        
        result = pipeline.run(image)
        data = TranslateResultData(
            status=result.status,
            reason=result.reason,
            regions=len(result.units),
            units=[UnitModel.from_unit(u) for u in result.units],
            time_ms=result.time_ms,
        )
        if result.image is not None:
            data.output_image_base64 = base64.b64encode(encode_image(result.image, "PNG")).decode("utf-8")
        return data


_service: Optional[ImageTranslateService] = None


def get_image_translate_service() -> ImageTranslateService:
    """Get singleton ImageTranslateService built from settings."""
    global _service
    if _service is None:
        _service = ImageTranslateService(TranslationPipeline.from_settings(get_settings()))
    return _service
