"""
Translation API endpoints.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from manga_translator.errors import MangaTranslatorError
from manga_translator.models.translate import (
    HealthResponse,
    TranslateResponse,
    TranslateResultData,
)
from manga_translator.services.image_service import (
    ImageTranslateService,
    get_image_translate_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """
    Health check endpoint.
    Returns service status and version.
    """
    return HealthResponse(status="ok", version="0.1.0")


@router.post(
    "/api/v1/translate",
    response_model=TranslateResponse,
    tags=["Translation"],
    summary="Translate image (multipart upload)",
    description="Upload an image and get it back with detected text replaced by its translation."
)
def translate_image(
    file: Annotated[UploadFile, File(description="Image file to translate")],
    source_lang: Annotated[Optional[str], Form()] = None,
    target_lang: Annotated[Optional[str], Form()] = None,
    service: ImageTranslateService = Depends(get_image_translate_service),
) -> TranslateResponse:
    """
    Translate the text in an uploaded image.
    
    The image is processed through:
    1. OCR to detect text lines
    2. Translation of each line
    3. Painting over the original text
    4. Rendering the translated text centered in each line box
    
    Returns the processed image as base64 PNG.
    """
    if file.content_type and not file.content_type.startswith("image/"):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {file.content_type}. Expected image/*"
        )
    
    image_bytes = file.file.read()
    try:
        result = service.translate_image(
            image_bytes=image_bytes,
            source_lang=source_lang,
            target_lang=target_lang,
        )
        return TranslateResponse(success=True, data=result)
    except MangaTranslatorError as e:
        logger.error(f"Translation of {file.filename} failed: {e}")
        return TranslateResponse(
            success=False,
            error=str(e),
            data=TranslateResultData(
                status="error",
                reason=str(e)
            )
        )
