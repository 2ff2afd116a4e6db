"""
Pydantic models for translate API request/response.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from manga_translator.models.region import TranslationUnit


class RegionModel(BaseModel):
    """Pixel bounding box of a text line."""
    
    x: int
    y: int
    width: int
    height: int


class UnitModel(BaseModel):
    """One detected line and its translation."""
    
    region: RegionModel
    original_text: str
    translated_text: str = ""
    
    @classmethod
    def from_unit(cls, unit: TranslationUnit) -> "UnitModel":
        r = unit.region
        return cls(
            region=RegionModel(x=r.x, y=r.y, width=r.width, height=r.height),
            original_text=unit.original_text,
            translated_text=unit.translated_text or "",
        )


class TranslateResultData(BaseModel):
    """Data returned from a translation run."""
    
    status: Literal["processed", "skipped", "error"] = Field(
        description="Processing status"
    )
    reason: str = Field(description="Status reason/description")
    regions: int = Field(default=0, description="Number of text regions processed")
    units: List[UnitModel] = Field(default_factory=list, description="Detected lines and translations")
    time_ms: int = Field(default=0, description="Processing time in milliseconds")
    output_image_base64: Optional[str] = Field(
        default=None,
        description="Translated PNG as base64 string"
    )


class TranslateResponse(BaseModel):
    """Standard API response for translation endpoints."""
    
    success: bool = Field(description="Whether the request was successful")
    data: Optional[TranslateResultData] = Field(
        default=None,
        description="Translation result data"
    )
    error: Optional[str] = Field(
        default=None,
        description="Error message if success=false"
    )


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(default="ok")
    version: str = Field(default="0.1.0")
