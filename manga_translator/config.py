"""
Configuration management using pydantic-settings.
Loads from environment variables and .env file.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class TranslateConfig(BaseSettings):
    """
    Pipeline settings.
    
    These settings can be overridden with environment variables.
    """
    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Manga Translate API"
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    
    # CORS settings (comma-separated string)
    BACKEND_CORS_ORIGINS: str = "*"
    
    # OCR.space
    OCR_SPACE_API_KEY: Optional[str] = None
    OCR_API_URL: str = "https://api.ocr.space/parse/image"
    OCR_LANGUAGE: str = "jpn"
    OCR_ENGINE: int = 5
    OCR_TIMEOUT: float = 60.0
    
    # MyMemory
    TRANSLATE_API_URL: str = "https://api.mymemory.translated.net/get"
    TRANSLATE_TIMEOUT: float = 30.0
    SOURCE_LANG: str = "ja"
    TARGET_LANG: str = "en"
    TRANSLATE_CONCURRENCY: int = 1
    
    # Input guard (free OCR tier rejects or times out on large uploads)
    MAX_INPUT_BYTES: int = 1024 * 1024
    
    # Font Configuration
    MIN_FONT_PX: int = 6
    FONT_PATHS: str = ""
    
    @field_validator("OCR_SPACE_API_KEY", mode="before")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        """
        Warn early when OCR credentials are missing.
        """
        if not v:
            logger.warning("OCR_SPACE_API_KEY is not set. Text detection will not work.")
        return v or None
    
    @field_validator("TRANSLATE_CONCURRENCY", "MIN_FONT_PX")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v
    
    def font_paths(self) -> List[str]:
        """Extra font files, in priority order."""
        return [p.strip() for p in self.FONT_PATHS.split(",") if p.strip()]
    
    class Config:
        case_sensitive = True
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Allow extra fields in .env


class Settings(TranslateConfig):
    """
    Combined application settings.
    """
    pass


# Create settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
