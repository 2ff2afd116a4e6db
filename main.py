"""
FastAPI application entry point for the image translation service.
"""

# Load .env before settings are read
from dotenv import load_dotenv
load_dotenv()

import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from manga_translator.api.translate import router as translate_router
from manga_translator.config import get_settings
from manga_translator.logging_config import setup_logging


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=(
            "API service that detects text in images (manga pages, signs, screenshots), "
            "translates it and renders the translation over the original text."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    cors_origins = [o.strip() for o in settings.BACKEND_CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(translate_router)

    if not settings.OCR_SPACE_API_KEY:
        logging.getLogger(__name__).warning(
            "OCR_SPACE_API_KEY is not set; /api/v1/translate requests will fail."
        )

    return app


# Application instance
app = create_app()


def run():
    """Run the application with uvicorn."""
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    run()
