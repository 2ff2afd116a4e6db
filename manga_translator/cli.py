"""
Command line entry point.

Usage:
  manga-translate page.png page.en.png
  manga-translate page.jpg out.png --source-lang ja --target-lang en --log-level DEBUG
"""

# Load .env from the working directory before settings are read
from dotenv import find_dotenv, load_dotenv
load_dotenv(find_dotenv(usecwd=True))

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from manga_translator.config import get_settings
from manga_translator.errors import ConfigurationError, MangaTranslatorError
from manga_translator.logging_config import setup_logging
from manga_translator.services.pipeline import TranslationPipeline
from manga_translator.utils.image_utils import load_image, save_image

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="manga-translate",
        description="Detect text in an image, translate it and render the translation in place.",
    )
    ap.add_argument("input", help="Input image path")
    ap.add_argument("output", help="Output image path (written as PNG)")
    ap.add_argument("--source-lang", default=None, help="Source language tag (default: SOURCE_LANG)")
    ap.add_argument("--target-lang", default=None, help="Target language tag (default: TARGET_LANG)")
    ap.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL)")
    return ap


def run(input_path: str, output_path: str, pipeline: TranslationPipeline, max_input_bytes: int) -> int:
    """
    Translate one file. Returns a process exit code.
    """
    path = Path(input_path)
    if not path.is_file():
        logger.error(f"Input file not found: {input_path}")
        return 1
    
    size = path.stat().st_size
    if size > max_input_bytes:
        logger.warning(
            f"Input file size is over {max_input_bytes // 1024} KB ({size // 1024} KB). "
            "This may exceed the OCR free tier limit and cause timeouts or errors."
        )
    
    logger.info(f"Starting translation for: {input_path}")
    try:
        image = load_image(path)
        result = pipeline.run(image)
        if result.status == "skipped":
            logger.info("No text detected. Nothing to do.")
            return 0
        save_image(result.image, output_path)
    except MangaTranslatorError as e:
        logger.error(f"Translation failed: {e}")
        return 1
    
    logger.info(f"Process complete. Translated image saved as '{output_path}' ({result.time_ms}ms)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    
    setup_logging(args.log_level or settings.LOG_LEVEL, settings.LOG_DIR)
    
    if not settings.OCR_SPACE_API_KEY:
        logger.error(str(ConfigurationError(
            "Please get a free API key from https://ocr.space/ and set OCR_SPACE_API_KEY."
        )))
        return 1
    
    pipeline = TranslationPipeline.from_settings(settings)
    if args.source_lang:
        pipeline.source_lang = args.source_lang
    if args.target_lang:
        pipeline.target_lang = args.target_lang
    
    return run(args.input, args.output, pipeline, settings.MAX_INPUT_BYTES)


if __name__ == "__main__":
    sys.exit(main())
