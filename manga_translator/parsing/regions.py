"""
Reconstruction of line-level translation units from OCR.space responses.

Expected payload shape (only the consumed fields are shown):

    {
      "ParsedResults": [{
        "TextOverlay": {
          "Lines": [
            {"LineText": "...", "Words": [{"Left": 10, "Top": 10, "Width": 20, "Height": 20}, ...]},
            ...
          ]
        }
      }],
      "IsErroredOnProcessing": false,
      "ErrorMessage": "..."
    }

A malformed line never fails the whole response; it is logged and skipped.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from manga_translator.errors import MalformedLineError, ProcessingError
from manga_translator.models.region import Token, TranslationUnit
from manga_translator.parsing.aggregate import aggregate_tokens
from manga_translator.parsing.scanner import extract_value, find_keyed_array, iter_objects

logger = logging.getLogger(__name__)

ERROR_FLAG = '"IsErroredOnProcessing":true'
ERROR_MESSAGE_KEY = "ErrorMessage"
DEFAULT_ERROR_MESSAGE = "API returned a processing error."

LINES_KEY = "Lines"
LINE_TEXT_KEY = "LineText"
WORDS_KEY = "Words"
WORD_BOX_KEYS = ("Left", "Top", "Width", "Height")

TRANSLATED_TEXT_KEY = "translatedText"


@dataclass
class LineOutcome:
    """Result of parsing one line object: a unit, a skip reason, or an error."""
    unit: Optional[TranslationUnit] = None
    skipped: str = ""
    error: Optional[MalformedLineError] = None

    @property
    def ok(self) -> bool:
        return self.unit is not None


def _parse_word(word_obj: str) -> Token:
    values = [extract_value(word_obj, key) for key in WORD_BOX_KEYS]
    for key, value in zip(WORD_BOX_KEYS, values):
        if value is None:
            raise MalformedLineError(f"Word is missing {key}: {word_obj}")
    try:
        return Token.from_values(*values)
    except ValueError as e:
        raise MalformedLineError(f"Word has a non-numeric box value: {word_obj}") from e
    except OverflowError as e:
        # digit runs too long for a float come back as inf
        raise MalformedLineError(f"Word has an out-of-range box value: {word_obj}") from e


def parse_line(line_obj: str) -> LineOutcome:
    """Parse one ``{"LineText": ..., "Words": [...]}`` object."""
    text = extract_value(line_obj, LINE_TEXT_KEY)
    if text is None:
        return LineOutcome(skipped="no_text")

    words_span = find_keyed_array(line_obj, WORDS_KEY)
    if words_span is None:
        return LineOutcome(skipped="no_words")
    words_body = line_obj[words_span[0] + 1:words_span[1]]

    try:
        tokens = [_parse_word(word_obj) for word_obj in iter_objects(words_body)]
        if not tokens:
            return LineOutcome(skipped="empty_words")
        region = aggregate_tokens(tokens)
    except MalformedLineError as e:
        return LineOutcome(error=e)
    except ValueError as e:
        return LineOutcome(error=MalformedLineError(f"Invalid word geometry: {e}"))

    return LineOutcome(unit=TranslationUnit(region=region, original_text=text))


def check_processing_error(payload: str) -> None:
    """Raise ProcessingError when the OCR service flagged the request as failed."""
    if ERROR_FLAG not in payload:
        return
    message = extract_value(payload, ERROR_MESSAGE_KEY)
    if not message:
        message = DEFAULT_ERROR_MESSAGE
    raise ProcessingError(message)


def parse_ocr_payload(payload: str) -> List[TranslationUnit]:
    """
    Turn an OCR.space response body into translation units in source order.

    Raises:
        ProcessingError: when the service reported a processing failure
    """
    check_processing_error(payload)

    lines_span = find_keyed_array(payload, LINES_KEY)
    if lines_span is None:
        logger.debug("No Lines array in OCR payload")
        return []
    lines_body = payload[lines_span[0] + 1:lines_span[1]]

    units: List[TranslationUnit] = []
    for line_obj in iter_objects(lines_body):
        logger.debug(f"Parsing line object: {line_obj}")
        outcome = parse_line(line_obj)
        if outcome.ok:
            logger.debug(f"Created translation unit for text: {outcome.unit.original_text}")
            units.append(outcome.unit)
        elif outcome.error is not None:
            logger.debug(f"Skipping malformed line: {outcome.error}")
        else:
            logger.debug(f"Skipping line ({outcome.skipped})")

    logger.debug(f"Finished parsing OCR payload, {len(units)} units")
    return units


def parse_translation_payload(payload: str) -> str:
    """Extract ``translatedText`` from a MyMemory response, or "" when absent."""
    value = extract_value(payload, TRANSLATED_TEXT_KEY)
    if value is None:
        logger.warning("Translation response has no translatedText field")
        return ""
    return value
