"""Tests for OCR payload -> translation unit reconstruction."""

import pytest

from manga_translator.errors import MalformedLineError, ProcessingError
from manga_translator.models.region import Rectangle, Token
from manga_translator.parsing.aggregate import aggregate_tokens
from manga_translator.parsing.regions import (
    DEFAULT_ERROR_MESSAGE,
    parse_line,
    parse_ocr_payload,
    parse_translation_payload,
)
from payloads import compact, make_line, make_ocr_payload, make_translation_payload, make_word


class TestAggregateTokens:

    def test_two_tokens(self):
        tokens = [Token(0, 0, 10, 10), Token(20, 5, 10, 10)]
        assert aggregate_tokens(tokens) == Rectangle(0, 0, 30, 15)

    def test_single_token(self):
        assert aggregate_tokens([Token(3, 4, 5, 6)]) == Rectangle(3, 4, 5, 6)

    def test_empty_is_rejected(self):
        with pytest.raises(ValueError):
            aggregate_tokens([])


class TestParseOcrPayload:

    def test_single_line(self):
        payload = make_ocr_payload([make_line("こんにちは", [(10, 10, 20, 20), (40, 10, 20, 20)])])
        units = parse_ocr_payload(payload)
        assert len(units) == 1
        assert units[0].region == Rectangle(10, 10, 50, 20)
        assert units[0].original_text == "こんにちは"
        assert units[0].translated_text is None

    def test_lines_keep_source_order(self):
        payload = make_ocr_payload([
            make_line("一", [(50, 50, 10, 10)]),
            make_line("二", [(0, 0, 10, 10)]),
            make_line("三", [(20, 20, 10, 10)]),
        ])
        assert [u.original_text for u in parse_ocr_payload(payload)] == ["一", "二", "三"]

    def test_float_coordinates_are_truncated(self):
        payload = make_ocr_payload([make_line("a", [(10.9, 5.5, 20.7, 9.99)])])
        assert parse_ocr_payload(payload)[0].region == Rectangle(10, 5, 20, 9)

    def test_processing_error_with_message(self):
        payload = make_ocr_payload([], errored=True, error_message="File failed validation")
        with pytest.raises(ProcessingError) as exc:
            parse_ocr_payload(payload)
        assert exc.value.message == "File failed validation"
        assert "File failed validation" in str(exc.value)

    def test_processing_error_wins_over_lines(self):
        payload = make_ocr_payload([make_line("a", [(0, 0, 1, 1)])], errored=True, error_message="boom")
        with pytest.raises(ProcessingError):
            parse_ocr_payload(payload)

    def test_processing_error_without_message(self):
        with pytest.raises(ProcessingError) as exc:
            parse_ocr_payload(make_ocr_payload([], errored=True))
        assert exc.value.message == DEFAULT_ERROR_MESSAGE

    def test_processing_error_with_array_message_uses_default(self):
        payload = make_ocr_payload([], errored=True, error_message=["Timed out waiting for results"])
        with pytest.raises(ProcessingError) as exc:
            parse_ocr_payload(payload)
        assert exc.value.message == DEFAULT_ERROR_MESSAGE

    def test_missing_lines_is_empty(self):
        assert parse_ocr_payload(compact({"ParsedResults": [], "IsErroredOnProcessing": False})) == []

    def test_empty_payload_is_empty(self):
        assert parse_ocr_payload("") == []

    def test_line_without_words_is_dropped(self):
        payload = make_ocr_payload([
            {"LineText": "no words here"},
            make_line("kept", [(1, 1, 2, 2)]),
        ])
        assert [u.original_text for u in parse_ocr_payload(payload)] == ["kept"]

    def test_line_with_empty_words_is_dropped(self):
        payload = make_ocr_payload([make_line("empty", [])])
        assert parse_ocr_payload(payload) == []

    def test_line_without_text_is_dropped(self):
        payload = make_ocr_payload([{"Words": [make_word(0, 0, 5, 5)]}])
        assert parse_ocr_payload(payload) == []

    def test_malformed_word_skips_only_that_line(self):
        bad_word = {"Left": 1, "Top": 1, "Width": 5}
        payload = make_ocr_payload([
            make_line("first", [(0, 0, 5, 5)]),
            {"LineText": "broken", "Words": [make_word(0, 0, 5, 5), bad_word]},
            make_line("third", [(10, 10, 5, 5)]),
        ])
        assert [u.original_text for u in parse_ocr_payload(payload)] == ["first", "third"]

    def test_non_numeric_box_skips_line(self):
        payload = make_ocr_payload([
            {"LineText": "neg", "Words": [make_word(-3, 0, 5, 5)]},
            make_line("ok", [(0, 0, 5, 5)]),
        ])
        assert [u.original_text for u in parse_ocr_payload(payload)] == ["ok"]

    def test_out_of_range_box_skips_line(self):
        huge = int("1" + "9" * 400)
        payload = make_ocr_payload([
            make_line("ok", [(0, 0, 5, 5)]),
            {"LineText": "huge", "Words": [make_word(huge, 0, 5, 5)]},
        ])
        assert [u.original_text for u in parse_ocr_payload(payload)] == ["ok"]

    def test_out_of_range_box_outcome(self):
        line = compact({"LineText": "x", "Words": [make_word(0, int("9" * 400), 5, 5)]})
        outcome = parse_line(line)
        assert not outcome.ok
        assert isinstance(outcome.error, MalformedLineError)

    def test_every_unit_has_a_region(self):
        payload = make_ocr_payload([
            make_line("a", [(0, 0, 4, 4), (8, 0, 4, 4)]),
            make_line("b", []),
            make_line("c", [(5, 5, 5, 5)]),
        ])
        units = parse_ocr_payload(payload)
        assert len(units) == 2
        assert all(u.region.width > 0 and u.region.height > 0 for u in units)


class TestParseLine:

    def test_outcome_for_good_line(self):
        outcome = parse_line(compact(make_line("x", [(0, 0, 1, 1)])))
        assert outcome.ok
        assert outcome.error is None

    def test_outcome_for_missing_text(self):
        outcome = parse_line(compact({"Words": []}))
        assert not outcome.ok
        assert outcome.skipped == "no_text"

    def test_outcome_for_missing_words(self):
        outcome = parse_line(compact({"LineText": "x"}))
        assert outcome.skipped == "no_words"

    def test_outcome_for_malformed_word(self):
        outcome = parse_line(compact({"LineText": "x", "Words": [{"Left": 1}]}))
        assert not outcome.ok
        assert isinstance(outcome.error, MalformedLineError)


class TestParseTranslationPayload:

    def test_extracts_translated_text(self):
        assert parse_translation_payload(make_translation_payload("Hello")) == "Hello"

    def test_missing_field(self):
        assert parse_translation_payload(compact({"responseStatus": 403})) == ""
