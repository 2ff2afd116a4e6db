"""Tests for the command line surface."""

import importlib
import logging
import os

import pytest
from PIL import Image

from manga_translator import cli
from manga_translator.config import Settings
from manga_translator.errors import DecodeError, TransportError
from manga_translator.models.region import Rectangle, TranslationUnit
from manga_translator.services.pipeline import PipelineResult
from manga_translator.utils.image_utils import decode_image


class _FakePipeline:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.images = []

    def run(self, image):
        self.images.append(image)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def input_png(tmp_path):
    path = tmp_path / "page.png"
    Image.new("RGB", (40, 30), (200, 200, 200)).save(path)
    return path


def _processed():
    out = Image.new("RGB", (40, 30), (255, 255, 255))
    unit = TranslationUnit(Rectangle(0, 0, 10, 10), "あ", "A")
    return PipelineResult(status="processed", reason="ok", units=[unit], image=out)


def test_missing_input_is_fatal(tmp_path):
    pipeline = _FakePipeline(result=_processed())
    code = cli.run(str(tmp_path / "nope.png"), str(tmp_path / "out.png"), pipeline, 1024)
    assert code == 1
    assert pipeline.images == []
    assert not (tmp_path / "out.png").exists()


def test_success_writes_png(tmp_path, input_png):
    out = tmp_path / "out.png"
    code = cli.run(str(input_png), str(out), _FakePipeline(result=_processed()), 1024 * 1024)
    assert code == 0
    with Image.open(out) as img:
        assert img.format == "PNG"
        assert img.size == (40, 30)


def test_nothing_to_do_writes_nothing(tmp_path, input_png):
    out = tmp_path / "out.png"
    pipeline = _FakePipeline(result=PipelineResult(status="skipped", reason="no_text"))
    assert cli.run(str(input_png), str(out), pipeline, 1024 * 1024) == 0
    assert not out.exists()


def test_fatal_error_writes_nothing(tmp_path, input_png):
    out = tmp_path / "out.png"
    pipeline = _FakePipeline(error=TransportError("OCR.space API", 500, "down"))
    assert cli.run(str(input_png), str(out), pipeline, 1024 * 1024) == 1
    assert not out.exists()


def test_undecodable_input_is_fatal(tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not an image")
    pipeline = _FakePipeline(result=_processed())
    assert cli.run(str(bad), str(tmp_path / "out.png"), pipeline, 1024 * 1024) == 1
    assert pipeline.images == []


def test_decompression_bomb_is_a_decode_error(tmp_path, input_png, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    out = tmp_path / "out.png"
    pipeline = _FakePipeline(result=_processed())

    with pytest.raises(DecodeError):
        decode_image(input_png.read_bytes())
    assert cli.run(str(input_png), str(out), pipeline, 1024 * 1024) == 1
    assert pipeline.images == []
    assert not out.exists()


def test_dotenv_in_working_directory_is_loaded(tmp_path, monkeypatch):
    name = "MANGA_TRANSLATE_DOTENV_CHECK"
    monkeypatch.delenv(name, raising=False)
    (tmp_path / ".env").write_text(f"{name}=from-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    try:
        importlib.reload(cli)
        assert os.environ[name] == "from-dotenv"
    finally:
        os.environ.pop(name, None)


def test_oversized_input_warns_and_proceeds(tmp_path, input_png, caplog):
    out = tmp_path / "out.png"
    with caplog.at_level(logging.WARNING, logger="manga_translator.cli"):
        code = cli.run(str(input_png), str(out), _FakePipeline(result=_processed()), max_input_bytes=10)
    assert code == 0
    assert out.exists()
    assert any("over" in r.getMessage() for r in caplog.records if r.levelno == logging.WARNING)


def test_main_requires_api_key(tmp_path, input_png, monkeypatch):
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(OCR_SPACE_API_KEY=None))
    monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)
    assert cli.main([str(input_png), str(tmp_path / "out.png")]) == 1
    assert not (tmp_path / "out.png").exists()


def test_main_wires_language_overrides(tmp_path, input_png, monkeypatch):
    seen = {}

    def _fake_run(input_path, output_path, pipeline, max_input_bytes):
        seen["pipeline"] = pipeline
        seen["max"] = max_input_bytes
        return 0

    monkeypatch.setattr(cli, "get_settings", lambda: Settings(OCR_SPACE_API_KEY="k", MAX_INPUT_BYTES=123))
    monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(cli, "run", _fake_run)

    code = cli.main([str(input_png), "out.png", "--source-lang", "ko", "--target-lang", "fr"])

    assert code == 0
    assert seen["max"] == 123
    assert seen["pipeline"].source_lang == "ko"
    assert seen["pipeline"].target_lang == "fr"
