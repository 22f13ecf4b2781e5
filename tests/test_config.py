import logging

import pytest

from ppocr_cli.config import EngineConfig, Settings
from ppocr_cli.errors import InputError
from ppocr_cli.logs import setup_logging

ENV_VARS = (
    "OCR_ENGINE",
    "OCR_MODEL_VERSION",
    "OCR_DET_MODEL",
    "OCR_REC_MODEL",
    "OCR_KEYS",
    "OCR_RECT_BORDER_SIZE",
    "OCR_MERGE_BOXES",
    "OCR_MERGE_THRESHOLD",
    "TESSERACT_PATH",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = Settings.from_env()
    assert s.ocr_engine == "auto"
    assert s.engine_config() == EngineConfig(
        model_version="v4", rect_border_size=12, merge_boxes=False, merge_threshold=1
    )
    assert s.tesseract_path is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("OCR_ENGINE", " Tesseract ")
    monkeypatch.setenv("OCR_MODEL_VERSION", "V5")
    monkeypatch.setenv("OCR_DET_MODEL", "/models/det.onnx")
    monkeypatch.setenv("OCR_REC_MODEL", "/models/rec.onnx")
    monkeypatch.setenv("OCR_KEYS", "/models/keys_v5.txt")
    monkeypatch.setenv("OCR_RECT_BORDER_SIZE", "4")
    monkeypatch.setenv("OCR_MERGE_BOXES", "yes")
    monkeypatch.setenv("OCR_MERGE_THRESHOLD", "3")

    s = Settings.from_env()
    cfg = s.engine_config()

    assert s.ocr_engine == "tesseract"
    assert cfg.model_version == "v5"
    assert cfg.det_model_path == "/models/det.onnx"
    assert cfg.rec_model_path == "/models/rec.onnx"
    assert (cfg.rect_border_size, cfg.merge_boxes, cfg.merge_threshold) == (4, True, 3)


def test_malformed_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("OCR_RECT_BORDER_SIZE", "twelve")
    assert Settings.from_env().rect_border_size == 12


@pytest.mark.parametrize(
    "kwargs", [{"rect_border_size": -1}, {"merge_threshold": -2}, {"model_version": "v3"}]
)
def test_engine_config_rejects_bad_values(kwargs):
    with pytest.raises(InputError):
        EngineConfig(**kwargs)


def test_setup_logging_levels():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(verbose=False)
        assert root.level == logging.ERROR
        assert len(root.handlers) == 1
        setup_logging(verbose=True)
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)


@pytest.mark.parametrize(
    "paths",
    [
        {},
        {"det_model_path": "det.onnx", "rec_model_path": "rec.onnx"},
        {"det_model_path": "det.onnx", "keys_path": "keys.txt"},
    ],
)
def test_non_bundled_version_needs_all_model_files(paths):
    with pytest.raises(InputError, match="PP-OCRv5"):
        EngineConfig(model_version="v5", **paths)


def test_non_bundled_version_from_env_without_models(monkeypatch):
    monkeypatch.setenv("OCR_MODEL_VERSION", "v5")
    with pytest.raises(InputError):
        Settings.from_env().engine_config()
