from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import InputError

MODEL_VERSIONS = ("v4", "v5")

# rapidocr_onnxruntime wheels ship PP-OCRv4 det/rec models and keys
BUNDLED_MODEL_VERSION = "v4"


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _get_path(name: str) -> Optional[str]:
    raw = (os.getenv(name) or "").strip()
    return raw or None


@dataclass(frozen=True)
class EngineConfig:
    # None means "use the models bundled with the engine package"
    det_model_path: Optional[str] = None
    rec_model_path: Optional[str] = None
    keys_path: Optional[str] = None

    model_version: str = "v4"

    # Pixels added on every side of a detected rectangle before cropping.
    rect_border_size: int = 12

    # Merge neighbouring rectangles on the same line.
    merge_boxes: bool = False
    merge_threshold: int = 1

    def __post_init__(self) -> None:
        if self.rect_border_size < 0:
            raise InputError(f"rect_border_size must be >= 0, got {self.rect_border_size}")
        if self.merge_threshold < 0:
            raise InputError(f"merge_threshold must be >= 0, got {self.merge_threshold}")
        if self.model_version not in MODEL_VERSIONS:
            raise InputError(
                f"Unknown model version {self.model_version!r}; expected one of {', '.join(MODEL_VERSIONS)}"
            )
        # the version tag must describe the models that actually get loaded
        explicit = (self.det_model_path, self.rec_model_path, self.keys_path)
        if self.model_version != BUNDLED_MODEL_VERSION and not all(explicit):
            raise InputError(
                f"PP-OCR{self.model_version} needs OCR_DET_MODEL, OCR_REC_MODEL and OCR_KEYS; "
                f"only PP-OCR{BUNDLED_MODEL_VERSION} models are bundled"
            )


@dataclass(frozen=True)
class Settings:
    # OCR backend
    ocr_engine: str  # auto | ppocr | rapidocr | paddle | tesseract

    # Models
    model_version: str
    det_model_path: Optional[str]
    rec_model_path: Optional[str]
    keys_path: Optional[str]

    # Box geometry
    rect_border_size: int
    merge_boxes: bool
    merge_threshold: int

    # Optional explicit tesseract binary (desktop installs)
    tesseract_path: Optional[str]

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            ocr_engine=(os.getenv("OCR_ENGINE") or "auto").strip().lower(),
            model_version=(os.getenv("OCR_MODEL_VERSION") or "v4").strip().lower(),
            det_model_path=_get_path("OCR_DET_MODEL"),
            rec_model_path=_get_path("OCR_REC_MODEL"),
            keys_path=_get_path("OCR_KEYS"),
            rect_border_size=_get_int("OCR_RECT_BORDER_SIZE", 12),
            merge_boxes=_get_bool("OCR_MERGE_BOXES", False),
            merge_threshold=_get_int("OCR_MERGE_THRESHOLD", 1),
            tesseract_path=_get_path("TESSERACT_PATH"),
        )

    def engine_config(self) -> EngineConfig:
        return EngineConfig(
            det_model_path=self.det_model_path,
            rec_model_path=self.rec_model_path,
            keys_path=self.keys_path,
            model_version=self.model_version,
            rect_border_size=self.rect_border_size,
            merge_boxes=self.merge_boxes,
            merge_threshold=self.merge_threshold,
        )
