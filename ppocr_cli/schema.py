from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

# The gateway contract does not surface a per-region score; every record
# carries this placeholder instead of a measured confidence.
DEFAULT_CONFIDENCE = 1.0


class OutputMode(str, Enum):
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class DetectedRegion:
    left: int
    top: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "left": int(self.left),
            "top": int(self.top),
            "width": int(self.width),
            "height": int(self.height),
        }


@dataclass(frozen=True)
class RecognizedText:
    text: str
    confidence: float = DEFAULT_CONFIDENCE


@dataclass(frozen=True)
class TextBoxRecord:
    text: str
    confidence: float
    position: DetectedRegion

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "position": self.position.to_dict(),
        }


@dataclass
class SessionState:
    output_mode: OutputMode = OutputMode.TEXT
    verbose: bool = False
    engine_initialized: bool = False
