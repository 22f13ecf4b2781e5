from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from ..config import EngineConfig
from ..errors import EngineError
from ..schema import DetectedRegion

logger = logging.getLogger("ppocr_cli.engines")


class EngineGateway(ABC):
    """Narrow contract around an external text detection + recognition engine.

    Images are RGB uint8 numpy arrays (H, W, 3). Sub-images returned by
    ``extract_crops`` line up index-for-index with ``detect`` for the same image.
    Every engine failure surfaces as ``EngineError``.
    """

    name = "base"

    def __init__(self) -> None:
        self._config: Optional[EngineConfig] = None

    @property
    def initialized(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> EngineConfig:
        if self._config is None:
            raise EngineError(f"{self.name} engine used before initialize()")
        return self._config

    def _require_initialized(self) -> None:
        if self._config is None:
            raise EngineError(f"{self.name} engine used before initialize()")

    def initialize(self, config: EngineConfig) -> None:
        """Load models once. Later calls are no-ops."""
        if self._config is not None:
            logger.debug("%s engine already initialized; ignoring repeat call", self.name)
            return
        try:
            self._load(config)
        except EngineError:
            raise
        except Exception as e:
            raise EngineError(f"Failed to initialize {self.name} engine: {e}") from e
        self._config = config
        logger.info("%s engine initialized (models %s)", self.name, config.model_version)

    @abstractmethod
    def _load(self, config: EngineConfig) -> None:
        ...

    @abstractmethod
    def detect(self, image: np.ndarray) -> List[DetectedRegion]:
        """Return text rectangles in engine order (top->bottom, left->right)."""
        ...

    @abstractmethod
    def extract_crops(self, image: np.ndarray) -> List[np.ndarray]:
        ...

    @abstractmethod
    def recognize(self, sub_image: np.ndarray) -> str:
        ...

    @abstractmethod
    def run_full(self, image: np.ndarray) -> List[str]:
        """Detect + recognize in one pass; returns the strings only."""
        ...
