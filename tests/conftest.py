from typing import Iterable, List, Optional, Sequence

import numpy as np
import pytest
from PIL import Image

from ppocr_cli.config import EngineConfig
from ppocr_cli.engines import EngineGateway
from ppocr_cli.errors import EngineError
from ppocr_cli.schema import DetectedRegion


def marked_crop(index: int, width: int, height: int) -> np.ndarray:
    """Crop whose pixels all hold its own index, so recognize() can tell crops apart."""
    return np.full((height, width, 3), index, dtype=np.uint8)


class FakeGateway(EngineGateway):
    """Scripted in-process engine."""

    name = "fake"

    def __init__(
        self,
        regions: Sequence[DetectedRegion] = (),
        crops: Optional[List[np.ndarray]] = None,
        texts: Sequence[str] = (),
        full: Sequence[str] = (),
        fail_at: Iterable[int] = (),
        init_error: Optional[Exception] = None,
        detect_error: Optional[Exception] = None,
    ) -> None:
        super().__init__()
        self.regions = list(regions)
        if crops is None:
            crops = [marked_crop(i, r.width, r.height) for i, r in enumerate(self.regions)]
        self.crops = crops
        self.texts = list(texts)
        self.full = list(full)
        self.fail_at = set(fail_at)
        self.init_error = init_error
        self.detect_error = detect_error
        self.init_calls = 0
        self.load_calls = 0
        self.calls: List[str] = []
        self.recognized: List[int] = []

    def initialize(self, config: EngineConfig) -> None:
        self.init_calls += 1
        super().initialize(config)

    def _load(self, config: EngineConfig) -> None:
        self.load_calls += 1
        if self.init_error is not None:
            raise self.init_error

    def detect(self, image):
        self._require_initialized()
        self.calls.append("detect")
        if self.detect_error is not None:
            raise self.detect_error
        return list(self.regions)

    def extract_crops(self, image):
        self.calls.append("extract_crops")
        return list(self.crops)

    def recognize(self, sub_image):
        self.calls.append("recognize")
        idx = int(sub_image.flat[0])
        if idx in self.fail_at:
            raise EngineError(f"bad crop {idx}")
        self.recognized.append(idx)
        return self.texts[idx]

    def run_full(self, image):
        self._require_initialized()
        self.calls.append("run_full")
        return list(self.full)


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def image():
    return np.zeros((40, 80, 3), dtype=np.uint8)


@pytest.fixture
def write_image(tmp_path):
    def _write(name: str = "page.png", fmt: str = "PNG"):
        path = tmp_path / name
        Image.new("RGB", (32, 16), (255, 255, 255)).save(path, format=fmt)
        return path

    return _write
