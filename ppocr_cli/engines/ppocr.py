from typing import Any, Dict, List

import numpy as np
from rapidocr_onnxruntime import RapidOCR

from ..config import EngineConfig
from ..errors import EngineError
from ..schema import DetectedRegion
from .gateway import EngineGateway, logger
from .geometry import crop, inflate, merge_regions, quad_to_region


def _rapid_kwargs(config: EngineConfig) -> Dict[str, Any]:
    kw: Dict[str, Any] = {}
    if config.det_model_path:
        kw["det_model_path"] = config.det_model_path
    if config.rec_model_path:
        kw["rec_model_path"] = config.rec_model_path
    if config.keys_path:
        kw["rec_keys_path"] = config.keys_path
    return kw


class PPOCRGateway(EngineGateway):
    """PP-OCR detection/recognition through rapidocr_onnxruntime."""

    name = "ppocr"

    def __init__(self) -> None:
        super().__init__()
        self.ocr = None

    def _load(self, config: EngineConfig) -> None:
        # Falls back to the PP-OCR models shipped inside the wheel.
        self.ocr = RapidOCR(**_rapid_kwargs(config))

    def _call(self, image: np.ndarray, **flags) -> list:
        if self.ocr is None:
            raise EngineError("ppocr engine used before initialize()")
        # RapidOCR treats ndarrays as BGR
        bgr = np.ascontiguousarray(image[..., ::-1]) if image.ndim == 3 else image
        try:
            result, _elapse = self.ocr(bgr, **flags)
        except Exception as e:
            raise EngineError(f"ppocr engine failed: {e}") from e
        return [] if result is None else list(result)

    def detect(self, image: np.ndarray) -> List[DetectedRegion]:
        cfg = self.config
        h, w = image.shape[:2]
        quads = self._call(image, use_det=True, use_cls=False, use_rec=False)
        regions = [quad_to_region(q) for q in quads]
        if cfg.merge_boxes:
            regions = merge_regions(regions, cfg.merge_threshold)
        regions = [inflate(r, cfg.rect_border_size, w, h) for r in regions]
        logger.info("ppocr detected %d text regions", len(regions))
        return regions

    def extract_crops(self, image: np.ndarray) -> List[np.ndarray]:
        return [crop(image, r) for r in self.detect(image)]

    def recognize(self, sub_image: np.ndarray) -> str:
        rec = self._call(sub_image, use_det=False, use_cls=False, use_rec=True)
        # rec-only output: [[text, score], ...]
        return "".join(str(item[0]) for item in rec if item and item[0])

    def run_full(self, image: np.ndarray) -> List[str]:
        out: List[str] = []
        for item in self._call(image):
            # full output: [box, text, score]
            text = item[1] if len(item) > 1 else ""
            if not text:
                continue
            out.append(str(text))
        return out
