import os
from typing import Dict, List, Optional, Tuple

import numpy as np

import pytesseract
from pytesseract import Output  # type: ignore

from ..config import EngineConfig
from ..errors import EngineError
from ..schema import DetectedRegion
from .gateway import EngineGateway, logger
from .geometry import crop, inflate, merge_regions


def _cfg(psm: int = 6) -> str:
    # psm 6 = single uniform block for layout, psm 7 = one text line per crop
    return f"--oem 1 --psm {psm} -c preserve_interword_spaces=1"


def _group_tokens(data: Dict[str, List]) -> List[DetectedRegion]:
    """
    Group image_to_data tokens into lines using (block_num, par_num, line_num)
    and return one rectangle per line, sorted top->bottom, then left->right.
    """
    n = len(data.get("text", []))
    groups: Dict[Tuple[int, int, int], List[int]] = {}
    for i in range(n):
        if not (data["text"][i] or "").strip():
            continue
        key = (
            int(data.get("block_num", [0] * n)[i]),
            int(data.get("par_num", [0] * n)[i]),
            int(data.get("line_num", [0] * n)[i]),
        )
        groups.setdefault(key, []).append(i)

    out: List[DetectedRegion] = []
    for idxs in groups.values():
        x0 = min(int(data["left"][j]) for j in idxs)
        y0 = min(int(data["top"][j]) for j in idxs)
        x1 = max(int(data["left"][j]) + int(data["width"][j]) for j in idxs)
        y1 = max(int(data["top"][j]) + int(data["height"][j]) for j in idxs)
        out.append(DetectedRegion(left=x0, top=y0, width=x1 - x0, height=y1 - y0))

    out.sort(key=lambda r: (r.top, r.left))
    return out


class TesseractGateway(EngineGateway):
    """Line detection and recognition through the tesseract binary."""

    name = "tesseract"

    def __init__(self, tesseract_cmd: Optional[str] = None) -> None:
        super().__init__()
        self.tesseract_cmd = tesseract_cmd

    def _load(self, config: EngineConfig) -> None:
        if self.tesseract_cmd and os.path.exists(self.tesseract_cmd):
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
        # raises TesseractNotFoundError when the binary is missing
        version = pytesseract.get_tesseract_version()
        logger.info("tesseract %s found", version)

    def detect(self, image: np.ndarray) -> List[DetectedRegion]:
        cfg = self.config
        h, w = image.shape[:2]
        try:
            data = pytesseract.image_to_data(image, output_type=Output.DICT, config=_cfg(psm=6))
        except Exception as e:
            raise EngineError(f"tesseract detection failed: {e}") from e
        regions = _group_tokens(data)
        if cfg.merge_boxes:
            regions = merge_regions(regions, cfg.merge_threshold)
        regions = [inflate(r, cfg.rect_border_size, w, h) for r in regions]
        logger.info("tesseract detected %d text lines", len(regions))
        return regions

    def extract_crops(self, image: np.ndarray) -> List[np.ndarray]:
        return [crop(image, r) for r in self.detect(image)]

    def recognize(self, sub_image: np.ndarray) -> str:
        self._require_initialized()
        try:
            text = pytesseract.image_to_string(sub_image, config=_cfg(psm=7))
        except Exception as e:
            raise EngineError(f"tesseract recognition failed: {e}") from e
        return str(text).strip()

    def run_full(self, image: np.ndarray) -> List[str]:
        self._require_initialized()
        try:
            text = pytesseract.image_to_string(image, config=_cfg(psm=6))
        except Exception as e:
            raise EngineError(f"tesseract recognition failed: {e}") from e
        return [ln.strip() for ln in str(text).splitlines() if ln.strip()]
