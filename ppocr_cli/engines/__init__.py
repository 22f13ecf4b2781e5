from typing import Optional

from ..errors import InputError
from .gateway import EngineGateway
from .tess import TesseractGateway
try:
    from .ppocr import PPOCRGateway  # optional
except Exception:  # pragma: no cover
    PPOCRGateway = None  # type: ignore

ENGINE_NAMES = ("auto", "ppocr", "rapidocr", "paddle", "tesseract")


def make_gateway(name: Optional[str], tesseract_cmd: Optional[str] = None) -> EngineGateway:
    """
    Factory. Supported names:
      - 'auto' / 'ppocr' / 'rapidocr' / 'paddle'  (default; requires rapidocr_onnxruntime)
      - 'tesseract'
    """
    n = (name or "auto").strip().lower()
    if n in ("auto", "ppocr", "rapidocr", "paddle"):
        if PPOCRGateway is None:
            raise InputError("PPOCR engine not available (install rapidocr_onnxruntime)")
        return PPOCRGateway()
    if n == "tesseract":
        return TesseractGateway(tesseract_cmd=tesseract_cmd)
    raise InputError(f"Unknown OCR engine {name!r}; expected one of {', '.join(ENGINE_NAMES)}")


__all__ = [
    "EngineGateway",
    "TesseractGateway",
    "PPOCRGateway",
    "ENGINE_NAMES",
    "make_gateway",
]
