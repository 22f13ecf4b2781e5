import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from .errors import InputError

logger = logging.getLogger("ppocr_cli.imaging")


def load_image(path: Union[str, Path]) -> np.ndarray:
    """Decode an image file into an RGB uint8 array (H, W, 3)."""
    logger.info("Loading image from %s...", path)
    try:
        with Image.open(path) as im:
            rgb = im.convert("RGB")
    except OSError as e:
        logger.error("Failed to load image: %s", e)
        raise InputError(f"Failed to load image {path}: {e}") from e
    logger.info("Image loaded, size: %dx%d", rgb.width, rgb.height)
    return np.asarray(rgb, dtype=np.uint8)
