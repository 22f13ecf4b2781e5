"""
Turns raw gateway output into records.

Structured mode pairs every detected rectangle with the crop at the same index
and recognizes crops one by one. A crop that fails recognition is logged and
left out; the rest of the page is still reported. A region/crop count mismatch
means the pairing cannot be trusted, so the whole image fails.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import numpy as np

from .engines import EngineGateway
from .engines.geometry import sub_image_size
from .errors import EngineError
from .imaging import load_image
from .schema import DEFAULT_CONFIDENCE, OutputMode, RecognizedText, TextBoxRecord

logger = logging.getLogger("ppocr_cli.aggregate")


def aggregate_boxes(gateway: EngineGateway, image: np.ndarray) -> List[TextBoxRecord]:
    regions = gateway.detect(image)
    logger.info("Found %d text regions", len(regions))
    if not regions:
        logger.info("No text regions detected in the image.")
        return []

    crops = gateway.extract_crops(image)
    logger.info("Extracted %d text images", len(crops))
    if len(regions) != len(crops):
        logger.error(
            "Mismatch between text rectangles (%d) and text images (%d)",
            len(regions),
            len(crops),
        )
        raise EngineError(
            f"Inconsistent detection results: {len(regions)} regions but {len(crops)} crops"
        )

    records: List[TextBoxRecord] = []
    for i, (region, sub_image) in enumerate(zip(regions, crops)):
        logger.info("Processing text region %d of %d", i + 1, len(regions))
        w, h = sub_image_size(sub_image)
        if w == 0 or h == 0 or region.is_empty:
            logger.error("Invalid subimage with zero dimensions at index %d", i)
            continue
        try:
            rec = RecognizedText(text=gateway.recognize(sub_image), confidence=DEFAULT_CONFIDENCE)
        except EngineError as e:
            logger.error("Failed to recognize text in region %d: %s", i, e)
            continue
        records.append(TextBoxRecord(text=rec.text, confidence=rec.confidence, position=region))
    return records


def aggregate_text(gateway: EngineGateway, image: np.ndarray) -> List[str]:
    return list(gateway.run_full(image))


def process_image(
    gateway: EngineGateway, path: Union[str, Path], mode: OutputMode
) -> Union[List[TextBoxRecord], List[str]]:
    image = load_image(path)
    if mode is OutputMode.JSON:
        logger.info("Processing in JSON mode...")
        return aggregate_boxes(gateway, image)
    logger.info("Processing in text mode...")
    return aggregate_text(gateway, image)
