import logging
from pathlib import Path
from typing import Optional, TextIO, Union

from .aggregate import process_image
from .config import EngineConfig
from .engines import EngineGateway
from .errors import InputError
from .output import emit
from .schema import SessionState

logger = logging.getLogger("ppocr_cli.runner")


def initialize_engine(gateway: EngineGateway, config: EngineConfig, state: SessionState) -> None:
    """One-time engine setup shared by both run modes."""
    if state.engine_initialized:
        return
    logger.info(
        "Initializing OCR engine %s from PP-OCR%s models...", gateway.name, config.model_version
    )
    gateway.initialize(config)
    state.engine_initialized = True


def run_single(
    gateway: EngineGateway,
    config: EngineConfig,
    path: Optional[Union[str, Path]],
    state: SessionState,
    out: Optional[TextIO] = None,
) -> int:
    if path is None:
        raise InputError(
            "Image path is required for OCR processing. Use --path to specify the image file."
        )
    image_path = Path(path)
    try:
        exists = image_path.exists()
    except (OSError, ValueError) as e:
        raise InputError(f"Cannot access input path {image_path}: {e}") from e
    if not exists:
        logger.error("Input image file does not exist: %s", image_path)
        raise InputError(f"Input file not found: {image_path}")

    initialize_engine(gateway, config, state)
    result = process_image(gateway, image_path, state.output_mode)
    emit(result, state.output_mode, out)
    logger.info("OCR process completed")
    return 0
