import logging
import sys

_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Route all logs to stderr; stdout only carries OCR results."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    root_logger = logging.getLogger()
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.INFO if verbose else logging.ERROR)

    # engine libraries are chatty at INFO
    for name in ("rapidocr_onnxruntime", "PIL"):
        logging.getLogger(name).setLevel(logging.WARNING)
