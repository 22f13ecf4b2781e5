"""PaddleOCR command line tool."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import Settings
from .engines import ENGINE_NAMES, make_gateway
from .errors import OcrCliError
from .logs import setup_logging
from .runner import run_single
from .schema import OutputMode, SessionState
from .session import SessionController

logger = logging.getLogger("ppocr_cli")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ppocr-cli", description="PaddleOCR command line tool")
    p.add_argument("-p", "--path", metavar="IMAGE_PATH", default=None, help="Image to recognize")
    p.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in OutputMode],
        default=OutputMode.TEXT.value,
        help="json (text, confidence and position per region) or text (recognized lines only)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Show detailed logs")
    p.add_argument("--version-info", action="store_true", help="Show model version information")
    p.add_argument(
        "-s", "--server", dest="interactive", action="store_true", help="Start interactive mode"
    )
    p.add_argument(
        "--engine",
        choices=list(ENGINE_NAMES),
        default=settings.ocr_engine if settings.ocr_engine in ENGINE_NAMES else "auto",
        help="OCR backend (default: $OCR_ENGINE or auto)",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)

    if args.version_info:
        try:
            config = settings.engine_config()
        except OcrCliError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"PaddleOCR CLI - Model Version: PP-OCR{config.model_version}")
        return 0

    setup_logging(args.verbose)
    logger.info("Starting PaddleOCR command line tool")

    state = SessionState(output_mode=OutputMode(args.mode), verbose=args.verbose)
    try:
        config = settings.engine_config()
        gateway = make_gateway(args.engine, tesseract_cmd=settings.tesseract_path)
        if args.interactive:
            return SessionController(gateway, config, state).run()
        if args.path is None:
            print(
                "Error: Image path is required for OCR processing. Use --path to specify the image file.",
                file=sys.stderr,
            )
            print("Use --help for more information.", file=sys.stderr)
            return 1
        return run_single(gateway, config, args.path, state)
    except OcrCliError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
