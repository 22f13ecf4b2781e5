"""
Interactive mode: one engine, many images.

    AwaitInput -> Validating -> (Confirming) -> Processing -> Reporting -> AwaitInput
                +-> Exited

An error while handling one image is logged and the loop goes back to
AwaitInput; only "exit"/"quit" (or end of input) ends the session.
"""
from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TextIO

from .aggregate import process_image
from .config import EngineConfig
from .engines import EngineGateway
from .errors import OcrCliError
from .output import emit
from .runner import initialize_engine
from .schema import SessionState

logger = logging.getLogger("ppocr_cli.session")

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "bmp", "tiff", "webp"})
EXIT_COMMANDS = frozenset({"exit", "quit"})
AFFIRMATIVE = frozenset({"y", "yes"})


class State(Enum):
    AWAIT_INPUT = "await_input"
    VALIDATING = "validating"
    CONFIRMING = "confirming"
    PROCESSING = "processing"
    REPORTING = "reporting"
    EXITED = "exited"


class SessionController:
    def __init__(
        self,
        gateway: EngineGateway,
        config: EngineConfig,
        state: SessionState,
        readline: Optional[Callable[[], str]] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.gateway = gateway
        self.config = config
        self.state = state
        self._readline = readline or sys.stdin.readline
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.current = State.AWAIT_INPUT

    def _goto(self, new: State) -> None:
        logger.debug("session %s -> %s", self.current.value, new.value)
        self.current = new

    def _prompt(self, text: str) -> Optional[str]:
        """Show a prompt and block for one line; None on end of input."""
        self.out.write(text)
        self.out.flush()
        line = self._readline()
        if not line:
            return None
        return line.strip()

    def run(self) -> int:
        self.out.write("PaddleOCR Interactive Mode Started\n")
        self.out.write("Enter image file paths to process (type 'exit' or 'quit' to exit):\n")
        initialize_engine(self.gateway, self.config, self.state)

        while self.current is not State.EXITED:
            self.step()
        return 0

    def step(self) -> None:
        """Run one AwaitInput iteration to completion."""
        self._goto(State.AWAIT_INPUT)
        line = self._prompt("> ")
        if line is None or line.lower() in EXIT_COMMANDS:
            self.out.write("Exiting interactive mode...\n")
            self._goto(State.EXITED)
            return
        if not line:
            return

        self._goto(State.VALIDATING)
        path = Path(line)
        try:
            exists = path.exists()
        except (OSError, ValueError) as e:
            # ENAMETOOLONG, EACCES, embedded NUL...
            self.err.write(f"Error: Cannot access path: {line} ({e})\n")
            self.err.flush()
            return
        if not exists:
            self.err.write(f"Error: File does not exist: {line}\n")
            self.err.flush()
            return

        ext = path.suffix[1:].lower()
        if ext not in IMAGE_EXTENSIONS and not self._confirm(line):
            return

        self._goto(State.PROCESSING)
        try:
            result = process_image(self.gateway, path, self.state.output_mode)
            self._goto(State.REPORTING)
            emit(result, self.state.output_mode, self.out)
        except OcrCliError as e:
            logger.error("Error processing image: %s", e)
            return
        except Exception as e:
            logger.exception("Unexpected error processing image %s: %s", line, e)
            return
        logger.info("OCR processing completed successfully.")

    def _confirm(self, line: str) -> bool:
        self._goto(State.CONFIRMING)
        self.err.write(f"Warning: File does not appear to be an image: {line}\n")
        self.err.flush()
        answer = self._prompt("Do you want to continue? (y/N): ")
        return answer is not None and answer.lower() in AFFIRMATIVE
