import json
import sys
from typing import Iterable, List, Optional, Sequence, TextIO, Union

from .errors import OutputError
from .schema import OutputMode, TextBoxRecord


def format_json(records: Iterable[TextBoxRecord]) -> str:
    try:
        payload = [r.to_dict() for r in records]
        return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, AttributeError) as e:
        raise OutputError(f"Failed to serialize results: {e}") from e


def format_text(lines: Iterable[str]) -> str:
    return "\n".join(str(ln) for ln in lines)


def render(result: Union[Sequence[TextBoxRecord], Sequence[str]], mode: OutputMode) -> str:
    if mode is OutputMode.JSON:
        return format_json(result)  # type: ignore[arg-type]
    return format_text(result)  # type: ignore[arg-type]


def emit(
    result: Union[List[TextBoxRecord], List[str]],
    mode: OutputMode,
    stream: Optional[TextIO] = None,
) -> None:
    """Write rendered results; a text-mode result with no strings writes nothing."""
    out = stream or sys.stdout
    rendered = render(result, mode)
    if mode is OutputMode.TEXT and not result:
        return
    out.write(rendered + "\n")
    out.flush()
