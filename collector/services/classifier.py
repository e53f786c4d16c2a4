import json
from typing import Optional, Tuple

from collector.models.enums import BodyKind


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def as_json_text(body: bytes) -> Optional[str]:
    """Return the body as text if it is one valid JSON value, else None."""
    try:
        text = body.decode("utf-8")
        json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None
    return text


def classify_body(body: bytes) -> Tuple[BodyKind, str]:
    text = as_json_text(body)
    if text is not None:
        return BodyKind.JSON, text
    return BodyKind.TEXT, body.decode("utf-8", errors="replace")
