# src/contract_kit/extraction/parsing.py

import json
import logging
import re
from typing import Any

from .errors import ResponseParseError

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")
_OBJECT_GREEDY = re.compile(r"\{[\s\S]*\}")
_OBJECT_LAZY = re.compile(r"\{[\s\S]*?\}")


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    cleaned = raw.strip()
    cleaned = _FENCE_OPEN.sub("", cleaned)
    cleaned = _FENCE_CLOSE.sub("", cleaned)
    return cleaned


def parse_json_record(raw: str) -> dict[str, Any]:
    """Coerce a model response into a JSON object.

    Strips code fences, takes the outermost ``{...}`` span and parses it.
    If that fails, the shortest ``{...}`` span is tried before giving up.

    Raises:
        ResponseParseError: No JSON object could be recovered.
    """
    if not raw or not raw.strip():
        raise ResponseParseError("Empty response")

    cleaned = strip_code_fences(raw)
    match = _OBJECT_GREEDY.search(cleaned)
    candidate = match.group(0) if match else cleaned

    try:
        return _load_object(candidate)
    except ResponseParseError as exc:
        first_error = exc

    match = _OBJECT_LAZY.search(raw)
    if match is None:
        raise ResponseParseError(f"No JSON object found in response: {first_error}")

    logger.debug("Retrying JSON extraction with the shortest object span")
    return _load_object(match.group(0))


def _load_object(candidate: str) -> dict[str, Any]:
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(str(exc)) from exc
    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data
