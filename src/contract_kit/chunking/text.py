# src/contract_kit/chunking/text.py

import re
import unicodedata

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")
_BOM_CHARS = re.compile("[\ufeff\ufffe\uffff]")
_SPACE_RUNS = re.compile(r" +")
_NEWLINE_RUNS = re.compile(r"\n{3,}")


def sanitize_text(text: str) -> str:
    """Normalize OCR / PDF output before it reaches any external service.

    Drops control characters (keeping newlines and tabs), byte-order marks,
    applies NFKC normalization, unifies line endings and collapses runs of
    spaces and blank lines.
    """
    if not text:
        return ""

    cleaned = _CONTROL_CHARS.sub("", text)
    cleaned = _BOM_CHARS.sub("", cleaned)
    cleaned = unicodedata.normalize("NFKC", cleaned)
    cleaned = cleaned.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = cleaned.replace("\t", " ")
    cleaned = _SPACE_RUNS.sub(" ", cleaned)
    cleaned = _NEWLINE_RUNS.sub("\n\n", cleaned)
    return cleaned.strip()


def estimate_tokens(text: str, chars_per_token: float) -> float:
    """Approximate token count from a fixed characters-per-token ratio."""
    if chars_per_token <= 0:
        raise ValueError("chars_per_token must be > 0")
    return len(text) / chars_per_token
