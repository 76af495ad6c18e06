# src/contract_kit/chunking/chunking.py

import logging
from time import monotonic

from contract_kit.observability import names
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook

from .config import ChunkingConfig

logger = logging.getLogger(__name__)

_SENTENCE_END = ". "
_NEWLINE = "\n"


def chunk_with_overlap(
    text: str,
    *,
    chunk_size: int,
    overlap: int,
    config: ChunkingConfig = ChunkingConfig(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[str]:
    """Split ``text`` into overlapping pieces that end at natural boundaries.

    ``chunk_size`` is a soft target: a window is cut back to the last
    sentence end or newline when that boundary lies at least
    ``config.boundary_ratio`` of the way into it. The next window starts
    ``chunk_size - overlap`` characters later, but never after the end of the
    piece just emitted, so every character lands in some piece.

    Pieces are stripped; pieces shorter than ``config.min_chunk_length`` are
    dropped as noise.
    """
    start_time = monotonic()
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    if overlap < 0:
        raise ValueError("overlap must be >= 0")
    if overlap >= chunk_size:
        raise ValueError("overlap must be < chunk_size")

    pieces: list[str] = []
    text_len = len(text)
    step = chunk_size - overlap
    cursor = 0

    while cursor < text_len:
        end = min(cursor + chunk_size, text_len)

        if end < text_len:
            boundary = _last_boundary(text, cursor, end)
            if boundary >= cursor + chunk_size * config.boundary_ratio:
                end = boundary + 1

        pieces.append(text[cursor:end].strip())

        if end == text_len:
            break
        cursor = min(cursor + step, end)

    kept = [p for p in pieces if len(p) >= config.min_chunk_length]

    elapsed_ms = 1000 * (monotonic() - start_time)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(kept))
    if len(kept) < len(pieces):
        metrics_hook.increment(names.CHUNKING_CHUNKS_DROPPED, len(pieces) - len(kept))
        logger.debug("Dropped %d undersized chunks", len(pieces) - len(kept))
    return kept


def _last_boundary(text: str, start: int, end: int) -> int:
    """Index of the last boundary character inside ``text[start:end]``, or -1.

    For a sentence end this is the period, for a paragraph the newline.
    """
    sentence = text.rfind(_SENTENCE_END, start, end)
    newline = text.rfind(_NEWLINE, start, end)
    return max(sentence, newline)
