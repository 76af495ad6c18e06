# src/contract_kit/chunking/sections.py

import logging
import re
from dataclasses import dataclass
from time import monotonic

from contract_kit.observability import names
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook

from .config import ChunkingConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    """A structurally detected span of a contract.

    ``content`` starts at the header, so the heading text is part of it.
    """

    title: str
    content: str
    start_offset: int


@dataclass(frozen=True)
class _Header:
    title: str
    offset: int


def segment_sections(
    text: str,
    config: ChunkingConfig = ChunkingConfig(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Section]:
    """Split ``text`` into sections at detected headers.

    Every pattern runs over the whole text independently. Headers are ordered
    by offset; at an identical offset the higher-priority pattern wins. Matches
    from different patterns at different offsets are never reconciled, so two
    sections may describe overlapping header lines.

    Sections shorter than ``config.min_section_length`` are discarded. When
    nothing survives, a single section titled ``config.fallback_title`` spans
    the whole document.
    """
    start = monotonic()
    headers = _find_headers(text, config)

    sections: list[Section] = []
    for i, header in enumerate(headers):
        next_offset = headers[i + 1].offset if i + 1 < len(headers) else len(text)
        content = text[header.offset : next_offset].strip()
        if len(content) < config.min_section_length:
            continue
        sections.append(
            Section(title=header.title, content=content, start_offset=header.offset)
        )

    if not sections:
        logger.debug("No sections detected, using whole document")
        sections.append(Section(title=config.fallback_title, content=text, start_offset=0))

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.SEGMENTATION_DURATION, elapsed_ms)
    metrics_hook.increment(names.SEGMENTATION_SECTIONS_FOUND, len(sections))
    logger.debug(
        "Segmented %d characters into %d sections (%d headers)",
        len(text),
        len(sections),
        len(headers),
    )
    return sections


def _find_headers(text: str, config: ChunkingConfig) -> list[_Header]:
    """Headers from every pattern, one per offset, in document order.

    Patterns run in priority order and the first title found at an offset
    is kept: "ARTICLE I: TERMS:" yields "TERMS:" from the ARTICLE pattern,
    not "ARTICLE I" from the caption pattern. Matches at different offsets
    are all kept, even when they come from the same header line.
    """
    found: dict[int, _Header] = {}
    for pattern, ignore_case in config.patterns:
        regex = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
        for match in regex.finditer(text):
            offset = match.start()
            if offset in found:
                continue
            found[offset] = _Header(title=match.group(1).strip(), offset=offset)
    return sorted(found.values(), key=lambda h: h.offset)
