"""Best-effort text recovery from raw PDF bytes.

This is not a PDF text extractor. It scrapes two kinds of readable text
straight out of the byte stream and hands the result to the text parser:

1. literal strings shown with ``(...) Tj`` inside ``BT`` ... ``ET`` blocks;
2. every run of at least six printable ASCII / whitespace characters.

Compressed or font-encoded content streams (most modern PDFs) yield little
or nothing here; that is a known limitation.
"""

from __future__ import annotations

import re
from datetime import date

from ...logging_setup import get_logger
from ...models import CandidateTransaction
from ..decode import bytes_to_raw_text
from .free_text import parse_text_content

_logger = get_logger("statement_ingest.ingest.adapters.pdf_scrape")

# Below this many extracted characters the raw content is parsed instead.
MIN_EXTRACTED_CHARS = 100
MIN_RUN_LENGTH = 6

_TEXT_BLOCK_RE = re.compile(r"BT[\s\S]*?ET")
_SHOW_TEXT_RE = re.compile(r"\(([^)]*)\)\s*Tj")
_READABLE_RUN_RE = re.compile(r"[\x20-\x7e\t\n\r]{%d,}" % MIN_RUN_LENGTH)


def extract_show_text(content: str) -> str:
    parts: list[str] = []
    for block in _TEXT_BLOCK_RE.findall(content):
        parts.extend(text + " " for text in _SHOW_TEXT_RE.findall(block))
    return "".join(parts)


def extract_readable_runs(content: str) -> list[str]:
    return [run.strip() for run in _READABLE_RUN_RE.findall(content)]


def scrape_text(content: str) -> str:
    return extract_show_text(content) + "\n" + "\n".join(extract_readable_runs(content))


def parse_pdf_bytes(data: bytes, *, today: date | None = None) -> list[CandidateTransaction]:
    """Scrape ``data`` for text and parse it as statement lines."""

    content = bytes_to_raw_text(data)
    combined = scrape_text(content)
    _logger.debug("pdf scraper: extracted %d characters", len(combined))
    if len(combined) > MIN_EXTRACTED_CHARS:
        return parse_text_content(combined, today=today)
    return parse_text_content(content, today=today)


__all__ = [
    "MIN_EXTRACTED_CHARS",
    "extract_show_text",
    "extract_readable_runs",
    "scrape_text",
    "parse_pdf_bytes",
]
