"""Format detection and parser dispatch.

A route is chosen from the declared file name extension or MIME type and
maps to an ordered tuple of :class:`ParserStrategy` values. Strategies run in
order and the first non-empty result wins; an empty result is never an error.

=========  =================================
route      strategies
=========  =================================
csv        delimited
pdf        pdf
excel      delimited, text
unknown    delimited, text
=========  =================================
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from ..logging_setup import get_logger
from ..models import CandidateTransaction
from .adapters.delimited_csv import parse_delimited
from .adapters.free_text import parse_text_content
from .adapters.pdf_scrape import parse_pdf_bytes
from .decode import bytes_to_text

_logger = get_logger("statement_ingest.ingest.dispatch")

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({"csv", "xls", "xlsx", "pdf"})
SUPPORTED_MIME_TYPES: frozenset[str] = frozenset(
    {
        "text/csv",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/pdf",
    }
)


@dataclass(frozen=True, slots=True)
class ParserStrategy:
    """A named, stateless parser over raw statement bytes."""

    name: str
    parse: Callable[..., list[CandidateTransaction]]

    def __call__(self, data: bytes, *, today: date | None = None) -> list[CandidateTransaction]:
        return self.parse(data, today=today)


def _over_text(
    fn: Callable[..., list[CandidateTransaction]],
) -> Callable[..., list[CandidateTransaction]]:
    def run(data: bytes, *, today: date | None = None) -> list[CandidateTransaction]:
        return fn(bytes_to_text(data), today=today)

    return run


DELIMITED = ParserStrategy("delimited", _over_text(parse_delimited))
TEXT = ParserStrategy("text", _over_text(parse_text_content))
PDF = ParserStrategy("pdf", parse_pdf_bytes)

ROUTES: dict[str, tuple[ParserStrategy, ...]] = {
    "csv": (DELIMITED,),
    "pdf": (PDF,),
    "excel": (DELIMITED, TEXT),
    "unknown": (DELIMITED, TEXT),
}


def _extension(file_name: str | None) -> str:
    name = (file_name or "").strip()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def resolve_format_key(file_name: str | None, file_type: str | None) -> str:
    """Return the file extension, else the MIME subtype, lower-cased."""

    ext = _extension(file_name)
    if ext:
        return ext
    return (file_type or "").strip().rsplit("/", 1)[-1].lower()


def select_route(file_name: str | None, file_type: str | None) -> str:
    key = resolve_format_key(file_name, file_type)
    hint = (file_type or "").lower()
    if key == "csv" or "csv" in hint:
        return "csv"
    if key == "pdf" or "pdf" in hint:
        return "pdf"
    if key in {"xls", "xlsx"} or "excel" in hint or "spreadsheet" in hint:
        return "excel"
    return "unknown"


def is_supported_upload(file_name: str | None, file_type: str | None) -> bool:
    """Whether the upload is one of the formats the client offers to upload."""

    return (
        _extension(file_name) in SUPPORTED_EXTENSIONS
        or (file_type or "").strip().lower() in SUPPORTED_MIME_TYPES
    )


def dispatch(
    data: bytes,
    *,
    file_name: str | None,
    file_type: str | None,
    today: date | None = None,
) -> list[CandidateTransaction]:
    """Run the route's strategies in order and return the first non-empty result."""

    route = select_route(file_name, file_type)
    _logger.info(
        "dispatch: file=%r type=%r key=%r route=%s",
        file_name,
        file_type,
        resolve_format_key(file_name, file_type),
        route,
    )
    for strategy in ROUTES[route]:
        found = strategy(data, today=today)
        _logger.info("dispatch: parser %s found %d transactions", strategy.name, len(found))
        if found:
            return found
    return []


__all__ = [
    "ParserStrategy",
    "DELIMITED",
    "TEXT",
    "PDF",
    "ROUTES",
    "SUPPORTED_EXTENSIONS",
    "SUPPORTED_MIME_TYPES",
    "resolve_format_key",
    "select_route",
    "is_supported_upload",
    "dispatch",
]
