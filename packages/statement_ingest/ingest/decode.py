"""Transport decoding for uploaded statements.

Uploads arrive base64-encoded. Decoding to raw bytes is the only step allowed
to fail a request; turning bytes into text never fails (UTF-8 first, then a
byte-preserving Latin-1 fallback).
"""

from __future__ import annotations

import base64
import binascii
import re

from ..errors import DecodeError

_WS_RE = re.compile(rb"\s+")


def decode_transport(file_content: str | bytes) -> bytes:
    """Decode base64 ``file_content`` to raw bytes.

    Whitespace (line-wrapped base64) and a leading ``data:...;base64,`` prefix
    are tolerated. Any other malformation raises :class:`DecodeError`.
    """

    raw = file_content.encode("ascii", "replace") if isinstance(file_content, str) else file_content
    if raw.startswith(b"data:") and b"," in raw:
        raw = raw.split(b",", 1)[1]
    raw = _WS_RE.sub(b"", raw)
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"invalid base64 file content: {exc}") from exc


def bytes_to_text(data: bytes) -> str:
    """Decode statement bytes as text for the line/table parsers."""

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def bytes_to_raw_text(data: bytes) -> str:
    """Map each byte to one character (Latin-1) for byte-stream scraping."""

    return data.decode("latin-1")


__all__ = ["decode_transport", "bytes_to_text", "bytes_to_raw_text"]
