"""Offset cursor encoding and decoding for pagination.

A cursor encodes a zero-based offset into the sequence that was paginated.
Cursors are opaque strings clients pass back unchanged; their validity is
scoped to the sequence snapshot they were issued for.

The cursor format is:
1. ``"{prefix}:{offset}"`` where prefix defaults to ``arrayconnection``
2. Base64 URL-safe encoded for use in URLs

Example:
    arrayconnection:3  ->  YXJyYXljb25uZWN0aW9uOjM=
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from relaykit.core.codec import OpaqueCodec
from relaykit.core.settings import get_relay_settings

logger = logging.getLogger(__name__)

_OFFSET_RE = re.compile(r"0|[1-9][0-9]*")


class CursorCodec:
    """Encode and decode offset cursors within one namespace.

    Usage:
        codec = CursorCodec()
        cursor = codec.encode(3)
        codec.decode(cursor)  # 3
    """

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix or get_relay_settings().cursor_prefix

    def encode(self, offset: int) -> str:
        """Encode an offset to an opaque cursor string."""
        return OpaqueCodec.encode(f"{self.prefix}:{offset}")

    def decode(self, cursor: str) -> int:
        """Decode a cursor string to its offset.

        Raises:
            ValueError: If cursor is invalid, corrupted or from another namespace
        """
        text = OpaqueCodec.decode(cursor)
        prefix, sep, offset = text.partition(":")
        if not sep or prefix != self.prefix:
            raise ValueError(f"Invalid cursor: expected '{self.prefix}' namespace")
        if not _OFFSET_RE.fullmatch(offset):
            raise ValueError("Invalid cursor: offset is not a non-negative integer")
        return int(offset)


def offset_to_cursor(offset: int) -> str:
    """Create the cursor for an offset."""
    return CursorCodec().encode(offset)


def cursor_to_offset(cursor: str) -> int | None:
    """Extract the offset from a cursor, or None if it cannot be decoded."""
    try:
        return CursorCodec().decode(cursor)
    except ValueError:
        logger.debug("Undecodable cursor", extra={"cursor": cursor})
        return None


def get_offset_with_default(cursor: str | None, default_offset: int) -> int:
    """Return the cursor's offset, or ``default_offset`` if absent or invalid."""
    if cursor is None:
        return default_offset
    offset = cursor_to_offset(cursor)
    return default_offset if offset is None else offset


def cursor_for_object_in_sequence(sequence: Sequence[Any], obj: Any) -> str | None:
    """Return the cursor of ``obj`` within ``sequence``, or None if absent."""
    try:
        offset = sequence.index(obj)
    except ValueError:
        return None
    return offset_to_cursor(offset)


__all__ = [
    "CursorCodec",
    "cursor_for_object_in_sequence",
    "cursor_to_offset",
    "get_offset_with_default",
    "offset_to_cursor",
]
