"""Cursor-based pagination producing Relay connections.

The engine windows an ordered sequence the caller already produced:

    from relaykit.core.pagination import connection_from_sequence

    connection = connection_from_sequence(items, first=10, after=cursor)
    connection.page_info.has_next_page

Cursors are opaque base64 strings wrapping an offset into that sequence;
clients pass them back unchanged. Partially loaded sequences go through
connection_from_slice with the slice's offset and the full length.
"""

from relaykit.core.pagination.cursor import (
    CursorCodec,
    cursor_for_object_in_sequence,
    cursor_to_offset,
    get_offset_with_default,
    offset_to_cursor,
)
from relaykit.core.pagination.engine import (
    connection_from_awaitable,
    connection_from_sequence,
    connection_from_slice,
)
from relaykit.core.pagination.schemas import (
    Connection,
    ConnectionArguments,
    CursorPage,
    Edge,
    PageInfo,
)

__all__ = [
    # Schemas
    "Connection",
    "ConnectionArguments",
    "CursorPage",
    "Edge",
    "PageInfo",
    # Cursor utilities
    "CursorCodec",
    "cursor_for_object_in_sequence",
    "cursor_to_offset",
    "get_offset_with_default",
    "offset_to_cursor",
    # Engine
    "connection_from_awaitable",
    "connection_from_sequence",
    "connection_from_slice",
]
