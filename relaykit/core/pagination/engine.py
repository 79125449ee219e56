"""Windowing of ordered sequences into Relay connections.

The engine takes a sequence the caller already filtered and sorted, plus
the four connection arguments, and computes the visible window. Arguments
are applied in a fixed order:

    after -> before -> first -> last

so ``first`` and ``last`` together select a slice within a slice. Malformed
``after``/``before`` cursors are ignored. Negative ``first``/``last`` fail
the request.

Page info is computed against the whole sequence: ``has_previous_page``
is true when an item precedes the window, ``has_next_page`` when an item
follows it. Empty windows keep reporting what lies on either side.

Every function here is pure; the input sequence is never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from relaykit.core.exceptions import ConnectionArgumentError
from relaykit.core.pagination.cursor import CursorCodec
from relaykit.core.pagination.schemas import Connection, ConnectionArguments, Edge, PageInfo
from relaykit.core.settings import RelaySettings, get_relay_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

ArgsLike = ConnectionArguments | Mapping[str, Any] | None


def _materialize(items: Iterable[T]) -> Sequence[T]:
    if isinstance(items, Sequence):
        return items
    return list(items)


def _validate_count(name: str, value: int | None, max_page_size: int | None) -> None:
    if value is None:
        return
    if value < 0:
        raise ConnectionArgumentError(
            detail=f"Argument '{name}' must be a non-negative integer",
            extra={"argument": name, "value": value},
        )
    if max_page_size is not None and value > max_page_size:
        raise ConnectionArgumentError(
            detail=f"Argument '{name}' must not exceed {max_page_size}",
            extra={"argument": name, "value": value, "max_page_size": max_page_size},
        )


def _decode_bound(codec: CursorCodec, name: str, cursor: str | None) -> int | None:
    if cursor is None:
        return None
    try:
        return codec.decode(cursor)
    except ValueError:
        logger.debug("Ignoring malformed cursor", extra={"argument": name})
        return None


def _merge_args(args: ArgsLike, overrides: dict[str, Any]) -> ConnectionArguments:
    coerced = ConnectionArguments.coerce(args)
    if not overrides:
        return coerced
    return ConnectionArguments(**{**coerced.model_dump(), **overrides})


def connection_from_slice(
    sequence_slice: Iterable[T],
    args: ArgsLike = None,
    *,
    slice_start: int = 0,
    sequence_length: int | None = None,
    settings: RelaySettings | None = None,
    **kwargs: Any,
) -> Connection[T]:
    """Window a materialized slice of a (possibly longer) sequence.

    Use this when only part of the sequence is loaded, e.g. a page fetched
    from a store: ``slice_start`` is the offset of the slice's first item
    within the full sequence and ``sequence_length`` the full length.

    Args:
        sequence_slice: Items starting at ``slice_start`` in the full sequence
        args: Connection arguments (model, mapping or None)
        slice_start: Offset of ``sequence_slice[0]`` in the full sequence
        sequence_length: Length of the full sequence (defaults to the slice end)
        settings: Relay settings (defaults to the cached settings)
        **kwargs: Individual connection arguments overriding ``args``

    Returns:
        Connection with the visible edges and page info

    Raises:
        ConnectionArgumentError: If ``first`` or ``last`` is negative or too large
    """
    settings = settings or get_relay_settings()
    request = _merge_args(args, kwargs)
    _validate_count("first", request.first, settings.max_page_size)
    _validate_count("last", request.last, settings.max_page_size)

    items = _materialize(sequence_slice)
    codec = CursorCodec(settings.cursor_prefix)
    slice_end = slice_start + len(items)
    if sequence_length is None:
        sequence_length = slice_end

    after_offset = _decode_bound(codec, "after", request.after)
    before_offset = _decode_bound(codec, "before", request.before)

    start, end = 0, sequence_length
    if after_offset is not None:
        start = max(start, after_offset + 1)
    if before_offset is not None:
        end = min(end, before_offset)
    start = min(start, sequence_length)
    end = max(end, start)

    if request.first is not None:
        end = min(end, start + request.first)
    if request.last is not None:
        start = max(start, end - request.last)

    # Only the materialized part of the window can become edges
    lower = max(start, slice_start)
    upper = max(min(end, slice_end), lower)
    edges = [
        Edge(node=node, cursor=codec.encode(lower + index))
        for index, node in enumerate(items[lower - slice_start : upper - slice_start])
    ]

    first_offset = lower if edges else start
    last_end = upper if edges else end
    page_info = PageInfo(
        has_previous_page=first_offset > 0,
        has_next_page=last_end < sequence_length,
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
    )
    return Connection(edges=edges, page_info=page_info)


def connection_from_sequence(
    sequence: Iterable[T],
    args: ArgsLike = None,
    *,
    settings: RelaySettings | None = None,
    **kwargs: Any,
) -> Connection[T]:
    """Window a fully materialized sequence.

    Example:
        >>> conn = connection_from_sequence(["a", "b", "c", "d", "e"], first=2)
        >>> conn.nodes
        ['a', 'b']
        >>> conn.page_info.has_next_page
        True
    """
    items = _materialize(sequence)
    return connection_from_slice(
        items,
        args,
        slice_start=0,
        sequence_length=len(items),
        settings=settings,
        **kwargs,
    )


async def connection_from_awaitable(
    awaitable: Awaitable[Iterable[T]],
    args: ArgsLike = None,
    *,
    settings: RelaySettings | None = None,
    **kwargs: Any,
) -> Connection[T]:
    """Await a sequence, then window it with connection_from_sequence."""
    sequence = await awaitable
    return connection_from_sequence(sequence, args, settings=settings, **kwargs)


__all__ = [
    "connection_from_awaitable",
    "connection_from_sequence",
    "connection_from_slice",
]
