"""Connection arguments and results.

A request carries up to four arguments (``before``, ``after``, ``first``,
``last``); the result is a Relay connection: the visible edges in sequence
order plus page info describing what lies outside the window.

Connections can also be flattened to a REST-style CursorPage that shares
the same cursors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ConnectionArguments(BaseModel):
    """The four standard connection arguments.

    All are optional and may be combined. ``first`` and ``last`` are
    validated by the engine, so a negative value reaches it unchanged and
    fails there as a request error.
    """

    before: str | None = Field(default=None, description="Only items before this cursor")
    after: str | None = Field(default=None, description="Only items after this cursor")
    first: int | None = Field(default=None, description="At most this many items from the start of the window")
    last: int | None = Field(default=None, description="At most this many items from the end of the window")

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def coerce(cls, args: ConnectionArguments | Mapping[str, Any] | None) -> ConnectionArguments:
        """Build arguments from a model, a mapping of field values, or None."""
        if args is None:
            return cls()
        if isinstance(args, cls):
            return args
        return cls(**dict(args))


class PageInfo(BaseModel):
    """Where the window sits in the paginated sequence.

    Attributes:
        has_previous_page: An item of the sequence precedes the window
        has_next_page: An item of the sequence follows the window
        start_cursor: Cursor of the first edge, None when there are no edges
        end_cursor: Cursor of the last edge, None when there are no edges
    """

    has_previous_page: bool = Field(description="Items exist before the window")
    has_next_page: bool = Field(description="Items exist after the window")
    start_cursor: str | None = Field(default=None, description="Cursor of the first edge")
    end_cursor: str | None = Field(default=None, description="Cursor of the last edge")

    model_config = {"frozen": True}


class Edge(BaseModel, Generic[T]):
    """One item of the window and the cursor pointing at it."""

    node: T = Field(description="The item")
    cursor: str = Field(description="Opaque position of the item in the sequence")

    model_config = {"frozen": True}


class Connection(BaseModel, Generic[T]):
    """Windowed view of an ordered sequence.

    Usage:
        connection = connection_from_sequence(users, first=10)

        # Next page
        connection_from_sequence(users, first=10, after=connection.page_info.end_cursor)

        # Previous page
        connection_from_sequence(users, last=10, before=connection.page_info.start_cursor)

    Attributes:
        edges: Visible items with their cursors, in sequence order
        page_info: Navigation metadata
    """

    edges: list[Edge[T]] = Field(default_factory=list, description="Visible edges")
    page_info: PageInfo = Field(description="Navigation metadata")

    model_config = {"frozen": True}

    @property
    def nodes(self) -> list[T]:
        """Visible items without their cursors."""
        return [edge.node for edge in self.edges]

    def to_cursor_page(self) -> CursorPage[T]:
        """Flatten into a REST-style page.

        Neighbour cursors are only set when a page exists in that direction.
        """
        page_info = self.page_info
        return CursorPage(
            items=self.nodes,
            next_cursor=page_info.end_cursor if page_info.has_next_page else None,
            prev_cursor=page_info.start_cursor if page_info.has_previous_page else None,
            has_more=page_info.has_next_page,
        )


class CursorPage(BaseModel, Generic[T]):
    """REST-style page.

    Attributes:
        items: Visible items
        next_cursor: Pass as ``after`` to continue forwards
        prev_cursor: Pass as ``before`` to continue backwards
        has_more: Items exist after this page
    """

    items: list[T] = Field(default_factory=list)
    next_cursor: str | None = None
    prev_cursor: str | None = None
    has_more: bool = False


__all__ = [
    "Connection",
    "ConnectionArguments",
    "CursorPage",
    "Edge",
    "PageInfo",
]
