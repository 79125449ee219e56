"""Base GraphQL types shared by every connection.

Provides the Relay PageInfo type mirroring
relaykit.core.pagination.schemas.PageInfo.
"""

from __future__ import annotations

import strawberry

from relaykit.core.pagination.schemas import PageInfo


@strawberry.type(name="PageInfo", description="Information about pagination in a connection")
class PageInfoType:
    """GraphQL Relay PageInfo for cursor-based pagination."""

    has_previous_page: bool = strawberry.field(
        description="When paginating backwards, are there more items?",
    )
    has_next_page: bool = strawberry.field(
        description="When paginating forwards, are there more items?",
    )
    start_cursor: str | None = strawberry.field(
        default=None,
        description="When paginating backwards, the cursor to continue",
    )
    end_cursor: str | None = strawberry.field(
        default=None,
        description="When paginating forwards, the cursor to continue",
    )

    @classmethod
    def from_page_info(cls, page_info: PageInfo) -> PageInfoType:
        """Convert the pydantic PageInfo to its GraphQL type."""
        return cls(
            has_previous_page=page_info.has_previous_page,
            has_next_page=page_info.has_next_page,
            start_cursor=page_info.start_cursor,
            end_cursor=page_info.end_cursor,
        )


__all__ = ["PageInfoType"]
