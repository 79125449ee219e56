"""Generic Relay connection types and fields for Strawberry.

Connection and Edge types are generated per item type instead of being
declared by hand for every feature:

    UserConnection = create_connection(User)

    # Produces:
    # type UserEdge { node: User, cursor: String! }
    # type UserConnection { edges: [UserEdge], pageInfo: PageInfo! }

A field returning the connection with the standard ``before``, ``after``,
``first`` and ``last`` arguments:

    @strawberry.type
    class Query:
        users = connection_field(User, lambda root, context: context["users"])

This module builds classes at runtime, so annotations must stay real
objects (no postponed evaluation).
"""

import inspect
import logging
from collections.abc import Callable
from typing import Annotated, Any

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from relaykit.core.exceptions import ConnectionArgumentError
from relaykit.core.pagination import Connection, ConnectionArguments, connection_from_sequence
from relaykit.graphql.types.base import PageInfoType

logger = logging.getLogger(__name__)

__all__ = [
    "AfterArg",
    "BeforeArg",
    "FirstArg",
    "LastArg",
    "clear_type_cache",
    "connection_field",
    "create_connection",
    "create_edge",
    "to_graphql_connection",
]

# Type aliases for annotated arguments with descriptions
BeforeArg = Annotated[
    str | None, strawberry.argument(description="Return items before this cursor"),
]
AfterArg = Annotated[
    str | None, strawberry.argument(description="Return items after this cursor"),
]
FirstArg = Annotated[
    int | None, strawberry.argument(description="Return at most this many items from the start"),
]
LastArg = Annotated[
    int | None, strawberry.argument(description="Return at most this many items from the end"),
]

SequenceResolver = Callable[[Any, Any], Any]

_edge_types: dict[tuple[type, str], type] = {}
_connection_types: dict[tuple[type, str], type] = {}


def _type_name(item_type: type) -> str:
    definition = getattr(item_type, "__strawberry_definition__", None)
    if definition is not None:
        return definition.name
    return item_type.__name__


# ============================================================================
# Connection Factories
# ============================================================================


def create_edge(item_type: type, type_name_prefix: str | None = None) -> type:
    """Create (or reuse) the Relay Edge type for ``item_type``.

    The Connection type built for the same item type and prefix uses this
    same Edge type.

    Args:
        item_type: Strawberry type of the nodes
        type_name_prefix: Prefix for the type name (defaults to the item type name)

    Returns:
        A Strawberry type named ``{prefix}Edge`` with ``node`` and ``cursor``
    """
    prefix = type_name_prefix or _type_name(item_type)
    key = (item_type, prefix)
    cached = _edge_types.get(key)
    if cached is not None:
        return cached

    namespace = {
        "__module__": __name__,
        "__annotations__": {"node": item_type | None, "cursor": str},
        "node": strawberry.field(description="The item at the end of the edge"),
        "cursor": strawberry.field(description="A cursor for use in pagination"),
    }
    edge = strawberry.type(
        type(f"{prefix}Edge", (), namespace),
        name=f"{prefix}Edge",
        description="An edge in a connection",
    )
    _edge_types[key] = edge
    return edge


def create_connection(item_type: type, type_name_prefix: str | None = None) -> type:
    """Create (or reuse) the Relay Connection type for ``item_type``.

    Types are cached per item type and prefix, so every field paginating the
    same item type shares one ``{prefix}Connection`` in the schema.

    Args:
        item_type: Strawberry type of the nodes
        type_name_prefix: Prefix for the type name (defaults to the item type name)

    Returns:
        A Strawberry type named ``{prefix}Connection`` with ``edges`` and ``pageInfo``
    """
    prefix = type_name_prefix or _type_name(item_type)
    key = (item_type, prefix)
    cached = _connection_types.get(key)
    if cached is not None:
        return cached

    edge_type = create_edge(item_type, prefix)
    namespace = {
        "__module__": __name__,
        "__annotations__": {
            "edges": list[edge_type | None] | None,
            "page_info": PageInfoType,
        },
        "edges": strawberry.field(description="A list of edges"),
        "page_info": strawberry.field(description="Information to aid in pagination"),
    }
    connection = strawberry.type(
        type(f"{prefix}Connection", (), namespace),
        name=f"{prefix}Connection",
        description=f"A connection to a list of {prefix} items",
    )
    connection.edge_type = edge_type
    _connection_types[key] = connection
    logger.debug("Created connection type %sConnection", prefix)
    return connection


def clear_type_cache() -> None:
    """Forget generated Edge and Connection types.

    Call between schemas built from throwaway item types, e.g. in tests.
    """
    _edge_types.clear()
    _connection_types.clear()


def to_graphql_connection(connection: Connection[Any], connection_type: type) -> Any:
    """Convert an engine Connection into an instance of ``connection_type``."""
    edge_type = connection_type.edge_type
    return connection_type(
        edges=[edge_type(node=edge.node, cursor=edge.cursor) for edge in connection.edges],
        page_info=PageInfoType.from_page_info(connection.page_info),
    )


# ============================================================================
# Connection Field
# ============================================================================


def connection_field(
    item_type: type,
    resolver: SequenceResolver,
    *,
    type_name_prefix: str | None = None,
    description: str | None = None,
) -> Any:
    """Create a field paginating the sequence returned by ``resolver``.

    Args:
        item_type: Strawberry type of the nodes
        resolver: ``(root, context)`` returning the ordered sequence, or an
            awaitable of it
        type_name_prefix: Prefix for the generated Connection/Edge type names
        description: Field description

    Returns:
        A Strawberry field with ``before``, ``after``, ``first``, ``last``
        arguments returning the Connection type
    """
    connection_type = create_connection(item_type, type_name_prefix)

    def paginate(sequence: Any, args: ConnectionArguments) -> Any:
        try:
            connection = connection_from_sequence(sequence, args)
        except ConnectionArgumentError as e:
            raise GraphQLError(e.detail, original_error=e, extensions=e.extensions) from e
        return to_graphql_connection(connection, connection_type)

    async def paginate_async(pending: Any, args: ConnectionArguments) -> Any:
        return paginate(await pending, args)

    def resolve_connection(
        root: Any,
        info: Info,
        before: BeforeArg = None,
        after: AfterArg = None,
        first: FirstArg = None,
        last: LastArg = None,
    ):
        args = ConnectionArguments(before=before, after=after, first=first, last=last)
        sequence = resolver(root, info.context)
        if inspect.isawaitable(sequence):
            return paginate_async(sequence, args)
        return paginate(sequence, args)

    resolve_connection.__annotations__["return"] = connection_type
    return strawberry.field(resolver=resolve_connection, description=description)
