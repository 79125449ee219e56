"""Global object identification for Strawberry schemas.

Provides:
- Node: the interface every refetchable type implements (one field, ``id: ID!``)
- node_type: decorator turning a class into a Node type registered with a NodeRegistry
- global_id_field: the ``id`` field encoding the static kind and local id
- node_field / nodes_field: root fields resolving global ids
- create_schema: builds the schema with every registered Node type

Example:
    registry = NodeRegistry()

    @node_type(registry, fetch=lambda local_id, ctx: USERS.get(local_id), model=UserModel)
    class User(Node):
        name: str

    @strawberry.type
    class Query:
        node = node_field(registry)

    schema = create_schema(registry, query=Query)

Polymorphic results go through the registry: each Node type checks
``registry.resolve_kind(obj, context)`` to claim the instances it owns.

This module builds fields at runtime, so annotations must stay real
objects (no postponed evaluation).
"""

import logging
from collections.abc import Callable, Iterable
from typing import Annotated, Any

import strawberry
from strawberry.types import Info

from relaykit.core.identification import NodeRegistry, default_id_getter, to_global_id
from relaykit.core.identification.registry import FetchFn, IdGetter

logger = logging.getLogger(__name__)

__all__ = [
    "Node",
    "create_schema",
    "global_id_field",
    "node_field",
    "node_type",
    "nodes_field",
]


@strawberry.interface(name="Node", description="An object with an ID")
class Node:
    """Relay Node interface."""

    id: strawberry.ID = strawberry.field(description="The id of the object")


def global_id_field(
    kind: str,
    id_getter: IdGetter | None = None,
    *,
    description: str = "The ID of an object",
) -> Any:
    """Create the ``id: ID!`` field of a Node type.

    The kind is the statically known type name; the local id is read from the
    parent object with ``id_getter`` (``id`` attribute or key by default).
    """
    getter = id_getter or default_id_getter

    def resolve_id(root: Any) -> strawberry.ID:
        return strawberry.ID(to_global_id(kind, getter(root)))

    return strawberry.field(resolver=resolve_id, name="id", description=description)


def node_type(
    registry: NodeRegistry,
    *,
    fetch: FetchFn,
    name: str | None = None,
    model: type | None = None,
    id_getter: IdGetter | None = None,
    description: str | None = None,
) -> Callable[[type], type]:
    """Decorator declaring a Strawberry Node type and registering its kind.

    Args:
        registry: Registry the kind is registered with
        fetch: ``(local_id, context)`` returning the backing object or None
        name: GraphQL type name (defaults to the class name)
        model: Class of the backing objects, used when the registry has no
            explicit kind resolver
        id_getter: Reads the local id from a backing object
        description: GraphQL type description

    Returns:
        Decorator producing the Strawberry type
    """

    def wrap(cls: type) -> type:
        kind = name or cls.__name__

        def is_type_of(type_cls: type, obj: Any, info: Any) -> bool:
            if isinstance(obj, type_cls):
                return True
            return registry.resolve_kind(obj, info.context) == kind

        if "id" not in cls.__dict__:
            cls.id = global_id_field(kind, id_getter)
        cls.is_type_of = classmethod(is_type_of)

        object_type = strawberry.type(cls, name=kind, description=description)
        registry.register(kind, fetch, object_type=model, schema_type=object_type)
        return object_type

    return wrap


def node_field(
    registry: NodeRegistry,
    *,
    description: str = "Fetches an object given its ID",
) -> Any:
    """Create the root ``node(id: ID!): Node`` field.

    Undecodable ids, unknown kinds and missing objects all resolve to null.
    """

    def resolve_node(
        info: Info,
        id: Annotated[strawberry.ID, strawberry.argument(description="The ID of an object")],
    ) -> Node | None:
        return registry.lookup(id, info.context)

    return strawberry.field(resolver=resolve_node, description=description)


def nodes_field(
    registry: NodeRegistry,
    *,
    description: str = "Fetches objects given their IDs",
) -> Any:
    """Create the root ``nodes(ids: [ID!]!): [Node]!`` field.

    Results keep the order of ``ids``; each unresolvable id yields null.
    """

    def resolve_nodes(
        info: Info,
        ids: Annotated[list[strawberry.ID], strawberry.argument(description="The IDs of objects")],
    ) -> list[Node | None]:
        return registry.lookup_many(ids, info.context)

    return strawberry.field(resolver=resolve_nodes, description=description)


def create_schema(
    registry: NodeRegistry,
    *,
    query: type,
    mutation: type | None = None,
    types: Iterable[type] = (),
    **kwargs: Any,
) -> strawberry.Schema:
    """Build a Strawberry schema exposing every Node type of ``registry``.

    The registry is frozen first; registering kinds afterwards fails.
    """
    registry.freeze()
    node_types = [
        entry.schema_type for entry in registry.kinds.values() if entry.schema_type is not None
    ]
    schema = strawberry.Schema(
        query=query,
        mutation=mutation,
        types=[*node_types, *types],
        **kwargs,
    )
    logger.info("GraphQL schema created", extra={"node_kinds": sorted(registry.kinds)})
    return schema
