"""Strawberry types for Relay connections and global object identification."""

from relaykit.graphql.types.base import PageInfoType
from relaykit.graphql.types.node import (
    Node,
    create_schema,
    global_id_field,
    node_field,
    node_type,
    nodes_field,
)
from relaykit.graphql.types.pagination import (
    AfterArg,
    BeforeArg,
    FirstArg,
    LastArg,
    clear_type_cache,
    connection_field,
    create_connection,
    create_edge,
    to_graphql_connection,
)

__all__ = [
    "AfterArg",
    "BeforeArg",
    "FirstArg",
    "LastArg",
    "Node",
    "PageInfoType",
    "clear_type_cache",
    "connection_field",
    "create_connection",
    "create_edge",
    "create_schema",
    "global_id_field",
    "node_field",
    "node_type",
    "nodes_field",
    "to_graphql_connection",
]
