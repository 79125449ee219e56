"""Strawberry schema-construction layer for the Relay conventions.

This package exposes, for use while building a schema:
- the Node interface, node/nodes root fields and Node type registration
- Connection/Edge type factories and connection fields
- Relay mutations carrying a client mutation id
"""

from relaykit.graphql.mutations import mutation_with_client_mutation_id
from relaykit.graphql.types import (
    Node,
    PageInfoType,
    clear_type_cache,
    connection_field,
    create_connection,
    create_edge,
    create_schema,
    global_id_field,
    node_field,
    node_type,
    nodes_field,
    to_graphql_connection,
)

__all__ = [
    "Node",
    "PageInfoType",
    "clear_type_cache",
    "connection_field",
    "create_connection",
    "create_edge",
    "create_schema",
    "global_id_field",
    "mutation_with_client_mutation_id",
    "node_field",
    "node_type",
    "nodes_field",
    "to_graphql_connection",
]
