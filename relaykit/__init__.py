"""Relay conventions on top of Strawberry GraphQL.

- relaykit.core.identification: opaque global ids and the NodeRegistry
- relaykit.core.pagination: cursor pagination producing connections
- relaykit.graphql: Strawberry glue (Node, connections, mutations)

The Strawberry layer is imported lazily so the core stays usable on its own.
"""

from __future__ import annotations

from typing import Any

from relaykit.core.identification import NodeRegistry, from_global_id, to_global_id
from relaykit.core.pagination import (
    Connection,
    ConnectionArguments,
    connection_from_sequence,
    connection_from_slice,
)

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "ConnectionArguments",
    "NodeRegistry",
    "connection_from_sequence",
    "connection_from_slice",
    "from_global_id",
    "graphql",
    "to_global_id",
]


def __getattr__(name: str) -> Any:
    if name == "graphql":
        import relaykit.graphql as graphql_module

        return graphql_module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
