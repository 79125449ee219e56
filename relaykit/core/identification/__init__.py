"""Global object identification.

    from relaykit.core.identification import NodeRegistry, to_global_id

    registry = NodeRegistry()
    registry.register("User", fetch_user, object_type=User)

    registry.lookup(to_global_id("User", 1), context)
"""

from relaykit.core.identification.global_id import (
    GlobalId,
    from_global_id,
    is_valid_kind,
    to_global_id,
)
from relaykit.core.identification.registry import (
    NodeKind,
    NodeRegistry,
    default_id_getter,
)

__all__ = [
    "GlobalId",
    "NodeKind",
    "NodeRegistry",
    "default_id_getter",
    "from_global_id",
    "is_valid_kind",
    "to_global_id",
]
