"""Opaque global identifiers.

A global id names one object anywhere in the graph: it pairs the kind of
the object with its local id inside that kind, e.g. ``("User", "42")``.

Wire format:
    URL-safe base64 of ``"{kind}:{local_id}"``

Kinds are GraphQL names and cannot contain ``:``, so the first ``:``
always splits the pair and local ids may contain any character.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from relaykit.core.codec import OpaqueCodec

KIND_NAME_RE = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")


def is_valid_kind(kind: object) -> bool:
    """Check whether ``kind`` can be embedded in a global id."""
    return isinstance(kind, str) and KIND_NAME_RE.fullmatch(kind) is not None


class GlobalId(BaseModel):
    """Decoded form of an opaque global id.

    Attributes:
        kind: Name of the object kind (a GraphQL type name)
        local_id: Identifier of the object within its kind
    """

    kind: str = Field(pattern=rf"^{KIND_NAME_RE.pattern}$", description="Object kind")
    local_id: str = Field(description="Identifier within the kind")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return to_global_id(self.kind, self.local_id)


def to_global_id(kind: str, local_id: str | int) -> str:
    """Encode a kind and local id into an opaque global id.

    Raises:
        ValueError: If ``kind`` is not a valid GraphQL name
    """
    if not is_valid_kind(kind):
        raise ValueError(f"Invalid kind name: {kind!r}")
    return OpaqueCodec.encode(f"{kind}:{local_id}")


def from_global_id(token: str) -> GlobalId:
    """Decode an opaque global id.

    Raises:
        ValueError: If the token is malformed
    """
    text = OpaqueCodec.decode(token)
    kind, sep, local_id = text.partition(":")
    if not sep or not is_valid_kind(kind):
        raise ValueError("Invalid global id: missing or invalid kind")
    return GlobalId(kind=kind, local_id=local_id)


__all__ = [
    "GlobalId",
    "KIND_NAME_RE",
    "from_global_id",
    "is_valid_kind",
    "to_global_id",
]
