"""Registry translating between global ids and live instances.

The registry maps each object kind to a fetch function and owns the one
runtime type resolver used for polymorphic ``Node`` results. It is built
during schema setup, frozen when the schema is built, and read-only while
requests are served, so concurrent lookups need no locking.

Failure semantics:
- Malformed, forged or stale ids never raise; they resolve to ``None``
  exactly like an object that does not exist.
- Conflicting registrations and unclassifiable instances are
  configuration errors and always raise.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from relaykit.core.exceptions import KindRegistrationError, NodeResolutionError
from relaykit.core.identification.global_id import from_global_id, is_valid_kind, to_global_id

logger = logging.getLogger(__name__)

FetchFn = Callable[[str, Any], Any]
KindResolver = Callable[[Any, Any], str]
IdGetter = Callable[[Any], Any]


def default_id_getter(instance: Any) -> Any:
    """Read the local id of an instance from its ``id`` key or attribute."""
    if isinstance(instance, Mapping):
        return instance["id"]
    return instance.id


@dataclass(frozen=True)
class NodeKind:
    """One registered object kind.

    Attributes:
        name: Kind name, unique within a registry
        fetch: ``(local_id, context) -> instance | None`` (or an awaitable of it)
        object_type: Optional class used by the fallback type resolver
        schema_type: Optional type object the schema layer exposes for this kind
    """

    name: str
    fetch: FetchFn
    object_type: type | None = None
    schema_type: Any = None


class NodeRegistry:
    """Kind registry for global object identification.

    Re-registering a kind with the same fetch function is a no-op. A
    different fetch function raises KindRegistrationError unless the
    registry allows overwrites, in which case the latest one wins.

    Usage:
        registry = NodeRegistry(resolve_kind=lambda obj, ctx: type(obj).__name__)
        registry.register("User", lambda local_id, ctx: users.get(local_id))

        token = registry.global_id_for("User", user)
        registry.lookup(token, context)  # -> user
    """

    def __init__(
        self,
        resolve_kind: KindResolver | None = None,
        *,
        allow_overwrite: bool = False,
    ) -> None:
        self._resolve_kind = resolve_kind
        self._allow_overwrite = allow_overwrite
        self._kinds: dict[str, NodeKind] = {}
        self._frozen = False

    # ──────────────────────────────────────────────────────────────
    # Setup
    # ──────────────────────────────────────────────────────────────

    @property
    def kinds(self) -> Mapping[str, NodeKind]:
        """Read-only view of the registered kinds."""
        return MappingProxyType(self._kinds)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, kind: object) -> bool:
        return kind in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)

    def register(
        self,
        kind: str,
        fetch: FetchFn,
        object_type: type | None = None,
        schema_type: Any = None,
    ) -> NodeKind:
        """Associate a kind name with its fetch function.

        Args:
            kind: Kind name (a valid GraphQL name)
            fetch: ``(local_id, context)`` returning the instance or None
            object_type: Class whose instances belong to this kind, used when
                the registry has no explicit type resolver
            schema_type: Type object the schema layer exposes for this kind

        Returns:
            The registered entry

        Raises:
            KindRegistrationError: If the registry is frozen, the name is
                invalid, or the kind is already bound to another fetch function
        """
        if self._frozen:
            raise KindRegistrationError(
                detail=f"Cannot register kind '{kind}': registry is frozen",
                extra={"kind": kind},
            )
        if not is_valid_kind(kind):
            raise KindRegistrationError(
                detail=f"Invalid kind name: {kind!r}",
                type="invalid-kind-name",
                extra={"kind": str(kind)},
            )
        if not callable(fetch):
            raise KindRegistrationError(
                detail=f"Fetch function for kind '{kind}' is not callable",
                extra={"kind": kind},
            )

        entry = NodeKind(name=kind, fetch=fetch, object_type=object_type, schema_type=schema_type)
        existing = self._kinds.get(kind)
        if existing is not None and existing != entry:
            if not self._allow_overwrite:
                logger.error("Conflicting registration for kind %s", kind)
                raise KindRegistrationError(
                    detail=f"Kind '{kind}' is already registered with a different fetch function",
                    type="kind-already-registered",
                    extra={"kind": kind},
                )
            logger.warning("Overwriting registration for kind %s", kind)

        self._kinds[kind] = entry
        logger.debug("Registered node kind %s", kind)
        return entry

    def fetcher(self, kind: str, object_type: type | None = None) -> Callable[[FetchFn], FetchFn]:
        """Decorator form of :meth:`register`.

        Example:
            @registry.fetcher("Photo")
            def get_photo(local_id, context):
                return photos.get(local_id)
        """

        def decorator(fetch: FetchFn) -> FetchFn:
            self.register(kind, fetch, object_type)
            return fetch

        return decorator

    def freeze(self) -> None:
        """Make the registry read-only. Idempotent."""
        self._frozen = True

    # ──────────────────────────────────────────────────────────────
    # Request time
    # ──────────────────────────────────────────────────────────────

    def global_id_for(
        self,
        kind: str,
        instance: Any,
        id_getter: IdGetter | None = None,
    ) -> str:
        """Return the global id of an instance whose kind is statically known."""
        local_id = (id_getter or default_id_getter)(instance)
        return to_global_id(kind, local_id)

    def lookup(self, token: str, context: Any = None) -> Any:
        """Resolve a global id to its instance.

        Returns the instance or ``None``. When the kind's fetch function is
        asynchronous, returns an awaitable resolving to the same.

        Undecodable tokens and unknown kinds return ``None``. Exceptions
        raised by the fetch function propagate to the caller.
        """
        try:
            global_id = from_global_id(token)
        except ValueError:
            logger.debug("Global id could not be decoded")
            return None

        entry = self._kinds.get(global_id.kind)
        if entry is None:
            logger.debug("Global id refers to unregistered kind %s", global_id.kind)
            return None

        return entry.fetch(global_id.local_id, context)

    def lookup_many(self, tokens: Iterable[str], context: Any = None) -> Any:
        """Resolve several global ids, preserving order.

        Returns a list, or an awaitable list if any fetch was asynchronous.
        """
        results: list[Any] = []
        try:
            for token in tokens:
                results.append(self.lookup(token, context))
        except Exception:
            # Fetches already started must not be left un-awaited
            for pending in results:
                if inspect.iscoroutine(pending):
                    pending.close()
            raise
        if any(inspect.isawaitable(result) for result in results):
            return _gather(results)
        return results

    def resolve_kind(self, instance: Any, context: Any = None) -> str:
        """Determine the kind name of an instance returned by a fetch function.

        Raises:
            NodeResolutionError: If no registered kind can be determined
        """
        if self._resolve_kind is not None:
            kind = self._resolve_kind(instance, context)
        else:
            kind = self._kind_for_instance(instance)

        if kind is None or kind not in self._kinds:
            logger.critical(
                "Cannot resolve node kind for instance of %s",
                type(instance).__name__,
                extra={"resolved_kind": kind},
            )
            raise NodeResolutionError(
                detail=f"Unknown object type `{type(instance).__name__}`",
                extra={"instance_type": type(instance).__name__, "resolved_kind": kind},
            )
        return kind

    def _kind_for_instance(self, instance: Any) -> str | None:
        # Most specific registered class wins, so a subclass kind beats its base
        by_type: dict[type, str] = {}
        for entry in self._kinds.values():
            if entry.object_type is not None:
                by_type.setdefault(entry.object_type, entry.name)
        for cls in type(instance).__mro__:
            if cls in by_type:
                return by_type[cls]
        # Virtual subclasses (ABC.register) only show up through isinstance
        return next(
            (name for object_type, name in by_type.items() if isinstance(instance, object_type)),
            None,
        )


async def _gather(results: list[Any]) -> list[Any]:
    async def settle(result: Any) -> Any:
        if inspect.isawaitable(result):
            return await result
        return result

    return list(await asyncio.gather(*(settle(result) for result in results)))


__all__ = [
    "FetchFn",
    "IdGetter",
    "KindResolver",
    "NodeKind",
    "NodeRegistry",
    "default_id_getter",
]
