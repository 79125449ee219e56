"""Exception taxonomy for the relay convention layer.

Three outcomes are distinguished:

- Validation errors: malformed pagination input at the request boundary
  (negative ``first``/``last``). Raised to the caller as request errors.
- Configuration errors: an instance no kind can claim, conflicting kind
  registrations. These are programmer errors and are never converted into
  a per-request ``null``.
- Not-found: never an exception. A forged, stale or unknown identifier
  resolves to ``None`` exactly like a deleted object.
"""

from __future__ import annotations

from typing import Any


class RelayException(Exception):
    """Base relay exception.

    Every error raised by relaykit derives from it.

    Attributes:
        detail: Human-readable error message.
        type: Stable error type identifier, exported in GraphQL error extensions.
        extra: Structured context (kind, argument, value, ...) for logs and clients.

    Example:
        raise RelayException(
            detail="Kind 'User' is already registered",
            type="kind-already-registered",
            extra={"kind": "User"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "relay-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize relay exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
        """
        self.detail = detail
        self.type = type
        self.extra = extra or {}
        super().__init__(detail)

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions for this exception."""
        return {"code": self.type, **self.extra}


class ValidationException(RelayException):
    """Exception raised for request-level validation errors."""

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


class ConnectionArgumentError(ValidationException):
    """Raised when connection arguments are invalid.

    Example:
        raise ConnectionArgumentError(
            detail="Argument 'first' must be a non-negative integer",
            extra={"argument": "first", "value": -1},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "invalid-connection-argument",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


class ConfigurationException(RelayException):
    """Exception raised for schema setup mistakes.

    Configuration errors are fatal: they describe a broken schema, not bad
    user input, and must propagate instead of degrading to ``None``.
    """

    def __init__(
        self,
        detail: str,
        type: str = "configuration-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


class KindRegistrationError(ConfigurationException):
    """Raised for invalid, conflicting or late kind registrations."""

    def __init__(
        self,
        detail: str,
        type: str = "kind-registration-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


class NodeResolutionError(ConfigurationException):
    """Raised when the runtime type of an instance cannot be determined."""

    def __init__(
        self,
        detail: str,
        type: str = "node-resolution-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


__all__ = [
    "ConfigurationException",
    "ConnectionArgumentError",
    "KindRegistrationError",
    "NodeResolutionError",
    "RelayException",
    "ValidationException",
]
