"""Relay convention settings.

Controls the cursor namespace, page size limits and the name of the
client mutation id field.

Environment variables use RELAY_ prefix.
Example: RELAY_MAX_PAGE_SIZE=100, RELAY_CURSOR_PREFIX=arrayconnection
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelaySettings(BaseSettings):
    """Relay convention configuration.

    Attributes:
        cursor_prefix: Namespace embedded in every offset cursor. Changing it
            invalidates every cursor previously handed out.
        max_page_size: Upper bound for ``first``/``last``. ``None`` disables
            the bound. Values above it are rejected, not clamped.
        client_mutation_id_name: GraphQL name of the correlation token field
            on mutation inputs and payloads.

    Example:
        settings = RelaySettings(max_page_size=50)
    """

    cursor_prefix: str = Field(
        default="arrayconnection",
        min_length=1,
        max_length=64,
        pattern=r"^[^:]+$",
        description="Namespace prefix for offset cursors",
    )
    max_page_size: int | None = Field(
        default=None,
        ge=1,
        le=100_000,
        description="Maximum allowed first/last value (None disables the limit)",
    )
    client_mutation_id_name: str = Field(
        default="clientMutationID",
        pattern=r"^[_A-Za-z][_0-9A-Za-z]*$",
        description="GraphQL field name of the client mutation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
