"""Relay mutations with a client mutation id.

A Relay mutation takes exactly one argument, ``input``, and returns a
payload. The client puts a correlation token in the input and gets it
back unchanged in the payload, whatever the business logic returns:

    introduce_ship = mutation_with_client_mutation_id(
        "IntroduceShip",
        input_fields={"ship_name": str, "faction_id": strawberry.ID},
        output_fields={"ship": Ship | None},
        mutate_and_get_payload=introduce,
    )

    # input IntroduceShipInput { shipName: String!, factionId: ID!, clientMutationID: String! }
    # type IntroduceShipPayload { ship: Ship, clientMutationID: String! }

``mutate_and_get_payload(input, context)`` receives the declared input
fields as a dict keyed by their Python names and returns a mapping of
output field values, or an awaitable of one.

Types are built at runtime, so annotations must stay real objects (no
postponed evaluation).
"""

import inspect
import logging
import types
import typing
from collections.abc import Awaitable, Callable, Mapping
from typing import Annotated, Any

import strawberry
from strawberry.types import Info

from relaykit.core.settings import RelaySettings, get_relay_settings
from relaykit.infra.logging.context import log_context

logger = logging.getLogger(__name__)

__all__ = ["mutation_with_client_mutation_id"]

MutateAndGetPayload = Callable[[dict[str, Any], Any], Mapping[str, Any] | Awaitable[Mapping[str, Any]]]

CLIENT_MUTATION_ID = "client_mutation_id"


def _is_optional(annotation: Any) -> bool:
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        return type(None) in typing.get_args(annotation)
    return False


def _build_type(
    type_name: str,
    fields: Mapping[str, Any],
    client_mutation_id_name: str,
    *,
    is_input: bool,
    description: str,
) -> type:
    annotations: dict[str, Any] = {}
    namespace: dict[str, Any] = {"__module__": __name__, "__annotations__": annotations}
    for field_name, annotation in fields.items():
        if field_name == CLIENT_MUTATION_ID:
            raise ValueError(f"Field name '{CLIENT_MUTATION_ID}' is reserved")
        annotations[field_name] = annotation
        # Nullable fields may be left out by clients and business logic alike
        if _is_optional(annotation):
            namespace[field_name] = strawberry.field(default=None)

    annotations[CLIENT_MUTATION_ID] = str
    namespace[CLIENT_MUTATION_ID] = strawberry.field(
        name=client_mutation_id_name,
        description="Correlation token echoed back in the mutation payload",
    )

    decorator = strawberry.input if is_input else strawberry.type
    return decorator(type(type_name, (), namespace), name=type_name, description=description)


def mutation_with_client_mutation_id(
    name: str,
    input_fields: Mapping[str, Any],
    output_fields: Mapping[str, Any],
    mutate_and_get_payload: MutateAndGetPayload,
    *,
    description: str | None = None,
    settings: RelaySettings | None = None,
) -> Any:
    """Create a mutation field following the Relay input/payload convention.

    Args:
        name: Base name; types are named ``{name}Input`` and ``{name}Payload``
        input_fields: Python field name -> annotation for the input type
        output_fields: Python field name -> annotation for the payload type
        mutate_and_get_payload: Business logic ``(input, context) -> outputs``
        description: Field description
        settings: Relay settings (defaults to the cached settings)

    Returns:
        A Strawberry field taking ``input: {name}Input!`` and returning ``{name}Payload``
    """
    settings = settings or get_relay_settings()
    client_mutation_id_name = settings.client_mutation_id_name

    input_type = _build_type(
        f"{name}Input",
        input_fields,
        client_mutation_id_name,
        is_input=True,
        description=f"Input of the {name} mutation",
    )
    payload_type = _build_type(
        f"{name}Payload",
        output_fields,
        client_mutation_id_name,
        is_input=False,
        description=f"Payload of the {name} mutation",
    )
    input_names = list(input_fields)
    output_names = set(output_fields)

    def build_payload(outputs: Mapping[str, Any] | None, client_mutation_id: str) -> Any:
        values = {key: value for key, value in (outputs or {}).items() if key in output_names}
        return payload_type(**values, client_mutation_id=client_mutation_id)

    async def build_payload_async(pending: Awaitable[Mapping[str, Any]], client_mutation_id: str) -> Any:
        return build_payload(await pending, client_mutation_id)

    def resolve_mutation(info: Info, input):
        client_mutation_id = getattr(input, CLIENT_MUTATION_ID)
        values = {field_name: getattr(input, field_name) for field_name in input_names}
        with log_context(mutation=name):
            logger.debug("Executing mutation", extra={"client_mutation_id": client_mutation_id})
            outputs = mutate_and_get_payload(values, info.context)
        if inspect.isawaitable(outputs):
            return build_payload_async(outputs, client_mutation_id)
        return build_payload(outputs, client_mutation_id)

    resolve_mutation.__annotations__.update(
        {
            "input": Annotated[input_type, strawberry.argument(description=f"Input of the {name} mutation")],
            "return": payload_type,
        }
    )
    return strawberry.field(resolver=resolve_mutation, description=description)
