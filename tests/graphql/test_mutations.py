"""Tests for Relay mutations carrying a client mutation id.

Types are declared inside tests, so annotations must stay real objects.
"""

import pytest
import strawberry
from strawberry.printer import print_schema

from relaykit.core.identification import NodeRegistry, to_global_id
from relaykit.core.settings import RelaySettings
from relaykit.graphql import create_schema, mutation_with_client_mutation_id

INTRODUCE_USER = """
    mutation IntroduceUser($input: IntroduceUserInput!) {
        introduceUser(input: $input) {
            user { id name }
            userCount
            clientMutationID
        }
    }
"""


@strawberry.type
class Query:
    ok: bool = True


def test_schema_contains_input_and_payload(schema) -> None:
    """Test that each mutation gets its own Input and Payload types."""
    sdl = print_schema(schema)
    assert "input IntroduceUserInput" in sdl
    assert "type IntroduceUserPayload" in sdl
    assert "introduceUser(" in sdl
    assert "): IntroduceUserPayload" in sdl


def test_client_mutation_id_is_non_null_string(schema) -> None:
    """Test that clientMutationID is a required String on input and payload."""
    result = schema.execute_sync(
        """
        {
            input: __type(name: "IntroduceUserInput") {
                inputFields { name type { kind ofType { name } } }
            }
            payload: __type(name: "IntroduceUserPayload") {
                fields { name type { kind ofType { name } } }
            }
        }
        """
    )
    assert result.errors is None
    expected = {"kind": "NON_NULL", "ofType": {"name": "String"}}
    input_fields = {f["name"]: f["type"] for f in result.data["input"]["inputFields"]}
    payload_fields = {f["name"]: f["type"] for f in result.data["payload"]["fields"]}
    assert input_fields["clientMutationID"] == expected
    assert input_fields["name"] == expected
    assert payload_fields["clientMutationID"] == expected
    assert payload_fields["userCount"] == {"kind": "SCALAR", "ofType": None}


def test_mutation_echoes_client_mutation_id(api) -> None:
    """Test that the payload echoes the client mutation id with the outputs."""
    result = api.schema.execute_sync(
        INTRODUCE_USER,
        variable_values={"input": {"name": "Ada Lovelace", "clientMutationID": "abc"}},
    )

    assert result.errors is None
    payload = result.data["introduceUser"]
    assert payload["clientMutationID"] == "abc"
    assert payload["userCount"] == 3
    assert payload["user"] == {"id": to_global_id("User", "3"), "name": "Ada Lovelace"}
    assert api.store.users["3"].name == "Ada Lovelace"


def test_client_mutation_id_cannot_be_overridden(schema) -> None:
    """Test that business logic output never replaces the echoed id."""
    result = schema.execute_sync(
        """
        mutation {
            mirror(input: {text: "hello", clientMutationID: "req-42"}) {
                echo
                clientMutationID
            }
        }
        """
    )

    assert result.errors is None
    assert result.data == {"mirror": {"echo": "hello", "clientMutationID": "req-42"}}


def test_missing_client_mutation_id_is_invalid(schema) -> None:
    """Test that the client mutation id is required in the input."""
    result = schema.execute_sync(
        'mutation { mirror(input: {text: "hello"}) { clientMutationID } }'
    )

    assert result.errors is not None
    assert "clientMutationID" in result.errors[0].message


@pytest.mark.asyncio
async def test_async_mutation(api) -> None:
    """Test that asynchronous business logic is awaited before echoing."""
    user_id = to_global_id("User", "2")

    result = await api.schema.execute(
        """
        mutation Rename($input: RenameUserInput!) {
            renameUser(input: $input) {
                user { name }
                clientMutationID
            }
        }
        """,
        variable_values={"input": {"userId": user_id, "name": "Jane Doe", "clientMutationID": "r1"}},
    )

    assert result.errors is None
    assert result.data == {"renameUser": {"user": {"name": "Jane Doe"}, "clientMutationID": "r1"}}


@pytest.mark.asyncio
async def test_empty_output_still_echoes(api) -> None:
    """Test that an empty output keeps declared fields null and echoes the id."""
    result = await api.schema.execute(
        """
        mutation Rename($input: RenameUserInput!) {
            renameUser(input: $input) { user { name } clientMutationID }
        }
        """,
        variable_values={
            "input": {"userId": "garbage-token", "name": "Nobody", "clientMutationID": ""}
        },
    )

    assert result.errors is None
    assert result.data == {"renameUser": {"user": None, "clientMutationID": ""}}


def test_mutation_receives_context() -> None:
    """Test that business logic receives the declared inputs and the context."""
    calls = []

    def mutate(input, context):
        calls.append((input, context["viewer"]))
        return {"accepted": True}

    @strawberry.type
    class Mutation:
        submit = mutation_with_client_mutation_id(
            "Submit",
            input_fields={"body": str, "tag": str | None},
            output_fields={"accepted": bool},
            mutate_and_get_payload=mutate,
            description="Submit a body",
        )

    schema = create_schema(NodeRegistry(), query=Query, mutation=Mutation)

    result = schema.execute_sync(
        'mutation { submit(input: {body: "hi", clientMutationID: "s1"}) { accepted clientMutationID } }',
        context_value={"viewer": "admin"},
    )

    assert result.errors is None
    assert result.data == {"submit": {"accepted": True, "clientMutationID": "s1"}}
    assert calls == [({"body": "hi", "tag": None}, "admin")]


def test_custom_client_mutation_id_name() -> None:
    """Test that the client mutation id field name is configurable."""

    @strawberry.type
    class Mutation:
        ping = mutation_with_client_mutation_id(
            "Ping",
            input_fields={},
            output_fields={"pong": bool | None},
            mutate_and_get_payload=lambda input, context: {"pong": True},
            settings=RelaySettings(client_mutation_id_name="clientMutationId"),
        )

    schema = create_schema(NodeRegistry(), query=Query, mutation=Mutation)

    result = schema.execute_sync(
        'mutation { ping(input: {clientMutationId: "p"}) { pong clientMutationId } }'
    )

    assert result.errors is None
    assert result.data == {"ping": {"pong": True, "clientMutationId": "p"}}


def test_reserved_field_name_rejected() -> None:
    """Test that declaring client_mutation_id explicitly fails."""
    with pytest.raises(ValueError, match="reserved"):
        mutation_with_client_mutation_id(
            "Broken",
            input_fields={"client_mutation_id": str},
            output_fields={},
            mutate_and_get_payload=lambda input, context: {},
        )
