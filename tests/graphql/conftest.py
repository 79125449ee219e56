"""GraphQL test fixtures.

Provides:
- In-memory user and photo stores
- A schema with User and Photo node types, node/nodes root fields,
  paginated users/photos and Relay mutations

Strawberry types are built per test so every schema owns a fresh registry.
Annotations in this module must stay real objects.
"""

import asyncio
from dataclasses import dataclass, field

import pytest
import strawberry

from relaykit.core.identification import NodeRegistry
from relaykit.graphql import (
    Node,
    clear_type_cache,
    connection_field,
    create_schema,
    mutation_with_client_mutation_id,
    node_field,
    node_type,
    nodes_field,
)


@dataclass
class UserRecord:
    id: str
    name: str


@dataclass
class PhotoRecord:
    id: str
    width: int


@dataclass
class Store:
    users: dict[str, UserRecord] = field(default_factory=dict)
    photos: dict[str, PhotoRecord] = field(default_factory=dict)


@dataclass
class RelayApi:
    schema: strawberry.Schema
    registry: NodeRegistry
    store: Store


@pytest.fixture(autouse=True)
def fresh_connection_types():
    """Drop Edge/Connection types generated for this test's item types."""
    yield
    clear_type_cache()


@pytest.fixture
def store() -> Store:
    return Store(
        users={
            "1": UserRecord(id="1", name="John Doe"),
            "2": UserRecord(id="2", name="Jane Smith"),
        },
        photos={
            "3": PhotoRecord(id="3", width=300),
            "4": PhotoRecord(id="4", width=400),
        },
    )


def build_api(store: Store) -> RelayApi:
    registry = NodeRegistry()

    def get_user(local_id, context):
        return store.users.get(local_id)

    async def get_photo(local_id, context):
        await asyncio.sleep(0)
        return store.photos.get(local_id)

    @node_type(registry, fetch=get_user, model=UserRecord, description="A person")
    class User(Node):
        name: str

    @node_type(registry, fetch=get_photo, model=PhotoRecord)
    class Photo(Node):
        width: int

    async def load_photos(root, context):
        await asyncio.sleep(0)
        return list(store.photos.values())

    @strawberry.type
    class Query:
        node = node_field(registry)
        nodes = nodes_field(registry)
        users = connection_field(User, lambda root, context: list(store.users.values()))
        photos = connection_field(Photo, load_photos)

    def create_user(input, context):
        local_id = str(len(store.users) + 1)
        user = UserRecord(id=local_id, name=input["name"])
        store.users[local_id] = user
        return {"user": user, "user_count": len(store.users)}

    async def update_user_name(input, context):
        await asyncio.sleep(0)
        user = registry.lookup(input["user_id"], context)
        if user is None:
            return {}
        user.name = input["name"]
        return {"user": user}

    def echo_text(input, context):
        return {"client_mutation_id": "overridden", "undeclared": True, "echo": input["text"]}

    @strawberry.type
    class Mutation:
        introduce_user = mutation_with_client_mutation_id(
            "IntroduceUser",
            input_fields={"name": str},
            output_fields={"user": User | None, "user_count": int | None},
            mutate_and_get_payload=create_user,
        )
        rename_user = mutation_with_client_mutation_id(
            "RenameUser",
            input_fields={"user_id": strawberry.ID, "name": str},
            output_fields={"user": User | None},
            mutate_and_get_payload=update_user_name,
        )
        mirror = mutation_with_client_mutation_id(
            "Mirror",
            input_fields={"text": str},
            output_fields={"echo": str | None},
            mutate_and_get_payload=echo_text,
        )

    schema = create_schema(registry, query=Query, mutation=Mutation)
    return RelayApi(schema=schema, registry=registry, store=store)


@pytest.fixture
def api(store: Store) -> RelayApi:
    return build_api(store)


@pytest.fixture
def schema(api: RelayApi) -> strawberry.Schema:
    return api.schema
