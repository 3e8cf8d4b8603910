"""Shared fixtures for gql-tsgen tests."""

import logging
from pathlib import Path

import pytest
from graphql import build_schema, parse

from gql_tsgen.config import TypegenConfig
from gql_tsgen.core.documents import CollectedDocument, DocumentKind
from gql_tsgen.logging import get_logger

SCHEMA_SDL = """
scalar DateTime

enum Role {
    ADMIN
    USER
}

input UserInput {
    name: String!
    role: Role
    tags: [String!]
}

interface Node {
    id: ID!
}

type User implements Node {
    id: ID!
    name: String
    role: Role
    friends: [User!]!
    createdAt: DateTime
}

type Query {
    hello(name: String): String
    user(id: ID!): User
    node(id: ID!): Node
    users: [User]
}

type Mutation {
    doThing: Boolean
    createUser(input: UserInput!): User!
}
"""


class MemoryWriter:
    """File writer keeping everything in memory."""

    def __init__(self):
        self.files: dict[Path, str] = {}

    async def write(self, path, contents):
        self.files[Path(path)] = contents


@pytest.fixture
def schema():
    """A schema with queries and mutations but no subscriptions."""
    return build_schema(SCHEMA_SDL)


@pytest.fixture
def config():
    return TypegenConfig(output_dir=Path("/out"))


@pytest.fixture
def writer():
    return MemoryWriter()


def operation_definition(source: str):
    return parse(source).definitions[0]


def collected(source: str, name: str, kind: DocumentKind = DocumentKind.OPERATION, **kwargs):
    """Collect one named definition from a document source."""
    return CollectedDocument(name=name, kind=kind, document=parse(source), **kwargs)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so they do not outlive a test."""
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
