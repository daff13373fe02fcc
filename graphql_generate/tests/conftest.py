"""Shared pytest fixtures for graphql_generate tests."""

from __future__ import annotations

import threading

import pytest

from graphql_generate.pipeline import (
    BackendBundle,
    BackendGenerator,
    ClientDocuments,
    ClientGenerator,
    FoldersConfig,
    GenerationConfig,
    MigrationEngine,
    NamedArtifact,
)

MODEL_SDL = '''
"""
@model
"""
type Note {
  id: ID!
  title: String!
  description: String
  comments: [Comment]
}

"""
@model
"""
type Comment {
  id: ID!
  text: String
}

type Query {
  likeNote(id: ID!): Boolean
}
'''


class StaticBackendGenerator(BackendGenerator):
    """Returns a fixed bundle and records the database kind it was asked for."""

    file_extension = "ts"

    def __init__(self, bundle: BackendBundle):
        self.bundle = bundle
        self.calls: list[str] = []

    def create_backend(self, database: str) -> BackendBundle:
        self.calls.append(database)
        return self.bundle


class StaticClientGenerator(ClientGenerator):
    def __init__(self, documents: ClientDocuments):
        self.documents = documents
        self.calls = 0

    def create_client(self) -> ClientDocuments:
        self.calls += 1
        return self.documents


class RecordingEngine(MigrationEngine):
    """Migration engine that records its calls and optionally fails."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []
        self.lock = threading.Lock()

    def diff_and_apply(self, schema_text, migrations_dir, connection):
        with self.lock:
            self.calls.append((schema_text, migrations_dir, connection))
        if self.error is not None:
            raise self.error


def artifacts(**contents: str) -> tuple[NamedArtifact, ...]:
    return tuple(NamedArtifact(name, content) for name, content in contents.items())


@pytest.fixture
def folders() -> FoldersConfig:
    return FoldersConfig(model="mo", schema="s", resolvers="r", client="c", migrations="m")


@pytest.fixture
def config(folders: FoldersConfig) -> GenerationConfig:
    return GenerationConfig(folders=folders)


@pytest.fixture
def model_root(tmp_path):
    """A project root holding MODEL_SDL in its model folder."""
    model_dir = tmp_path / "mo"
    model_dir.mkdir()
    (model_dir / "note.graphql").write_text(MODEL_SDL, encoding="utf-8")
    return tmp_path
