"""
Pipeline - GraphQL backend, client and database generation.

1. Config: validate the `generate` configuration
2. Schema loader: merge every model file into one schema
3. Backend: schema file and resolver modules
4. Client: fragments, queries, mutations and subscriptions
5. Database: apply the migration for the merged schema
6. Writer: persist artifacts concurrently, reporting every failure
"""

from __future__ import annotations

from .artifacts import ArtifactGroup, BackendBundle, ClientDocuments, GenerationOutcome, NamedArtifact
from .config import (
    BackendOptions,
    DatabaseConfig,
    FoldersConfig,
    GenerationConfig,
    OutputConfig,
    PostgresConnection,
    SqliteConnection,
    load_config,
)
from .database import MigrationEngine
from .errors import (
    AggregateWriteError,
    ArtifactWriteError,
    ConfigError,
    GenerateError,
    GeneratorError,
    LoadError,
    MigrationError,
    OrchestrationError,
)
from .generators import BackendGenerator, ClientGenerator
from .orchestrator import GenerateFlags, GenerationOrchestrator, generate, normalize_flags
from .schema_loader import load_merged_schema
from .writer import AtomicWriter, FanOutWriter

__all__ = [
    "AggregateWriteError",
    "ArtifactGroup",
    "ArtifactWriteError",
    "AtomicWriter",
    "BackendBundle",
    "BackendGenerator",
    "BackendOptions",
    "ClientDocuments",
    "ClientGenerator",
    "ConfigError",
    "DatabaseConfig",
    "FanOutWriter",
    "FoldersConfig",
    "GenerateError",
    "GenerateFlags",
    "GenerationConfig",
    "GenerationOrchestrator",
    "GenerationOutcome",
    "GeneratorError",
    "LoadError",
    "MigrationEngine",
    "MigrationError",
    "NamedArtifact",
    "OrchestrationError",
    "OutputConfig",
    "PostgresConnection",
    "SqliteConnection",
    "generate",
    "load_config",
    "load_merged_schema",
    "normalize_flags",
]
