"""GraphQL Generate

Generates a GraphQL backend, client documents and database migrations
from the model files of a project.
"""

__version__ = "1.0.1"

from .pipeline import (
    AggregateWriteError,
    ConfigError,
    GenerateFlags,
    GenerationConfig,
    GenerationOrchestrator,
    LoadError,
    MigrationError,
    OrchestrationError,
    generate,
    load_config,
)

__all__ = [
    "GenerationOrchestrator",
    "GenerationConfig",
    "GenerateFlags",
    "generate",
    "load_config",
    "ConfigError",
    "LoadError",
    "AggregateWriteError",
    "MigrationError",
    "OrchestrationError",
]
