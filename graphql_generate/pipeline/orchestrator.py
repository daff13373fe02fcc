"""
Generation orchestrator.

Validates the configuration, loads the merged schema once and runs the
requested pipelines concurrently. A failing pipeline never cancels the
others; every failure is reported in one OrchestrationError.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, replace
from pathlib import Path

from .artifacts import GenerationOutcome
from .backend import run_backend
from .client import run_client
from .config import GenerationConfig
from .database import MigrationEngineFactory, run_database
from .errors import ConfigError, GeneratorError, OrchestrationError
from .generators import BackendFactory, ClientFactory, TemplateBackendGenerator, TemplateClientGenerator, import_object
from .schema_loader import load_merged_schema

logger = logging.getLogger(__name__)

SchemaLoader = Callable[[str, Path], str]

# Model files loaded below the model folder
MODEL_PATTERN = "**/*.graphql"


@dataclass(frozen=True)
class GenerateFlags:
    """Which pipelines were requested."""

    backend: bool = False
    client: bool = False
    db: bool = False


def normalize_flags(flags: GenerateFlags) -> GenerateFlags:
    """Resolve the default pipeline.

    The backend is generated when neither the client nor the database was
    requested. The database is never selected implicitly.
    """
    if not flags.db and not flags.client:
        return replace(flags, backend=True)
    return flags


class GenerationOrchestrator:
    """Runs the backend, client and database pipelines of one invocation.

    Args:
        config: Generation config
        root: Project root every configured folder is relative to
        schema_loader: Callable(pattern, root) returning the merged schema
        backend_factory: Overrides the configured backend generator factory
        client_factory: Overrides the configured client generator factory
        engine_factory: Overrides the configured migration engine factory
    """

    def __init__(
        self,
        config: GenerationConfig,
        root: Path,
        schema_loader: SchemaLoader | None = None,
        backend_factory: BackendFactory | None = None,
        client_factory: ClientFactory | None = None,
        engine_factory: MigrationEngineFactory | None = None,
    ):
        self.config = config
        self.root = Path(root)
        self.schema_loader = schema_loader or load_merged_schema
        self.backend_factory = backend_factory
        self.client_factory = client_factory
        self.engine_factory = engine_factory

    def run(self, flags: GenerateFlags) -> list[GenerationOutcome]:
        """Run every requested pipeline.

        Returns:
            One successful outcome per pipeline that ran

        Raises:
            ConfigError: Before any I/O if the configuration is incomplete
            LoadError: If the merged schema cannot be loaded
            GeneratorError: If a generator cannot be constructed
            OrchestrationError: If any pipeline failed
        """
        self.config.validate()
        flags = normalize_flags(flags)
        backend_factory, client_factory = self._resolve_factories()
        if flags.db and self.config.database.connection is None:
            raise ConfigError(f"'db.dbConfig' is required to migrate database '{self.config.database.database}'")

        schema_text = self.schema_loader(f"{self.config.folders.model}/{MODEL_PATTERN}", self.root)
        options = self.config.backend

        # Construction is cheap, generation happens inside each pipeline
        backend = backend_factory(schema_text, options) if flags.backend else None
        client = client_factory(schema_text, options) if flags.client else None

        jobs: dict[str, Callable[[], list[Path] | None]] = {}
        if backend is not None:
            jobs["backend"] = lambda: run_backend(schema_text, backend, self.config, self.root)
        if client is not None:
            jobs["client"] = lambda: run_client(client, self.config, self.root)
        if flags.db:
            jobs["db"] = lambda: run_database(schema_text, self.config, self.root, self.engine_factory)

        logger.info("Running pipelines: %s", ", ".join(jobs))
        with ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix="graphql-generate") as executor:
            futures = {name: executor.submit(job) for name, job in jobs.items()}
            wait(futures.values())

        outcomes = []
        for name, future in futures.items():
            error = future.exception()
            if error is None:
                outcomes.append(GenerationOutcome(name, written=future.result() or []))
            else:
                logger.warning("Pipeline %s failed: %s", name, error)
                outcomes.append(GenerationOutcome(name, error=error))

        failures = {outcome.pipeline: outcome.error for outcome in outcomes if not outcome.ok}
        if failures:
            raise OrchestrationError(failures)
        return outcomes

    def _resolve_factories(self) -> tuple[BackendFactory, ClientFactory]:
        options = self.config.backend
        try:
            backend_factory = self.backend_factory or (import_object(options.generator) if options.generator else TemplateBackendGenerator)
            client_factory = self.client_factory or (
                import_object(options.client_generator) if options.client_generator else TemplateClientGenerator
            )
        except GeneratorError as e:
            raise ConfigError(f"Invalid generator in 'graphqlCRUD': {e}") from e
        return backend_factory, client_factory


def generate(
    flags: GenerateFlags,
    config: GenerationConfig,
    root: Path,
    **kwargs,
) -> list[GenerationOutcome]:
    """Run the requested pipelines; see GenerationOrchestrator for kwargs."""
    return GenerationOrchestrator(config, root, **kwargs).run(flags)
