"""
Database pipeline: bring the live database in line with the merged schema.

Computing and applying the migration is the job of a migration engine,
configured as a "module:attr" factory under `db.engine`. The factory is
called with the database kind and its typed connection settings.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from .config import GenerationConfig, PostgresConnection, SqliteConnection
from .errors import ConfigError, GeneratorError, MigrationError
from .generators.base import import_object

logger = logging.getLogger(__name__)

Connection = PostgresConnection | SqliteConnection


class MigrationEngine(ABC):
    """Diffs the schema against persisted migrations and applies the delta."""

    @abstractmethod
    def diff_and_apply(self, schema_text: str, migrations_dir: Path, connection: Connection) -> None:
        """
        Apply the migration needed to match schema_text.

        Args:
            schema_text: The merged schema
            migrations_dir: Directory holding the persisted migration state
            connection: Connection settings of the target database
        """


MigrationEngineFactory = Callable[[str, Connection], MigrationEngine]


def resolve_engine_factory(config: GenerationConfig) -> MigrationEngineFactory:
    """Return the migration engine factory configured under `db.engine`.

    Raises:
        MigrationError: If no engine is configured or it cannot be imported
    """
    if not config.database.engine:
        raise MigrationError(f"No migration engine configured for database '{config.database.database}', set 'db.engine'")
    try:
        return import_object(config.database.engine)
    except GeneratorError as e:
        raise MigrationError(f"Cannot load migration engine: {e}") from e


def run_database(
    schema_text: str,
    config: GenerationConfig,
    root: Path,
    engine_factory: MigrationEngineFactory | None = None,
) -> None:
    """Migrate the configured database to schema_text.

    Must run at most once per invocation: re-running against a partially
    applied migration may apply it twice.

    Raises:
        ConfigError: If the database has no connection settings
        MigrationError: If the engine cannot be built or fails
    """
    database = config.database
    if database.connection is None:
        raise ConfigError(f"'db.dbConfig' is required to migrate database '{database.database}'")

    factory = engine_factory or resolve_engine_factory(config)
    migrations_dir = Path(root) / config.folders.migrations
    logger.info("Migrating %s database using %s", database.database, migrations_dir)

    try:
        engine = factory(database.database, database.connection)
        engine.diff_and_apply(schema_text, migrations_dir, database.connection)
    except MigrationError:
        raise
    except Exception as e:
        raise MigrationError(f"Migration of '{database.database}' database failed: {e}") from e

    logger.info("Database %s is up to date", database.database)
