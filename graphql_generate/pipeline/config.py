"""
Configuration for the generation pipeline.

The configuration document uses the same camelCase keys as the
`generate` extension of a graphql-config file:

    {
        "folders": {"model": ..., "schema": ..., "resolvers": ..., "client": ..., "migrations": ...},
        "graphqlCRUD": {"create": true, "subCreate": false, ...},
        "db": {"database": "sqlite3", "dbConfig": {"filename": "db.sqlite"}},
        "output": {"atomicWrite": true, "maxWorkers": 8}
    }

Every section is parsed into a frozen dataclass and unknown keys are
rejected with ConfigError.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError


def _check_keys(section: str, data: Any, allowed: set[str]) -> dict:
    if not isinstance(data, dict):
        raise ConfigError(f"'{section}' must be an object, got {type(data).__name__}")
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"Unknown key(s) in '{section}': {', '.join(unknown)}")
    return data


def _check_type(section: str, key: str, value: Any, expected: type) -> Any:
    # bool is a subclass of int, reject it where a number is expected
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(f"'{section}.{key}' must be of type {expected.__name__}")
    return value


@dataclass(frozen=True)
class FoldersConfig:
    """Output and input folders, relative to the project root."""

    # Folder holding the *.graphql model files
    model: str = ""

    # Folder receiving generated.graphql
    schema: str = ""

    # Folder receiving custom/, generated/ and the resolver index
    resolvers: str = ""

    # Folder receiving generated client documents
    client: str = ""

    # Folder holding persisted migrations
    migrations: str = ""

    def missing(self) -> list[str]:
        """Names of folders that are not set."""
        return [f.name for f in fields(self) if not isinstance(getattr(self, f.name), str) or not getattr(self, f.name).strip()]

    @staticmethod
    def from_dict(d: dict) -> FoldersConfig:
        d = _check_keys("folders", d, {f.name for f in fields(FoldersConfig)})
        return FoldersConfig(**d)


@dataclass(frozen=True)
class BackendOptions:
    """Options of the backend and client generators."""

    create: bool = True
    update: bool = True
    delete: bool = True
    find: bool = True
    find_all: bool = True
    sub_create: bool = False
    sub_update: bool = False
    sub_delete: bool = False

    # "module:attr" of a custom backend generator factory
    generator: str | None = None

    # "module:attr" of a custom client generator factory
    client_generator: str | None = None

    _KEYS = {
        "create": "create",
        "update": "update",
        "delete": "delete",
        "find": "find",
        "findAll": "find_all",
        "subCreate": "sub_create",
        "subUpdate": "sub_update",
        "subDelete": "sub_delete",
        "generator": "generator",
        "clientGenerator": "client_generator",
    }

    @staticmethod
    def from_dict(d: dict) -> BackendOptions:
        d = _check_keys("graphqlCRUD", d, set(BackendOptions._KEYS))
        kwargs = {}
        for key, value in d.items():
            expected = str if key in ("generator", "clientGenerator") else bool
            kwargs[BackendOptions._KEYS[key]] = _check_type("graphqlCRUD", key, value, expected)
        return BackendOptions(**kwargs)

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for key, attr in BackendOptions._KEYS.items()}


@dataclass(frozen=True)
class PostgresConnection:
    """Connection settings recognized for the `pg` database kind."""

    host: str = "localhost"
    port: int = 5432
    user: str = ""
    password: str = ""
    database: str = ""


@dataclass(frozen=True)
class SqliteConnection:
    """Connection settings recognized for the `sqlite3` database kind."""

    filename: str = ""


CONNECTION_TYPES: dict[str, type] = {
    "pg": PostgresConnection,
    "sqlite3": SqliteConnection,
}


@dataclass(frozen=True)
class DatabaseConfig:
    """Selected database kind and its typed connection settings."""

    database: str = "pg"
    connection: PostgresConnection | SqliteConnection | None = None

    # "module:attr" of a migration engine factory
    engine: str | None = None

    @staticmethod
    def from_dict(d: dict) -> DatabaseConfig:
        d = _check_keys("db", d, {"database", "dbConfig", "engine"})
        kind = d.get("database", "pg")
        _check_type("db", "database", kind, str)
        if kind not in CONNECTION_TYPES:
            raise ConfigError(f"Unsupported database '{kind}', expected one of: {', '.join(CONNECTION_TYPES)}")

        connection = None
        if d.get("dbConfig") is not None:
            connection_type = CONNECTION_TYPES[kind]
            section = f"db.dbConfig ({kind})"
            raw = _check_keys(section, d["dbConfig"], {f.name for f in fields(connection_type)})
            for f in fields(connection_type):
                if f.name in raw:
                    _check_type(section, f.name, raw[f.name], type(f.default))
            connection = connection_type(**raw)

        engine = d.get("engine")
        if engine is not None:
            _check_type("db", "engine", engine, str)
        return DatabaseConfig(database=kind, connection=connection, engine=engine)


@dataclass(frozen=True)
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        atomic_write: Write through a temporary file and rename it over the target
        max_workers: Upper bound on concurrent writes within one pipeline
    """

    atomic_write: bool = True
    max_workers: int = 8

    @staticmethod
    def from_dict(d: dict) -> OutputConfig:
        d = _check_keys("output", d, {"atomicWrite", "maxWorkers"})
        atomic_write = _check_type("output", "atomicWrite", d.get("atomicWrite", True), bool)
        max_workers = _check_type("output", "maxWorkers", d.get("maxWorkers", 8), int)
        if max_workers < 1:
            raise ConfigError("'output.maxWorkers' must be at least 1")
        return OutputConfig(atomic_write=atomic_write, max_workers=max_workers)


@dataclass(frozen=True)
class GenerationConfig:
    """The resolved `generate` configuration of one invocation."""

    folders: FoldersConfig = field(default_factory=FoldersConfig)
    backend: BackendOptions = field(default_factory=BackendOptions)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> None:
        """Check that every folder is populated.

        Raises:
            ConfigError: If any folder entry is missing or empty
        """
        missing = self.folders.missing()
        if missing:
            raise ConfigError(f"'generate' config 'folders' section is missing: {', '.join(missing)}")

    @staticmethod
    def from_dict(d: dict) -> GenerationConfig:
        """Create a config from a parsed `generate` section."""
        if not d:
            raise ConfigError("You should provide a valid 'generate' config to generate schema from data model")
        d = _check_keys("generate", d, {"folders", "graphqlCRUD", "db", "output"})
        if "folders" not in d:
            raise ConfigError("'generate' config missing 'folders' section that is required")

        config = GenerationConfig(
            folders=FoldersConfig.from_dict(d["folders"]),
            backend=BackendOptions.from_dict(d.get("graphqlCRUD", {})),
            database=DatabaseConfig.from_dict(d.get("db", {})),
            output=OutputConfig.from_dict(d.get("output", {})),
        )
        config.validate()
        return config


def load_config(path: Path) -> GenerationConfig:
    """Load a GenerationConfig from a JSON file.

    The `extensions.generate` section is used when present, so a
    graphql-config document can be passed directly; otherwise the whole
    document is the `generate` section.

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    extensions = document.get("extensions")
    if isinstance(extensions, dict) and "generate" in extensions:
        document = extensions["generate"]
    return GenerationConfig.from_dict(document)
