"""
Backend pipeline: schema file and resolver modules.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .artifacts import ArtifactGroup, BackendBundle, NamedArtifact
from .config import GenerationConfig
from .generators.base import BackendGenerator
from .writer import FanOutWriter

logger = logging.getLogger(__name__)

SCHEMA_FILE = "generated"
SCHEMA_EXTENSION = "graphql"
INDEX_FILE = "index"


def backend_groups(bundle: BackendBundle, extension: str, config: GenerationConfig, root: Path) -> list[ArtifactGroup]:
    """Map a backend bundle onto its output locations.

    The four groups target disjoint paths:
    <schema>/generated.graphql, <resolvers>/custom/<name>, <resolvers>/generated/<name>
    and <resolvers>/index.
    """
    resolvers = root / config.folders.resolvers
    return [
        ArtifactGroup.of("schema", root / config.folders.schema, SCHEMA_EXTENSION, [NamedArtifact(SCHEMA_FILE, bundle.schema)]),
        ArtifactGroup.of("custom resolvers", resolvers / "custom", extension, bundle.custom),
        ArtifactGroup.of("generated resolvers", resolvers / "generated", extension, bundle.types),
        ArtifactGroup.of("resolver index", resolvers, extension, [NamedArtifact(INDEX_FILE, bundle.index)]),
    ]


def run_backend(schema_text: str, generator: BackendGenerator, config: GenerationConfig, root: Path) -> list[Path]:
    """Generate the backend and write it below root.

    Args:
        schema_text: The merged schema; the generator was built from it
        generator: Backend generator
        config: Generation config
        root: Project root

    Returns:
        Written paths

    Raises:
        AggregateWriteError: With every failed write of the four groups
    """
    bundle = generator.create_backend(config.database.database)
    logger.info("Writing backend for %s (%d bytes of schema)", config.database.database, len(schema_text))

    writer = FanOutWriter.from_config(config.output)
    return writer.write_groups(backend_groups(bundle, generator.file_extension, config, Path(root)))
