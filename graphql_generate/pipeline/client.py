"""
Client pipeline: fragments, queries, mutations and subscriptions.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .artifacts import ArtifactGroup, ClientDocuments
from .config import GenerationConfig
from .generators.base import ClientGenerator
from .writer import FanOutWriter

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION = "graphql"

# Document categories, each written to <client>/generated/<category>
CATEGORIES = ("fragments", "queries", "mutations", "subscriptions")


def client_groups(documents: ClientDocuments, config: GenerationConfig, root: Path) -> list[ArtifactGroup]:
    generated = root / config.folders.client / "generated"
    return [ArtifactGroup.of(category, generated / category, DOCUMENT_EXTENSION, getattr(documents, category)) for category in CATEGORIES]


def run_client(generator: ClientGenerator, config: GenerationConfig, root: Path) -> list[Path]:
    """Generate client documents and write every category concurrently.

    Directories are only created for categories that have documents.

    Raises:
        AggregateWriteError: With every failed write across the categories
    """
    documents = generator.create_client()
    groups = client_groups(documents, config, Path(root))
    logger.info("Writing client documents: %s", ", ".join(f"{len(g.artifacts)} {g.category}" for g in groups))

    writer = FanOutWriter.from_config(config.output)
    return writer.write_groups(groups)
