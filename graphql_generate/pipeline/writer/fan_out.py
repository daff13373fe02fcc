"""
Concurrent writer for groups of artifacts.

Every artifact is written by its own task on a bounded thread pool.
Writes are fail-slow: a failed write never cancels its siblings, and all
failures are reported together once every write has settled.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from ..artifacts import ArtifactGroup, NamedArtifact
from ..config import OutputConfig
from ..errors import AggregateWriteError, ArtifactWriteError
from .atomic_writer import AtomicWriter

logger = logging.getLogger(__name__)


class FanOutWriter:
    """Writes artifact groups concurrently through an AtomicWriter."""

    def __init__(self, writer: AtomicWriter | None = None, max_workers: int = 8):
        self.writer = writer or AtomicWriter()
        self.max_workers = max_workers

    @staticmethod
    def from_config(output: OutputConfig) -> FanOutWriter:
        return FanOutWriter(AtomicWriter(atomic=output.atomic_write), max_workers=output.max_workers)

    def write_all(self, group: ArtifactGroup) -> list[Path]:
        """Write every artifact of a single group.

        Returns:
            Written paths, in submission order

        Raises:
            AggregateWriteError: If any write failed
        """
        return self.write_groups([group])

    def write_groups(self, groups: Iterable[ArtifactGroup]) -> list[Path]:
        """Write every artifact of several groups as one fan-out.

        Groups must target disjoint paths; artifacts sharing a path within a
        group race and the last write wins.

        Returns:
            Written paths, in submission order

        Raises:
            AggregateWriteError: With one entry per failed write
        """
        tasks: list[tuple[ArtifactGroup, NamedArtifact, Future]] = []
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="graphql-generate-write") as executor:
            for group in groups:
                for artifact in group.artifacts:
                    future = executor.submit(self.writer.write, group.path_for(artifact), artifact.content)
                    tasks.append((group, artifact, future))
            wait([future for _, _, future in tasks])

        written: list[Path] = []
        errors: list[ArtifactWriteError] = []
        for group, artifact, future in tasks:
            error = future.exception()
            if error is None:
                written.append(future.result())
            else:
                if not isinstance(error, ArtifactWriteError):
                    cause, error = error, ArtifactWriteError(group.path_for(artifact), error)
                    error.__cause__ = cause
                errors.append(error.tagged(artifact.name, group.category))

        if errors:
            logger.warning("%d of %d write(s) failed", len(errors), len(tasks))
            raise AggregateWriteError(errors)

        logger.info("Wrote %d file(s)", len(written))
        return written
