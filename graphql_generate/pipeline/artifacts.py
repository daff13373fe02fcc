"""
Value types passed between generators, pipelines and the writer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class NamedArtifact:
    """A named unit of generated text destined for one output file."""

    name: str
    content: str


@dataclass(frozen=True)
class ArtifactGroup:
    """A category of artifacts written below one directory.

    Attributes:
        category: Human-readable category name used in error reports
        directory: Directory every artifact of the group is written to
        extension: File extension without the leading dot
        artifacts: Artifacts in submission order
    """

    category: str
    directory: Path
    extension: str
    artifacts: tuple[NamedArtifact, ...] = ()

    @staticmethod
    def of(category: str, directory: Path, extension: str, artifacts: Iterable[NamedArtifact]) -> ArtifactGroup:
        return ArtifactGroup(category, Path(directory), extension, tuple(artifacts))

    def path_for(self, artifact: NamedArtifact) -> Path:
        return self.directory / f"{artifact.name}.{self.extension}"


@dataclass(frozen=True)
class BackendBundle:
    """Everything a backend generator produces in one call."""

    schema: str
    custom: tuple[NamedArtifact, ...] = ()
    types: tuple[NamedArtifact, ...] = ()
    index: str = ""


@dataclass(frozen=True)
class ClientDocuments:
    """Client documents grouped by operation kind."""

    fragments: tuple[NamedArtifact, ...] = ()
    queries: tuple[NamedArtifact, ...] = ()
    mutations: tuple[NamedArtifact, ...] = ()
    subscriptions: tuple[NamedArtifact, ...] = ()


@dataclass
class GenerationOutcome:
    """Result of one pipeline run."""

    pipeline: str
    error: BaseException | None = None
    written: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None
