"""
Error types raised by the generation pipeline.

Errors form a tree: a fan-out collects every failed write in an
AggregateWriteError, and the orchestrator collects every failed pipeline
in an OrchestrationError. Formatting the tree is left to the caller.
"""

from __future__ import annotations

from pathlib import Path


class GenerateError(Exception):
    """Base class for all generation errors."""


class ConfigError(GenerateError):
    """Raised when the generate configuration is missing or invalid.

    Always raised before any schema loading, generator call or file write.
    """


class LoadError(GenerateError):
    """Raised when the merged schema cannot be assembled."""


class GeneratorError(GenerateError):
    """Raised when a generator cannot be resolved or fails to produce output."""


class ArtifactWriteError(GenerateError):
    """Raised when a single artifact cannot be persisted.

    Attributes:
        path: Target file path
        artifact: Name of the artifact being written, if known
        category: Group the artifact belongs to, if known
    """

    def __init__(self, path: Path, cause: BaseException, artifact: str | None = None, category: str | None = None):
        self.path = Path(path)
        self.cause = cause
        self.artifact = artifact
        self.category = category
        super().__init__(f"Failed to write {self.path}: {cause}")

    def tagged(self, artifact: str, category: str) -> ArtifactWriteError:
        """Return a copy of this error tagged with artifact name and category."""
        error = ArtifactWriteError(self.path, self.cause, artifact=artifact, category=category)
        error.__cause__ = self.__cause__
        return error

    def __str__(self) -> str:
        if self.artifact is None:
            return super().__str__()
        return f"[{self.category}] {self.artifact}: failed to write {self.path}: {self.cause}"


class AggregateWriteError(GenerateError):
    """Raised when one or more writes of a fan-out failed.

    Attributes:
        errors: Every individual ArtifactWriteError, in submission order
    """

    def __init__(self, errors: list[ArtifactWriteError]):
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} artifact(s) could not be written")


class MigrationError(GenerateError):
    """Raised when the database migration engine fails."""


class OrchestrationError(GenerateError):
    """Raised when one or more requested pipelines failed.

    Attributes:
        failures: Mapping of pipeline name to the error it raised
    """

    def __init__(self, failures: dict[str, BaseException]):
        self.failures = dict(failures)
        names = ", ".join(self.failures)
        super().__init__(f"Generation failed in: {names}")
