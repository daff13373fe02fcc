"""
File persister for generated artifacts.

Creates missing parent directories and writes each file in one piece,
optionally through a temporary file so an interrupted write never
leaves the target half-written.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from ..errors import ArtifactWriteError

logger = logging.getLogger(__name__)

# Read once, os.umask can only be queried by setting it
_UMASK = os.umask(0)
os.umask(_UMASK)


class AtomicWriter:
    """Writes whole files, creating parent directories on demand.

    With `atomic` enabled a two-phase commit is used:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file

    Without it the target is overwritten in place.
    """

    def __init__(self, atomic: bool = True):
        self.atomic = atomic

    def write(self, path: Path, content: str) -> Path:
        """Write content to path.

        Args:
            path: Target file path
            content: Content to write

        Returns:
            The written path

        Raises:
            ArtifactWriteError: If the directory or the file cannot be written
        """
        path = Path(path)
        try:
            # Idempotent, existing directories are not an error
            path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic:
                self._write_atomic(path, content)
            else:
                with open(path, "w", encoding="utf-8") as f:
                    f.write(content)
        except (OSError, ValueError, TypeError) as e:
            # ValueError covers content the encoder rejects, e.g. lone surrogates
            raise ArtifactWriteError(path, e) from e

        logger.debug("Wrote %s", path)
        return path

    def _write_atomic(self, path: Path, content: str) -> None:
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.chmod(_target_mode(path))
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise


def _target_mode(path: Path) -> int:
    """Mode the written file should get, the one a plain open() would give."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_UMASK
