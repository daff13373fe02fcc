"""
Loading of the merged model schema.

Every matching `.graphql` file is parsed on its own, the definitions are
concatenated into one document, and the document is validated as SDL.
The merged text is printed from the AST, so applied directives and
descriptions are preserved.
"""

from __future__ import annotations

import glob
import logging
from collections.abc import Iterable
from pathlib import Path

from graphql import DocumentNode, GraphQLError, Source, build_ast_schema, parse, print_ast

from .errors import LoadError

logger = logging.getLogger(__name__)


def resolve_sources(sources: str | Path | Iterable[str | Path], root: Path | None = None) -> list[Path]:
    """Expand a glob pattern or a list of paths into sorted file paths.

    Relative patterns and paths are taken relative to root.
    """
    if isinstance(sources, (str, Path)):
        sources = [sources]

    paths: set[Path] = set()
    for source in sources:
        source = Path(source)
        if root is not None and not source.is_absolute():
            source = Path(root) / source
        if glob.has_magic(str(source)):
            paths.update(Path(p) for p in glob.glob(str(source), recursive=True))
        else:
            paths.add(source)
    return sorted(p for p in paths if not p.is_dir())


def load_merged_schema(sources: str | Path | Iterable[str | Path], root: Path | None = None) -> str:
    """Load and merge every schema file matched by sources.

    Args:
        sources: Glob pattern, path, or list of either
        root: Directory relative sources are resolved against

    Returns:
        The merged schema as SDL text

    Raises:
        LoadError: If no file matches, a file cannot be read or parsed,
            or the merged schema is invalid
    """
    paths = resolve_sources(sources, root)
    if not paths:
        raise LoadError(f"No schema files found for {sources}")

    definitions = []
    for path in paths:
        try:
            text = path.read_text(encoding="utf-8")
            document = parse(Source(text, str(path)))
        except OSError as e:
            raise LoadError(f"Cannot read schema file {path}: {e}") from e
        except GraphQLError as e:
            raise LoadError(f"Cannot parse schema file {path}: {e}") from e
        definitions.extend(document.definitions)

    merged = DocumentNode(definitions=tuple(definitions))
    try:
        build_ast_schema(merged)
    except (GraphQLError, TypeError) as e:
        raise LoadError(f"Invalid merged schema: {e}") from e

    logger.info("Loaded schema from %d file(s)", len(paths))
    return print_ast(merged)
