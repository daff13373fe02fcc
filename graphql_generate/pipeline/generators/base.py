"""
Interfaces of the generators driven by the pipelines.

A generator factory is any callable taking the merged schema text and
the BackendOptions and returning a generator instance. Custom factories
are referenced from the configuration as "module:attr".
"""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from ..artifacts import BackendBundle, ClientDocuments
from ..config import BackendOptions
from ..errors import GeneratorError


class BackendGenerator(ABC):
    """Produces the schema file and resolver modules."""

    # Extension of resolver and index files, without the dot
    file_extension: str = "py"

    @abstractmethod
    def create_backend(self, database: str) -> BackendBundle:
        """
        Generate the backend artifacts.

        Args:
            database: Database kind the resolvers target

        Returns:
            The schema, custom resolvers, type resolvers and resolver index
        """


class ClientGenerator(ABC):
    """Produces client-side GraphQL documents."""

    @abstractmethod
    def create_client(self) -> ClientDocuments:
        """
        Generate client documents.

        Returns:
            Fragments, queries, mutations and subscriptions
        """


BackendFactory = Callable[[str, BackendOptions], BackendGenerator]
ClientFactory = Callable[[str, BackendOptions], ClientGenerator]


def import_object(path: str) -> Any:
    """Import an object from a "module:attr" path.

    Raises:
        GeneratorError: If the path is malformed or cannot be imported
    """
    module_path, sep, attr = path.partition(":")
    if not sep or not module_path or not attr:
        raise GeneratorError(f"Invalid import path '{path}', expected 'module:attr'")
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise GeneratorError(f"Cannot import module '{module_path}': {e}") from e

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise GeneratorError(f"Module '{module_path}' has no attribute '{attr}'") from e
    return obj
