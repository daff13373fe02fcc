"""
Backend and client generators.

The template generators are the defaults; custom generator factories can
be configured as "module:attr" paths.
"""

from __future__ import annotations

from .base import BackendFactory, BackendGenerator, ClientFactory, ClientGenerator, import_object
from .schema_model import CrudOperation, SchemaModel, crud_operations
from .template_backend import TemplateBackendGenerator
from .template_client import TemplateClientGenerator

__all__ = [
    "BackendFactory",
    "BackendGenerator",
    "ClientFactory",
    "ClientGenerator",
    "CrudOperation",
    "SchemaModel",
    "TemplateBackendGenerator",
    "TemplateClientGenerator",
    "crud_operations",
    "import_object",
]
