"""
Default backend generator rendering Python resolver modules.
"""

from __future__ import annotations

import logging

from ...utils import snake_case
from ..artifacts import BackendBundle, NamedArtifact
from ..config import BackendOptions
from .base import BackendGenerator
from .rendering import TemplateRenderer, generation_comment
from .schema_model import SchemaModel, crud_operations

logger = logging.getLogger(__name__)


class TemplateBackendGenerator(BackendGenerator):
    """Generates CRUD resolvers for every model type of the schema.

    The schema is analyzed on the call to create_backend; construction only
    captures the generation comment of the running command.
    """

    file_extension = "py"

    def __init__(self, schema_text: str, options: BackendOptions):
        self.schema_text = schema_text
        self.options = options
        self.renderer = TemplateRenderer("backend")
        self.header = generation_comment()

    def create_backend(self, database: str) -> BackendBundle:
        model = SchemaModel.from_schema_text(self.schema_text)

        operations = {t.name: crud_operations(t, self.options) for t in model.types}
        all_operations = [op for t in model.types for op in operations[t.name]]

        schema = self.renderer.render(
            "schema.graphql.jinja2",
            header=self.header,
            schema=self.schema_text.rstrip("\n"),
            types=model.types,
            operations=all_operations,
            root_types=model.root_types,
        )

        types = tuple(
            NamedArtifact(
                snake_case(t.name),
                self.renderer.render(
                    "type_resolver.py.jinja2",
                    header=self.header,
                    type=t,
                    database=database,
                    operations=operations[t.name],
                    root_types=model.root_types,
                ),
            )
            for t in model.types
        )

        custom = tuple(
            NamedArtifact(snake_case(f"{field.parent}_{field.name}"), self.renderer.render("custom_resolver.py.jinja2", header=self.header, field=field))
            for field in model.root_fields
        )

        index = self.renderer.render(
            "index.py.jinja2",
            header=self.header,
            custom=[artifact.name for artifact in custom],
            types=[artifact.name for artifact in types],
        )

        logger.info("Generated resolvers for %d type(s) and %d custom field(s)", len(types), len(custom))
        return BackendBundle(schema=schema, custom=custom, types=types, index=index)
