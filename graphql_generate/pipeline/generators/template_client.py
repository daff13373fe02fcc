"""
Default client generator rendering GraphQL documents.
"""

from __future__ import annotations

import logging

from ..artifacts import ClientDocuments, NamedArtifact
from ..config import BackendOptions
from .base import ClientGenerator
from .rendering import TemplateRenderer
from .schema_model import SchemaModel, crud_operations

logger = logging.getLogger(__name__)

DOCUMENT_KINDS = {
    "Query": "queries",
    "Mutation": "mutations",
    "Subscription": "subscriptions",
}


class TemplateClientGenerator(ClientGenerator):
    """Generates one fragment per model type and one document per CRUD operation.

    Every operation document embeds the fragment it spreads, so each file
    is a complete GraphQL document on its own.
    """

    def __init__(self, schema_text: str, options: BackendOptions):
        self.schema_text = schema_text
        self.options = options
        self.renderer = TemplateRenderer("client")

    def create_client(self) -> ClientDocuments:
        model = SchemaModel.from_schema_text(self.schema_text)
        documents: dict[str, list[NamedArtifact]] = {"fragments": [], "queries": [], "mutations": [], "subscriptions": []}

        for model_type in model.types:
            # A fragment needs at least one field to select
            if not model_type.leaf_fields:
                logger.debug("Skipping %s, it has no scalar fields", model_type.name)
                continue

            documents["fragments"].append(NamedArtifact(model_type.name, self.renderer.render("fragment.graphql.jinja2", type=model_type)))
            for op in crud_operations(model_type, self.options):
                content = self.renderer.render("operation.graphql.jinja2", type=model_type, op=op)
                documents[DOCUMENT_KINDS[op.kind]].append(NamedArtifact(op.name, content))

        logger.info("Generated %d client document(s)", sum(len(docs) for docs in documents.values()))
        return ClientDocuments(**{kind: tuple(docs) for kind, docs in documents.items()})
