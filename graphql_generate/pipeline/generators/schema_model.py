"""
Object-type model extracted from the merged schema.

The default generators only need a flat view of the schema: the model
types with their fields, and the fields declared on the root operation
types, which become custom resolvers.
"""

from __future__ import annotations

from dataclasses import dataclass

from graphql import GraphQLError, GraphQLObjectType, build_schema, get_named_type, is_leaf_type, is_object_type

from ...utils import pluralize
from ..config import BackendOptions
from ..errors import GeneratorError

# Marker placed in a type description to select it as a model
MODEL_MARKER = "@model"

ROOT_KINDS = ("Query", "Mutation", "Subscription")


@dataclass(frozen=True)
class ModelField:
    name: str
    type: str
    named_type: str
    is_leaf: bool


@dataclass(frozen=True)
class ModelType:
    name: str
    fields: tuple[ModelField, ...]

    @property
    def leaf_fields(self) -> tuple[ModelField, ...]:
        return tuple(f for f in self.fields if f.is_leaf)

    @property
    def input_fields(self) -> tuple[ModelField, ...]:
        """Leaf fields a client may set, i.e. everything except the id."""
        return tuple(f for f in self.leaf_fields if f.name != "id")


@dataclass(frozen=True)
class RootField:
    kind: str
    parent: str
    name: str
    type: str
    args: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class SchemaModel:
    types: tuple[ModelType, ...]
    root_fields: tuple[RootField, ...]
    root_types: dict[str, str]

    @staticmethod
    def from_schema_text(schema_text: str) -> SchemaModel:
        """Build the model from SDL.

        Raises:
            GeneratorError: If the SDL cannot be built into a schema
        """
        try:
            schema = build_schema(schema_text, assume_valid_sdl=True)
        except (GraphQLError, TypeError) as e:
            raise GeneratorError(f"Cannot build schema: {e}") from e

        roots = {kind: root for kind, root in zip(ROOT_KINDS, (schema.query_type, schema.mutation_type, schema.subscription_type)) if root is not None}
        root_names = {root.name for root in roots.values()}

        candidates = [
            t
            for name, t in sorted(schema.type_map.items())
            if is_object_type(t) and not name.startswith("__") and name not in root_names
        ]
        marked = [t for t in candidates if t.description and MODEL_MARKER in t.description]
        types = tuple(_model_type(t) for t in (marked or candidates))

        root_fields = tuple(
            RootField(
                kind=kind,
                parent=root.name,
                name=name,
                type=str(field.type),
                args=tuple((arg_name, str(arg.type)) for arg_name, arg in field.args.items()),
            )
            for kind, root in roots.items()
            for name, field in root.fields.items()
        )
        return SchemaModel(types=types, root_fields=root_fields, root_types={kind: root.name for kind, root in roots.items()})


def _model_type(object_type: GraphQLObjectType) -> ModelType:
    fields = []
    for name, field in object_type.fields.items():
        named = get_named_type(field.type)
        fields.append(ModelField(name=name, type=str(field.type), named_type=named.name, is_leaf=is_leaf_type(named)))
    return ModelType(name=object_type.name, fields=tuple(fields))


@dataclass(frozen=True)
class CrudOperation:
    """A generated root field serving one CRUD action on a model type."""

    kind: str
    name: str
    action: str
    args: tuple[tuple[str, str], ...]
    type: str

    @property
    def returns_model(self) -> bool:
        return self.type != "ID!"


def crud_operations(model_type: ModelType, options: BackendOptions) -> list[CrudOperation]:
    """List the operations enabled by options for a model type, in schema order."""
    name = model_type.name
    plural = pluralize(name)
    # Input and filter types are only emitted when they have fields
    has_input = bool(model_type.input_fields)
    candidates = [
        (options.find and bool(model_type.leaf_fields), CrudOperation("Query", f"find{plural}", "find", (("fields", f"{name}Filter!"),), f"[{name}!]!")),
        (options.find_all, CrudOperation("Query", f"findAll{plural}", "find_all", (), f"[{name}!]!")),
        (options.create and has_input, CrudOperation("Mutation", f"create{name}", "create", (("input", f"{name}Input!"),), f"{name}!")),
        (options.update and has_input, CrudOperation("Mutation", f"update{name}", "update", (("id", "ID!"), ("input", f"{name}Input!")), f"{name}!")),
        (options.delete, CrudOperation("Mutation", f"delete{name}", "delete", (("id", "ID!"),), "ID!")),
        (options.sub_create, CrudOperation("Subscription", f"new{name}", "created", (), f"{name}!")),
        (options.sub_update, CrudOperation("Subscription", f"updated{name}", "updated", (), f"{name}!")),
        (options.sub_delete, CrudOperation("Subscription", f"deleted{name}", "deleted", (), "ID!")),
    ]
    return [operation for enabled, operation in candidates if enabled]
