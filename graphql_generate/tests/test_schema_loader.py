"""
Tests for merging model files into one schema.
"""

from __future__ import annotations

import pytest
from graphql import build_schema

from graphql_generate.pipeline import LoadError, load_merged_schema
from graphql_generate.pipeline.schema_loader import resolve_sources


@pytest.fixture
def model_dir(tmp_path):
    model = tmp_path / "model"
    (model / "nested").mkdir(parents=True)
    (model / "note.graphql").write_text('"""\n@model\n"""\ntype Note {\n  id: ID!\n  title: String @deprecated(reason: "use name")\n}\n')
    (model / "nested" / "comment.graphql").write_text("type Comment {\n  id: ID!\n  note: Note\n}\n")
    (model / "query.graphql").write_text("type Query {\n  notes: [Note]\n}\n")
    (model / "README.md").write_text("not a schema")
    return model


class TestLoadMergedSchema:
    def test_merges_files_recursively(self, tmp_path, model_dir):
        schema_text = load_merged_schema("model/**/*.graphql", tmp_path)

        schema = build_schema(schema_text)
        assert {"Note", "Comment", "Query"} <= set(schema.type_map)

    def test_preserves_directives_and_descriptions(self, tmp_path, model_dir):
        schema_text = load_merged_schema("model/**/*.graphql", tmp_path)

        assert '@deprecated(reason: "use name")' in schema_text
        assert "@model" in schema_text

    def test_sources_are_merged_in_path_order(self, tmp_path, model_dir):
        schema_text = load_merged_schema("model/**/*.graphql", tmp_path)

        assert schema_text.index("type Comment") < schema_text.index("type Note") < schema_text.index("type Query")

    def test_explicit_path_list(self, tmp_path, model_dir):
        schema_text = load_merged_schema([model_dir / "note.graphql"])

        assert "type Note" in schema_text
        assert "Comment" not in schema_text

    def test_type_extensions_across_files(self, tmp_path, model_dir):
        (model_dir / "extra.graphql").write_text("extend type Query {\n  comments: [Comment]\n}\n")

        schema = build_schema(load_merged_schema("model/**/*.graphql", tmp_path))

        assert set(schema.query_type.fields) == {"notes", "comments"}

    def test_no_matching_files(self, tmp_path):
        with pytest.raises(LoadError, match="No schema files"):
            load_merged_schema("model/**/*.graphql", tmp_path)

    def test_syntax_error_names_the_file(self, tmp_path, model_dir):
        (model_dir / "broken.graphql").write_text("type Broken {")

        with pytest.raises(LoadError, match="broken.graphql"):
            load_merged_schema("model/**/*.graphql", tmp_path)

    def test_invalid_merged_schema(self, tmp_path, model_dir):
        (model_dir / "duplicate.graphql").write_text("type Note {\n  id: ID!\n}\n")

        with pytest.raises(LoadError, match="Invalid merged schema"):
            load_merged_schema("model/**/*.graphql", tmp_path)


class TestResolveSources:
    def test_directories_are_skipped(self, tmp_path, model_dir):
        paths = resolve_sources("model/**", tmp_path)

        assert model_dir / "nested" not in paths
        assert model_dir / "README.md" in paths
