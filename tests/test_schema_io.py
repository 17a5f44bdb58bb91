"""Tests for the schema document loader and writer."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from database_schema_merge.core.exceptions import SchemaLoadError
from database_schema_merge.core.schemas import Cardinality, Relation, Schema, Table
from database_schema_merge.io.schema_io import (
    SchemaDocumentLoader,
    SchemaDocumentWriter,
)


@pytest.fixture
def loader():
    return SchemaDocumentLoader()


@pytest.fixture
def writer():
    return SchemaDocumentWriter()


class TestSchemaDocumentLoader:
    """Test suite for SchemaDocumentLoader."""

    def test_load_document(self, loader, temp_docs_dir):
        schema = loader.load(str(temp_docs_dir / "dv_schema.json"))

        assert schema.name == "dv"
        assert [t.name for t in schema.tables][0] == "dbo.Hub_Customer"
        assert schema.tables[2].definition.startswith("CREATE VIEW")
        assert schema.relations[0].cardinality == Cardinality.ZERO_OR_MORE
        assert schema.current_schema() == "dbo"

    def test_missing_file(self, loader, temp_docs_dir):
        source = str(temp_docs_dir / "missing.json")

        with pytest.raises(SchemaLoadError) as exc_info:
            loader.load(source)

        assert exc_info.value.source == source
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_invalid_json(self, loader):
        with pytest.raises(SchemaLoadError, match="bad.json"):
            loader.parse_bytes(b"invalid json content", "bad.json")

    def test_document_schema_violation(self, loader):
        data = json.dumps({"tables": [{"type": "VIEW"}]}).encode()

        with pytest.raises(SchemaLoadError, match="tables/0"):
            loader.parse_bytes(data, "doc.json")

    def test_relation_requires_parent_table(self, loader):
        data = json.dumps({"relations": [{"table": "a"}]}).encode()

        with pytest.raises(SchemaLoadError, match="parent_table"):
            loader.parse_bytes(data, "doc.json")

    def test_unknown_cardinality(self, loader):
        data = json.dumps(
            {"relations": [{"table": "a", "parent_table": "b", "cardinality": "many"}]}
        ).encode()

        with pytest.raises(SchemaLoadError):
            loader.parse_bytes(data, "doc.json")

    def test_display_cardinality_is_accepted(self, loader):
        data = json.dumps(
            {
                "relations": [
                    {"table": "a", "parent_table": "b", "cardinality": "Zero or one"}
                ]
            }
        ).encode()

        schema = loader.parse_bytes(data, "doc.json")

        assert schema.relations[0].cardinality == Cardinality.ZERO_OR_ONE

    def test_unknown_fields_are_kept(self, loader, writer):
        data = json.dumps(
            {"name": "x", "labels": [{"name": "dwh"}], "tables": [{"name": "t", "x": 1}]}
        ).encode()

        document = json.loads(writer.dump_bytes(loader.parse_bytes(data, "doc.json")))

        assert document["labels"] == [{"name": "dwh"}]
        assert document["tables"][0]["x"] == 1


class TestSchemaDocumentWriter:
    """Test suite for SchemaDocumentWriter."""

    def test_dump_field_order_and_aliases(self, writer):
        schema = Schema(
            name="merged",
            desc="d",
            tables=[Table(name="[DV].[dbo].[T]", type="VIEW", definition="SELECT 1")],
            relations=[
                Relation(
                    table="[DV].[dbo].[T]",
                    columns=["a"],
                    cardinality=Cardinality.EXACTLY_ONE,
                    parent_table="[DV].[dbo].[U]",
                    parent_columns=["b"],
                    parent_cardinality=Cardinality.ZERO_OR_MORE,
                    definition="[INNER JOIN] t.a = u.b",
                    virtual=True,
                )
            ],
        )

        text = writer.dump_bytes(schema).decode("utf-8")
        document = json.loads(text)

        assert list(document) == ["name", "desc", "tables", "relations", "functions"]
        assert document["tables"][0]["def"] == "SELECT 1"
        assert document["relations"][0] == {
            "table": "[DV].[dbo].[T]",
            "columns": ["a"],
            "cardinality": "exactly_one",
            "parent_table": "[DV].[dbo].[U]",
            "parent_columns": ["b"],
            "parent_cardinality": "zero_or_more",
            "def": "[INNER JOIN] t.a = u.b",
            "virtual": True,
        }
        assert "\n  " in text

    def test_non_ascii_is_preserved(self, writer):
        text = writer.dump_bytes(Schema(name="Kunden", desc="Übersicht")).decode()
        assert "Übersicht" in text

    def test_write_creates_parent_directories(self, writer, temp_output_dir):
        output = temp_output_dir / "nested" / "combined.json"

        result = writer.write(Schema(name="merged"), output)

        assert result == output
        assert json.loads(output.read_text(encoding="utf-8"))["name"] == "merged"

    def test_write_permission_error(self, writer):
        with patch("pathlib.Path.mkdir", side_effect=PermissionError("Access denied")):
            with pytest.raises(PermissionError, match="Failed to write schema"):
                writer.write(Schema(), Path("/root/test/out.json"))

    def test_written_document_loads_again(self, writer, loader, temp_output_dir):
        output = writer.write(
            Schema(name="m", tables=[Table(name="[DV].[dbo].[T]")]),
            temp_output_dir / "m.json",
        )

        assert loader.load(str(output)).tables[0].name == "[DV].[dbo].[T]"
