"""Production-quality test fixtures and configuration."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import pytest

from database_schema_merge.core.config import Config
from database_schema_merge.core.exceptions import SchemaLoadError
from database_schema_merge.core.schemas import Schema

DV_DOCUMENT: Dict[str, Any] = {
    "name": "dv",
    "desc": "Data vault",
    "tables": [
        {
            "name": "dbo.Hub_Customer",
            "type": "BASE TABLE",
            "comment": "",
            "columns": [
                {"name": "id", "type": "int", "nullable": False},
                {"name": "customer_key", "type": "nvarchar(50)", "nullable": False},
            ],
            "indexes": [
                {
                    "name": "PK_Hub_Customer",
                    "def": "CLUSTERED (id)",
                    "table": "dbo.Hub_Customer",
                    "columns": ["id"],
                }
            ],
            "constraints": [
                {
                    "name": "PK_Hub_Customer",
                    "type": "PRIMARY KEY",
                    "def": "PRIMARY KEY (id)",
                    "table": "dbo.Hub_Customer",
                    "columns": ["id"],
                }
            ],
            "def": "",
        },
        {
            "name": "dbo.Sat_Customer",
            "type": "BASE TABLE",
            "columns": [
                {"name": "hub_id", "type": "int", "nullable": False},
                {"name": "name", "type": "nvarchar(100)", "nullable": True},
            ],
            "constraints": [
                {
                    "name": "FK_Sat_Customer_Hub",
                    "type": "FOREIGN KEY",
                    "def": "FOREIGN KEY (hub_id) REFERENCES Hub_Customer (id)",
                    "table": "dbo.Sat_Customer",
                    "referenced_table": "Hub_Customer",
                    "columns": ["hub_id"],
                    "referenced_columns": ["id"],
                }
            ],
            "def": "",
        },
        {
            "name": "dbo.v_Customer",
            "type": "VIEW",
            "columns": [{"name": "id", "type": "int", "nullable": False}],
            "def": (
                "CREATE VIEW dbo.v_Customer AS\n"
                "SELECT h.id, s.name FROM Hub_Customer h\n"
                "INNER JOIN Sat_Customer s ON s.hub_id = h.id"
            ),
            "referenced_tables": ["Hub_Customer", "Sat_Customer"],
        },
    ],
    "relations": [
        {
            "table": "dbo.Sat_Customer",
            "columns": ["hub_id"],
            "cardinality": "zero_or_more",
            "parent_table": "dbo.Hub_Customer",
            "parent_columns": ["id"],
            "parent_cardinality": "exactly_one",
            "def": "FOREIGN KEY (hub_id) REFERENCES Hub_Customer (id)",
            "virtual": False,
        }
    ],
    "functions": [{"name": "fn_customer_key", "return_type": "nvarchar"}],
    "driver": {
        "name": "sqlserver",
        "database_version": "16.0",
        "meta": {"current_schema": "\"dbo\""},
    },
}

DM_DOCUMENT: Dict[str, Any] = {
    "name": "dm",
    "desc": "Data mart",
    "tables": [
        {
            "name": "Dim_Customer",
            "type": "BASE TABLE",
            "columns": [
                {"name": "customer_id", "type": "int", "nullable": False},
                {"name": "hub_customer_id", "type": "int", "nullable": False},
            ],
        }
    ],
    "relations": [
        {
            "table": "Dim_Customer",
            "columns": ["hub_customer_id"],
            "cardinality": "zero_or_more",
            "parent_table": "DV.dbo.Hub_Customer",
            "parent_columns": ["id"],
            "parent_cardinality": "exactly_one",
            "def": "cross database lookup",
        }
    ],
    "functions": [],
}


def write_document(directory: Path, file_name: str, document: Dict[str, Any]) -> Path:
    path = directory / file_name
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    return path


@pytest.fixture
def temp_docs_dir():
    """Create a temporary directory with realistic schema documents."""
    temp_dir = Path(tempfile.mkdtemp())
    write_document(temp_dir, "dv_schema.json", DV_DOCUMENT)
    write_document(temp_dir, "dm_schema.json", DM_DOCUMENT)

    yield temp_dir

    # Cleanup
    shutil.rmtree(temp_dir)


@pytest.fixture
def temp_output_dir():
    """Create a temporary output directory."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def test_config():
    """Command defaults independent of the process environment."""
    return Config(
        _env_file=None,
        default_schema="dbo",
        use_brackets=True,
        extract_view_relations=True,
        validate_output=False,
    )


class InMemoryLoader:
    """Loader serving documents from a dict, keyed by source identity."""

    def __init__(self, documents: Dict[str, Dict[str, Any]]) -> None:
        self.documents = documents
        self.loaded: List[str] = []

    def load(self, source: str) -> Schema:
        self.loaded.append(source)
        if source not in self.documents:
            raise SchemaLoadError(source, FileNotFoundError(source))
        return Schema.model_validate(self.documents[source])


@pytest.fixture
def memory_loader():
    """In-memory loader with the data vault and data mart documents."""
    return InMemoryLoader(
        {"dv_schema.json": DV_DOCUMENT, "dm_schema.json": DM_DOCUMENT}
    )


class DocumentTestHelper:
    """Helper class for creating test documents."""

    @staticmethod
    def table(name: str, table_type: str = "BASE TABLE", definition: str = "",
              columns: List[str] | None = None) -> Dict[str, Any]:
        return {
            "name": name,
            "type": table_type,
            "columns": [
                {"name": column, "type": "int", "nullable": False}
                for column in (columns or [])
            ],
            "def": definition,
        }

    @staticmethod
    def relation(table: str, column: str, parent_table: str, parent_column: str,
                 virtual: bool = False) -> Dict[str, Any]:
        return {
            "table": table,
            "columns": [column],
            "cardinality": "zero_or_more",
            "parent_table": parent_table,
            "parent_columns": [parent_column],
            "parent_cardinality": "exactly_one",
            "def": "",
            "virtual": virtual,
        }

    @staticmethod
    def document(name: str, tables: List[Dict[str, Any]],
                 relations: List[Dict[str, Any]] | None = None) -> Dict[str, Any]:
        return {
            "name": name,
            "tables": tables,
            "relations": relations or [],
            "functions": [],
        }


@pytest.fixture
def document_helper():
    """Provide document helper for tests."""
    return DocumentTestHelper()
