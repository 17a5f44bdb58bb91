"""JSON Schema (Draft 7) of the schema documents accepted as merge input.

Only the fields the merge relies on are constrained; everything else is
allowed so that documents from newer tbls versions still load.
"""

from typing import Any

NAME_LIST: dict[str, Any] = {"type": "array", "items": {"type": "string"}}

NULLABLE_STRING: dict[str, Any] = {"type": ["string", "null"]}

DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Schema document",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "desc": {"type": "string"},
        "tables": {"type": "array", "items": {"$ref": "#/definitions/table"}},
        "relations": {"type": "array", "items": {"$ref": "#/definitions/relation"}},
        "functions": {"type": "array", "items": {"$ref": "#/definitions/function"}},
        "driver": {
            "type": ["object", "null"],
            "properties": {
                "name": {"type": "string"},
                "database_version": {"type": "string"},
                "meta": {
                    "type": ["object", "null"],
                    "properties": {"current_schema": {"type": "string"}},
                },
            },
        },
    },
    "definitions": {
        "table": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string"},
                "type": {"type": "string"},
                "def": {"type": "string"},
                "columns": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["name"],
                        "properties": {"name": {"type": "string"}},
                    },
                },
                "constraints": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "table": NULLABLE_STRING,
                            "referenced_table": NULLABLE_STRING,
                        },
                    },
                },
                "indexes": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {"table": NULLABLE_STRING},
                    },
                },
                "referenced_tables": NAME_LIST,
            },
        },
        "relation": {
            "type": "object",
            "required": ["table", "parent_table"],
            "properties": {
                "table": {"type": "string"},
                "columns": NAME_LIST,
                "parent_table": {"type": "string"},
                "parent_columns": NAME_LIST,
                "cardinality": {"type": "string"},
                "parent_cardinality": {"type": "string"},
                "def": {"type": "string"},
                "virtual": {"type": "boolean"},
            },
        },
        "function": {
            "type": "object",
            "required": ["name"],
            "properties": {"name": {"type": "string"}},
        },
    },
}
