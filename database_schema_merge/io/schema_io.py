"""Reading and writing of schema documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator
from pydantic import ValidationError

from database_schema_merge.core.exceptions import SchemaLoadError
from database_schema_merge.core.schemas import Schema
from database_schema_merge.io.document_schema import DOCUMENT_SCHEMA
from database_schema_merge.logger import logger


class SchemaDocumentLoader:
    """Loads schema documents from JSON files or byte buffers.

    Every document is checked against the Draft 7 document schema before it
    is parsed into a :class:`Schema`.
    """

    def __init__(self) -> None:
        self.validator = Draft7Validator(DOCUMENT_SCHEMA)

    def load(self, source: str) -> Schema:
        """Load the schema document stored at ``source``.

        Args:
            source: Path of a JSON schema document

        Returns:
            Parsed schema document

        Raises:
            SchemaLoadError: If the file cannot be read or is not a valid document
        """
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error("Cannot read schema file: %s", path)
            raise SchemaLoadError(source, e) from e
        return self.parse_bytes(data, source)

    def parse_bytes(self, data: bytes, source: str) -> Schema:
        """Parse a schema document from a byte buffer.

        Args:
            data: UTF-8 encoded JSON document
            source: Identity of the document, used in error messages

        Returns:
            Parsed schema document

        Raises:
            SchemaLoadError: If the buffer is not a valid schema document
        """
        try:
            document: Any = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SchemaLoadError(source, e) from e

        errors = sorted(
            self.validator.iter_errors(document),
            key=lambda e: [str(part) for part in e.absolute_path],
        )
        if errors:
            messages = [self._format_error(error) for error in errors]
            raise SchemaLoadError(source, ValueError("; ".join(messages)))

        try:
            return Schema.model_validate(document)
        except ValidationError as e:
            raise SchemaLoadError(source, e) from e

    def _format_error(self, error: Any) -> str:
        location = "/".join(str(part) for part in error.absolute_path)
        return f"{location or '<root>'}: {error.message}"


class SchemaDocumentWriter:
    """Writes schema documents as indented JSON with a stable field order."""

    def dump_bytes(self, schema: Schema) -> bytes:
        """Serialize ``schema`` to UTF-8 encoded, indented JSON."""
        document = schema.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")

    def write(self, schema: Schema, output_path: Path) -> Path:
        """Write ``schema`` to ``output_path``.

        Args:
            schema: Schema to write
            output_path: Destination file; parent directories are created

        Returns:
            Path where the file was written

        Raises:
            PermissionError: If unable to write file
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(self.dump_bytes(schema))
            return output_path
        except Exception as e:
            raise PermissionError(
                f"Failed to write schema to {output_path}: {e}"
            ) from e
