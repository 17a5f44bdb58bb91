"""Qualified object names: parsing, bracket handling and standardization.

Names come in several precisions: ``Table``, ``Schema.Table`` and
``Database.Schema.Table``, each optionally written in bracket notation
(``[DV].[dbo].[Hub_Customer]``). Everything that compares or emits table
names across documents goes through :func:`standardize_table_name`.
"""

from __future__ import annotations

from dataclasses import dataclass

from database_schema_merge.core.constants import (
    BRACKET_CLOSE,
    BRACKET_OPEN,
    DATABASE_FILE_SUFFIXES,
    NAME_SEPARATOR,
)


@dataclass(frozen=True)
class QualifiedName:
    """Components of a qualified name; any of them may be empty."""

    database: str = ""
    schema: str = ""
    table: str = ""


def parse_qualified_name(name: str) -> QualifiedName:
    """Parse a qualified name into its components.

    Brackets are removed before splitting. Names with more than three parts
    keep the last three.

    Args:
        name: Name such as 'Users', 'dbo.Users' or '[DV].[dbo].[Users]'

    Returns:
        The parsed QualifiedName
    """
    parts = normalize_brackets(name).split(NAME_SEPARATOR)

    if len(parts) == 1:
        return QualifiedName(table=parts[0])
    if len(parts) == 2:
        return QualifiedName(schema=parts[0], table=parts[1])
    database, schema, table = parts[-3:]
    return QualifiedName(database=database, schema=schema, table=table)


def normalize_brackets(identifier: str) -> str:
    """Remove every bracket from an identifier.

    '[Database].[Schema].[Table]' -> 'Database.Schema.Table'
    """
    return identifier.replace(BRACKET_OPEN, "").replace(BRACKET_CLOSE, "")


def bracket_identifier(identifier: str) -> str:
    """Wrap an identifier in brackets unless it already is.

    'MyTable' -> '[MyTable]', '[MyTable]' -> '[MyTable]'
    """
    identifier = identifier.strip()
    if not identifier:
        return identifier
    if identifier.startswith(BRACKET_OPEN) and identifier.endswith(BRACKET_CLOSE):
        return identifier
    return f"{BRACKET_OPEN}{identifier}{BRACKET_CLOSE}"


def build_qualified_name(
    table: str, schema: str, database: str, use_brackets: bool
) -> str:
    """Join the non-empty components, optionally bracketing each of them."""
    parts = [part for part in (database, schema, table) if part]
    if use_brackets:
        parts = [bracket_identifier(part) for part in parts]
    return NAME_SEPARATOR.join(parts)


def standardize_table_name(
    name: str, default_db: str, default_schema: str, use_brackets: bool
) -> str:
    """Standardize a table name to a fully qualified form.

    Missing database and schema components are filled from the defaults;
    components present in ``name`` are kept.

    Args:
        name: Table name in any supported precision
        default_db: Database used when ``name`` has none
        default_schema: Schema used when ``name`` has none
        use_brackets: Whether to emit '[Database].[Schema].[Table]'

    Returns:
        The standardized name, or ``name`` unchanged when it is empty
    """
    if not name:
        return name

    parsed = parse_qualified_name(name)
    return build_qualified_name(
        parsed.table,
        parsed.schema or default_schema,
        parsed.database or default_db,
        use_brackets,
    )


def extract_database_name(file_path: str) -> str:
    """Derive a database name from a schema file path.

    'dv_schema.json' -> 'DV', 'my-database-schema.json' -> 'MY-DATABASE'
    """
    filename = file_path.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]
    if "." in filename:
        filename = filename.rsplit(".", 1)[0]

    for suffix in DATABASE_FILE_SUFFIXES:
        filename = filename.removesuffix(suffix)

    return filename.upper()
