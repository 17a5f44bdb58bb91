"""Pydantic models for type-safe schema documents, merge settings and reports."""

from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from database_schema_merge.core.constants import (
    DEFAULT_MERGED_NAME,
    DEFAULT_SCHEMA_NAME,
    MAX_CONDITION_LENGTH,
)


class Cardinality(str, Enum):
    """Multiplicity of one side of a relation (tbls JSON values)."""

    ZERO_OR_ONE = "zero_or_one"
    EXACTLY_ONE = "exactly_one"
    ZERO_OR_MORE = "zero_or_more"
    ONE_OR_MORE = "one_or_more"
    UNKNOWN = ""

    @classmethod
    def parse(cls, value: Any) -> "Cardinality":
        """Accept both tbls JSON values and their display form ('Zero or one')."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNKNOWN
        normalized = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        return cls(normalized)


class DocumentModel(BaseModel):
    """Base for records read from schema documents.

    Unknown fields are kept so that a document survives a load/write cycle.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Column(DocumentModel):
    name: str
    type: str = ""
    nullable: bool = False
    default: str | None = None
    comment: str = ""

    # Filled in by the schema repair step, never serialized
    parent_relations: list[Relation] = Field(
        default_factory=list, exclude=True, repr=False
    )
    child_relations: list[Relation] = Field(
        default_factory=list, exclude=True, repr=False
    )


class Constraint(DocumentModel):
    name: str = ""
    type: str = ""
    definition: str = Field("", alias="def")
    table: str | None = None
    referenced_table: str | None = None
    columns: list[str] = Field(default_factory=list)
    referenced_columns: list[str] = Field(default_factory=list)
    comment: str = ""


class Index(DocumentModel):
    name: str = ""
    definition: str = Field("", alias="def")
    table: str | None = None
    columns: list[str] = Field(default_factory=list)
    comment: str = ""


class Table(DocumentModel):
    """A table, view or materialized view of a schema document."""

    name: str
    type: str = ""
    comment: str = ""
    columns: list[Column] = Field(default_factory=list)
    indexes: list[Index] = Field(default_factory=list)
    constraints: list[Constraint] = Field(default_factory=list)
    triggers: list[dict[str, Any]] = Field(default_factory=list)
    definition: str = Field("", alias="def")
    referenced_tables: list[str] = Field(default_factory=list)

    def find_column(self, name: str) -> Column | None:
        """Return the column with the given name, or None."""
        for column in self.columns:
            if column.name == name:
                return column
        return None


class Relation(DocumentModel):
    """A relation between a child table and a parent table.

    ``columns`` and ``parent_columns`` correspond positionally. ``virtual``
    is False for declared foreign keys and True for relations inferred from
    SQL definitions.
    """

    table: str
    columns: list[str] = Field(default_factory=list)
    cardinality: Cardinality = Cardinality.UNKNOWN
    parent_table: str
    parent_columns: list[str] = Field(default_factory=list)
    parent_cardinality: Cardinality = Cardinality.UNKNOWN
    definition: str = Field("", alias="def")
    virtual: bool = False

    @field_validator("cardinality", "parent_cardinality", mode="before")
    @classmethod
    def validate_cardinality(cls, v: Any) -> Cardinality:
        return Cardinality.parse(v)

    def identity_key(self) -> tuple[str, str, str, str]:
        """Key under which two relations are considered the same."""
        return (
            self.table,
            ",".join(self.columns),
            self.parent_table,
            ",".join(self.parent_columns),
        )

    def __str__(self) -> str:
        return f"{self.table} -> {self.parent_table}"


class Function(DocumentModel):
    name: str
    return_type: str = ""
    arguments: str = ""
    type: str = ""


class DriverMeta(DocumentModel):
    current_schema: str = ""
    search_paths: list[str] = Field(default_factory=list)


class Driver(DocumentModel):
    name: str = ""
    database_version: str = ""
    meta: DriverMeta | None = None


class Schema(DocumentModel):
    """Top-level schema document."""

    name: str = ""
    desc: str = ""
    tables: list[Table] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    functions: list[Function] = Field(default_factory=list)
    driver: Driver | None = None

    def current_schema(self) -> str:
        """Return the driver's current schema with surrounding quotes removed."""
        if self.driver is None or self.driver.meta is None:
            return ""
        return self.driver.meta.current_schema.strip('"')


class JoinRelation(BaseModel):
    """A join fact extracted from SQL text; consumed by the relation deriver."""

    model_config = ConfigDict(frozen=True)

    from_table: str
    from_columns: list[str]
    to_table: str
    to_columns: list[str]
    join_type: str
    on_condition: str

    @property
    def display_condition(self) -> str:
        """Return the condition in the form used as a relation definition."""
        condition = self.on_condition
        if len(condition) > MAX_CONDITION_LENGTH:
            condition = condition[:MAX_CONDITION_LENGTH] + "..."
        return f"[{self.join_type} JOIN] {condition}"


class MergeConfig(BaseModel):
    """Immutable settings of a single merge run."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(DEFAULT_MERGED_NAME, description="Name of the merged schema")
    description: str = Field(
        "", description="Description of the merged schema (derived when empty)"
    )
    default_schema: str = Field(
        DEFAULT_SCHEMA_NAME, description="Schema used for unqualified names"
    )
    use_brackets: bool = Field(True, description="Emit [Database].[Schema].[Table]")
    extract_view_relations: bool = Field(
        True, description="Derive virtual relations from SQL definitions"
    )
    database_mapping: dict[str, str] = Field(
        default_factory=dict, description="Source identity -> database name"
    )


class MergeStats(BaseModel):
    """Counters collected while merging."""

    total_tables: int = 0
    total_views: int = 0
    total_relations: int = 0
    extracted_relations: int = 0
    total_functions: int = 0
    databases: list[str] = Field(default_factory=list)
    cross_db_relations: int = 0
    deduplicated_count: int = 0


class MergeResult(NamedTuple):
    schema: Schema
    stats: MergeStats


class BrokenRelation(BaseModel):
    """A relation endpoint that does not resolve to a table of the schema."""

    relation: str = Field(..., description="Display form 'child -> parent'")
    missing: str = Field(..., description="Name of the missing table")
    side: str = Field(..., description="'table' or 'parent_table'")
    virtual: bool = Field(..., description="Whether the relation was inferred")


class ValidationReport(BaseModel):
    """Referential consistency report of a merged schema."""

    total_tables: int = 0
    total_relations: int = 0
    fk_relations: int = 0
    virtual_relations: int = 0
    databases: list[str] = Field(default_factory=list)
    missing_tables: list[str] = Field(default_factory=list)
    tables_per_database: dict[str, int] = Field(default_factory=dict)
    relations_per_database: dict[str, int] = Field(default_factory=dict)
    broken_relations: list[BrokenRelation] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.broken_relations


Column.model_rebuild()
