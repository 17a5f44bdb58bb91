"""Core data models and shared types."""

from database_schema_merge.core.config import Config, load_config
from database_schema_merge.core.exceptions import (
    InvalidArgumentError,
    SchemaLoadError,
    SchemaMergeError,
    SchemaRepairError,
)
from database_schema_merge.core.schemas import (
    BrokenRelation,
    Cardinality,
    Column,
    Constraint,
    Driver,
    DriverMeta,
    Function,
    Index,
    JoinRelation,
    MergeConfig,
    MergeResult,
    MergeStats,
    Relation,
    Schema,
    Table,
    ValidationReport,
)

__all__ = [
    "BrokenRelation",
    "Cardinality",
    "Column",
    "Config",
    "Constraint",
    "Driver",
    "DriverMeta",
    "Function",
    "Index",
    "JoinRelation",
    "MergeConfig",
    "MergeResult",
    "MergeStats",
    "Relation",
    "Schema",
    "Table",
    "ValidationReport",
    "InvalidArgumentError",
    "SchemaLoadError",
    "SchemaMergeError",
    "SchemaRepairError",
    "load_config",
]
