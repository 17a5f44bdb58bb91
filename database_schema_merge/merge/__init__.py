"""Schema merge components."""

from database_schema_merge.merge.deduplicator import deduplicate_relations
from database_schema_merge.merge.identifier import (
    QualifiedName,
    bracket_identifier,
    build_qualified_name,
    extract_database_name,
    normalize_brackets,
    parse_qualified_name,
    standardize_table_name,
)
from database_schema_merge.merge.join_extractor import RegexJoinExtractor
from database_schema_merge.merge.merger import SchemaMerger
from database_schema_merge.merge.relation_deriver import RelationDeriver
from database_schema_merge.merge.repair import SchemaRepairer

__all__ = [
    "QualifiedName",
    "RegexJoinExtractor",
    "RelationDeriver",
    "SchemaMerger",
    "SchemaRepairer",
    "bracket_identifier",
    "build_qualified_name",
    "deduplicate_relations",
    "extract_database_name",
    "normalize_brackets",
    "parse_qualified_name",
    "standardize_table_name",
]
