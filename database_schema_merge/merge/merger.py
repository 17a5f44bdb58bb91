"""Merging of several schema documents into one consolidated schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from database_schema_merge.core.constants import VIEW_TYPES
from database_schema_merge.core.exceptions import SchemaLoadError
from database_schema_merge.core.schemas import (
    Constraint,
    Function,
    Index,
    MergeConfig,
    MergeResult,
    MergeStats,
    Relation,
    Schema,
    Table,
)
from database_schema_merge.logger import logger
from database_schema_merge.merge.deduplicator import deduplicate_relations
from database_schema_merge.merge.identifier import (
    extract_database_name,
    parse_qualified_name,
    standardize_table_name,
)
from database_schema_merge.merge.relation_deriver import RelationDeriver
from database_schema_merge.merge.repair import SchemaRepairer

if TYPE_CHECKING:
    from database_schema_merge.merge.interfaces import (
        IJoinExtractor,
        ISchemaLoader,
        ISchemaRepairer,
    )


class SchemaMerger:
    """Merges schema documents with standardized naming and virtual relations.

    Documents are processed one at a time in the order given. Each one gets a
    database prefix (from the configured mapping or its file name) and a
    default schema (its driver's current schema or the configured default),
    which are used to fully qualify every table, relation and function name.
    """

    def __init__(
        self,
        loader: "ISchemaLoader",
        join_extractor: "IJoinExtractor | None" = None,
        repairer: "ISchemaRepairer | None" = None,
    ) -> None:
        """Initialize the schema merger.

        Args:
            loader: Loads a schema document from its source identity
            join_extractor: Extractor for SQL definitions (regex based by default)
            repairer: Post-merge relinking step
        """
        self.loader = loader
        self.relation_deriver = RelationDeriver(join_extractor)
        self.repairer = repairer or SchemaRepairer()

    def merge(self, sources: list[str], config: MergeConfig | None = None) -> MergeResult:
        """Merge the documents identified by ``sources``.

        Args:
            sources: Source identities (file paths) in merge order
            config: Merge settings; defaults apply when omitted

        Returns:
            The merged schema and the statistics of the run

        Raises:
            SchemaLoadError: If a document cannot be loaded
            SchemaRepairError: If merged relations cannot be linked to tables
        """
        config = config or MergeConfig()

        merged = Schema(
            name=config.name,
            desc=config.description
            or f"Combined schema from {len(sources)} databases",
        )
        stats = MergeStats()

        for source in sources:
            self._merge_document(merged, stats, source, config)

        original_count = len(merged.relations)
        merged.relations = deduplicate_relations(merged.relations)
        stats.deduplicated_count = original_count - len(merged.relations)
        if stats.deduplicated_count:
            logger.info("Removed %d duplicate relation(s)", stats.deduplicated_count)

        repaired = self.repairer.repair(merged)
        return MergeResult(repaired, stats)

    def _merge_document(
        self, merged: Schema, stats: MergeStats, source: str, config: MergeConfig
    ) -> None:
        schema = self._load(source)

        if source in config.database_mapping:
            db_prefix = config.database_mapping[source]
        else:
            db_prefix = extract_database_name(source)
        schema_name = schema.current_schema() or config.default_schema
        stats.databases.append(db_prefix)
        logger.info(
            "Merging %s as database %s (default schema %s)",
            source,
            db_prefix,
            schema_name,
        )

        tables = [
            self.standardize_table(table, db_prefix, schema_name, config.use_brackets)
            for table in schema.tables
        ]
        stats.total_tables += len(tables)
        stats.total_views += sum(1 for t in tables if t.type in VIEW_TYPES)

        relations = [
            self.standardize_relation(
                relation, db_prefix, schema_name, config.use_brackets
            )
            for relation in schema.relations
        ]
        stats.total_relations += len(relations)
        # Only declared relations count as cross-database
        stats.cross_db_relations += count_cross_database(relations)

        if config.extract_view_relations:
            virtual_relations = self.relation_deriver.derive(
                tables, db_prefix, schema_name, config.use_brackets
            )
            stats.extracted_relations += len(virtual_relations)
            relations.extend(virtual_relations)

        functions = [
            self.standardize_function(
                function, db_prefix, schema_name, config.use_brackets
            )
            for function in schema.functions
        ]
        stats.total_functions += len(functions)

        merged.tables.extend(tables)
        merged.relations.extend(relations)
        merged.functions.extend(functions)

        if merged.driver is None and schema.driver is not None:
            merged.driver = schema.driver.model_copy(deep=True)

    def _load(self, source: str) -> Schema:
        try:
            return self.loader.load(source)
        except SchemaLoadError:
            raise
        except Exception as e:
            raise SchemaLoadError(source, e) from e

    def standardize_table(
        self, table: Table, db_prefix: str, schema_name: str, use_brackets: bool
    ) -> Table:
        """Return a copy of ``table`` with every table reference standardized."""

        def standardize(name: str, database: str = db_prefix) -> str:
            return standardize_table_name(name, database, schema_name, use_brackets)

        constraints: list[Constraint] = []
        for constraint in table.constraints:
            update: dict[str, str] = {}
            if constraint.table is not None:
                update["table"] = standardize(constraint.table)
            if constraint.referenced_table:
                # An explicit database on the referenced table is kept
                ref_db = parse_qualified_name(constraint.referenced_table).database
                update["referenced_table"] = standardize(
                    constraint.referenced_table, ref_db or db_prefix
                )
            constraints.append(constraint.model_copy(update=update, deep=True))

        indexes: list[Index] = [
            index.model_copy(
                update={"table": standardize(index.table)}
                if index.table is not None
                else {},
                deep=True,
            )
            for index in table.indexes
        ]

        return table.model_copy(
            update={
                "name": standardize(table.name),
                "referenced_tables": [
                    standardize(name) for name in table.referenced_tables
                ],
                "columns": [column.model_copy(deep=True) for column in table.columns],
                "constraints": constraints,
                "indexes": indexes,
                "triggers": [dict(trigger) for trigger in table.triggers],
            }
        )

    def standardize_relation(
        self, relation: Relation, db_prefix: str, schema_name: str, use_brackets: bool
    ) -> Relation:
        """Return a copy of ``relation`` with both endpoints standardized.

        Each side keeps its own explicit database; ``db_prefix`` only fills
        sides that have none.
        """
        table_db = parse_qualified_name(relation.table).database or db_prefix
        parent_db = parse_qualified_name(relation.parent_table).database or db_prefix

        return relation.model_copy(
            update={
                "table": standardize_table_name(
                    relation.table, table_db, schema_name, use_brackets
                ),
                "parent_table": standardize_table_name(
                    relation.parent_table, parent_db, schema_name, use_brackets
                ),
                "columns": list(relation.columns),
                "parent_columns": list(relation.parent_columns),
            }
        )

    def standardize_function(
        self, function: Function, db_prefix: str, schema_name: str, use_brackets: bool
    ) -> Function:
        return function.model_copy(
            update={
                "name": standardize_table_name(
                    function.name, db_prefix, schema_name, use_brackets
                )
            }
        )


def count_cross_database(relations: list[Relation]) -> int:
    """Count relations whose two sides carry different, non-empty databases."""
    count = 0
    for relation in relations:
        table_db = parse_qualified_name(relation.table).database
        parent_db = parse_qualified_name(relation.parent_table).database
        if table_db and parent_db and table_db != parent_db:
            count += 1
    return count
