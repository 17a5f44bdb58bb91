"""Referential consistency checks of merged schemas."""

from __future__ import annotations

from collections import Counter

from database_schema_merge.core.schemas import (
    BrokenRelation,
    Relation,
    Schema,
    ValidationReport,
)
from database_schema_merge.merge.identifier import parse_qualified_name


class MergedSchemaValidator:
    """Reports relations whose endpoints are not tables of the schema.

    The validator never modifies the schema it is given. All collections in
    the report are sorted (or kept in relation order) so that reports are
    reproducible.
    """

    def validate(self, schema: Schema) -> ValidationReport:
        """Validate the relations of a merged schema.

        Args:
            schema: Schema to validate

        Returns:
            ValidationReport with counts, databases and broken relations
        """
        table_names = {table.name for table in schema.tables}
        databases: set[str] = set()
        tables_per_database: Counter[str] = Counter()
        relations_per_database: Counter[str] = Counter()

        for table in schema.tables:
            database = parse_qualified_name(table.name).database
            if database:
                databases.add(database)
                tables_per_database[database] += 1

        virtual_count = sum(1 for relation in schema.relations if relation.virtual)

        missing_tables: set[str] = set()
        broken_relations: list[BrokenRelation] = []

        for relation in schema.relations:
            table_db = parse_qualified_name(relation.table).database
            parent_db = parse_qualified_name(relation.parent_table).database
            databases.update(db for db in (table_db, parent_db) if db)
            if table_db:
                relations_per_database[table_db] += 1

            for side, name in (
                ("table", relation.table),
                ("parent_table", relation.parent_table),
            ):
                if name not in table_names:
                    missing_tables.add(name)
                    broken_relations.append(self._broken(relation, name, side))

        return ValidationReport(
            total_tables=len(schema.tables),
            total_relations=len(schema.relations),
            fk_relations=len(schema.relations) - virtual_count,
            virtual_relations=virtual_count,
            databases=sorted(databases),
            missing_tables=sorted(missing_tables),
            tables_per_database=dict(sorted(tables_per_database.items())),
            relations_per_database=dict(sorted(relations_per_database.items())),
            broken_relations=broken_relations,
        )

    def _broken(self, relation: Relation, missing: str, side: str) -> BrokenRelation:
        return BrokenRelation(
            relation=str(relation),
            missing=missing,
            side=side,
            virtual=relation.virtual,
        )
