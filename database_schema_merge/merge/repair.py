"""Relinking of merged relations to the tables and columns they reference."""

from __future__ import annotations

from database_schema_merge.core.exceptions import SchemaRepairError
from database_schema_merge.core.schemas import Column, Relation, Schema, Table
from database_schema_merge.logger import logger


class SchemaRepairer:
    """Connects relations of a merged schema to its tables.

    Every relation endpoint must name a table of the schema. Relation
    columns are linked to the column records of tables that declare them:
    child columns collect the relation in ``child_relations``, parent columns
    in ``parent_relations``. Links are runtime only and are not written out.
    """

    def repair(self, schema: Schema) -> Schema:
        """Return a copy of ``schema`` with relations linked to columns.

        Args:
            schema: Merged schema

        Returns:
            New Schema; the input and its tables are left untouched

        Raises:
            SchemaRepairError: If a relation references a table that does not exist
        """
        copies = [self._unlinked_copy(table) for table in schema.tables]
        # Same-named tables are all kept; lookups resolve to the first
        tables: dict[str, Table] = {}
        for copy in copies:
            tables.setdefault(copy.name, copy)

        for relation in schema.relations:
            child = self._find_table(tables, relation, relation.table)
            parent = self._find_table(tables, relation, relation.parent_table)

            for column in self._linked_columns(child, relation.columns, relation):
                column.child_relations.append(relation)
            for column in self._linked_columns(
                parent, relation.parent_columns, relation
            ):
                column.parent_relations.append(relation)

        return schema.model_copy(update={"tables": copies})

    def _unlinked_copy(self, table: Table) -> Table:
        columns = [
            column.model_copy(update={"parent_relations": [], "child_relations": []})
            for column in table.columns
        ]
        return table.model_copy(update={"columns": columns})

    def _find_table(
        self, tables: dict[str, Table], relation: Relation, name: str
    ) -> Table:
        table = tables.get(name)
        if table is None:
            raise SchemaRepairError(str(relation), name)
        return table

    def _linked_columns(
        self, table: Table, names: list[str], relation: Relation
    ) -> list[Column]:
        if not table.columns:
            return []

        columns: list[Column] = []
        for name in names:
            column = table.find_column(name)
            if column is None:
                logger.debug(
                    "Relation %s: column %s not declared on %s, left unlinked",
                    relation,
                    name,
                    table.name,
                )
                continue
            columns.append(column)
        return columns
