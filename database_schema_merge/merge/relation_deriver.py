"""Conversion of extracted join facts into virtual relations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from database_schema_merge.core.constants import (
    DEFINITION_TABLE_TYPES,
    JOIN_LEFT,
    JOIN_RIGHT,
)
from database_schema_merge.core.schemas import (
    Cardinality,
    JoinRelation,
    Relation,
    Table,
)
from database_schema_merge.merge.join_extractor import RegexJoinExtractor

if TYPE_CHECKING:
    from database_schema_merge.merge.interfaces import IJoinExtractor

# join type -> (child cardinality, parent cardinality)
JOIN_CARDINALITIES: dict[str, tuple[Cardinality, Cardinality]] = {
    JOIN_LEFT: (Cardinality.ZERO_OR_ONE, Cardinality.ZERO_OR_MORE),
    JOIN_RIGHT: (Cardinality.ZERO_OR_MORE, Cardinality.ZERO_OR_ONE),
}
# INNER, FULL and anything unclassified
DEFAULT_JOIN_CARDINALITY = (Cardinality.EXACTLY_ONE, Cardinality.ZERO_OR_MORE)


class RelationDeriver:
    """Derives virtual relations from the SQL definitions of tables and views."""

    def __init__(self, join_extractor: "IJoinExtractor | None" = None) -> None:
        """Initialize the relation deriver.

        Args:
            join_extractor: Extractor used on each definition (regex based by default)
        """
        self.join_extractor = join_extractor or RegexJoinExtractor()

    def derive(
        self,
        tables: list[Table],
        default_db: str,
        default_schema: str,
        use_brackets: bool,
    ) -> list[Relation]:
        """Derive virtual relations from the definitions of ``tables``.

        Args:
            tables: Tables whose names are already standardized
            default_db: Database for unqualified joined tables
            default_schema: Schema for unqualified joined tables
            use_brackets: Whether standardized names use bracket notation

        Returns:
            Virtual relations in table order, then join order
        """
        relations: list[Relation] = []

        for table in tables:
            if table.type not in DEFINITION_TABLE_TYPES or not table.definition:
                continue

            joins = self.join_extractor.extract(
                table.definition, table.name, default_db, default_schema, use_brackets
            )
            relations.extend(self.to_relation(join) for join in joins)

        return relations

    def to_relation(self, join: JoinRelation) -> Relation:
        """Build a virtual Relation from a single join fact."""
        cardinality, parent_cardinality = JOIN_CARDINALITIES.get(
            join.join_type, DEFAULT_JOIN_CARDINALITY
        )
        return Relation(
            table=join.from_table,
            columns=list(join.from_columns),
            cardinality=cardinality,
            parent_table=join.to_table,
            parent_columns=list(join.to_columns),
            parent_cardinality=parent_cardinality,
            definition=join.display_condition,
            virtual=True,
        )
