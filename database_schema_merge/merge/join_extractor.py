"""Extraction of join facts from SQL definitions (views, procedures)."""

from __future__ import annotations

import re

from database_schema_merge.core.constants import (
    JOIN_FULL,
    JOIN_INNER,
    JOIN_LEFT,
    JOIN_RIGHT,
)
from database_schema_merge.core.schemas import JoinRelation
from database_schema_merge.logger import logger
from database_schema_merge.merge.identifier import (
    normalize_brackets,
    standardize_table_name,
)

# <join keyword> <table> [AS] <alias> ON <condition> <terminator>
# The alias is required. Terminators are a lookahead so that the keyword of
# a following join stays available to the next match.
JOIN_PATTERN = re.compile(
    r"(?:LEFT\s+|RIGHT\s+|INNER\s+|OUTER\s+|CROSS\s+|FULL\s+)?(?:OUTER\s+)?JOIN\s+"
    r"([\[\w\]\.]+)"
    r"\s+(?:AS\s+)?(\w+)"
    r"\s+ON\s+([^;]+?)"
    r"(?=\s+(?:WHERE|GROUP|ORDER|HAVING|UNION|LEFT|RIGHT|INNER|OUTER|CROSS|FULL|JOIN)\b"
    r"|\s*;|\s*$)",
    re.IGNORECASE,
)

# alias.column = alias.column, each token optionally bracketed
EQUALITY_PATTERN = re.compile(
    r"(\[?\w+\]?)\.(\[?\w+\]?)\s*=\s*(\[?\w+\]?)\.(\[?\w+\]?)"
)

WHITESPACE_PATTERN = re.compile(r"\s+")


def classify_join_type(clause: str) -> str:
    """Classify a join clause by the keywords it contains."""
    upper = clause.upper()
    if JOIN_LEFT in upper:
        return JOIN_LEFT
    if JOIN_RIGHT in upper:
        return JOIN_RIGHT
    if JOIN_FULL in upper:
        return JOIN_FULL
    return JOIN_INNER


def clean_condition(condition: str) -> str:
    """Collapse line breaks and repeated whitespace of an ON condition."""
    return WHITESPACE_PATTERN.sub(" ", condition).strip()


class RegexJoinExtractor:
    """Pattern based join extractor.

    Recognizes ``[LEFT|RIGHT|INNER|OUTER|CROSS|FULL] [OUTER] JOIN <table>
    [AS] <alias> ON <condition>`` clauses and the ``a.col = b.col`` equality
    pairs of their conditions. Each equality pair becomes one JoinRelation;
    composite keys are not grouped. Joins without an alias, nested
    parentheses and subqueries are not understood: unsupported text simply
    yields no facts.
    """

    def extract(
        self,
        sql_def: str,
        source_table: str,
        default_db: str,
        default_schema: str,
        use_brackets: bool,
    ) -> list[JoinRelation]:
        """Extract join facts from a SQL definition.

        Args:
            sql_def: SQL source text of a view or procedure
            source_table: Standardized name of the object owning the definition
            default_db: Database used to standardize the joined table
            default_schema: Schema used to standardize the joined table
            use_brackets: Whether standardized names use bracket notation

        Returns:
            Join facts in order of appearance (possibly empty)
        """
        if not sql_def:
            return []

        relations: list[JoinRelation] = []

        for match in JOIN_PATTERN.finditer(sql_def):
            joined_table = match.group(1).strip()
            on_condition = match.group(3).strip()

            joined_table_std = standardize_table_name(
                joined_table, default_db, default_schema, use_brackets
            )
            join_type = classify_join_type(match.group(0))
            condition = clean_condition(on_condition)

            for left_alias, left_column, right_alias, right_column in (
                EQUALITY_PATTERN.findall(on_condition)
            ):
                relations.append(
                    JoinRelation(
                        from_table=source_table,
                        from_columns=[normalize_brackets(left_column.strip())],
                        to_table=joined_table_std,
                        to_columns=[normalize_brackets(right_column.strip())],
                        join_type=join_type,
                        on_condition=condition,
                    )
                )

        if relations:
            logger.debug(
                "Extracted %d join(s) from definition of %s",
                len(relations),
                source_table,
            )
        return relations
