"""Removal of duplicate relations."""

from __future__ import annotations

from database_schema_merge.core.schemas import Relation
from database_schema_merge.logger import logger


def deduplicate_relations(relations: list[Relation]) -> list[Relation]:
    """Keep one relation per identity key, preferring declared foreign keys.

    The identity key is (child table, child columns, parent table, parent
    columns). The first relation seen for a key is kept unless it is virtual
    and a later one is not, in which case the later one replaces it. A
    non-virtual relation is never replaced, so among relations of the same
    provenance the first in input order wins.

    Args:
        relations: Relations in merge order

    Returns:
        Surviving relations, ordered by first appearance of their key
    """
    seen: dict[tuple[str, str, str, str], Relation] = {}

    for relation in relations:
        key = relation.identity_key()
        existing = seen.get(key)
        if existing is None:
            seen[key] = relation
        elif existing.virtual and not relation.virtual:
            logger.debug("Relation %s: foreign key replaces extracted join", relation)
            seen[key] = relation

    return list(seen.values())
