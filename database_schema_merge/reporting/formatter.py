"""Human readable merge summaries and validation reports."""

from __future__ import annotations

from pathlib import Path

from database_schema_merge.core.constants import (
    REPORT_BROKEN_RELATION_LIMIT,
    REPORT_RULE_WIDTH,
)
from database_schema_merge.core.schemas import (
    MergeConfig,
    MergeStats,
    Schema,
    ValidationReport,
)

RULE = "=" * REPORT_RULE_WIDTH


def format_merge_summary(
    stats: MergeStats, merged: Schema, output_path: Path, config: MergeConfig
) -> list[str]:
    """Return the lines of the summary printed after a merge."""
    lines = [
        RULE,
        "Merge Complete!",
        RULE,
        f"Databases merged: {', '.join(sorted(stats.databases))}",
        f"Total tables: {stats.total_tables} ({stats.total_views} views)",
        f"Total relations: {len(merged.relations)}",
        f"  - From foreign key constraints: {stats.total_relations}",
    ]
    if config.extract_view_relations:
        lines.append(f"  - Extracted from view JOINs: {stats.extracted_relations}")
    if stats.deduplicated_count > 0:
        lines.append(f"  - Duplicates removed: {stats.deduplicated_count}")
    if stats.cross_db_relations > 0:
        lines.append(f"  - Cross-database relations: {stats.cross_db_relations}")
    lines.extend(
        [
            f"Total functions: {stats.total_functions}",
            f"Bracket notation: {config.use_brackets}",
            f"Output written to: {output_path}",
            RULE,
        ]
    )
    return lines


def format_validation_report(
    report: ValidationReport, limit: int = REPORT_BROKEN_RELATION_LIMIT
) -> list[str]:
    """Return the lines of a validation report.

    Only the first ``limit`` broken relations are listed.
    """
    lines = [
        RULE,
        "Schema Validation Report",
        RULE,
        f"Total tables: {report.total_tables}",
        f"Total relations: {report.total_relations}",
        f"  - Foreign key constraints: {report.fk_relations}",
        f"  - Virtual relations (extracted): {report.virtual_relations}",
        f"Databases found: {', '.join(report.databases)}",
    ]
    for database in report.databases:
        lines.append(
            f"  - {database}: {report.tables_per_database.get(database, 0)} tables, "
            f"{report.relations_per_database.get(database, 0)} relations"
        )

    if report.broken_relations:
        lines.append("")
        lines.append(f"Found {len(report.broken_relations)} broken relations:")
        for broken in report.broken_relations[:limit]:
            kind = "Virtual" if broken.virtual else "FK"
            lines.append(f"  [{kind}] {broken.relation}")
            lines.append(f"       Missing ({broken.side}): {broken.missing}")
        remaining = len(report.broken_relations) - limit
        if remaining > 0:
            lines.append(f"  ... and {remaining} more")
    else:
        lines.append("")
        lines.append("All relations are valid!")

    lines.append(RULE)
    return lines
