"""Command line entry point of the schema merge."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from database_schema_merge.core.config import Config, load_config
from database_schema_merge.core.exceptions import (
    InvalidArgumentError,
    SchemaLoadError,
    SchemaMergeError,
    SchemaRepairError,
)
from database_schema_merge.core.schemas import MergeConfig, MergeResult
from database_schema_merge.io.schema_io import (
    SchemaDocumentLoader,
    SchemaDocumentWriter,
)
from database_schema_merge.logger import logger, setup_logger
from database_schema_merge.merge.merger import SchemaMerger
from database_schema_merge.reporting.formatter import (
    format_merge_summary,
    format_validation_report,
)
from database_schema_merge.validation.schema_validator import MergedSchemaValidator

MIN_INPUT_FILES = 2
MAPPING_SEPARATOR = ":"

DESCRIPTION = """\
Merge multiple tbls schema JSON files into a single combined schema.

The merge command:
- standardizes table names to database.schema.table
- extracts virtual relations from view JOIN clauses
- identifies cross-schema and cross-database relations
- deduplicates relations (preferring FK constraints over extracted relations)
"""

EPILOG = """\
examples:
  schema-merge merge dv_schema.json dm_schema.json -o combined.json
  schema-merge merge db1.json db2.json --db-mapping db1.json:DV --db-mapping db2.json:DM
"""


def parse_database_mappings(mappings: list[str]) -> dict[str, str]:
    """Parse ``path:name`` arguments into a mapping of path to database name.

    Raises:
        InvalidArgumentError: If an argument has no ':' separator
    """
    result: dict[str, str] = {}
    for mapping in mappings:
        path, separator, name = mapping.partition(MAPPING_SEPARATOR)
        if not separator:
            raise InvalidArgumentError(
                "--db-mapping",
                f"invalid database mapping format: {mapping} (expected filepath:dbname)",
            )
        result[path] = name
    return result


class MergeCommand:
    """The ``merge`` command: load, merge, write and report.

    Defaults of every option come from :class:`Config`; the parsed options
    are turned into a single :class:`MergeConfig` handed to the merger.
    """

    def __init__(
        self,
        config: Config | None = None,
        loader: SchemaDocumentLoader | None = None,
        writer: SchemaDocumentWriter | None = None,
    ) -> None:
        """Initialize the merge command.

        Args:
            config: Command defaults (read from the environment when omitted)
            loader: Loader of input documents
            writer: Writer of the merged document
        """
        self.config = config or load_config()
        self.loader = loader or SchemaDocumentLoader()
        self.writer = writer or SchemaDocumentWriter()
        self.validator = MergedSchemaValidator()

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="schema-merge",
            description="Tools for combined database schema documentation.",
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        merge = subparsers.add_parser(
            "merge",
            help="merge multiple tbls schema JSON files",
            description=DESCRIPTION,
            epilog=EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        merge.add_argument("inputs", nargs="*", metavar="JSON_FILE")
        merge.add_argument(
            "-o", "--output", type=Path, help="output file path (required)"
        )
        merge.add_argument("--name", default="", help="name for the merged schema")
        merge.add_argument(
            "--desc", default="", help="description for the merged schema"
        )
        merge.add_argument(
            "--default-schema",
            default=self.config.default_schema,
            help="default schema name (default: %(default)s)",
        )
        merge.add_argument(
            "--brackets",
            action=argparse.BooleanOptionalAction,
            default=self.config.use_brackets,
            help="use SQL Server bracket notation [Database].[Schema].[Table]",
        )
        merge.add_argument(
            "--extract-view-relations",
            action=argparse.BooleanOptionalAction,
            default=self.config.extract_view_relations,
            help="extract virtual relations from view JOIN clauses",
        )
        merge.add_argument(
            "--validate",
            action=argparse.BooleanOptionalAction,
            default=self.config.validate_output,
            help="validate merged schema and report issues",
        )
        merge.add_argument(
            "--db-mapping",
            action="append",
            default=[],
            metavar="FILEPATH:DBNAME",
            help="database name mapping (repeatable)",
        )
        merge.add_argument(
            "--log-level",
            default=self.config.log_level,
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="console log level",
        )
        return parser

    def build_merge_config(self, args: argparse.Namespace) -> MergeConfig:
        """Validate parsed arguments and turn them into a MergeConfig.

        Raises:
            InvalidArgumentError: If the arguments cannot describe a merge
        """
        if len(args.inputs) < MIN_INPUT_FILES:
            raise InvalidArgumentError(
                "JSON_FILE", f"at least {MIN_INPUT_FILES} JSON files are required"
            )
        if args.output is None:
            raise InvalidArgumentError(
                "--output", "output file must be specified with -o or --output"
            )

        return MergeConfig(
            name=args.name or self.config.merged_name,
            description=args.desc
            or f"Combined schema from {len(args.inputs)} databases",
            default_schema=args.default_schema,
            use_brackets=args.brackets,
            extract_view_relations=args.extract_view_relations,
            database_mapping=parse_database_mappings(args.db_mapping),
        )

    def run(self, argv: list[str] | None = None) -> None:
        """Run the merge command.

        Raises:
            SystemExit: Always, with the exit code of the outcome
        """
        exit_codes = self.config.exit_codes
        args = self.build_parser().parse_args(argv)
        setup_logger(args.log_level)
        try:
            self.execute(args)
        except InvalidArgumentError as e:
            logger.error("%s", e)
            sys.exit(exit_codes.error_invalid_arguments)
        except SchemaLoadError as e:
            logger.error("Schema load error: %s", e, exc_info=True)
            sys.exit(exit_codes.error_file_not_found)
        except SchemaRepairError as e:
            logger.error("Schema repair error: %s", e, exc_info=True)
            sys.exit(exit_codes.error_repair_failed)
        except SchemaMergeError as e:
            logger.error("Schema merge error: %s", e, exc_info=True)
            sys.exit(exit_codes.error_file_system)
        except PermissionError as e:
            logger.error("Cannot write output: %s", e, exc_info=True)
            sys.exit(exit_codes.error_file_system)
        except Exception:
            logger.exception("Unexpected error occurred")
            sys.exit(exit_codes.error_file_system)
        sys.exit(exit_codes.success)

    def run_for_testing(self, argv: list[str]) -> MergeResult:
        """Run the merge command, raising instead of calling sys.exit().

        Returns:
            The merged schema and statistics

        Raises:
            SchemaMergeError: If any critical error occurs during the merge
            PermissionError: If the output cannot be written
        """
        return self.execute(self.build_parser().parse_args(argv))

    def execute(self, args: argparse.Namespace) -> MergeResult:
        """Merge the input files, write the result and report on it."""
        merge_config = self.build_merge_config(args)

        logger.info("Merging %d schema files...", len(args.inputs))
        for i, source in enumerate(args.inputs, start=1):
            logger.info("  [%d/%d] %s", i, len(args.inputs), source)

        result = SchemaMerger(self.loader).merge(args.inputs, merge_config)
        output_path = self.writer.write(result.schema, args.output)

        for line in format_merge_summary(
            result.stats, result.schema, output_path, merge_config
        ):
            logger.info("%s", line)

        if args.validate:
            report = self.validator.validate(result.schema)
            for line in format_validation_report(report):
                logger.info("%s", line)

        return result


def main() -> None:
    """Console script entry point."""
    MergeCommand().run()
