"""Custom exception classes for the database schema merge tool."""

from __future__ import annotations


class SchemaMergeError(Exception):
    """Base exception for schema merge errors.

    All custom exceptions in the database schema merge tool inherit from this class.
    """

    pass


class InvalidArgumentError(SchemaMergeError):
    """Error in the arguments given to the merge command.

    Raised before any document is processed, e.g. when fewer than two input
    documents are given, the output path is missing or a database mapping is
    malformed.

    Args:
        argument: The argument (or option name) that was rejected
        reason: Human readable explanation
    """

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f"Invalid argument '{argument}': {reason}")


class SchemaLoadError(SchemaMergeError):
    """Error while reading or parsing a source schema document.

    Args:
        source: Identity (usually the file path) of the offending document
        cause: The underlying exception
    """

    def __init__(self, source: str, cause: Exception) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to load schema from '{source}': {cause}")


class SchemaRepairError(SchemaMergeError):
    """Error when merged relations cannot be linked back to their tables.

    Args:
        relation: Display form of the relation that failed to link
        missing: Name of the table that could not be found
    """

    def __init__(self, relation: str, missing: str) -> None:
        self.relation = relation
        self.missing = missing
        super().__init__(
            f"Failed to repair relation '{relation}': table '{missing}' not found"
        )
