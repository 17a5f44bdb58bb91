"""
Database Schema Merge

A Python package for merging several tbls schema documents into one combined
schema with standardized names, relations extracted from view definitions
and deduplicated foreign keys.
"""

from database_schema_merge.cli.merger import MergeCommand
from database_schema_merge.merge.merger import SchemaMerger

__all__ = ["MergeCommand", "SchemaMerger"]
