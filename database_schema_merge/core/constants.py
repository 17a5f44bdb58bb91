"""Constants shared by the schema merge components."""

# Table types (as reported by tbls drivers)
BASE_TABLE = "BASE TABLE"
VIEW = "VIEW"
MATERIALIZED_VIEW = "MATERIALIZED VIEW"

VIEW_TYPES = frozenset({VIEW, MATERIALIZED_VIEW})
DEFINITION_TABLE_TYPES = frozenset({BASE_TABLE, VIEW, MATERIALIZED_VIEW})

# Join types
JOIN_INNER = "INNER"
JOIN_LEFT = "LEFT"
JOIN_RIGHT = "RIGHT"
JOIN_FULL = "FULL"

# Identifier delimiters
BRACKET_OPEN = "["
BRACKET_CLOSE = "]"
NAME_SEPARATOR = "."

# Suffixes dropped from file names when deriving a database name
DATABASE_FILE_SUFFIXES = ("_schema", "-schema")

# Display limits
MAX_CONDITION_LENGTH = 100
REPORT_RULE_WIDTH = 70
REPORT_BROKEN_RELATION_LIMIT = 10

# Defaults
DEFAULT_MERGED_NAME = "Combined Schema"
DEFAULT_SCHEMA_NAME = "dbo"
