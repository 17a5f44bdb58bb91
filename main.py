"""
Database Schema Merge

Entry point for the schema merge command.
"""

from database_schema_merge import MergeCommand


def main() -> None:
    """
    Entry point for the schema merge command.

    Creates MergeCommand instance and runs it with the process arguments.
    """
    command = MergeCommand()
    command.run()


if __name__ == "__main__":
    main()
