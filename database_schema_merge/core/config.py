"""Configuration for the database schema merge command."""

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_MERGED_NAME, DEFAULT_SCHEMA_NAME


class ExitCodesConfig(BaseModel):
    """Configuration for exit codes."""

    success: int = 0
    error_file_not_found: int = 1
    error_invalid_arguments: int = 2
    error_repair_failed: int = 3
    error_file_system: int = 5


class Config(BaseSettings):
    """Defaults of the merge command, overridable from the environment.

    Values are read from ``SCHEMA_MERGE_*`` variables (or a ``.env`` file).
    Only the command line layer reads this; the merge itself is driven by an
    explicit ``MergeConfig``.
    """

    merged_name: str = Field(
        default=DEFAULT_MERGED_NAME, description="Default name of the merged schema"
    )
    default_schema: str = Field(
        default=DEFAULT_SCHEMA_NAME, description="Schema for unqualified names"
    )
    use_brackets: bool = Field(default=True, description="Use bracket notation")
    extract_view_relations: bool = Field(
        default=True, description="Extract virtual relations from view JOINs"
    )
    validate_output: bool = Field(
        default=False, description="Print a validation report after merging"
    )
    log_level: str | None = Field(
        default=None, description="Override the level of the console handler"
    )

    exit_codes: ExitCodesConfig = Field(default_factory=ExitCodesConfig)

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_MERGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def load_config(**overrides) -> Config:
    """Populate os.environ from .env (if present) and build a Config."""
    load_dotenv()
    return Config(**overrides)
