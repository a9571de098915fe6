from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env into os.environ
load_dotenv()


class Settings(BaseSettings):
    """Application configuration settings backed by environment variables."""

    log_level: str = Field(default="INFO", validation_alias="DDL2SQL_LOG_LEVEL")
    log_json: bool = Field(
        default=False,
        validation_alias="DDL2SQL_LOG_JSON",
        description="Emit JSON log lines instead of plain text."
    )

    ddl_dialect: str = Field(
        default="postgres",
        validation_alias="DDL2SQL_DIALECT",
        description="sqlglot dialect used to read DDL text."
    )

    format_sql: bool = Field(
        default=True,
        validation_alias="DDL2SQL_FORMAT_SQL",
        description="Pass emitted SQL through the formatter before returning it."
    )
    keyword_case: Literal["upper", "lower", "capitalize"] = Field(
        default="upper",
        validation_alias="DDL2SQL_KEYWORD_CASE",
        description="Keyword casing applied by the formatter."
    )
    reindent: bool = Field(
        default=True,
        validation_alias="DDL2SQL_REINDENT",
        description="Reindent formatted SQL, one clause per line."
    )

    placeholder_sql: str = Field(
        default="-- select columns to start",
        validation_alias="DDL2SQL_PLACEHOLDER_SQL",
        description="Text returned when there is nothing to plan yet."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def configure_env(self, env: str) -> None:
        """Loads environment-specific variables and reloads settings."""
        if not env:
            return

        load_dotenv(f".env.{env}", override=True)
        new_settings = Settings()
        self.__dict__.update(new_settings.__dict__)


settings = Settings()

# Configure logging during import
from ddl2sql.common.logger import configure_logging
configure_logging(
    level=settings.log_level,
    json_format=settings.log_json
)
