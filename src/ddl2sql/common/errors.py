from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict


class ErrorSeverity(str, Enum):
    """Severity levels for generation issues."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ErrorCode(str, Enum):
    """Standardized error codes surfaced to callers."""
    DDL_SYNTAX_ERROR = "DDL_SYNTAX_ERROR"
    MISSING_SCHEMA = "MISSING_SCHEMA"
    MISSING_BASE_TABLE = "MISSING_BASE_TABLE"
    NO_SELECTIONS = "NO_SELECTIONS"
    UNREACHABLE_TABLE = "UNREACHABLE_TABLE"
    AMBIGUOUS_JOIN_PATH = "AMBIGUOUS_JOIN_PATH"
    EMPTY_SELECT_LIST = "EMPTY_SELECT_LIST"


class DDL2SQLError(ValueError):
    """Base class for exceptions raised by ddl2sql."""


class DDLSyntaxError(DDL2SQLError):
    """Raised by the DDL adapter when the text does not parse into table structure.

    Attributes:
        statement (Optional[str]): Leading text of the offending statement.
    """

    def __init__(self, message: str, statement: Optional[str] = None):
        super().__init__(message)
        self.statement = statement


class StageError(BaseModel):
    """Represents a structured error produced by one generation stage.

    Attributes:
        stage (str): The stage where the error occurred (``schema``, ``planner``...).
        message (str): A human-readable error message.
        severity (ErrorSeverity): The severity of the error.
        error_code (ErrorCode): The standardized error code.
        details (Optional[Any]): Additional context or metadata.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    stage: str
    message: str
    severity: ErrorSeverity
    error_code: ErrorCode
    details: Optional[Any] = None

    @property
    def is_blocking(self) -> bool:
        """True when no SQL could be produced because of this error."""
        return self.severity == ErrorSeverity.ERROR
