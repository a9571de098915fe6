# ddl2sql package

__version__ = "0.1.0"

from .public_api import DDL2SQL

# Also expose individual API modules for more granular access
from .api.query_api import QueryAPI, SqlResult, generate_sql
from .api.schema_api import SchemaAPI, SchemaBuildResult, TableSummary

# Also expose core models and enums
from .common.errors import DDL2SQLError, DDLSyntaxError, ErrorCode, ErrorSeverity, StageError
from .schema.models import ForeignKey, SchemaGraph, Table
from .planning.models import JoinStep, Plan, Selection

__all__ = [
    "__version__",
    "DDL2SQL",
    "QueryAPI",
    "SqlResult",
    "generate_sql",
    "SchemaAPI",
    "SchemaBuildResult",
    "TableSummary",
    "DDL2SQLError",
    "DDLSyntaxError",
    "ErrorCode",
    "ErrorSeverity",
    "StageError",
    "ForeignKey",
    "SchemaGraph",
    "Table",
    "JoinStep",
    "Plan",
    "Selection",
]
