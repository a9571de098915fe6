"""
Query API for DDL2SQL

Turns a schema graph, a base table and a selection list into SQL text.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from ddl2sql.common.errors import ErrorCode, ErrorSeverity, StageError
from ddl2sql.common.logger import get_logger, schema_context
from ddl2sql.common.settings import settings
from ddl2sql.planning.models import Plan
from ddl2sql.planning.planner import plan_joins
from ddl2sql.rendering.emitter import emit_sql
from ddl2sql.rendering.formatter import format_sql
from ddl2sql.schema.models import SchemaGraph

logger = get_logger("query_api")


class SqlResult(BaseModel):
    """Represents the result of one SQL generation."""
    sql: str = Field(default="")
    warnings: List[str] = Field(default_factory=list)
    plan: Optional[Plan] = None
    errors: List[StageError] = Field(default_factory=list)


def _missing_input_errors(graph, base, selections) -> List[StageError]:
    checks = [
        (graph is None, ErrorCode.MISSING_SCHEMA, "No schema graph is loaded."),
        (not base, ErrorCode.MISSING_BASE_TABLE, "No base table is selected."),
        (not selections, ErrorCode.NO_SELECTIONS, "No columns are selected."),
    ]
    return [
        StageError(stage="planner", message=msg, severity=ErrorSeverity.INFO, error_code=code)
        for failed, code, msg in checks
        if failed
    ]


def _plan_errors(plan: Plan) -> List[StageError]:
    errors = [
        StageError(
            stage="planner",
            message=f"No FK path from {plan.base} to {table}.",
            severity=ErrorSeverity.WARNING,
            error_code=ErrorCode.UNREACHABLE_TABLE,
            details={"table": table},
        )
        for table in plan.unreachable
    ]
    errors.extend(
        StageError(
            stage="planner",
            message=f"Several shortest join paths lead from {plan.base} to {table}.",
            severity=ErrorSeverity.INFO,
            error_code=ErrorCode.AMBIGUOUS_JOIN_PATH,
            details={"table": table},
        )
        for table in plan.ambiguous
    )
    return errors


class QueryAPI:
    """
    API for generating SELECT ... LEFT JOIN statements.
    """

    def generate(
        self,
        graph: Optional[SchemaGraph],
        base: Optional[str],
        selections: Sequence[str],
        format: Optional[bool] = None,
        keyword_case: Optional[str] = None,
    ) -> SqlResult:
        """
        Plan joins and render SQL.

        Args:
            graph: Current schema graph (None when the DDL did not parse)
            base: Base table name
            selections: ``table.column`` / ``table.*`` identifiers
            format: Run the formatter; defaults to ``settings.format_sql``
            keyword_case: Keyword casing forwarded to the formatter

        Returns:
            SqlResult with SQL text, planner warnings and the plan itself
        """
        fingerprint = graph.fingerprint[:12] if graph is not None else None
        with schema_context(fingerprint):
            plan = plan_joins(graph, base, list(selections))
            if plan is None:
                return SqlResult(
                    sql=settings.placeholder_sql,
                    errors=_missing_input_errors(graph, base, selections),
                )

            if not plan.select:
                logger.info("Every selected table is unreachable from %s", plan.base)
                return SqlResult(
                    sql=settings.placeholder_sql,
                    warnings=list(plan.warnings),
                    plan=plan,
                    errors=_plan_errors(plan) + [
                        StageError(
                            stage="planner",
                            message=f"None of the selected columns can be joined to {plan.base}.",
                            severity=ErrorSeverity.WARNING,
                            error_code=ErrorCode.EMPTY_SELECT_LIST,
                        )
                    ],
                )

            sql = emit_sql(plan)
            should_format = settings.format_sql if format is None else format
            if should_format:
                sql = format_sql(sql, keyword_case=keyword_case)
            logger.debug("Generated SQL with %d joins", len(plan.steps))
            return SqlResult(
                sql=sql, warnings=list(plan.warnings), plan=plan, errors=_plan_errors(plan)
            )


def generate_sql(
    graph: Optional[SchemaGraph],
    base: Optional[str],
    selections: Sequence[str],
    format: Optional[bool] = None,
) -> SqlResult:
    """Convenience wrapper around :meth:`QueryAPI.generate`."""
    return QueryAPI().generate(graph, base, selections, format=format)
