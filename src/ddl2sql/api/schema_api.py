"""
Schema API for DDL2SQL

Builds schema graphs from DDL text and summarizes them for display.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ddl2sql.common.errors import DDLSyntaxError, ErrorCode, ErrorSeverity, StageError
from ddl2sql.common.logger import get_logger
from ddl2sql.schema.builder import build_graph_from_ddl
from ddl2sql.schema.models import SchemaGraph

logger = get_logger("schema_api")


class SchemaBuildResult(BaseModel):
    """Outcome of building a graph; ``graph`` is None when the DDL did not parse."""
    graph: Optional[SchemaGraph] = None
    errors: List[StageError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.graph is not None


class TableSummary(BaseModel):
    name: str
    qualified_name: Optional[str] = None
    columns: List[str] = Field(default_factory=list)
    primary_key: List[str] = Field(default_factory=list)
    references: List[str] = Field(default_factory=list)


class SchemaAPI:
    """
    API for turning DDL into schema graphs.
    """

    def build(self, ddl: str) -> SchemaBuildResult:
        """
        Build a schema graph from DDL text.

        Args:
            ddl: CREATE TABLE / ALTER TABLE statements

        Returns:
            SchemaBuildResult with the graph, or no graph and a DDL_SYNTAX_ERROR
        """
        try:
            graph = build_graph_from_ddl(ddl)
        except DDLSyntaxError as exc:
            logger.info("DDL rejected: %s", exc)
            return SchemaBuildResult(
                errors=[
                    StageError(
                        stage="schema",
                        message=str(exc),
                        severity=ErrorSeverity.ERROR,
                        error_code=ErrorCode.DDL_SYNTAX_ERROR,
                        details={"statement": exc.statement},
                    )
                ]
            )
        return SchemaBuildResult(graph=graph)

    def describe(self, graph: SchemaGraph) -> List[TableSummary]:
        """
        Summarize each table of a graph, in key order.
        """
        return [
            TableSummary(
                name=table.name,
                qualified_name=table.qualified_name,
                columns=list(table.columns),
                primary_key=list(table.primary_key),
                references=table.referenced_tables,
            )
            for _, table in sorted(graph.tables.items())
        ]
