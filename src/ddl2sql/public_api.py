"""
Public API for DDL2SQL

This module provides a small stateful interface over the pure schema, planning
and rendering functions: it holds the DDL text, the graph built from it, the
chosen base table and the current selections.
"""

from __future__ import annotations

from typing import List, Optional

from ddl2sql.api.query_api import QueryAPI, SqlResult
from ddl2sql.api.schema_api import SchemaAPI, TableSummary
from ddl2sql.common.errors import StageError
from ddl2sql.planning.selection import toggle_selection
from ddl2sql.schema.idents import normalize
from ddl2sql.schema.models import SchemaGraph


class DDL2SQL:
    """
    Public API for DDL2SQL

    One instance per editing session. The graph is rebuilt wholesale on every
    ``load_ddl`` call; selections are kept as-is across rebuilds, and tables
    that disappear simply become unreachable for the planner.
    """

    def __init__(self, ddl: Optional[str] = None):
        self.schema = SchemaAPI()
        self.query = QueryAPI()

        self._ddl = ""
        self._graph: Optional[SchemaGraph] = None
        self._errors: List[StageError] = []
        self._base: Optional[str] = None
        self._selections: List[str] = []

        if ddl is not None:
            self.load_ddl(ddl)

    @property
    def ddl(self) -> str:
        return self._ddl

    @property
    def graph(self) -> Optional[SchemaGraph]:
        return self._graph

    @property
    def errors(self) -> List[StageError]:
        """Errors from the last ``load_ddl`` call."""
        return list(self._errors)

    @property
    def base(self) -> Optional[str]:
        return self._base

    @property
    def selections(self) -> List[str]:
        return list(self._selections)

    def load_ddl(self, ddl: str) -> Optional[SchemaGraph]:
        """
        Replace the DDL text and rebuild the graph.

        Args:
            ddl: CREATE TABLE / ALTER TABLE statements

        Returns:
            The new graph, or None when the DDL has a syntax error
        """
        self._ddl = ddl
        result = self.schema.build(ddl)
        self._graph = result.graph
        self._errors = result.errors
        return self._graph

    def set_base(self, table: Optional[str]) -> None:
        self._base = normalize(table) if table else None

    def toggle(self, selection: str) -> List[str]:
        """
        Toggle a ``table.column`` or ``table.*`` identifier.

        Returns:
            The updated selection list
        """
        self._selections = toggle_selection(self._selections, selection)
        return self.selections

    def clear_selections(self) -> None:
        self._selections = []

    def tables(self) -> List[TableSummary]:
        if self._graph is None:
            return []
        return self.schema.describe(self._graph)

    def generate(self, format: Optional[bool] = None) -> SqlResult:
        """
        Generate SQL for the current graph, base table and selections.
        """
        return self.query.generate(self._graph, self._base, self._selections, format=format)
