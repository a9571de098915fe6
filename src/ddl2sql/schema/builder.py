"""Builds an immutable :class:`SchemaGraph` from closed DDL statements.

Construction happens on a private mutable draft per table; nothing is handed
out until :meth:`GraphBuilder.build` has deduplicated, sorted and frozen it,
so the result does not depend on statement order or on whether constraints
were declared inline or through later ``ALTER TABLE`` statements.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ddl2sql.common.logger import get_logger
from ddl2sql.schema.adapter import parse_ddl
from ddl2sql.schema.idents import canonical
from ddl2sql.schema.models import ForeignKey, SchemaGraph, SchemaStats, Table
from ddl2sql.schema.statements import (
    AlterTableStatement,
    Constraint,
    CreateTableStatement,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    Statement,
    TableName,
)

logger = get_logger("builder")

__all__ = ["GraphBuilder", "build_schema_graph", "build_graph_from_ddl"]


@dataclass
class _TableDraft:
    name: str
    qualified_name: Optional[str] = None
    columns: List[str] = field(default_factory=list)
    primary_key: List[str] = field(default_factory=list)
    fks: List[ForeignKey] = field(default_factory=list)


def _clean(names: Iterable[str]) -> List[str]:
    return [canonical(n) for n in names if n and n.strip()]


class GraphBuilder:
    """Accumulates statements into table drafts.

    Tables are created lazily on first reference (CREATE target, ALTER target
    or FK reference), so statement order does not matter.
    """

    def __init__(self):
        self._tables: Dict[str, _TableDraft] = {}
        self.skipped = 0

    def _ensure_table(self, ref: TableName) -> Optional[_TableDraft]:
        key = canonical(ref.name) if ref.name else ""
        if not key:
            return None
        draft = self._tables.get(key)
        if draft is None:
            draft = _TableDraft(name=key, qualified_name=ref.qualified)
            self._tables[key] = draft
        elif not draft.qualified_name:
            draft.qualified_name = ref.qualified
        return draft

    def _skip(self, reason: str, table: str) -> None:
        self.skipped += 1
        logger.debug("Skipping %s on table %s", reason, table)

    def apply(self, statement: Statement) -> None:
        draft = self._ensure_table(statement.table)
        if draft is None:
            self._skip("statement without a table name", "?")
            return
        if isinstance(statement, CreateTableStatement):
            draft.columns.extend(_clean(statement.columns))
        for constraint in statement.constraints:
            self._apply_constraint(draft, constraint)

    def _apply_constraint(self, draft: _TableDraft, constraint: Constraint) -> None:
        if isinstance(constraint, PrimaryKeyConstraint):
            cols = _clean(constraint.columns)
            if not cols:
                self._skip("primary key without columns", draft.name)
                return
            draft.primary_key = cols
            return

        if isinstance(constraint, ForeignKeyConstraint):
            from_cols = _clean(constraint.columns)
            target = self._ensure_table(constraint.references) if constraint.references else None
            if target is None or not from_cols:
                self._skip("foreign key without a resolvable reference", draft.name)
                return
            draft.fks.append(
                ForeignKey(
                    from_table=draft.name,
                    from_cols=from_cols,
                    to_table=target.name,
                    to_cols=_clean(constraint.ref_columns),
                    constraint_name=constraint.name,
                )
            )

    def _resolve_implicit_refs(self, fk: ForeignKey) -> ForeignKey:
        """``REFERENCES t`` without a column list points at t's primary key."""
        if fk.to_cols:
            return fk
        target = self._tables.get(fk.to_table)
        if target and len(target.primary_key) == len(fk.from_cols):
            return fk.model_copy(update={"to_cols": list(target.primary_key)})
        return fk

    def build(self) -> SchemaGraph:
        tables: Dict[str, Table] = {}
        fk_count = 0
        for key in sorted(self._tables):
            draft = self._tables[key]
            unique_fks: Dict[tuple, ForeignKey] = {}
            for fk in draft.fks:
                fk = self._resolve_implicit_refs(fk)
                unique_fks.setdefault(fk.sort_key, fk)
            fks = [unique_fks[k] for k in sorted(unique_fks)]
            fk_count += len(fks)
            tables[key] = Table(
                name=draft.name,
                qualified_name=draft.qualified_name,
                columns=sorted(set(draft.columns)),
                primary_key=sorted(set(draft.primary_key)),
                fks=fks,
            )
        stats = SchemaStats(table_count=len(tables), fk_count=fk_count)
        logger.info("Built schema graph: %d tables, %d foreign keys", stats.table_count, stats.fk_count)
        return SchemaGraph(tables=tables, stats=stats)


def build_schema_graph(statements: Iterable[Statement]) -> SchemaGraph:
    """Fold closed statements into a frozen schema graph.

    Args:
        statements (Iterable[Statement]): Output of :func:`parse_ddl` or
            :func:`statements_from_tree`.

    Returns:
        SchemaGraph: The finalized graph.
    """
    builder = GraphBuilder()
    for statement in statements:
        builder.apply(statement)
    return builder.build()


def build_graph_from_ddl(ddl: str) -> SchemaGraph:
    """Parse DDL text and build its schema graph.

    Raises:
        DDLSyntaxError: Propagated from the adapter; no partial graph is returned.
    """
    return build_schema_graph(parse_ddl(ddl))
