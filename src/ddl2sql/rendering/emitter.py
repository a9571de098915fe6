from __future__ import annotations

from typing import List

from ddl2sql.planning.models import JoinStep, Plan
from ddl2sql.schema.idents import quote_column, quote_ident

ALWAYS_TRUE = "1=1"


def _on_clause(step: JoinStep, from_alias: str, to_alias: str) -> str:
    parts = [
        f"{from_alias}.{quote_column(lcol)} = {to_alias}.{quote_column(rcol)}"
        for lcol, rcol in step.column_pairs
    ]
    return " AND ".join(parts) if parts else ALWAYS_TRUE


def emit_sql(plan: Plan) -> str:
    """Render a plan as ``SELECT ... FROM ... LEFT JOIN ...;``.

    One line per clause and per join; indentation and keyword case are left
    to :func:`ddl2sql.rendering.formatter.format_sql`.

    The plan is trusted as produced by the planner; an alias missing from
    ``plan.table_alias`` raises ``KeyError``.
    """
    select_parts = [
        f"{plan.alias(s.table)}.*" if s.is_wildcard else f"{plan.alias(s.table)}.{quote_column(s.column)}"
        for s in plan.select
    ]
    lines: List[str] = [
        "SELECT " + ", ".join(select_parts),
        f"FROM {quote_ident(plan.base)} AS {plan.alias(plan.base)}",
    ]
    for step in plan.steps:
        from_alias = plan.alias(step.from_table)
        to_alias = plan.alias(step.to_table)
        lines.append(
            f"LEFT JOIN {quote_ident(step.to_table)} AS {to_alias} ON {_on_clause(step, from_alias, to_alias)}"
        )
    return "\n".join(lines) + ";"
