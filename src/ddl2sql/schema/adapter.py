"""Front ends that reduce DDL into the closed statement variants.

Two inputs are supported:

* DDL text, parsed with ``sqlglot`` and walked statement by statement
  (:func:`parse_ddl`).
* A loosely shaped parser tree of plain dicts, as produced by SQL
  parsers that emit an AST as JSON (:func:`statements_from_tree`).

Only ``CREATE TABLE`` and ``ALTER TABLE ... ADD`` key constraints carry
structure the graph builder needs; every other statement is ignored.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import sqlglot
from sqlglot import expressions as exp
from sqlglot.errors import ParseError, TokenError

from ddl2sql.common.errors import DDLSyntaxError
from ddl2sql.common.logger import get_logger
from ddl2sql.common.settings import settings
from ddl2sql.schema.statements import (
    AlterTableStatement,
    Constraint,
    CreateTableStatement,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    Statement,
    TableName,
)

logger = get_logger("adapter")

__all__ = ["parse_ddl", "statements_from_tree"]

# sqlglot falls back to exp.Command for statements it cannot parse in full.
# A fallback matching one of these would silently lose tables or keys.
_LOST_STRUCTURE = {
    "CREATE": re.compile(
        r"^\s*(?:OR\s+REPLACE\s+)?(?:(?:GLOBAL|LOCAL|TEMP|TEMPORARY|UNLOGGED)\s+)*TABLE\b", re.IGNORECASE
    ),
    "ALTER": re.compile(r"^\s*TABLE\b.*\bADD\b.*\b(?:KEY|REFERENCES)\b", re.IGNORECASE | re.DOTALL),
}


def _snippet(node: exp.Expression) -> str:
    return " ".join(node.sql().split())[:120]


def _error_context(exc: Exception) -> Optional[str]:
    errors = getattr(exc, "errors", None) or []
    if not errors:
        return None
    first = errors[0]
    text = "".join(first.get(key) or "" for key in ("start_context", "highlight", "end_context"))
    return " ".join(text.split())[:120] or None


def _error_message(exc: Exception) -> str:
    errors = getattr(exc, "errors", None) or []
    if errors and errors[0].get("description"):
        return str(errors[0]["description"])
    return str(exc).splitlines()[0] if str(exc) else type(exc).__name__


def _table_name(node: Optional[exp.Expression]) -> Optional[TableName]:
    if isinstance(node, exp.Schema):
        node = node.this
    if not isinstance(node, exp.Table) or not node.name:
        return None
    return TableName(schema_name=node.db or None, name=node.name)


def _column_names(nodes: Optional[Iterable[exp.Expression]]) -> List[str]:
    names: List[str] = []
    for node in nodes or []:
        while isinstance(node, exp.Ordered):
            node = node.this
        if node is not None and node.name:
            names.append(node.name)
    return names


def _reference(ref: Optional[exp.Expression], statement: exp.Expression) -> Tuple[TableName, List[str]]:
    """Target table and (possibly empty) column list of a ``REFERENCES`` clause."""
    target = ref.this if isinstance(ref, exp.Reference) else None
    table = _table_name(target)
    if table is None:
        raise DDLSyntaxError("REFERENCES without a table name", _snippet(statement))
    columns = _column_names(target.expressions) if isinstance(target, exp.Schema) else []
    return table, columns


def _key_constraint(node: exp.Expression, statement: exp.Expression) -> Optional[Constraint]:
    name = None
    if isinstance(node, exp.Constraint):
        name = node.name or None
        node = next((e for e in node.expressions if isinstance(e, (exp.PrimaryKey, exp.ForeignKey))), None)
    if isinstance(node, exp.PrimaryKey):
        return PrimaryKeyConstraint(columns=_column_names(node.expressions), name=name)
    if isinstance(node, exp.ForeignKey):
        references, ref_columns = _reference(node.args.get("reference"), statement)
        return ForeignKeyConstraint(
            columns=_column_names(node.expressions),
            references=references,
            ref_columns=ref_columns,
            name=name,
        )
    return None


def _column_constraints(column: exp.ColumnDef, statement: exp.Expression) -> List[Constraint]:
    out: List[Constraint] = []
    for cons in column.args.get("constraints") or []:
        if not isinstance(cons, exp.ColumnConstraint):
            continue
        kind = cons.args.get("kind")
        name = cons.name or None
        if isinstance(kind, exp.PrimaryKeyColumnConstraint):
            out.append(PrimaryKeyConstraint(columns=[column.name], name=name))
        elif isinstance(kind, exp.Reference):
            references, ref_columns = _reference(kind, statement)
            # a column-level reference pairs exactly one column
            out.append(
                ForeignKeyConstraint(
                    columns=[column.name], references=references, ref_columns=ref_columns[:1], name=name
                )
            )
    return out


def _create_table(node: exp.Create) -> CreateTableStatement:
    schema = node.this
    table = _table_name(schema)
    if table is None:
        raise DDLSyntaxError("CREATE TABLE without a table name", _snippet(node))

    columns: List[str] = []
    constraints: List[Constraint] = []
    elements = schema.expressions if isinstance(schema, exp.Schema) else []
    for element in elements:
        if isinstance(element, exp.ColumnDef):
            columns.append(element.name)
            constraints.extend(_column_constraints(element, node))
        else:
            constraint = _key_constraint(element, node)
            if constraint is not None:
                constraints.append(constraint)
    return CreateTableStatement(table=table, columns=columns, constraints=constraints)


def _alter_table(node: exp.Alter) -> AlterTableStatement:
    table = _table_name(node.this)
    if table is None:
        raise DDLSyntaxError("ALTER TABLE without a table name", _snippet(node))

    constraints: List[Constraint] = []
    for action in node.args.get("actions") or []:
        if not isinstance(action, exp.AddConstraint):
            continue
        for element in action.expressions:
            constraint = _key_constraint(element, node)
            if constraint is not None:
                constraints.append(constraint)
    return AlterTableStatement(table=table, constraints=constraints)


def _check_command(node: exp.Command) -> None:
    head = node.name.upper()
    rest = node.text("expression")
    pattern = _LOST_STRUCTURE.get(head)
    if pattern is not None and pattern.search(rest):
        raise DDLSyntaxError(
            f"Could not parse {head} TABLE statement", " ".join(f"{node.name}{rest}".split())[:120]
        )
    logger.debug("Ignoring unparsed %s statement", head)


def parse_ddl(ddl: str, dialect: Optional[str] = None) -> List[Statement]:
    """Reduce DDL text to the CREATE/ALTER TABLE statements it contains.

    Args:
        ddl (str): One or more SQL statements.
        dialect (Optional[str]): sqlglot dialect to read with; defaults to
            ``settings.ddl_dialect``.

    Returns:
        List[Statement]: Recognized statements in source order.

    Raises:
        DDLSyntaxError: If the text does not parse, or a CREATE/ALTER TABLE
            statement cannot be reduced to its columns and keys.
    """
    dialect = dialect or settings.ddl_dialect
    try:
        expressions = sqlglot.parse(ddl or "", read=dialect)
    except (ParseError, TokenError) as exc:
        raise DDLSyntaxError(_error_message(exc), _error_context(exc)) from exc

    statements: List[Statement] = []
    for node in expressions:
        if isinstance(node, exp.Create) and str(node.args.get("kind") or "").upper() == "TABLE":
            statements.append(_create_table(node))
        elif isinstance(node, exp.Alter) and str(node.args.get("kind") or "").upper() == "TABLE":
            statements.append(_alter_table(node))
        elif isinstance(node, exp.Command):
            _check_command(node)
    logger.debug("Parsed %d table statements", len(statements))
    return statements


# ---- loosely shaped parser trees ----

def _name_of(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value or None
    if isinstance(value, Mapping):
        inner = value.get("name")
        if isinstance(inner, Mapping):
            return _name_of(inner)
        if isinstance(inner, str) and inner:
            return inner
    return None


def _table_of(value: Any) -> Optional[TableName]:
    name = _name_of(value)
    if not name:
        return None
    schema = None
    if isinstance(value, Mapping):
        schema = value.get("schema")
        inner = value.get("name")
        if not schema and isinstance(inner, Mapping):
            schema = inner.get("schema")
    return TableName(schema_name=str(schema) if schema else None, name=str(name))


def _names(values: Any) -> List[str]:
    if not isinstance(values, (list, tuple)):
        return []
    return [str(n) for n in (_name_of(v) for v in values) if n]


def _constraint_from_node(node: Mapping) -> Optional[Constraint]:
    ctype = node.get("type")
    name = _name_of(node.get("name")) if node.get("name") else None
    if ctype == "primary key":
        return PrimaryKeyConstraint(columns=_names(node.get("columns") or node.get("localColumns")), name=name)
    if ctype != "foreign key":
        return None
    local = _names(node.get("localColumns") or node.get("columns"))
    ref = node.get("references")
    if isinstance(ref, Mapping):
        ref_table = _table_of(ref.get("foreignTable") or ref.get("table") or ref.get("name"))
        ref_cols = _names(ref.get("foreignColumns") or ref.get("columns"))
    else:
        ref_table = _table_of(node.get("foreignTable") or node.get("table"))
        ref_cols = _names(node.get("foreignColumns"))
    return ForeignKeyConstraint(columns=local, references=ref_table, ref_columns=ref_cols, name=name)


def _tree_column_constraints(column: str, node: Mapping) -> Iterable[Constraint]:
    for cons in node.get("constraints") or []:
        if not isinstance(cons, Mapping):
            continue
        if cons.get("type") == "primary key":
            yield PrimaryKeyConstraint(columns=[column])
        elif cons.get("type") == "reference":
            ref_table = _table_of(cons.get("foreignTable"))
            ref_cols = _names(cons.get("foreignColumns"))[:1]
            yield ForeignKeyConstraint(columns=[column], references=ref_table, ref_columns=ref_cols)


def statements_from_tree(nodes: Iterable[Any]) -> List[Statement]:
    """Reduce a loosely shaped statement list (dicts tagged by ``type``) to closed statements.

    Unrecognized shapes are skipped.
    """
    statements: List[Statement] = []
    for node in nodes or []:
        if not isinstance(node, Mapping):
            continue
        kind = node.get("type")
        if kind == "create table":
            table = _table_of(node.get("name"))
            if table is None:
                continue
            columns: List[str] = []
            constraints: List[Constraint] = []
            for col in node.get("columns") or []:
                col_name = _name_of(col.get("name")) if isinstance(col, Mapping) else None
                if not col_name:
                    continue
                columns.append(col_name)
                constraints.extend(_tree_column_constraints(col_name, col))
            for cons in node.get("constraints") or []:
                if isinstance(cons, Mapping):
                    parsed = _constraint_from_node(cons)
                    if parsed is not None:
                        constraints.append(parsed)
            statements.append(CreateTableStatement(table=table, columns=columns, constraints=constraints))
        elif kind == "alter table":
            table = _table_of(node.get("table"))
            if table is None:
                continue
            constraints = []
            for change in node.get("changes") or []:
                if not isinstance(change, Mapping) or change.get("type") != "add constraint":
                    continue
                cons = change.get("constraint") or change
                if isinstance(cons, Mapping):
                    parsed = _constraint_from_node(cons)
                    if parsed is not None:
                        constraints.append(parsed)
            statements.append(AlterTableStatement(table=table, constraints=constraints))
    return statements
