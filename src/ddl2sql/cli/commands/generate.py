import pathlib
from typing import List, Optional

import typer
from rich.markup import escape

from ddl2sql.api.query_api import QueryAPI
from ddl2sql.api.schema_api import SchemaAPI
from ddl2sql.cli.console import console, print_error, print_warning
from ddl2sql.planning.models import Plan


def _print_join_path(plan: Plan) -> None:
    for hop, step in zip(plan.join_path, plan.steps):
        via = step.fk.constraint_name or f"{step.fk.from_table} -> {step.fk.to_table}"
        direction = " (reversed)" if step.is_reversed else ""
        console.print(f"[reference]{escape(hop)}[/reference] via {escape(via)}{direction}", soft_wrap=True)


def run_generate(
    ddl_file: pathlib.Path,
    base: str,
    selections: List[str],
    raw: bool = False,
    keyword_case: Optional[str] = None,
    show_path: bool = False,
) -> None:
    """Builds the graph for ``ddl_file`` and prints the generated SQL."""
    built = SchemaAPI().build(ddl_file.read_text(encoding="utf-8"))
    if not built.ok:
        for err in built.errors:
            print_error(f"{err.error_code.value}: {err.message}")
        raise typer.Exit(code=1)

    result = QueryAPI().generate(
        built.graph,
        base,
        selections,
        format=False if raw else None,
        keyword_case=keyword_case,
    )
    typer.echo(result.sql)
    if show_path and result.plan is not None:
        _print_join_path(result.plan)
    for warning in result.warnings:
        print_warning(warning)
