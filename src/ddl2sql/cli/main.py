#!/usr/bin/env python3
"""Command line interface for DDL2SQL."""
import pathlib
from enum import Enum
from typing import List, Optional

import typer
from typing_extensions import Annotated

from ddl2sql.common.settings import settings
from ddl2sql.cli.commands.generate import run_generate
from ddl2sql.cli.commands.inspect import inspect_schema

app = typer.Typer(
    name="ddl2sql",
    help="Generate SELECT ... LEFT JOIN queries from DDL.",
    no_args_is_help=True,
    add_completion=False,
)


class KeywordCase(str, Enum):
    upper = "upper"
    lower = "lower"
    capitalize = "capitalize"


DDLFileArgument = Annotated[
    pathlib.Path,
    typer.Argument(help="File with CREATE TABLE / ALTER TABLE statements", exists=True, dir_okay=False, readable=True),
]


@app.callback()
def global_callback(
    ctx: typer.Context,
    env: Annotated[Optional[str], typer.Option("--env", "-e", help="Environment name; loads .env.<name> over the defaults.")] = None,
):
    """
    DDL2SQL CLI Entry Point.
    """
    if env:
        settings.configure_env(env)


@app.command()
def generate(
    ddl_file: DDLFileArgument,
    base: Annotated[str, typer.Option("--base", "-b", help="Table to select FROM")],
    select: Annotated[List[str], typer.Option("--select", "-s", help="table.column or table.* (repeatable)")],
    raw: Annotated[bool, typer.Option("--raw", help="Print the emitted SQL without formatting")] = False,
    keyword_case: Annotated[Optional[KeywordCase], typer.Option("--keyword-case", help="Keyword casing applied by the formatter")] = None,
    show_path: Annotated[bool, typer.Option("--show-path", help="Print the join path after the SQL")] = False,
):
    """
    Print the SQL joining the selected columns to the base table.
    """
    run_generate(
        ddl_file,
        base,
        select,
        raw=raw,
        keyword_case=keyword_case.value if keyword_case else None,
        show_path=show_path,
    )


@app.command()
def inspect(ddl_file: DDLFileArgument):
    """
    Show the tables and foreign keys parsed from a DDL file.
    """
    inspect_schema(ddl_file)


if __name__ == "__main__":
    app()
