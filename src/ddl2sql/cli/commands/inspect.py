import pathlib

import typer
from rich.table import Table

from ddl2sql.api.schema_api import SchemaAPI
from ddl2sql.cli.console import console, print_error, print_success


def inspect_schema(ddl_file: pathlib.Path) -> None:
    """Displays the tables, keys and references parsed from a DDL file."""
    api = SchemaAPI()
    built = api.build(ddl_file.read_text(encoding="utf-8"))
    if not built.ok:
        for err in built.errors:
            print_error(f"{err.error_code.value}: {err.message}")
        raise typer.Exit(code=1)

    graph = built.graph
    table = Table(title=f"Schema {graph.fingerprint[:12]}")
    table.add_column("Table", style="table.name", no_wrap=True)
    table.add_column("Primary Key", style="key")
    table.add_column("Columns")
    table.add_column("References", style="reference")

    for summary in api.describe(graph):
        references = [f"{ref} (self)" if ref == summary.name else ref for ref in summary.references]
        table.add_row(
            summary.name,
            ", ".join(summary.primary_key) or "-",
            str(len(summary.columns)),
            ", ".join(references) or "-",
        )

    console.print(table)
    summary_line = f"{graph.stats.table_count} tables, {graph.stats.fk_count} foreign keys"
    self_refs = sum(1 for fk in graph.foreign_keys() if fk.is_self_reference)
    if self_refs:
        summary_line += f" ({self_refs} self-referencing)"
    print_success(summary_line)
