from .builder import GraphBuilder, build_graph_from_ddl, build_schema_graph
from .idents import normalize, quote_ident
from .models import ForeignKey, SchemaGraph, SchemaStats, Table

__all__ = [
    "GraphBuilder",
    "build_graph_from_ddl",
    "build_schema_graph",
    "normalize",
    "quote_ident",
    "ForeignKey",
    "SchemaGraph",
    "SchemaStats",
    "Table",
]
