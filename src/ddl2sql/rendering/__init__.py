from .emitter import emit_sql
from .formatter import format_sql

__all__ = ["emit_sql", "format_sql"]
