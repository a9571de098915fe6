"""Identifier normalization and quoting.

Table keys throughout the package are *normalized*: schema qualifier dropped,
surrounding double quotes removed, lowercased. Emitted SQL re-quotes names
only where needed (tables) or always (columns).
"""
from __future__ import annotations

import re

__all__ = [
    "canonical",
    "normalize",
    "needs_quote",
    "quote_ident",
    "quote_column",
    "split_qualified",
]

_SIMPLE_IDENT = re.compile(r"^[a-z_][a-z0-9_]*$")
# One segment: a double-quoted run (with "" escapes) or a bare run without dots/quotes.
_SEGMENT = r'(?:"(?:[^"]|"")*"|[^".]+)'
_TWO_SEGMENTS = re.compile(rf"^({_SEGMENT})\.({_SEGMENT})$")


def unquote(name: str) -> str:
    """Strip one pair of surrounding double quotes and undo ``""`` escapes."""
    if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
        return name[1:-1].replace('""', '"')
    return name


def canonical(name: str) -> str:
    """Unquote and lowercase a name that is already split from its schema."""
    return unquote(name.strip()).lower()


def split_qualified(name: str) -> tuple[str | None, str]:
    """Split ``schema.table`` into ``(schema, table)`` respecting quoted segments.

    Names with a single segment, or with more than two, are returned whole as
    the table part.
    """
    m = _TWO_SEGMENTS.match(name.strip())
    if not m:
        return None, name.strip()
    return m.group(1), m.group(2)


def normalize(name: str) -> str:
    """Return the table key for a possibly schema-qualified, quoted name.

    >>> normalize('public."Customers"')
    'customers'
    >>> normalize('"Weird.Name"')
    'weird.name'
    """
    _, table = split_qualified(name)
    return canonical(table)


def needs_quote(name: str) -> bool:
    return not _SIMPLE_IDENT.match(name)


def _quote(part: str) -> str:
    return '"' + part.replace('"', '""') + '"'


def quote_ident(name: str) -> str:
    """Quote a table identifier for emission.

    Dotted names quote every segment; single names are quoted only when
    they are not simple lowercase identifiers.
    """
    parts = name.split(".")
    force = len(parts) > 1
    return ".".join(_quote(p) if force or needs_quote(p) else p for p in parts)


def quote_column(name: str) -> str:
    return _quote(name)
