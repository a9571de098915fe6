"""Selection identifiers (``table.column`` / ``table.*``) and the toggle reducer."""
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ddl2sql.planning.models import WILDCARD, Selection

__all__ = [
    "selection_id",
    "split_selection_id",
    "toggle_selection",
    "expand_selections",
]


def selection_id(table: str, column: str = WILDCARD) -> str:
    return f"{table}.{column}"


def split_selection_id(selection: str) -> Tuple[str, str]:
    """Split an identifier at its first dot; the column part may be empty."""
    table, _, column = selection.partition(".")
    return table, column


def toggle_selection(current: Iterable[str], toggled: str) -> List[str]:
    """Return the selection set after toggling ``toggled``.

    A present id is removed. A new ``table.*`` replaces every other id of that
    table; a new column id drops the table's wildcard. The result is
    deduplicated and sorted.
    """
    prev = list(current)
    if toggled in prev:
        nxt = [s for s in prev if s != toggled]
    else:
        table, column = split_selection_id(toggled)
        if column == WILDCARD:
            nxt = [s for s in prev if split_selection_id(s)[0] != table]
        else:
            nxt = [s for s in prev if s != selection_id(table, WILDCARD)]
        nxt.append(toggled)
    return sorted(set(nxt))


def expand_selections(selections: Iterable[str]) -> Dict[str, List[Selection]]:
    """Group identifiers by table into Selection lists.

    A wildcard suppresses the table's individual columns; otherwise columns
    are sorted. Tables keep first-seen order.
    """
    by_table: Dict[str, Tuple[bool, set]] = {}
    for sel in selections:
        table, column = split_selection_id(sel)
        if not table:
            continue
        star, cols = by_table.setdefault(table, (False, set()))
        if column == WILDCARD:
            by_table[table] = (True, cols)
        elif column:
            cols.add(column)

    out: Dict[str, List[Selection]] = {}
    for table, (star, cols) in by_table.items():
        if star:
            out[table] = [Selection(table=table, column=WILDCARD)]
        else:
            out[table] = [Selection(table=table, column=c) for c in sorted(cols)]
    return out
