"""Deterministic shortest join-path planning over a schema graph.

Every foreign key is walkable in both directions. A breadth-first search from
the base table with a fixed neighbor order yields one shortest path per
selected table; the union of those paths becomes the ordered list of LEFT
JOIN steps.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ddl2sql.common.logger import get_logger
from ddl2sql.planning.models import JoinStep, Plan, Selection
from ddl2sql.planning.selection import expand_selections, split_selection_id
from ddl2sql.schema.idents import canonical, normalize
from ddl2sql.schema.models import ForeignKey, SchemaGraph

logger = get_logger("planner")

__all__ = ["plan_joins", "unreachable_warning", "ambiguous_warning"]


def unreachable_warning(base: str, target: str) -> str:
    return f"No FK path from {base} to {target}; omitting its columns."


def ambiguous_warning(base: str, target: str) -> str:
    return f"Multiple equal-cost join paths from {base} to {target}; choosing one deterministically."


@dataclass(frozen=True)
class _Edge:
    """A directed traversal of a foreign key with its oriented column pairing."""

    src: str
    dst: str
    src_cols: Tuple[str, ...]
    dst_cols: Tuple[str, ...]
    fk: ForeignKey

    @property
    def identity(self) -> tuple:
        return (self.src, self.dst, self.src_cols, self.dst_cols, self.fk.constraint_name or "")

    @property
    def order_key(self) -> tuple:
        return (self.dst, self.src, ",".join(self.src_cols), ",".join(self.dst_cols), self.fk.constraint_name or "")

    def to_step(self) -> JoinStep:
        return JoinStep(
            from_table=self.src,
            to_table=self.dst,
            fk=self.fk,
            from_cols=list(self.src_cols),
            to_cols=list(self.dst_cols),
        )


def _adjacency(graph: SchemaGraph) -> Dict[str, List[_Edge]]:
    adj: Dict[str, List[_Edge]] = {name: [] for name in graph.tables}
    for fk in graph.foreign_keys():
        forward = _Edge(fk.from_table, fk.to_table, tuple(fk.from_cols), tuple(fk.to_cols), fk)
        reverse = _Edge(fk.to_table, fk.from_table, tuple(fk.to_cols), tuple(fk.from_cols), fk)
        adj.setdefault(fk.from_table, []).append(forward)
        adj.setdefault(fk.to_table, []).append(reverse)
    for edges in adj.values():
        edges.sort(key=lambda e: e.order_key)
    return adj


def _bfs(adj: Dict[str, List[_Edge]], base: str):
    depth: Dict[str, int] = {base: 0}
    parent: Dict[str, _Edge] = {}
    ambiguous: Set[str] = set()
    queue = deque([base])
    while queue:
        cur = queue.popleft()
        next_depth = depth[cur] + 1
        for edge in adj.get(cur, []):
            nbr = edge.dst
            if nbr not in depth:
                depth[nbr] = next_depth
                parent[nbr] = edge
                queue.append(nbr)
            elif depth[nbr] == next_depth and parent.get(nbr) is not edge:
                ambiguous.add(nbr)
    return depth, parent, ambiguous


def _path_to(parent: Dict[str, _Edge], base: str, target: str) -> List[_Edge]:
    path: List[_Edge] = []
    node = target
    while node != base:
        edge = parent[node]
        path.append(edge)
        node = edge.src
    path.reverse()
    return path


def _order_edges(edges: Sequence[_Edge], base: str) -> List[_Edge]:
    ordered: List[_Edge] = []
    visited = {base}
    pending = list(edges)
    while pending:
        for i, edge in enumerate(pending):
            if edge.src in visited or edge.dst in visited:
                ordered.append(edge)
                visited.update((edge.src, edge.dst))
                del pending[i]
                break
        else:
            logger.warning("Dropping %d join edges disconnected from %s", len(pending), base)
            break
    return ordered


def _assign_aliases(ordered: Sequence[_Edge], base: str) -> Dict[str, str]:
    neighbors: Dict[str, Set[str]] = {}
    for edge in ordered:
        neighbors.setdefault(edge.src, set()).add(edge.dst)
        neighbors.setdefault(edge.dst, set()).add(edge.src)

    aliases = {base: "t0"}
    queue = deque([base])
    while queue:
        cur = queue.popleft()
        for nbr in sorted(neighbors.get(cur, ())):
            if nbr not in aliases:
                aliases[nbr] = f"t{len(aliases)}"
                queue.append(nbr)
    return aliases


def _select_list(selections: Iterable[str], base: str, ordered: Sequence[_Edge], aliases: Dict[str, str]) -> List[Selection]:
    grouped = expand_selections(selections)
    table_order = [base]
    for edge in ordered:
        for table in (edge.src, edge.dst):
            if table not in table_order:
                table_order.append(table)
    out: List[Selection] = []
    for table in table_order:
        if table in aliases:
            out.extend(grouped.get(table, []))
    return out


def plan_joins(graph: Optional[SchemaGraph], base: Optional[str], selections: Sequence[str]) -> Optional[Plan]:
    """Compute the join plan for ``selections`` rooted at ``base``.

    Args:
        graph (Optional[SchemaGraph]): The current schema graph.
        base (Optional[str]): Table the query selects FROM.
        selections (Sequence[str]): ``table.column`` / ``table.*`` identifiers.

    Returns:
        Optional[Plan]: ``None`` when the graph, base or selections are missing.
    """
    if graph is None or not base or not selections:
        return None

    base = normalize(base)
    normalized: List[str] = []
    for sel in selections:
        table, column = split_selection_id(sel)
        if table:
            normalized.append(f"{canonical(table)}.{column}")

    targets: List[str] = []
    for sel in normalized:
        table = split_selection_id(sel)[0]
        if table != base and table not in targets:
            targets.append(table)

    adj = _adjacency(graph)
    depth, parent, ambiguous = _bfs(adj, base)

    union: Dict[tuple, _Edge] = {}
    for target in targets:
        if target not in depth:
            continue
        for edge in _path_to(parent, base, target):
            union.setdefault(edge.identity, edge)

    ordered = _order_edges(list(union.values()), base)
    aliases = _assign_aliases(ordered, base)

    unreachable = [t for t in targets if t not in depth]
    ambiguous_targets = [t for t in targets if t in ambiguous]
    warnings = [unreachable_warning(base, t) for t in unreachable]
    warnings.extend(ambiguous_warning(base, t) for t in ambiguous_targets)
    if warnings:
        logger.info(
            "Planned from %s with %d unreachable and %d ambiguous targets",
            base, len(unreachable), len(ambiguous_targets),
        )

    return Plan(
        base=base,
        steps=[edge.to_step() for edge in ordered],
        table_alias=aliases,
        select=_select_list(normalized, base, ordered, aliases),
        warnings=warnings,
        unreachable=unreachable,
        ambiguous=ambiguous_targets,
    )
