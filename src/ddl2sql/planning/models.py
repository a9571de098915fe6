from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ddl2sql.schema.models import ForeignKey

WILDCARD = "*"


class Selection(BaseModel):
    """One entry of the SELECT list: a column of a table, or the wildcard."""

    table: str
    column: str

    model_config = ConfigDict(frozen=True)

    @property
    def is_wildcard(self) -> bool:
        return self.column == WILDCARD

    @property
    def id(self) -> str:
        return f"{self.table}.{self.column}"


class JoinStep(BaseModel):
    """One emitted LEFT JOIN.

    ``fk`` is the declaring constraint as stored in the graph; ``from_cols``
    and ``to_cols`` carry its column pairing oriented for this step, so that
    ``from_cols[i]`` lives on ``from_table`` and ``to_cols[i]`` on ``to_table``.
    """

    from_table: str
    to_table: str
    fk: ForeignKey
    from_cols: List[str] = Field(default_factory=list)
    to_cols: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_reversed(self) -> bool:
        return self.from_table != self.fk.from_table or self.to_table != self.fk.to_table

    @property
    def column_pairs(self) -> List[tuple[str, str]]:
        return list(zip(self.from_cols, self.to_cols))


class Plan(BaseModel):
    """Resolved join structure handed to the SQL emitter."""

    base: str
    steps: List[JoinStep] = Field(default_factory=list)
    table_alias: Dict[str, str] = Field(default_factory=dict)
    select: List[Selection] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    unreachable: List[str] = Field(default_factory=list)
    ambiguous: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def alias(self, table: str) -> str:
        return self.table_alias[table]

    @property
    def join_path(self) -> List[str]:
        return [f"{s.from_table}->{s.to_table}" for s in self.steps]
