from __future__ import annotations

import hashlib
import json
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ddl2sql.schema.idents import normalize


class ForeignKey(BaseModel):
    """A foreign key edge; ``from_cols[i]`` references ``to_cols[i]``."""

    from_table: str
    from_cols: List[str] = Field(default_factory=list)
    to_table: str
    to_cols: List[str] = Field(default_factory=list)
    constraint_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def sort_key(self) -> Tuple[str, str, str, str, str]:
        return (
            self.from_table,
            self.to_table,
            ",".join(self.from_cols),
            ",".join(self.to_cols),
            self.constraint_name or "",
        )

    @property
    def is_self_reference(self) -> bool:
        return self.from_table == self.to_table


class Table(BaseModel):
    """A table in the schema graph, keyed by its normalized name."""

    name: str
    qualified_name: Optional[str] = None
    columns: List[str] = Field(default_factory=list)
    primary_key: List[str] = Field(default_factory=list)
    fks: List[ForeignKey] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def referenced_tables(self) -> List[str]:
        return sorted({fk.to_table for fk in self.fks})


class SchemaStats(BaseModel):
    table_count: int = 0
    fk_count: int = 0

    model_config = ConfigDict(frozen=True)


class SchemaGraph(BaseModel):
    """Immutable snapshot of the tables, columns and keys declared by a DDL script."""

    tables: Dict[str, Table] = Field(default_factory=dict)
    stats: SchemaStats = Field(default_factory=SchemaStats)

    model_config = ConfigDict(frozen=True)

    def get_table(self, name: str) -> Optional[Table]:
        """Look a table up by any spelling that normalizes to its key."""
        return self.tables.get(normalize(name))

    def foreign_keys(self) -> List[ForeignKey]:
        return [fk for key in sorted(self.tables) for fk in self.tables[key].fks]

    @property
    def fingerprint(self) -> str:
        """Stable sha256 over the graph structure.

        Two graphs built from equivalent DDL share a fingerprint regardless
        of statement order or constraint placement.
        """
        payload = {
            key: {
                "columns": table.columns,
                "pk": table.primary_key,
                "fks": [list(fk.sort_key) for fk in table.fks],
            }
            for key, table in sorted(self.tables.items())
        }
        raw = json.dumps(payload, sort_keys=True)
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()
