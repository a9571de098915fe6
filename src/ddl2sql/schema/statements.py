"""Closed set of DDL statement variants consumed by the graph builder.

Whatever front end produced the DDL structure (the sqlglot-based adapter or
a loosely shaped parser tree), it is reduced to these models first.
"""
from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TableName(BaseModel):
    """A possibly schema-qualified table reference, quotes already removed."""

    schema_name: Optional[str] = None
    name: str

    model_config = ConfigDict(frozen=True)

    @property
    def qualified(self) -> str:
        if self.schema_name:
            return f"{self.schema_name}.{self.name}"
        return self.name


class PrimaryKeyConstraint(BaseModel):
    kind: Literal["primary key"] = "primary key"
    columns: List[str] = Field(default_factory=list)
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ForeignKeyConstraint(BaseModel):
    kind: Literal["foreign key"] = "foreign key"
    columns: List[str] = Field(default_factory=list)
    references: Optional[TableName] = None
    ref_columns: List[str] = Field(default_factory=list)
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True)


Constraint = Union[PrimaryKeyConstraint, ForeignKeyConstraint]


class CreateTableStatement(BaseModel):
    kind: Literal["create table"] = "create table"
    table: TableName
    columns: List[str] = Field(default_factory=list)
    constraints: List[Constraint] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class AlterTableStatement(BaseModel):
    kind: Literal["alter table"] = "alter table"
    table: TableName
    constraints: List[Constraint] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


Statement = Union[CreateTableStatement, AlterTableStatement]
