"""Pydantic models for catalog rows and snapshot bookkeeping.

Catalog query results arrive as plain dicts; the components validate them
into these models before using them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Catalog Rows
# ============================================================================


class DependencyTreeEntry(BaseModel):
    """A table and its topological depth (0 = references no other table)."""

    table_name: str
    level: int = 0


class ColumnWithAutoIncrement(BaseModel):
    """A column whose default draws from a sequence or generator."""

    column_name: str
    column_default: str | None = None


class ColumnStat(BaseModel):
    """Largest value currently stored in a column."""

    maxindex: Any = None


# ============================================================================
# Snapshot State
# ============================================================================


class DependencyPlan(BaseModel):
    """Restore plan produced by the dependency resolver.

    ``sorted=True`` means ``tables`` must be processed one after another in
    list order.  ``sorted=False`` means no dependency metadata was available
    and the tables may be processed concurrently.
    """

    tables: list[str] = Field(default_factory=list)
    sorted: bool = False


class AutoIncrementColumn(BaseModel):
    """Sequence restart recorded for one column at ``init()`` time."""

    model_config = ConfigDict(frozen=True)

    table_name: str
    column: str
    sequence_name: str
    restart_index: int
