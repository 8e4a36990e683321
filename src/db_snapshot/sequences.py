"""Auto-increment tracking.

For every table, find the columns whose default draws from a sequence (or
generator), and record where that sequence should restart after a restore:
the column's current maximum plus the dialect's offset.

The restart points are computed once, at ``init()`` time.  Restores always
return sequences to that baseline, never to the state left by a test.
"""

import logging
import re
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any

from db_snapshot.connection import Transaction
from db_snapshot.models import AutoIncrementColumn, ColumnStat, ColumnWithAutoIncrement

logger = logging.getLogger(__name__)

_QUOTED_IDENTIFIER = re.compile(r"'([^']+)'")


def get_sequence_name(column_default: str | None) -> str | None:
    """Extract the sequence name quoted inside a column default.

    Returns ``None`` when the default carries no single-quoted identifier,
    meaning the column is not sequence-backed.

    Example:
        >>> get_sequence_name("nextval('users_id_seq'::regclass)")
        'users_id_seq'
    """
    if not column_default:
        return None
    match = _QUOTED_IDENTIFIER.search(column_default)
    return match.group(1) if match else None


def parse_max_index(value: Any) -> int:
    """Convert a ``MAX()`` result to an int; absent or non-numeric is 0."""
    if value is None:
        return 0
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return 0
    if not number.is_finite():
        return 0
    return int(number)


async def get_columns_with_auto_increment(
    tx: Transaction, table: str
) -> list[ColumnWithAutoIncrement]:
    rows = await tx.exec_query("getColumnsWithAutoIncrement", {"table": table})
    return [ColumnWithAutoIncrement.model_validate(row) for row in rows]


async def get_max_column_index(tx: Transaction, table: str, column: str) -> ColumnStat | None:
    rows = await tx.exec_query("getMaxColumnIndex", {"table": table, "column": column})
    return ColumnStat.model_validate(rows[0]) if rows else None


async def detect_tables_with_auto_increment(
    tx: Transaction, tables: Iterable[str]
) -> dict[str, list[AutoIncrementColumn]]:
    """Record sequence restart points for every auto-increment column.

    Tables and columns are processed one at a time.  Columns whose default
    has no quoted sequence name are skipped.

    Args:
        tx: Open transaction.
        tables: Tables to inspect.

    Returns:
        Mapping of table name to its tracked columns.  Tables without any
        sequence-backed column are absent.
    """
    offset = tx.dialect.index_offset
    tracked: dict[str, list[AutoIncrementColumn]] = {}

    for table in tables:
        for column in await get_columns_with_auto_increment(tx, table):
            sequence_name = get_sequence_name(column.column_default)
            if not sequence_name:
                logger.debug(
                    "Skipping %s.%s: no sequence in default %r",
                    table, column.column_name, column.column_default,
                )
                continue

            stat = await get_max_column_index(tx, table, column.column_name)
            max_index = parse_max_index(stat.maxindex if stat else None)

            tracked.setdefault(table, []).append(
                AutoIncrementColumn(
                    table_name=table,
                    column=column.column_name,
                    sequence_name=sequence_name,
                    restart_index=max_index + offset,
                )
            )

    return tracked
