"""Snapshot creation: one temp-table copy per table."""

import logging
from collections.abc import Iterable

from db_snapshot.connection import Transaction, run_concurrently
from db_snapshot.errors import CatalogQueryError, SnapshotError

logger = logging.getLogger(__name__)


async def create_temp_table(tx: Transaction, table: str) -> None:
    """Copy the current rows of ``table`` into its snapshot table.

    An existing snapshot for the table is replaced.

    Raises:
        SnapshotError: If the copy cannot be created.
    """
    try:
        await tx.exec_query("createTempTable", {"table": table})
    except CatalogQueryError as e:
        raise SnapshotError(table, str(e)) from e
    logger.debug("Snapshot created for %s", table)


async def create_temp_tables(tx: Transaction, tables: Iterable[str]) -> None:
    """Snapshot every table concurrently; any failure fails them all."""
    await run_concurrently(create_temp_table(tx, table) for table in tables)
