"""Table discovery: list every user table in the target schema."""

import logging

from db_snapshot.connection import Transaction

logger = logging.getLogger(__name__)


async def detect_tables(tx: Transaction, tables: set[str]) -> set[str]:
    """Add every catalog table name to ``tables``.

    Runs inside the caller's transaction so the listing is consistent with
    whatever follows.  Repeated calls add nothing new for names already
    known.

    Args:
        tx: Open transaction.
        tables: Table set to populate (mutated in place).

    Returns:
        The same ``tables`` set, for convenience.

    Raises:
        CatalogQueryError: If the catalog cannot be read.
    """
    rows = await tx.exec_query("getTables")
    for row in rows:
        tables.add(row["name"])

    logger.debug("Detected %d table(s)", len(tables))
    return tables
