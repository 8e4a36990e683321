"""Dependency resolution: the order in which tables are restored."""

import logging
from collections.abc import Iterable

from db_snapshot.connection import Transaction
from db_snapshot.models import DependencyPlan, DependencyTreeEntry

logger = logging.getLogger(__name__)


async def get_sorted_dependency_tables(
    tx: Transaction, tables: Iterable[str]
) -> DependencyPlan:
    """Build a restore plan from the database's foreign-key metadata.

    When the dependency query returns nothing, the database cannot report
    dependencies: every known table is returned with ``sorted=False`` and may
    be processed concurrently.  Otherwise the distinct table names are
    returned in query order (parents first) with ``sorted=True``.

    Known tables the query does not list, such as tables on a foreign-key
    cycle, are appended at the end so they are still restored.

    Args:
        tx: Open transaction.
        tables: The known table set.

    Returns:
        ``DependencyPlan`` with the tables and the ``sorted`` flag.
    """
    known = list(tables)
    rows = await tx.exec_query("dependencyTree")
    if not rows:
        return DependencyPlan(tables=known, sorted=False)

    entries = [DependencyTreeEntry.model_validate(row) for row in rows]
    ordered = list(dict.fromkeys(entry.table_name for entry in entries))

    listed = set(ordered)
    unlisted = sorted(t for t in known if t not in listed)
    if unlisted:
        logger.warning(
            "Tables missing from dependency tree, restored last: %s",
            ", ".join(unlisted),
        )
        ordered.extend(unlisted)

    return DependencyPlan(tables=ordered, sorted=True)
