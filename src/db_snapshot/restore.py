"""Restore orchestration.

``RestoreManager`` is built once per ``restore_data()`` call, inside its
transaction.  It exposes the three steps of a restore:

- ``disable_foreign_keys()`` / ``enable_foreign_keys()``, delegated to the
  dialect (no-ops where the dialect cannot toggle enforcement);
- ``restore_order()``, which truncates, repopulates and resets sequences for
  every table, sequentially when the plan is sorted and concurrently when it
  is not.
"""

import logging
from collections.abc import Mapping, Sequence

from db_snapshot.connection import Transaction, run_concurrently
from db_snapshot.errors import CatalogQueryError, RestoreError
from db_snapshot.models import AutoIncrementColumn, DependencyPlan

logger = logging.getLogger(__name__)


class RestoreManager:
    """Restore steps bound to one transaction and one plan.

    Args:
        tx: Open transaction.
        plan: Tables to restore and whether their order matters.
        auto_increment: Tracked sequence restarts, keyed by table name.
    """

    def __init__(
        self,
        tx: Transaction,
        plan: DependencyPlan,
        auto_increment: Mapping[str, Sequence[AutoIncrementColumn]],
    ) -> None:
        self._tx = tx
        self._plan = plan
        self._auto_increment = auto_increment

    @property
    def plan(self) -> DependencyPlan:
        return self._plan

    async def disable_foreign_keys(self) -> None:
        await self._tx.dialect.disable_foreign_keys(self._tx)

    async def enable_foreign_keys(self) -> None:
        await self._tx.dialect.enable_foreign_keys(self._tx)

    async def restore_order(self) -> None:
        """Restore every planned table.

        A sorted plan runs one table's full cycle before starting the next.
        An unsorted plan dispatches all tables at once.
        """
        if self._plan.sorted:
            for table in self._plan.tables:
                await self.recreate_data(table)
            return

        await run_concurrently(self.recreate_data(table) for table in self._plan.tables)

    async def recreate_data(self, table: str) -> None:
        """Truncate ``table``, refill it from its snapshot, reset sequences.

        Raises:
            RestoreError: If any of the three steps fails.
        """
        try:
            await self._tx.exec_query("truncateTable", {"table": table})
            await self._tx.exec_query("restoreData", {"table": table})
            await self.reset_auto_increment_columns(table)
        except CatalogQueryError as e:
            raise RestoreError(table, str(e)) from e
        logger.debug("Restored %s", table)

    async def reset_auto_increment_columns(self, table: str) -> None:
        for entry in self._auto_increment.get(table, ()):
            await self._tx.exec_query(
                "resetAutoIncrementColumn",
                {
                    "table": table,
                    "column": entry.column,
                    "sequence_name": entry.sequence_name,
                    "index": entry.restart_index,
                },
            )
