"""Shared fakes for component tests.

``FakeTransaction`` stands in for ``db_snapshot.connection.Transaction``:
it records every ``exec_query`` call, answers from canned responses, and
can be told to fail for a given operation and table.

``FakeConnection`` stands in for ``SnapshotConnection``, counts commits
and rollbacks, and runs the dialect's after-rollback hook the way the real
connection does.
"""

import asyncio
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any

import pytest

from db_snapshot.connection import SnapshotConnection
from db_snapshot.dialects import get_dialect
from db_snapshot.errors import CatalogQueryError

Response = list[dict] | Callable[[dict], list[dict]]


class FakeTransaction:
    """Records operations and replays canned rows."""

    def __init__(self, dialect_name: str = "postgres") -> None:
        self.dialect = get_dialect(dialect_name)
        self.calls: list[tuple[str, dict]] = []
        self.responses: dict[str, Response] = {}
        self.failures: set[tuple[str, str | None]] = set()

    def respond(self, operation: str, rows: Response) -> None:
        self.responses[operation] = rows

    def fail(self, operation: str, table: str | None = None) -> None:
        self.failures.add((operation, table))

    async def exec_query(self, operation: str, params: dict | None = None) -> list[dict]:
        params = dict(params or {})
        # Yield so concurrently dispatched work actually interleaves
        await asyncio.sleep(0)
        self.calls.append((operation, params))

        if (operation, params.get("table")) in self.failures or (operation, None) in self.failures:
            raise CatalogQueryError(operation, "simulated failure")

        response = self.responses.get(operation, [])
        return response(params) if callable(response) else list(response)

    def operations(self, name: str | None = None) -> list[tuple[str, dict]]:
        return [c for c in self.calls if name is None or c[0] == name]

    def tables_for(self, operation: str) -> list[str]:
        return [p.get("table") for op, p in self.calls if op == operation]


class FakeConnection(SnapshotConnection):
    """SnapshotConnection whose transactions hand out one FakeTransaction."""

    def __init__(self, tx: FakeTransaction) -> None:
        self._dialect = tx.dialect
        self.tx = tx
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    @asynccontextmanager
    async def transaction(self):
        try:
            yield self.tx
        except BaseException as e:
            self.rollbacks += 1
            if isinstance(e, Exception) and self._dialect.foreign_keys_survive_rollback:
                await self._dialect.after_rollback(self.tx)
            raise
        else:
            self.commits += 1

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_tx() -> FakeTransaction:
    return FakeTransaction()


def users_orders_tx(dialect_name: str = "postgres") -> FakeTransaction:
    """Two tables, ``orders.user_id`` -> ``users.id``, serial ids."""
    tx = FakeTransaction(dialect_name)
    tx.respond("getTables", [{"name": "orders"}, {"name": "users"}])
    tx.respond(
        "dependencyTree",
        [{"table_name": "users", "level": 0}, {"table_name": "orders", "level": 1}],
    )

    def _columns(params: dict[str, Any]) -> list[dict]:
        return [
            {
                "column_name": "id",
                "column_default": f"nextval('{params['table']}_id_seq'::regclass)",
            }
        ]

    maxima = {"users": 42, "orders": 7}
    tx.respond("getColumnsWithAutoIncrement", _columns)
    tx.respond("getMaxColumnIndex", lambda p: [{"maxindex": maxima[p["table"]]}])
    return tx
