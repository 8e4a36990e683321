"""Dialect policy base class.

A ``Dialect`` bundles everything that differs between database types:

- the SQL lookup table (operation name -> statement, or a tuple of
  statements run in order),
- identifier quoting and temp-table naming,
- whether foreign-key enforcement can be switched off with a statement,
- the offset added to a column's maximum value to get a sequence restart
  point.

One concrete subclass exists per database type.  The engine picks one at
construction time; nothing is assembled per call.

Templates use two kinds of placeholders:

- ``{table}``, ``{temp_table}``, ``{column}`` are identifiers, rendered with
  the dialect's quoting.  ``{qualified_table}`` is ``{table}`` prefixed with
  the quoted schema name when one is set.  ``{index}`` renders as an integer
  literal, for DDL that cannot take bind parameters.
- ``:schema``, ``:table_name``, ``:column_name``, ``:sequence_name`` and
  ``:index`` are bind parameters passed to the driver.  ``:schema`` may be
  ``NULL`` for dialects without a default schema.

Usage:
    from db_snapshot.dialects.base import Dialect

    class DuckDBDialect(Dialect):
        name = "duckdb"
        QUERIES = {"getTables": "SELECT table_name AS name FROM ..."}
"""

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from db_snapshot.errors import CatalogQueryError

if TYPE_CHECKING:
    from db_snapshot.connection import Transaction

SQL = str | tuple[str, ...]

# `:name` bind parameters; `::type` casts are not binds
_BIND_PATTERN = re.compile(r"(?<![:\w\\]):(\w+)\b(?!:)")

# Binds that may render as NULL
_NULLABLE_BINDS = frozenset({"schema"})


class Dialect:
    """Per-database policy and SQL lookup table.

    Args:
        queries: Optional per-operation overrides merged over the class
            ``QUERIES`` table.
        schema_name: Schema bound to ``:schema`` in catalog queries.  Falls
            back to ``default_schema``.
        temp_table_suffix: Suffix appended to a table name to name its
            snapshot copy.
    """

    name: ClassVar[str] = ""
    index_offset: ClassVar[int] = 0
    supports_foreign_keys: ClassVar[bool] = False
    # Set when the FK toggle is session state that a rollback leaves in place
    foreign_keys_survive_rollback: ClassVar[bool] = False
    identifier_quote: ClassVar[str] = '"'
    default_schema: ClassVar[str | None] = None
    QUERIES: ClassVar[dict[str, SQL]] = {}

    def __init__(
        self,
        queries: Mapping[str, SQL] | None = None,
        schema_name: str | None = None,
        temp_table_suffix: str = "_snapshot",
    ) -> None:
        self._queries: dict[str, SQL] = {**self.QUERIES, **(queries or {})}
        self.schema_name = schema_name or self.default_schema
        self.temp_table_suffix = temp_table_suffix

    def __repr__(self) -> str:
        return f"{type(self).__name__}(schema_name={self.schema_name!r})"

    @property
    def operations(self) -> frozenset[str]:
        """Operation names this dialect can resolve."""
        return frozenset(self._queries)

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        """Quote an identifier, doubling any embedded quote characters."""
        q = self.identifier_quote
        return f"{q}{name.replace(q, q * 2)}{q}"

    def temp_table_name(self, table: str) -> str:
        """Name of the snapshot copy for ``table`` (unquoted)."""
        return f"{table}{self.temp_table_suffix}"

    def qualify(self, table: str) -> str:
        """Quoted ``table``, schema-qualified when a schema is set."""
        if self.schema_name:
            return f"{self.quote_identifier(self.schema_name)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table)

    # ------------------------------------------------------------------
    # Statement Rendering
    # ------------------------------------------------------------------

    def render(
        self, operation: str, params: Mapping[str, Any] | None = None
    ) -> list[tuple[str, dict[str, Any]]]:
        """Resolve an operation to executable statements.

        Args:
            operation: Operation name, e.g. ``"truncateTable"``.
            params: Values for ``table``, ``column``, ``sequence_name`` and
                ``index``.  Only the ones the template uses are required.

        Returns:
            List of ``(sql, bind_params)`` pairs, in execution order.

        Raises:
            CatalogQueryError: If the operation is unknown to this dialect or
                the template needs a parameter that was not supplied.
        """
        if operation not in self._queries:
            raise CatalogQueryError(
                operation, f"no statement registered for dialect '{self.name}'"
            )

        params = dict(params or {})
        table = params.get("table")
        column = params.get("column")

        identifiers: dict[str, Any] = {}
        if table is not None:
            identifiers["table"] = self.quote_identifier(table)
            identifiers["temp_table"] = self.quote_identifier(self.temp_table_name(table))
            identifiers["qualified_table"] = self.qualify(table)
        if column is not None:
            identifiers["column"] = self.quote_identifier(column)
        if params.get("index") is not None:
            identifiers["index"] = int(params["index"])

        binds: dict[str, Any] = {
            "schema": self.schema_name,
            "table_name": table,
            "column_name": column,
            "sequence_name": params.get("sequence_name"),
            "index": identifiers.get("index"),
        }

        template = self._queries[operation]
        statements = (template,) if isinstance(template, str) else template

        rendered: list[tuple[str, dict[str, Any]]] = []
        for statement in statements:
            try:
                sql = statement.format(**identifiers)
            except KeyError as e:
                raise CatalogQueryError(operation, f"missing parameter {e}") from e

            bind_names = _BIND_PATTERN.findall(sql)
            missing = [
                n for n in bind_names
                if binds.get(n) is None and n not in _NULLABLE_BINDS
            ]
            if missing:
                raise CatalogQueryError(
                    operation, f"missing parameter(s): {', '.join(missing)}"
                )
            rendered.append((sql, {n: binds[n] for n in bind_names}))

        return rendered

    # ------------------------------------------------------------------
    # Foreign Keys
    # ------------------------------------------------------------------

    async def disable_foreign_keys(self, tx: "Transaction") -> None:
        """Turn off foreign-key enforcement for the rest of ``tx``."""
        if self.supports_foreign_keys:
            await tx.exec_query("foreignKey.disable")

    async def enable_foreign_keys(self, tx: "Transaction") -> None:
        """Turn foreign-key enforcement back on."""
        if self.supports_foreign_keys:
            await tx.exec_query("foreignKey.enable")

    async def after_rollback(self, tx: "Transaction") -> None:
        """Undo session state a rolled-back transaction left behind.

        Runs in a fresh transaction, and only for dialects that set
        ``foreign_keys_survive_rollback``.
        """
        if self.supports_foreign_keys and self.foreign_keys_survive_rollback:
            await self.enable_foreign_keys(tx)
