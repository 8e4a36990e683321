"""Dialect registry.

Maps database type names to ``Dialect`` classes.  New dialects are added
with ``register_dialect`` without touching the built-in ones.

Usage:
    from db_snapshot.dialects import get_dialect

    dialect = get_dialect("postgres", schema_name="app")
    dialect.index_offset   # 1
"""

from collections.abc import Mapping

from db_snapshot.dialects.base import SQL, Dialect
from db_snapshot.dialects.mysql import MariaDBDialect, MySQLDialect
from db_snapshot.dialects.postgres import CockroachDialect, PostgresDialect
from db_snapshot.dialects.sqlite import SQLiteDialect
from db_snapshot.errors import UnsupportedDialectError

_DIALECTS: dict[str, type[Dialect]] = {
    "postgres": PostgresDialect,
    "cockroachdb": CockroachDialect,
    "mysql": MySQLDialect,
    "mariadb": MariaDBDialect,
    "sqlite": SQLiteDialect,
}


# SQLAlchemy backend names -> dialect names
_BACKENDS = {
    "postgresql": "postgres",
    "postgres": "postgres",
    "cockroachdb": "cockroachdb",
    "mysql": "mysql",
    "mariadb": "mariadb",
    "sqlite": "sqlite",
}


def infer_dialect(database_url: str) -> str:
    """Dialect name for a database URL, from its scheme.

    Example:
        >>> infer_dialect("postgresql+asyncpg://u:p@localhost/db")
        'postgres'

    Raises:
        UnsupportedDialectError: If the scheme maps to no known dialect.
    """
    backend = database_url.split("://", 1)[0].split("+", 1)[0].lower()
    return dialect_for_backend(backend)


def dialect_for_backend(backend: str) -> str:
    """Dialect name for a SQLAlchemy backend name (``engine.dialect.name``)."""
    if backend in _BACKENDS:
        return _BACKENDS[backend]
    if backend in _DIALECTS:
        return backend
    raise UnsupportedDialectError(
        f"Cannot infer dialect for backend '{backend}'. "
        f"Available: {', '.join(available_dialects())}"
    )


def register_dialect(name: str, dialect_cls: type[Dialect]) -> None:
    """Register (or replace) the dialect class used for ``name``."""
    _DIALECTS[name] = dialect_cls


def available_dialects() -> list[str]:
    """Names of all registered dialects, sorted."""
    return sorted(_DIALECTS)


def get_dialect(
    name: str,
    queries: Mapping[str, SQL] | None = None,
    schema_name: str | None = None,
    temp_table_suffix: str = "_snapshot",
) -> Dialect:
    """Instantiate the dialect registered for ``name``.

    Raises:
        UnsupportedDialectError: If no dialect is registered under ``name``.
    """
    try:
        dialect_cls = _DIALECTS[name]
    except KeyError:
        raise UnsupportedDialectError(
            f"Unsupported dialect '{name}'. "
            f"Available: {', '.join(available_dialects())}"
        ) from None
    return dialect_cls(
        queries=queries,
        schema_name=schema_name,
        temp_table_suffix=temp_table_suffix,
    )


__all__ = [
    "SQL",
    "Dialect",
    "PostgresDialect",
    "CockroachDialect",
    "MySQLDialect",
    "MariaDBDialect",
    "SQLiteDialect",
    "available_dialects",
    "dialect_for_backend",
    "get_dialect",
    "infer_dialect",
    "register_dialect",
]
