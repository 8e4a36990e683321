"""SQLite dialect.

``PRAGMA foreign_keys`` is a no-op inside a transaction, so foreign keys
cannot be switched off during a restore.  The dependency query therefore
reports nothing and every table is restored unordered.  Only columns
declared ``AUTOINCREMENT`` keep a counter (in ``sqlite_sequence``) worth
resetting.
"""

from db_snapshot.dialects.base import SQL, Dialect

SQLITE_QUERIES: dict[str, SQL] = {
    "getTables": """
        SELECT name
        FROM sqlite_master
        WHERE type = 'table'
          AND name NOT LIKE 'sqlite_%'
        ORDER BY name
    """,
    "dependencyTree": "SELECT name AS table_name, 0 AS level FROM sqlite_master WHERE 0",
    "createTempTable": (
        "DROP TABLE IF EXISTS temp.{temp_table}",
        "CREATE TEMP TABLE {temp_table} AS SELECT * FROM main.{table}",
    ),
    "getColumnsWithAutoIncrement": """
        SELECT p.name AS column_name, '''' || m.name || '''' AS column_default
        FROM sqlite_master AS m, pragma_table_info(m.name) AS p
        WHERE m.type = 'table'
          AND m.name = :table_name
          AND p.pk = 1
          AND upper(m.sql) LIKE '%AUTOINCREMENT%'
    """,
    "getMaxColumnIndex": "SELECT MAX({column}) AS maxindex FROM main.{table}",
    "truncateTable": "DELETE FROM main.{table}",
    "restoreData": "INSERT INTO main.{table} SELECT * FROM temp.{temp_table}",
    "resetAutoIncrementColumn": (
        "UPDATE sqlite_sequence SET seq = :index WHERE name = :sequence_name"
    ),
}


class SQLiteDialect(Dialect):
    """SQLite: no FK toggle, ``sqlite_sequence`` stores the last used value."""

    name = "sqlite"
    index_offset = 0
    supports_foreign_keys = False
    QUERIES = SQLITE_QUERIES
