"""MySQL and MariaDB dialects.

Tables are emptied with ``DELETE`` rather than ``TRUNCATE`` because MySQL
commits implicitly around ``TRUNCATE``.  ``ALTER TABLE ... AUTO_INCREMENT``
still commits implicitly, so on these servers the sequence reset is the one
step a rollback cannot undo.

``FOREIGN_KEY_CHECKS`` is a session variable that a rollback leaves alone,
so the dialect switches it back on after a failed transaction.  Catalog
queries read ``schema_name`` when one is set and ``DATABASE()`` otherwise.
"""

from db_snapshot.dialects.base import SQL, Dialect

MYSQL_QUERIES: dict[str, SQL] = {
    "getTables": """
        SELECT table_name AS name
        FROM information_schema.tables
        WHERE table_schema = COALESCE(:schema, DATABASE())
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
    """,
    "dependencyTree": """
        WITH RECURSIVE fk AS (
            SELECT DISTINCT table_name AS child, referenced_table_name AS parent
            FROM information_schema.referential_constraints
            WHERE constraint_schema = COALESCE(:schema, DATABASE())
              AND table_name <> referenced_table_name
        ),
        tree AS (
            SELECT CAST(t.table_name AS CHAR(64)) AS table_name, 0 AS level
            FROM information_schema.tables t
            WHERE t.table_schema = COALESCE(:schema, DATABASE())
              AND t.table_type = 'BASE TABLE'
              AND NOT EXISTS (SELECT 1 FROM fk WHERE fk.child = t.table_name)
            UNION ALL
            SELECT fk.child, tree.level + 1
            FROM fk
            JOIN tree ON fk.parent = tree.table_name
            WHERE tree.level < 64
        )
        SELECT table_name, MAX(level) AS level
        FROM tree
        GROUP BY table_name
        ORDER BY level, table_name
    """,
    "createTempTable": (
        "DROP TEMPORARY TABLE IF EXISTS {temp_table}",
        "CREATE TEMPORARY TABLE {temp_table} AS SELECT * FROM {qualified_table}",
    ),
    # AUTO_INCREMENT belongs to the table, so the "sequence" is the table
    # name itself, quoted the way a sequence default would be.
    "getColumnsWithAutoIncrement": """
        SELECT
            column_name AS column_name,
            CONCAT('''', table_name, '''') AS column_default
        FROM information_schema.columns
        WHERE table_schema = COALESCE(:schema, DATABASE())
          AND table_name = :table_name
          AND extra LIKE '%auto_increment%'
        ORDER BY ordinal_position
    """,
    "getMaxColumnIndex": "SELECT MAX({column}) AS maxindex FROM {qualified_table}",
    "truncateTable": "DELETE FROM {qualified_table}",
    "restoreData": "INSERT INTO {qualified_table} SELECT * FROM {temp_table}",
    # InnoDB raises a value at or below the current maximum to max + 1.
    "resetAutoIncrementColumn": "ALTER TABLE {qualified_table} AUTO_INCREMENT = {index}",
    "foreignKey.disable": "SET FOREIGN_KEY_CHECKS = 0",
    "foreignKey.enable": "SET FOREIGN_KEY_CHECKS = 1",
}


class MySQLDialect(Dialect):
    """MySQL: FK checks toggled per session, backtick-quoted identifiers."""

    name = "mysql"
    index_offset = 0
    supports_foreign_keys = True
    foreign_keys_survive_rollback = True
    identifier_quote = "`"
    QUERIES = MYSQL_QUERIES


class MariaDBDialect(MySQLDialect):
    """MariaDB shares MySQL's catalog and statements."""

    name = "mariadb"
