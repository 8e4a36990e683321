"""PostgreSQL and CockroachDB dialects.

Snapshots live in the session's ``pg_temp`` schema.  Live tables are always
schema-qualified, since ``pg_temp`` comes first on the search path and a
temp copy would otherwise shadow a live table of the same name.  Foreign-key triggers
are suspended with ``session_replication_role``, which requires a role
allowed to set it (superuser or ``rds_superuser`` style grants).
"""

from db_snapshot.dialects.base import SQL, Dialect

# Tables at level 0 reference nothing; each FK hop adds one level.  A table
# reached through several paths keeps its deepest level.
_DEPENDENCY_TREE = """
    WITH RECURSIVE fk AS (
        SELECT child.relname AS child, parent.relname AS parent
        FROM pg_constraint c
        JOIN pg_class child ON child.oid = c.conrelid
        JOIN pg_class parent ON parent.oid = c.confrelid
        JOIN pg_namespace n ON n.oid = child.relnamespace
        WHERE c.contype = 'f'
          AND n.nspname = :schema
          AND c.conrelid <> c.confrelid
    ),
    tree AS (
        SELECT t.table_name::text AS table_name, 0 AS level
        FROM information_schema.tables t
        WHERE t.table_schema = :schema
          AND t.table_type = 'BASE TABLE'
          AND NOT EXISTS (SELECT 1 FROM fk WHERE fk.child = t.table_name)
        UNION ALL
        SELECT fk.child::text, tree.level + 1
        FROM fk
        JOIN tree ON fk.parent = tree.table_name
        WHERE tree.level < 64
    )
    SELECT table_name, MAX(level) AS level
    FROM tree
    GROUP BY table_name
    ORDER BY level, table_name
"""

POSTGRES_QUERIES: dict[str, SQL] = {
    "getTables": """
        SELECT table_name AS name
        FROM information_schema.tables
        WHERE table_schema = :schema
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
    """,
    "dependencyTree": _DEPENDENCY_TREE,
    "createTempTable": (
        "DROP TABLE IF EXISTS pg_temp.{temp_table}",
        "CREATE TEMPORARY TABLE {temp_table} AS SELECT * FROM {qualified_table}",
    ),
    # Identity columns have no default; report their backing sequence in the
    # same quoted form a serial default carries.
    "getColumnsWithAutoIncrement": """
        SELECT
            column_name,
            COALESCE(
                column_default,
                '''' || pg_get_serial_sequence(
                    quote_ident(table_schema) || '.' || quote_ident(table_name),
                    column_name
                ) || ''''
            ) AS column_default
        FROM information_schema.columns
        WHERE table_schema = :schema
          AND table_name = :table_name
          AND (column_default LIKE 'nextval(%' OR is_identity = 'YES')
        ORDER BY ordinal_position
    """,
    "getMaxColumnIndex": "SELECT MAX({column}) AS maxindex FROM {qualified_table}",
    "truncateTable": "DELETE FROM {qualified_table}",
    # GENERATED ALWAYS identity columns reject explicit values otherwise
    "restoreData": (
        "INSERT INTO {qualified_table} OVERRIDING SYSTEM VALUE "
        "SELECT * FROM pg_temp.{temp_table}"
    ),
    # restart_index already includes the +1 offset, so the next nextval()
    # returns exactly restart_index.
    "resetAutoIncrementColumn": (
        "SELECT setval(CAST(CAST(:sequence_name AS text) AS regclass), :index, false)"
    ),
    "foreignKey.disable": "SET LOCAL session_replication_role = 'replica'",
    "foreignKey.enable": "SET LOCAL session_replication_role = 'origin'",
}


class PostgresDialect(Dialect):
    """PostgreSQL: FK triggers can be suspended, sequences restart at max + 1."""

    name = "postgres"
    index_offset = 1
    supports_foreign_keys = True
    default_schema = "public"
    QUERIES = POSTGRES_QUERIES


class CockroachDialect(Dialect):
    """CockroachDB: no replication-role switch, ``setval`` marks max as used."""

    name = "cockroachdb"
    index_offset = 0
    supports_foreign_keys = False
    default_schema = "public"
    QUERIES = {
        **POSTGRES_QUERIES,
        "restoreData": "INSERT INTO {qualified_table} SELECT * FROM pg_temp.{temp_table}",
        # An empty table records max 0; sequences cannot be set below 1, so
        # restart at 1 unused instead.
        "resetAutoIncrementColumn": """
            SELECT setval(
                CAST(:sequence_name AS STRING),
                CASE WHEN CAST(:index AS INT) > 0 THEN CAST(:index AS INT) ELSE 1 END,
                CAST(:index AS INT) > 0
            )
        """,
    }
