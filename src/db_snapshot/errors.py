"""Exception types raised by db-snapshot.

All errors propagate to the caller unchanged; the enclosing transaction is
rolled back before they leave ``init()`` or ``restore_data()``.
"""


class DatabaseSnapshotError(Exception):
    """Base class for all db-snapshot errors."""

    pass


class UnsupportedDialectError(DatabaseSnapshotError):
    """Raised when no dialect is registered for a database type."""

    pass


class CatalogQueryError(DatabaseSnapshotError):
    """Raised when a dialect statement cannot be resolved or fails to execute."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class SnapshotError(DatabaseSnapshotError):
    """Raised when the temporary copy of a table cannot be created."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(f"Snapshot of '{table}' failed: {message}")
        self.table = table


class RestoreError(DatabaseSnapshotError):
    """Raised when a table cannot be truncated or repopulated."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(f"Restore of '{table}' failed: {message}")
        self.table = table
