"""db-snapshot: snapshot a database before a test run, restore it between tests.

Copies every table into a session-scoped temp table, records where each
auto-increment sequence stands, and on demand puts every table back in
foreign-key order with the sequences restarted.

Usage:
    from db_snapshot import DatabaseSnapshot, create_snapshot
    from db_snapshot import get_dialect, register_dialect
    from db_snapshot import CatalogQueryError, SnapshotError, RestoreError
"""

__version__ = "0.1.0"

# Engine
from db_snapshot.core import DatabaseSnapshot
from db_snapshot.connection import SnapshotConnection, Transaction

# Dialects
from db_snapshot.dialects import Dialect, get_dialect, infer_dialect, register_dialect

# Config
from db_snapshot.config.loader import load_snapshot_config
from db_snapshot.config.models import SnapshotConfig, SnapshotProfile

# Factory
from db_snapshot.factory import ProfileNotFoundError, create_snapshot, resolve_url

# Errors
from db_snapshot.errors import (
    CatalogQueryError,
    DatabaseSnapshotError,
    RestoreError,
    SnapshotError,
    UnsupportedDialectError,
)

# Models
from db_snapshot.models import AutoIncrementColumn, DependencyPlan

__all__ = [
    # Engine
    "DatabaseSnapshot",
    "SnapshotConnection",
    "Transaction",
    # Dialects
    "Dialect",
    "get_dialect",
    "infer_dialect",
    "register_dialect",
    # Config
    "load_snapshot_config",
    "SnapshotConfig",
    "SnapshotProfile",
    # Factory
    "create_snapshot",
    "resolve_url",
    "ProfileNotFoundError",
    # Errors
    "DatabaseSnapshotError",
    "CatalogQueryError",
    "SnapshotError",
    "RestoreError",
    "UnsupportedDialectError",
    # Models
    "AutoIncrementColumn",
    "DependencyPlan",
]
