"""Configuration management: profiles, TOML loading, and config models.

Usage:
    >>> from db_snapshot.config import load_snapshot_config, SnapshotProfile, SnapshotConfig
"""

from db_snapshot.config.loader import load_snapshot_config
from db_snapshot.config.models import SnapshotConfig, SnapshotProfile, SnapshotSettings

__all__ = ["load_snapshot_config", "SnapshotConfig", "SnapshotProfile", "SnapshotSettings"]
