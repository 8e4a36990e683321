"""Load snapshot configuration from a TOML file."""

import tomllib
from pathlib import Path

from db_snapshot.config.models import SnapshotConfig, SnapshotProfile, SnapshotSettings


def load_snapshot_config(config_path: Path | None = None) -> SnapshotConfig:
    """Load snapshot configuration from TOML file.

    Args:
        config_path: Path to db.toml (default: ``db.toml`` in the current
            working directory)

    Returns:
        SnapshotConfig with all profiles

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If a profile or setting is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / "db.toml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"Database config not found: {config_path}\n"
            f"Create db.toml with a [profiles.<name>] table."
        )

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse profiles
    profiles = {}
    for name, profile_data in data.get("profiles", {}).items():
        profiles[name] = SnapshotProfile(**profile_data)

    return SnapshotConfig(
        profiles=profiles,
        settings=SnapshotSettings(**data.get("snapshot", {})),
    )
