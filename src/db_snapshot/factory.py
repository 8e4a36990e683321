"""Snapshot engine factory.

Supports two configuration modes:
1. Direct URL: ``create_snapshot(database_url=...)``
2. Profile mode: a ``[profiles.<name>]`` table in db.toml, selected by name
   or by the ``DB_SNAPSHOT_PROFILE`` environment variable
"""

import logging
import os
from pathlib import Path
from urllib.parse import quote

from db_snapshot.config.loader import load_snapshot_config
from db_snapshot.config.models import SnapshotProfile
from db_snapshot.core import DatabaseSnapshot
from db_snapshot.dialects import get_dialect, infer_dialect

logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "DB_SNAPSHOT_PROFILE"


class ProfileNotFoundError(Exception):
    """Raised when no database profile is configured."""

    pass


def get_active_profile_name() -> str:
    """Get active profile name from the environment.

    Returns:
        Profile name

    Raises:
        ProfileNotFoundError: If ``DB_SNAPSHOT_PROFILE`` is not set
    """
    env_profile = os.environ.get(PROFILE_ENV_VAR)
    if env_profile:
        return env_profile

    raise ProfileNotFoundError(
        "No database profile configured.\n"
        f"Set {PROFILE_ENV_VAR}=<name> or pass database_url directly."
    )


def resolve_url(profile: SnapshotProfile) -> str:
    """Resolve profile URL with password substitution.

    Args:
        profile: Database profile from config

    Returns:
        Connection URL with password substituted
    """
    url = profile.url
    if profile.db_password and "[YOUR-PASSWORD]" in url:
        url = url.replace("[YOUR-PASSWORD]", quote(profile.db_password, safe=""))
    return url


def create_snapshot(
    profile_name: str | None = None,
    database_url: str | None = None,
    dialect: str | None = None,
    config_path: Path | None = None,
) -> DatabaseSnapshot:
    """Build a ``DatabaseSnapshot`` from a URL or a db.toml profile.

    When ``database_url`` is given, profiles are not consulted.  Otherwise
    the profile named ``profile_name`` (or ``DB_SNAPSHOT_PROFILE``) is
    loaded from ``config_path``.

    Args:
        profile_name: Profile in db.toml.
        database_url: Direct connection URL, bypassing profiles.
        dialect: Dialect name; inferred from the URL when omitted.
        config_path: Path to db.toml (default: ``./db.toml``).

    Returns:
        A ``DatabaseSnapshot`` that has not yet connected.

    Raises:
        ProfileNotFoundError: If no URL is given and no profile is configured
            or the named profile does not exist.
        UnsupportedDialectError: If the dialect cannot be resolved.

    Example:
        >>> snapshot = create_snapshot("local")
        >>> await snapshot.init()
    """
    if database_url is not None:
        dialect_name = dialect or infer_dialect(database_url)
        return DatabaseSnapshot(database_url, dialect=get_dialect(dialect_name))

    if profile_name is None:
        profile_name = get_active_profile_name()

    config = load_snapshot_config(config_path)
    if profile_name not in config.profiles:
        available = ", ".join(config.profiles.keys())
        raise ProfileNotFoundError(
            f"Profile '{profile_name}' not found. Available: {available}"
        )

    profile = config.profiles[profile_name]
    url = resolve_url(profile)
    dialect_name = dialect or profile.dialect or infer_dialect(url)
    logger.debug("Using profile %s (%s)", profile_name, dialect_name)

    return DatabaseSnapshot(
        url,
        dialect=get_dialect(
            dialect_name,
            schema_name=profile.schema_name,
            temp_table_suffix=config.settings.temp_table_suffix,
        ),
    )
