"""Pydantic models for snapshot configuration."""

from pydantic import BaseModel, Field


class SnapshotProfile(BaseModel):
    """Database connection profile from db.toml."""

    url: str
    description: str = ""
    db_password: str | None = None  # For [YOUR-PASSWORD] placeholder substitution
    dialect: str | None = None  # Inferred from the URL scheme when omitted
    schema_name: str | None = None  # Dialect default when omitted


class SnapshotSettings(BaseModel):
    """Engine-wide settings from the ``[snapshot]`` table."""

    temp_table_suffix: str = Field(default="_snapshot", min_length=1)


class SnapshotConfig(BaseModel):
    """Complete configuration from db.toml."""

    profiles: dict[str, SnapshotProfile]
    settings: SnapshotSettings = Field(default_factory=SnapshotSettings)
