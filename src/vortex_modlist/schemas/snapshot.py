"""Typed view of a Vortex full-state backup.

Only the slices the mod-list pipeline reads are modelled; everything else in
the backup is ignored. Attribute bags are loosely typed in Vortex, so scalar
fields are coerced to trimmed text and blanks or non-scalars become ``None``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vortex_modlist.matching.normalization import blank_to_none


def _as_text(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return blank_to_none(value)
    return None


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ModAttributes(_SnapshotModel):
    logical_file_name: str | None = Field(default=None, alias="logicalFileName")
    mod_name: str | None = Field(default=None, alias="modName")
    file_name: str | None = Field(default=None, alias="fileName")
    version: str | None = None
    mod_version: str | None = Field(default=None, alias="modVersion")
    homepage: str | None = None
    mod_id: str | None = Field(default=None, alias="modId")
    source: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)


class ModEntry(_SnapshotModel):
    type: str | None = None
    archive_id: str | None = Field(default=None, alias="archiveId")
    attributes: ModAttributes = Field(default_factory=ModAttributes)

    @field_validator("type", "archive_id", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_attributes(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class ModState(_SnapshotModel):
    enabled: bool = False

    @field_validator("enabled", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return value is True


class Profile(_SnapshotModel):
    mod_state: dict[str, ModState | None] = Field(default_factory=dict, alias="modState")

    @field_validator("mod_state", mode="before")
    @classmethod
    def _null_mod_state(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class Download(_SnapshotModel):
    local_path: str | None = Field(default=None, alias="localPath")
    size: int | None = None
    file_time: float | None = Field(default=None, alias="fileTime")


class DownloadsState(_SnapshotModel):
    files: dict[str, Download | None] = Field(default_factory=dict)


class PersistentState(_SnapshotModel):
    mods: dict[str, dict[str, ModEntry | None] | None] | None = None
    profiles: dict[str, Profile | None] = Field(default_factory=dict)
    downloads: DownloadsState = Field(default_factory=DownloadsState)


class ProfileSettings(_SnapshotModel):
    last_active_profile: dict[str, str | None] = Field(
        default_factory=dict, alias="lastActiveProfile"
    )


class SettingsState(_SnapshotModel):
    profiles: ProfileSettings = Field(default_factory=ProfileSettings)


class Snapshot(_SnapshotModel):
    persistent: PersistentState = Field(default_factory=PersistentState)
    settings: SettingsState = Field(default_factory=SettingsState)

    def active_profile(self, game: str) -> Profile | None:
        """Profile Vortex last activated for ``game``, if it is still present."""
        profile_id = self.settings.profiles.last_active_profile.get(game)
        if not profile_id:
            return None
        return self.persistent.profiles.get(profile_id)
