import os
import sys
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_snapshot_dir() -> Path:
    """Vortex writes its full-state backups under its application data root."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "Vortex" / "temp" / "state_backups_full"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VML_",
        extra="ignore",
    )

    snapshot_dir: Path = Path("")
    snapshot_glob: str = "*.json"
    output_dir: Path = Path(".")
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _resolve_snapshot_dir(self) -> "Settings":
        if self.snapshot_dir == Path(""):
            self.snapshot_dir = _default_snapshot_dir()
        return self


settings = Settings()
