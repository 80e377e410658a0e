"""
app_home.py - Application Config Directory

Resolves where persisted state (rules, inputs, settings) lives
"""

from dataclasses import dataclass
from pathlib import Path
import os

from platformdirs import user_config_path

APP_NAME = "imgrename"
CONFIG_DIR_ENV = "IMGRENAME_CONFIG_DIR"


def default_config_dir() -> Path:
    """Platform config directory for the application"""
    return user_config_path(APP_NAME, appauthor=False)


@dataclass(frozen=True)
class AppHome:
    """Directory holding persisted application state"""
    path: Path

    @classmethod
    def resolve(cls) -> "AppHome":
        """$IMGRENAME_CONFIG_DIR when set, otherwise the platform config dir"""
        override = os.environ.get(CONFIG_DIR_ENV)
        if override:
            return cls(Path(override).expanduser())
        return cls(default_config_dir())

    def file_path(self, name: str) -> Path:
        return self.path / name

    def ensure_dir(self) -> Path:
        self.path.mkdir(parents=True, exist_ok=True)
        return self.path
