"""Configuration loading from environment variables and per-user directories."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import appdirs

APP_NAME = "cargo-hoist"
REGISTRY_FILENAME = "registry.toml"
HOOK_FILENAME = "hook"

HOME_ENV = "CARGO_HOIST_HOME"
TARGET_DIR_ENV = "CARGO_TARGET_DIR"


@dataclass(frozen=True)
class HoistConfig:
    """Top-level cargo hoist configuration."""

    home_dir: Path
    target_dir: Optional[Path] = None
    shell: str = ""

    @property
    def registry_path(self) -> Path:
        return self.home_dir / REGISTRY_FILENAME

    @property
    def hook_marker(self) -> Path:
        """Marker written once the shell hook has been installed."""
        return self.home_dir / HOOK_FILENAME


def default_home_dir() -> Path:
    return Path(appdirs.user_config_dir(APP_NAME))


def load_config(environ: Optional[Mapping[str, str]] = None) -> HoistConfig:
    """Load configuration.

    Priority: environment variables > defaults.
    """
    environ = os.environ if environ is None else environ

    home = environ.get(HOME_ENV)
    target_dir = environ.get(TARGET_DIR_ENV)

    return HoistConfig(
        home_dir=Path(home).expanduser() if home else default_home_dir(),
        target_dir=Path(target_dir).expanduser() if target_dir else None,
        shell=environ.get("SHELL", ""),
    )
