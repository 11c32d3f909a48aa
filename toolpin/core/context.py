"""
Workspace context — "where are we, and what does the config say here."

The working directory is set ONCE at startup by the entry point:

    - CLI:    main.py   → context.set_working_dir(path)
    - Tests:  fixtures  → Workspace(working_dir=tmp_path)

A ``Workspace`` is what a ``Tool`` holds to reach its configuration.
Config is loaded lazily and cached for the lifetime of the workspace
object; build a new workspace to see file-system changes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from toolpin.core.config.loader import ConfigManager
from toolpin.core.models.config import ToolpinConfig

logger = logging.getLogger(__name__)

HOME_ENV = "TOOLPIN_HOME"

_working_dir: Optional[Path] = None


def set_working_dir(path: Path) -> None:
    """Register the working directory for the current process."""
    global _working_dir
    _working_dir = path


def get_working_dir() -> Optional[Path]:
    """Return the registered working directory, or None if not yet set."""
    return _working_dir


def toolpin_home() -> Path:
    """Home directory for toolpin state: ``$TOOLPIN_HOME`` or ``~/.toolpin``."""
    env_home = os.environ.get(HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / ".toolpin"


class Workspace:
    """A working directory plus lazily loaded configuration."""

    def __init__(
        self,
        working_dir: Path | None = None,
        end_dir: Path | None = None,
        home_dir: Path | None = None,
    ) -> None:
        self.working_dir = (working_dir or get_working_dir() or Path.cwd()).resolve()
        self.end_dir = end_dir
        self.home_dir = home_dir if home_dir is not None else toolpin_home()
        self._config_manager: ConfigManager | None = None
        self._config: ToolpinConfig | None = None

    def load_config_manager(self) -> ConfigManager:
        if self._config_manager is None:
            self._config_manager = ConfigManager.load(
                self.working_dir,
                end_dir=self.end_dir,
                home_dir=self.home_dir,
            )
        return self._config_manager

    def load_config(self) -> ToolpinConfig:
        """The merged config for this workspace, env overrides applied."""
        if self._config is None:
            self._config = self.load_config_manager().merged()
        return self._config

    def __repr__(self) -> str:
        return f"Workspace(working_dir={self.working_dir!s})"
