"""
Configuration loader — reads the ``.prototools.yml`` hierarchy.

Starting at the working directory, every directory up to the end
directory (or the filesystem root) contributes one ``ConfigFile``,
nearest first.  A directory without a config file still gets an
entry holding an empty config: ecosystem probing runs per directory,
not per file.  The user-global file in the toolpin home directory is
appended last.

Order is priority.  Nothing downstream re-sorts these entries.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from toolpin.core.errors import ToolpinError
from toolpin.core.models.config import DetectStrategy, ToolConfig, ToolpinConfig

logger = logging.getLogger(__name__)

# Config filename looked up in every directory
CONFIG_FILE_NAME = ".prototools.yml"

# Overrides settings.detect_strategy from any file
DETECT_STRATEGY_ENV = "TOOLPIN_DETECT_STRATEGY"


class ConfigError(ToolpinError):
    """Raised when a config file cannot be read or is invalid."""


def load_config_file(path: Path) -> ToolpinConfig:
    """Load and validate one config file.

    A missing file is not an error; it loads as an empty config.

    Raises:
        ConfigError: If the file exists but is unreadable or invalid.
    """
    if not path.is_file():
        return ToolpinConfig()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ToolpinConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return ToolpinConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def walk_config_paths(start_dir: Path, end_dir: Path | None = None) -> list[Path]:
    """Candidate config paths from ``start_dir`` upward, nearest first.

    Stops after ``end_dir`` when it is an ancestor of ``start_dir``,
    otherwise at the filesystem root.
    """
    current = start_dir.resolve()
    stop = end_dir.resolve() if end_dir else None
    paths: list[Path] = []

    while True:
        paths.append(current / CONFIG_FILE_NAME)
        if current == stop:
            break
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return paths


@dataclass
class ConfigFile:
    """One level of the hierarchy: where it lives and what it says."""

    path: Path
    config: ToolpinConfig
    exists: bool = False
    global_: bool = False

    @property
    def directory(self) -> Path:
        return self.path.parent


@dataclass
class ConfigManager:
    """The ordered hierarchy for one resolution."""

    files: list[ConfigFile] = field(default_factory=list)

    @classmethod
    def load(
        cls,
        start_dir: Path,
        end_dir: Path | None = None,
        home_dir: Path | None = None,
    ) -> ConfigManager:
        """Build the hierarchy for ``start_dir``.

        Raises:
            ConfigError: If any existing file in the hierarchy is invalid.
        """
        files: list[ConfigFile] = []

        for path in walk_config_paths(start_dir, end_dir):
            exists = path.is_file()
            files.append(ConfigFile(path=path, config=load_config_file(path), exists=exists))

        if home_dir is not None:
            global_path = home_dir.resolve() / CONFIG_FILE_NAME
            if global_path.is_file() and all(f.path != global_path for f in files):
                files.append(ConfigFile(
                    path=global_path,
                    config=load_config_file(global_path),
                    exists=True,
                    global_=True,
                ))

        logger.debug(
            "Loaded config hierarchy: %d levels, %d files",
            len(files), sum(1 for f in files if f.exists),
        )
        return cls(files=files)

    def merged(self) -> ToolpinConfig:
        """Flatten the hierarchy into one config.  Nearer files win.

        Only settings a file actually writes override farther files,
        so an empty ``settings:`` block does not reset the strategy.
        """
        merged = ToolpinConfig()

        for file in reversed(self.files):
            cfg = file.config
            merged.versions.update(cfg.versions)

            for name in cfg.settings.model_fields_set:
                setattr(merged.settings, name, getattr(cfg.settings, name))

            for tool_id, tool_cfg in cfg.tools.items():
                base = merged.tools.get(tool_id, ToolConfig())
                overrides = {name: getattr(tool_cfg, name) for name in tool_cfg.model_fields_set}
                merged.tools[tool_id] = base.model_copy(update=overrides)

        return apply_env_overrides(merged)


def apply_env_overrides(config: ToolpinConfig) -> ToolpinConfig:
    """Apply ``TOOLPIN_*`` environment overrides to a merged config.

    Raises:
        ConfigError: If an override holds an unknown value.
    """
    strategy = os.environ.get(DETECT_STRATEGY_ENV, "").strip()
    if strategy:
        try:
            config.settings.detect_strategy = DetectStrategy(strategy)
        except ValueError as e:
            allowed = ", ".join(s.value for s in DetectStrategy)
            raise ConfigError(
                f"Invalid {DETECT_STRATEGY_ENV}={strategy!r}; expected one of: {allowed}"
            ) from e
    return config
