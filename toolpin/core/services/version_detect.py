"""
Version detection — which version of a tool is active right here.

Priority, first hit wins:

    1. explicit version passed by the caller (e.g. ``--version``)
    2. ``TOOLPIN_<ID>_VERSION`` environment variable
    3. the config hierarchy, searched per ``settings.detect_strategy``:

       first-available    per level: config entry, then ecosystem files
       only-prototools    config entries only, never probe
       prefer-prototools  all config entries first, then a second pass
                          probing every level

Nearer levels always outrank farther ones, and within one level a
config entry outranks an ecosystem file.  The search is sequential:
each level (including its probe) finishes before the next starts.

The result carries the file the version came from.  Nothing here
writes process state; ``publish_detected_from`` does that for callers
that want child processes to see it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from toolpin.core.config.loader import CONFIG_FILE_NAME, ConfigFile, ConfigManager
from toolpin.core.errors import VersionDetectFailed
from toolpin.core.models.config import DetectStrategy
from toolpin.core.models.version import UnresolvedVersionSpec

if TYPE_CHECKING:
    from toolpin.core.tool import Tool

logger = logging.getLogger(__name__)

DETECTED_FROM_ENV = "TOOLPIN_DETECTED_FROM"


class VersionSource(StrEnum):
    """Where a detected version came from."""

    OVERRIDE = "override"
    ENV_VAR = "env-var"
    CONFIG = "config"
    ECOSYSTEM = "ecosystem"


@dataclass(frozen=True)
class DetectedVersion:
    """A resolved version spec plus its provenance."""

    version: UnresolvedVersionSpec
    source: VersionSource
    path: Path | None = None      # originating file for config/ecosystem hits
    env_var: str | None = None    # variable name for env-var hits

    def to_dict(self) -> dict:
        return {
            "version": str(self.version),
            "kind": self.version.kind.value,
            "source": self.source.value,
            "path": str(self.path) if self.path else None,
            "env_var": self.env_var,
        }


# ── Hierarchy passes ────────────────────────────────────────────


def _from_config_file(tool: Tool, file: ConfigFile) -> DetectedVersion | None:
    version = file.config.get_version(tool.id)
    if version is None:
        return None

    logger.debug(
        "Detected %s version %s from %s file %s",
        tool.id, version, CONFIG_FILE_NAME, file.path,
    )
    return DetectedVersion(version=version, source=VersionSource.CONFIG, path=file.path)


async def _from_ecosystem(tool: Tool, directory: Path) -> DetectedVersion | None:
    detected = await tool.detect_version_from(directory)
    if detected is None:
        return None

    version, path = detected
    logger.debug(
        "Detected %s version %s from tool's ecosystem file %s",
        tool.id, version, path,
    )
    return DetectedVersion(version=version, source=VersionSource.ECOSYSTEM, path=path)


async def detect_version_first_available(
    tool: Tool,
    config_manager: ConfigManager,
) -> DetectedVersion | None:
    """Per level: config entry, then ecosystem probe, then move up."""
    for file in config_manager.files:
        detected = _from_config_file(tool, file)
        if detected is not None:
            return detected

        detected = await _from_ecosystem(tool, file.directory)
        if detected is not None:
            return detected

    return None


async def detect_version_only_prototools(
    tool: Tool,
    config_manager: ConfigManager,
) -> DetectedVersion | None:
    """Config entries only.  The probe is never called."""
    for file in config_manager.files:
        detected = _from_config_file(tool, file)
        if detected is not None:
            return detected

    return None


async def detect_version_prefer_prototools(
    tool: Tool,
    config_manager: ConfigManager,
) -> DetectedVersion | None:
    """Whole-hierarchy config pass, then whole-hierarchy probe pass."""
    detected = await detect_version_only_prototools(tool, config_manager)
    if detected is not None:
        return detected

    for file in config_manager.files:
        detected = await _from_ecosystem(tool, file.directory)
        if detected is not None:
            return detected

    return None


# ── Entry point ─────────────────────────────────────────────────


async def detect_version(
    tool: Tool,
    forced_version: UnresolvedVersionSpec | None = None,
) -> DetectedVersion:
    """Resolve the version of ``tool`` for its workspace.

    Args:
        tool: The tool to resolve.
        forced_version: An already-parsed explicit version; wins outright.

    Returns:
        The detected version and where it came from.

    Raises:
        VersionParseError: If the environment variable holds an invalid
            version.  This never falls through to the file search.
        VersionDetectFailed: If no source produced a version.
        ConfigError: If a config file in the hierarchy is invalid.
    """
    if forced_version is not None:
        logger.debug(
            "Using explicit %s version %s passed on the command line",
            tool.id, forced_version,
        )
        return DetectedVersion(version=forced_version, source=VersionSource.OVERRIDE)

    env_var = f"{tool.get_env_var_prefix()}_VERSION"
    session_version = os.environ.get(env_var, "")

    if session_version:
        logger.debug(
            "Detected %s version %s from environment variable %s",
            tool.id, session_version, env_var,
        )
        return DetectedVersion(
            version=UnresolvedVersionSpec.parse(session_version),
            source=VersionSource.ENV_VAR,
            env_var=env_var,
        )

    logger.debug("Attempting to find %s version from %s files", tool.id, CONFIG_FILE_NAME)

    config_manager = tool.workspace.load_config_manager()
    strategy = tool.workspace.load_config().settings.detect_strategy

    match strategy:
        case DetectStrategy.FIRST_AVAILABLE:
            detected = await detect_version_first_available(tool, config_manager)
        case DetectStrategy.PREFER_PROTOTOOLS:
            detected = await detect_version_prefer_prototools(tool, config_manager)
        case DetectStrategy.ONLY_PROTOTOOLS:
            detected = await detect_version_only_prototools(tool, config_manager)

    if detected is not None:
        return detected

    raise VersionDetectFailed(tool.name)


def publish_detected_from(detected: DetectedVersion) -> None:
    """Expose the originating file as ``TOOLPIN_DETECTED_FROM``.

    Last write wins; there is one slot per process.  Override and
    env-var hits have no file and leave the variable untouched.
    """
    if detected.path is not None:
        os.environ[DETECTED_FROM_ENV] = str(detected.path)
