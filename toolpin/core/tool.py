"""
Tool — one developer tool as seen by the resolution engine.

A tool is an id, a workspace to read config from, and an ecosystem
probe.  Everything about *installing* the tool lives elsewhere.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from toolpin.core.context import Workspace
from toolpin.core.models.config import ToolConfig
from toolpin.core.models.version import UnresolvedVersionSpec
from toolpin.core.services.ecosystem import EcosystemProbe, NullProbe, VersionFileProbe

_ENV_UNSAFE_RE = re.compile(r"[^A-Z0-9]")


@dataclass
class Tool:
    """A tool identity bound to a workspace for one resolution."""

    id: str
    workspace: Workspace
    probe: EcosystemProbe = field(default_factory=NullProbe)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id

    @classmethod
    def load(cls, tool_id: str, workspace: Workspace) -> Tool:
        """Build a tool from the workspace config.

        ``tools.<id>.version_files`` turns on version-file probing.
        """
        tool_cfg = workspace.load_config().tools.get(tool_id, ToolConfig())
        probe: EcosystemProbe = (
            VersionFileProbe(tool_cfg.version_files) if tool_cfg.version_files else NullProbe()
        )
        return cls(id=tool_id, workspace=workspace, probe=probe)

    def get_env_var_prefix(self) -> str:
        """``TOOLPIN_<ID>`` — e.g. ``TOOLPIN_GO_TASK`` for ``go-task``."""
        return f"TOOLPIN_{_ENV_UNSAFE_RE.sub('_', self.id.upper())}"

    def get_config(self) -> ToolConfig:
        return self.workspace.load_config().tools.get(self.id, ToolConfig())

    async def detect_version_from(
        self, directory: Path,
    ) -> tuple[UnresolvedVersionSpec, Path] | None:
        return await self.probe.detect_version_from(directory)
