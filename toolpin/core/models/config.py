"""
Config model — the contents of one ``.prototools.yml`` file.

Example::

    versions:
      node: "20.11.0"
      deno: "^1.40"

    settings:
      detect_strategy: prefer-prototools

    tools:
      node:
        version_files: [".nvmrc", ".node-version"]
        download_file: "node-v{version}-{os}-{arch}.tar.gz"
        checksum_file: "SHASUMS256.txt"
        checksum_url: "https://nodejs.org/dist/v{version}/{checksum_file}"
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from toolpin.core.errors import VersionParseError
from toolpin.core.models.version import UnresolvedVersionSpec


class DetectStrategy(StrEnum):
    """How the hierarchy is searched once override and env var came up empty."""

    FIRST_AVAILABLE = "first-available"
    PREFER_PROTOTOOLS = "prefer-prototools"
    ONLY_PROTOTOOLS = "only-prototools"


class ToolpinSettings(BaseModel):
    """The ``settings:`` block."""

    detect_strategy: DetectStrategy = DetectStrategy.FIRST_AVAILABLE


class ToolConfig(BaseModel):
    """Per-tool knobs under ``tools.<id>``.

    None of these encode tool heuristics; they are data the user (or a
    plugin author) supplies.
    """

    version_files: list[str] = Field(default_factory=list)
    download_file: str = ""
    download_url: str = ""
    checksum_file: str = ""
    checksum_url: str = ""


class ToolpinConfig(BaseModel):
    """One parsed config file.  Missing files load as ``ToolpinConfig()``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    versions: dict[str, UnresolvedVersionSpec] = Field(default_factory=dict)
    settings: ToolpinSettings = Field(default_factory=ToolpinSettings)
    tools: dict[str, ToolConfig] = Field(default_factory=dict)

    @field_validator("versions", mode="before")
    @classmethod
    def _parse_versions(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        parsed: dict[str, Any] = {}
        for tool_id, spec in value.items():
            if isinstance(spec, UnresolvedVersionSpec):
                parsed[str(tool_id)] = spec
                continue
            # YAML turns 3.10 into 3.1, yes into True and a blank into None
            if isinstance(spec, bool) or not isinstance(spec, (str, int)):
                raise ValueError(
                    f"Version for '{tool_id}' must be a string, got {spec!r}; "
                    f"quote it, e.g. {tool_id}: \"3.10\""
                )
            try:
                parsed[str(tool_id)] = UnresolvedVersionSpec.parse(str(spec))
            except VersionParseError as e:
                raise ValueError(str(e)) from e
        return parsed

    def get_version(self, tool_id: str) -> UnresolvedVersionSpec | None:
        """Look up the pinned version for a tool."""
        return self.versions.get(tool_id)
