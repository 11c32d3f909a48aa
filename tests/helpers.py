"""
Test helpers — config writers and ecosystem probe stubs.
"""

from pathlib import Path

from toolpin.core.models.version import UnresolvedVersionSpec
from toolpin.core.services.ecosystem import EcosystemProbe


def write_config(directory: Path, content: str) -> Path:
    """Write a .prototools.yml into ``directory``."""
    path = directory / ".prototools.yml"
    path.write_text(content)
    return path


class StubProbe(EcosystemProbe):
    """Probe answering from a ``{directory: version}`` map; records calls."""

    def __init__(self, hits: dict[Path, str] | None = None) -> None:
        self.hits = hits or {}
        self.calls: list[Path] = []

    async def detect_version_from(self, directory: Path):
        self.calls.append(directory)
        version = self.hits.get(directory)
        if version is None:
            return None
        return UnresolvedVersionSpec.parse(version), directory / ".nvmrc"


class ForbiddenProbe(EcosystemProbe):
    """Probe that must never be asked."""

    async def detect_version_from(self, directory: Path):
        raise AssertionError(f"ecosystem probe called for {directory}")
