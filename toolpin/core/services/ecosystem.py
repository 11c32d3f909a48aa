"""
Ecosystem probes — find a version in a tool's own project files.

A probe answers one question for one directory: "does this directory
pin a version of the tool outside of .prototools.yml?"  The engine
decides *when* to ask; probes never walk the hierarchy themselves.

Per-tool heuristics (parsing package.json engines, rust-toolchain.toml,
...) belong to tool plugins.  The only probe shipped here is data
driven: it reads whichever pinned-version files the config lists.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from toolpin.core.errors import VersionFileError
from toolpin.core.models.version import UnresolvedVersionSpec

logger = logging.getLogger(__name__)


class EcosystemProbe(ABC):
    """Detects a version from tool-specific files in one directory."""

    @abstractmethod
    async def detect_version_from(
        self, directory: Path,
    ) -> tuple[UnresolvedVersionSpec, Path] | None:
        """Return ``(version, file it came from)``, or None.

        May raise; errors propagate to the resolution caller.
        """


class NullProbe(EcosystemProbe):
    """A tool with no ecosystem files."""

    async def detect_version_from(
        self, directory: Path,
    ) -> tuple[UnresolvedVersionSpec, Path] | None:
        return None


class VersionFileProbe(EcosystemProbe):
    """Reads pinned-version files such as ``.nvmrc`` or ``.python-version``.

    Files are tried in the given order; the first one holding a
    non-comment line wins.

    Raises:
        VersionParseError: (from ``detect_version_from``) if the file
            holds something that is not a version.
        VersionFileError: if the file is not valid UTF-8.
    """

    def __init__(self, file_names: list[str]) -> None:
        self.file_names = list(file_names)

    async def detect_version_from(
        self, directory: Path,
    ) -> tuple[UnresolvedVersionSpec, Path] | None:
        for name in self.file_names:
            path = directory / name
            if not path.is_file():
                continue

            try:
                content = await asyncio.to_thread(path.read_text, encoding="utf-8")
            except UnicodeDecodeError as e:
                raise VersionFileError(path, e) from e

            line = _first_version_line(content)
            if line is None:
                logger.debug("Version file %s is empty, skipping", path)
                continue

            return UnresolvedVersionSpec.parse(line), path

        return None

    def __repr__(self) -> str:
        return f"VersionFileProbe({self.file_names!r})"


def _first_version_line(content: str) -> str | None:
    for raw in content.splitlines():
        line = raw.strip()
        if line and not line.startswith("#"):
            return line
    return None
