"""
Download artifacts — file names and URLs for one tool release.

Templates may use these tokens:

    {version}         the version being installed
    {os}              ``linux``, ``darwin``, ``windows``
    {arch}            normalized machine name (``amd64``, ``arm64``, ...)
    {download_file}   the interpolated download file name
    {checksum_file}   the interpolated manifest name (checksum URL only)

``{checksum_file}`` is substituted before any other token, so a
manifest name that itself contains ``{version}`` still ends up fully
interpolated.
"""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass
from pathlib import Path

from toolpin.core.models.config import ToolConfig
from toolpin.core.services.checksum import Verifiable

logger = logging.getLogger(__name__)

# Maps platform.machine() → name used in release asset file names
_ARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "AMD64": "amd64",      # Windows / WSL2
    "aarch64": "arm64",
    "arm64": "arm64",      # macOS (Darwin reports arm64)
    "armv7l": "armhf",
    "i686": "i386",
    "i386": "i386",
}


def host_arch() -> str:
    machine = platform.machine()
    return _ARCH_MAP.get(machine, machine.lower())


def host_os() -> str:
    return platform.system().lower()


@dataclass
class DownloadArtifact(Verifiable):
    """One downloadable release of a tool and its checksum manifest."""

    tool_id: str
    version: str
    temp_dir: Path
    download_file: str
    checksum_file: str = ""
    download_url: str = ""
    checksum_url_template: str = ""
    os_name: str = ""
    arch: str = ""

    def __post_init__(self) -> None:
        self.temp_dir = Path(self.temp_dir)
        self.os_name = self.os_name or host_os()
        self.arch = self.arch or host_arch()

    @classmethod
    def from_tool_config(
        cls,
        tool_id: str,
        version: str,
        temp_dir: Path,
        config: ToolConfig,
    ) -> DownloadArtifact:
        """Build an artifact from ``tools.<id>`` config."""
        return cls(
            tool_id=tool_id,
            version=version,
            temp_dir=temp_dir,
            download_file=config.download_file or f"{tool_id}-{{version}}",
            checksum_file=config.checksum_file,
            download_url=config.download_url,
            checksum_url_template=config.checksum_url,
        )

    def _fill_platform_tokens(self, text: str) -> str:
        return (
            text.replace("{version}", self.version)
            .replace("{os}", self.os_name)
            .replace("{arch}", self.arch)
        )

    def interpolate_tokens(self, text: str) -> str:
        """Fill ``{version}``, ``{os}``, ``{arch}``, ``{download_file}``."""
        text = self._fill_platform_tokens(text)
        return text.replace("{download_file}", self.download_file_name())

    def download_file_name(self) -> str:
        return self._fill_platform_tokens(self.download_file)

    def download_path(self) -> Path:
        return self.temp_dir / self.download_file_name()

    def resolved_download_url(self) -> str | None:
        if not self.download_url:
            return None
        return self.interpolate_tokens(self.download_url)

    def checksum_file_name(self) -> str:
        """Manifest file name; defaults to ``<download file>.sha256``."""
        if self.checksum_file:
            return self.interpolate_tokens(self.checksum_file)
        return f"{self.download_file_name()}.sha256"

    # ── Verifiable ──────────────────────────────────────────────

    def checksum_path(self) -> Path:
        return self.temp_dir / self.checksum_file_name()

    def checksum_url(self) -> str | None:
        if not self.checksum_url_template:
            return None
        url = self.checksum_url_template.replace("{checksum_file}", self.checksum_file_name())
        return self.interpolate_tokens(url)


async def verify_download(artifact: Verifiable, download_file: Path | None = None) -> bool:
    """Verify a fetched artifact against its own manifest location.

    Args:
        artifact: The artifact; its ``checksum_path()`` must already exist.
        download_file: The fetched file.  Defaults to the artifact's
            ``download_path()`` when it has one.

    Raises:
        ChecksumMismatch: If the manifest does not vouch for the file.
        OSError: If the manifest or the file is missing.
    """
    if download_file is None:
        if not isinstance(artifact, DownloadArtifact):
            raise TypeError("download_file is required for this artifact type")
        download_file = artifact.download_path()

    checksum_file = artifact.checksum_path()
    logger.info("Verifying %s against %s", download_file.name, checksum_file.name)
    return await artifact.verify_checksum(checksum_file, download_file)
