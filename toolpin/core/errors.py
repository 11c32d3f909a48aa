"""
Error taxonomy — every failure the core raises on purpose.

Callers catch ``ToolpinError`` to handle all of them at once (the CLI
does this).  Plain I/O failures are *not* wrapped: a missing manifest
surfaces as ``FileNotFoundError``, never as a checksum mismatch.
"""

from __future__ import annotations

from pathlib import Path


class ToolpinError(Exception):
    """Base class for errors raised by toolpin."""


class VersionParseError(ToolpinError):
    """A version string could not be parsed into a version spec."""

    def __init__(self, version: str, error: Exception | str) -> None:
        self.version = version
        self.error = error
        super().__init__(f"Failed to parse version '{version}': {error}")


class VersionFileError(ToolpinError):
    """A pinned-version file exists but cannot be read as text."""

    def __init__(self, path: Path, error: Exception | str) -> None:
        self.path = Path(path)
        self.error = error
        super().__init__(f"Cannot read version file {self.path}: {error}")


class VersionDetectFailed(ToolpinError):
    """No source produced a version for the tool."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(
            f"Failed to detect an applicable version to run {tool} with. "
            f"Pin one in a .prototools.yml file or set a version explicitly."
        )


class ChecksumMismatch(ToolpinError):
    """No manifest line matched the downloaded file's digest."""

    def __init__(self, download_file: Path, checksum_file: Path) -> None:
        self.download_file = Path(download_file)
        self.checksum_file = Path(checksum_file)
        super().__init__(
            f"Checksum has failed for {self.download_file}, "
            f"which was verified using {self.checksum_file}."
        )
