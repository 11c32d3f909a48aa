"""
Checksum verification — trust a download only if a manifest vouches for it.

Accepted manifest line shapes::

    <sha256>  <file name>     (any separator width, ``*`` binary marker ok)
    <sha256>                  (bare digest, file name not checked)

Lines are matched in file order and the first match wins.  Lines that
are not valid UTF-8 are skipped so one bad entry in a shared manifest
does not block every other artifact.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from toolpin.core.errors import ChecksumMismatch

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 65536


def get_sha256_hash_of_file(path: Path) -> str:
    """Hex SHA-256 of a file's full contents, read in one pass."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def _manifest_matches(checksum_file: Path, checksum: str, file_name: str) -> bool:
    with open(checksum_file, "rb") as f:
        for raw in f:
            try:
                line = raw.decode("utf-8").rstrip("\r\n")
            except UnicodeDecodeError:
                continue

            # <checksum>  <file>
            if line.startswith(checksum) and line.endswith(file_name):
                return True
            # <checksum>
            if line == checksum:
                return True

    return False


async def verify_checksum(checksum_file: Path, download_file: Path) -> bool:
    """Verify ``download_file`` against the manifest at ``checksum_file``.

    Returns:
        True when a manifest line matches.

    Raises:
        ChecksumMismatch: If no line matches.
        OSError: If either file cannot be opened (``FileNotFoundError``
            when missing).  Never reported as a mismatch.
    """
    checksum_file = Path(checksum_file)
    download_file = Path(download_file)

    logger.debug(
        "Verifying checksum of downloaded file %s using %s",
        download_file, checksum_file,
    )

    checksum = await asyncio.to_thread(get_sha256_hash_of_file, download_file)
    matched = await asyncio.to_thread(
        _manifest_matches, checksum_file, checksum, download_file.name,
    )

    if matched:
        logger.debug("Successfully verified, checksum matches")
        return True

    raise ChecksumMismatch(download_file, checksum_file)


class Verifiable(ABC):
    """Anything downloadable that ships a checksum manifest."""

    @abstractmethod
    def checksum_path(self) -> Path:
        """Local path the manifest is (or will be) downloaded to."""

    @abstractmethod
    def checksum_url(self) -> str | None:
        """Remote manifest location, or None when there is none."""

    async def verify_checksum(self, checksum_file: Path, download_file: Path) -> bool:
        return await verify_checksum(checksum_file, download_file)
