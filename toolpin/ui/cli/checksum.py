"""
CLI commands for download verification.

Thin wrappers over ``toolpin.core.services.checksum``.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from toolpin.core.errors import ChecksumMismatch


@click.command("verify")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("download", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def verify(manifest: Path, download: Path) -> None:
    """Verify DOWNLOAD against the checksum MANIFEST."""
    from toolpin.core.services.checksum import verify_checksum

    try:
        asyncio.run(verify_checksum(manifest, download))
    except ChecksumMismatch as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✅ {download.name} matches {manifest.name}", fg="green")


@click.command("hash")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def hash_file(path: Path) -> None:
    """Print the SHA-256 of PATH in manifest format."""
    from toolpin.core.services.checksum import get_sha256_hash_of_file

    click.echo(f"{get_sha256_hash_of_file(path)}  {path.name}")
