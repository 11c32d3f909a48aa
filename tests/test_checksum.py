"""
Tests for checksum verification — manifest formats, mismatches, I/O errors.
"""

import hashlib
from pathlib import Path

import pytest

from toolpin.core.errors import ChecksumMismatch
from toolpin.core.services import checksum as checksum_mod
from toolpin.core.services.checksum import get_sha256_hash_of_file, verify_checksum


@pytest.fixture
def fake_digest(monkeypatch: pytest.MonkeyPatch) -> str:
    """Pin the computed digest of any file to ``abc123``."""
    monkeypatch.setattr(checksum_mod, "get_sha256_hash_of_file", lambda path: "abc123")
    return "abc123"


@pytest.fixture
def archive(tmp_path: Path) -> Path:
    path = tmp_path / "archive.tar.gz"
    path.write_bytes(b"pretend this is a tarball")
    return path


class TestManifestFormats:
    """Both accepted line shapes."""

    @pytest.mark.asyncio
    async def test_digest_and_filename(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text("abc123  archive.tar.gz\n")

        assert await verify_checksum(manifest, archive) is True

    @pytest.mark.asyncio
    async def test_any_separator_width(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text("abc123 *archive.tar.gz\n")

        assert await verify_checksum(manifest, archive) is True

    @pytest.mark.asyncio
    async def test_bare_digest_ignores_name(self, tmp_path: Path, fake_digest: str):
        download = tmp_path / "whatever-name.zip"
        download.write_bytes(b"data")
        manifest = tmp_path / "whatever-name.zip.sha256"
        manifest.write_text("abc123\n")

        assert await verify_checksum(manifest, download) is True

    @pytest.mark.asyncio
    async def test_match_among_other_artifacts(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text(
            "fff000  other-linux.tar.gz\n"
            "abc123  archive.tar.gz\n"
            "eee111  other-darwin.tar.gz\n"
        )

        assert await verify_checksum(manifest, archive) is True

    @pytest.mark.asyncio
    async def test_crlf_manifest(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_bytes(b"abc123  archive.tar.gz\r\n")

        assert await verify_checksum(manifest, archive) is True

    @pytest.mark.asyncio
    async def test_real_digest(self, tmp_path: Path, archive: Path):
        digest = hashlib.sha256(archive.read_bytes()).hexdigest()
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text(f"{digest}  archive.tar.gz\n")

        assert await verify_checksum(manifest, archive) is True


class TestMismatch:
    """No matching line is an error, not False."""

    @pytest.mark.asyncio
    async def test_other_digest(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text("def456  archive.tar.gz\n")

        with pytest.raises(ChecksumMismatch) as exc_info:
            await verify_checksum(manifest, archive)
        assert exc_info.value.download_file == archive
        assert exc_info.value.checksum_file == manifest
        assert str(archive) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_bare_other_digest(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "archive.tar.gz.sha256"
        manifest.write_text("def456\n")

        with pytest.raises(ChecksumMismatch):
            await verify_checksum(manifest, archive)

    @pytest.mark.asyncio
    async def test_digest_for_another_file(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text("abc123  other.tar.gz\n")

        with pytest.raises(ChecksumMismatch):
            await verify_checksum(manifest, archive)

    @pytest.mark.asyncio
    async def test_empty_manifest(self, tmp_path: Path, archive: Path):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text("")

        with pytest.raises(ChecksumMismatch):
            await verify_checksum(manifest, archive)


class TestUndecodableLines:
    """Bad bytes on one line do not abort the scan."""

    @pytest.mark.asyncio
    async def test_skips_bad_line_then_matches(
        self, tmp_path: Path, archive: Path, fake_digest: str,
    ):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_bytes(b"\xff\xfe garbage \xc3\x28\n" b"abc123  archive.tar.gz\n")

        assert await verify_checksum(manifest, archive) is True

    @pytest.mark.asyncio
    async def test_only_bad_lines(self, tmp_path: Path, archive: Path, fake_digest: str):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_bytes(b"\xff\xfe\n")

        with pytest.raises(ChecksumMismatch):
            await verify_checksum(manifest, archive)


class TestIOErrors:
    """Missing files surface as I/O errors, never as a mismatch."""

    @pytest.mark.asyncio
    async def test_missing_manifest(self, tmp_path: Path, archive: Path):
        with pytest.raises(FileNotFoundError):
            await verify_checksum(tmp_path / "missing.txt", archive)

    @pytest.mark.asyncio
    async def test_missing_download(self, tmp_path: Path):
        manifest = tmp_path / "SHASUMS256.txt"
        manifest.write_text("abc123\n")

        with pytest.raises(FileNotFoundError):
            await verify_checksum(manifest, tmp_path / "missing.tar.gz")


class TestSha256:
    """Tests for get_sha256_hash_of_file()."""

    def test_known_content(self, tmp_path: Path):
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello")
        assert get_sha256_hash_of_file(path) == hashlib.sha256(b"hello").hexdigest()

    def test_larger_than_one_chunk(self, tmp_path: Path):
        data = b"x" * 200_000
        path = tmp_path / "big.bin"
        path.write_bytes(data)
        assert get_sha256_hash_of_file(path) == hashlib.sha256(data).hexdigest()
