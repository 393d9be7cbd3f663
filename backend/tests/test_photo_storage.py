"""
Inventory Service — Photo Storage Unit Tests
==============================================

What:  Tests for PhotoStorage (store, resolve, discard, directory handling).
How:   Real files in pytest's tmp_path; no HTTP involved.

Test Strategy:
    ✅ Stored files get generated names inside the cache directory
    ✅ References can never resolve outside the cache directory
    ✅ discard() is best-effort and never raises
    ✅ Write failures surface as FileStorageError
"""

import re

import pytest

from inventory_service.exceptions import FileStorageError
from inventory_service.services.photo_storage import PhotoStorage


class TestPhotoStorageStore:
    """Tests for writing uploads."""

    @pytest.mark.asyncio
    async def test_store_writes_file_with_generated_name(self, cache_dir, sample_image_bytes):
        storage = PhotoStorage(str(cache_dir))
        reference = await storage.store(sample_image_bytes)

        assert re.fullmatch(r"[0-9a-f]{32}", reference)
        assert (cache_dir / reference).read_bytes() == sample_image_bytes

    @pytest.mark.asyncio
    async def test_store_generates_unique_names(self, cache_dir):
        storage = PhotoStorage(str(cache_dir))
        first = await storage.store(b"one")
        second = await storage.store(b"two")
        assert first != second
        assert sorted(p.name for p in cache_dir.iterdir()) == sorted([first, second])

    @pytest.mark.asyncio
    async def test_store_creates_missing_directory(self, tmp_path):
        """The cache directory (and parents) is created on first write."""
        target = tmp_path / "nested" / "cache"
        storage = PhotoStorage(str(target))
        reference = await storage.store(b"data")
        assert (target / reference).exists()

    @pytest.mark.asyncio
    async def test_store_failure_raises_file_storage_error(self, tmp_path):
        """A cache path below a regular file cannot be created."""
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("x")
        storage = PhotoStorage(str(blocker / "cache"))

        with pytest.raises(FileStorageError):
            await storage.store(b"data")


class TestPhotoStorageResolve:
    """Tests for mapping references back to files."""

    def test_resolve_existing(self, cache_dir):
        (cache_dir / "abc").write_bytes(b"x")
        storage = PhotoStorage(str(cache_dir))
        assert storage.resolve("abc") == cache_dir.resolve() / "abc"

    def test_resolve_none(self, cache_dir):
        assert PhotoStorage(str(cache_dir)).resolve(None) is None

    def test_resolve_missing_file(self, cache_dir):
        """A reference whose file was removed out-of-band resolves to None."""
        assert PhotoStorage(str(cache_dir)).resolve("gone") is None

    @pytest.mark.parametrize("reference", ["../secret", "sub/file", "/etc/passwd", "..", ".", ""])
    def test_resolve_rejects_non_basenames(self, cache_dir, reference):
        assert PhotoStorage(str(cache_dir)).resolve(reference) is None

    def test_resolve_directory_is_not_a_photo(self, cache_dir):
        (cache_dir / "subdir").mkdir()
        assert PhotoStorage(str(cache_dir)).resolve("subdir") is None


class TestPhotoStorageDiscard:
    """Tests for best-effort deletion."""

    @pytest.mark.asyncio
    async def test_discard_removes_file(self, cache_dir):
        (cache_dir / "abc").write_bytes(b"x")
        await PhotoStorage(str(cache_dir)).discard("abc")
        assert not (cache_dir / "abc").exists()

    @pytest.mark.asyncio
    async def test_discard_missing_file(self, cache_dir):
        """Should not raise for files that are already gone."""
        await PhotoStorage(str(cache_dir)).discard("nonexistent")

    @pytest.mark.asyncio
    async def test_discard_none(self, cache_dir):
        await PhotoStorage(str(cache_dir)).discard(None)

    @pytest.mark.asyncio
    async def test_discard_ignores_traversal(self, tmp_path, cache_dir):
        outside = tmp_path / "outside.txt"
        outside.write_text("keep me")
        await PhotoStorage(str(cache_dir)).discard("../outside.txt")
        assert outside.exists()

    @pytest.mark.asyncio
    async def test_discard_swallows_os_errors(self, cache_dir):
        """A directory in place of the file makes os.remove fail; nothing is raised."""
        (cache_dir / "subdir").mkdir()
        await PhotoStorage(str(cache_dir)).discard("subdir")
        assert (cache_dir / "subdir").exists()


class TestPhotoStorageDirectory:

    def test_ensure_directory(self, tmp_path):
        target = tmp_path / "a" / "b" / "cache"
        storage = PhotoStorage(str(target))
        assert not storage.is_writable()
        assert storage.ensure_directory() == target.resolve()
        assert storage.is_writable()

    def test_constructor_has_no_side_effects(self, tmp_path):
        PhotoStorage(str(tmp_path / "never-created"))
        assert not (tmp_path / "never-created").exists()
