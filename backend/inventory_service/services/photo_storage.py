"""
Inventory Service — Photo Storage Service
===========================================

What:  Owns the cache directory where uploaded item photos live.
How:   Writes uploads under server-generated names, resolves photo
       references back to readable paths, and discards old files.
Who:   Called by the route handlers; the inventory store never touches disk.

Naming:
    Every stored file is named with a fresh uuid4 hex string (no extension,
    no part of the client's filename). The basename is the photo reference
    kept on the item record. This rules out collisions between uploads and
    path traversal through a crafted filename.

Directory Structure:
    cache/
    ├── 3f2c9a0e6b1d4c7e8a5f0b2d4e6c8a1f
    └── 9b8e7d6c5a4f3e2d1c0b9a8f7e6d5c4b
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles

from inventory_service.exceptions import FileStorageError

logger = logging.getLogger(__name__)


class PhotoStorage:
    """
    Manages the lifecycle of photo files in the cache directory.

    Lifecycle of an uploaded photo:
        1. Route validates the request (item exists, file present)
        2. store() writes the bytes under a new uuid name
        3. The returned basename becomes the item's photo_reference
        4. On replacement, discard() removes the previous file in the background
    """

    def __init__(self, cache_dir: str):
        self.cache_dir = Path(cache_dir).resolve()

    def ensure_directory(self) -> Path:
        """Create the cache directory (and parents) if it does not exist yet."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return self.cache_dir

    def is_writable(self) -> bool:
        return self.cache_dir.is_dir() and os.access(self.cache_dir, os.W_OK)

    def _path_for(self, reference: str) -> Optional[Path]:
        """
        Map a reference to a path inside the cache directory.

        Returns None for anything that is not a bare filename, so a reference
        can never point outside the cache directory.
        """
        if not reference or Path(reference).name != reference or reference in (".", ".."):
            return None
        return self.cache_dir / reference

    async def store(self, content: bytes) -> str:
        """
        Write photo bytes to a new file in the cache directory.

        Returns:
            The stored file's basename (the photo reference).

        Raises:
            FileStorageError if the directory cannot be created or the write fails.
        """
        reference = uuid.uuid4().hex
        path = self.cache_dir / reference

        try:
            self.ensure_directory()
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store photo at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded photo",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Photo stored: %s (%d bytes)", reference, len(content))
        return reference

    def resolve(self, reference: Optional[str]) -> Optional[Path]:
        """
        Return the path of a stored photo, or None if it cannot be served.

        A reference whose file was removed out-of-band resolves to None; the
        stale reference itself is left alone.
        """
        if reference is None:
            return None
        path = self._path_for(reference)
        if path is None or not path.is_file():
            if path is not None:
                logger.warning("Photo reference %s has no backing file", reference)
            return None
        return path

    async def discard(self, reference: Optional[str]) -> None:
        """
        Best-effort removal of a stored photo.

        Never raises: a missing file is ignored and any other failure is only
        logged. Used as a background task after a photo replacement and when
        purging a deleted item's photo.
        """
        if reference is None:
            return
        path = self._path_for(reference)
        if path is None:
            logger.warning("Refusing to discard invalid photo reference %r", reference)
            return
        try:
            if path.exists():
                os.remove(path)
                logger.info("Discarded photo: %s", reference)
            else:
                logger.debug("Discard: photo already gone: %s", reference)
        except OSError as e:
            logger.warning("Failed to discard photo %s: %s", reference, str(e))
