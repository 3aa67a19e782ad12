"""
Single-slot file cache for the bookmark source body.

One opaque byte payload lives at one fixed path. There is no timestamp,
ETag or TTL: the slot is either present or absent.

Writes go to a sibling temp file and are renamed into place, so readers
see either the previous payload or the new one, never a partial write.
An `asyncio.Lock` per store serializes load/store inside the process.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from functools import lru_cache
from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os

from core import config

logger = logging.getLogger(__name__)


class CacheStoreError(RuntimeError):
    pass


class CacheStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _temp_path(self) -> Path:
        return self.path.with_name(f".{self.path.name}.{uuid4().hex}.tmp")

    async def load(self) -> bytes | None:
        """
        Return the stored payload, or None when nothing has been stored yet.

        Raises CacheStoreError if the file exists but cannot be read.
        """
        async with self._lock:
            try:
                async with aiofiles.open(self.path, mode="rb") as f:
                    return await f.read()
            except (FileNotFoundError, NotADirectoryError):
                # Nothing (or no directory) at the location yet.
                return None
            except OSError as exc:
                logger.debug("cache_read_failed path=%s", self.path, exc_info=True)
                raise CacheStoreError("Failed to read cached payload.") from exc

    async def store(self, payload: bytes) -> None:
        """
        Replace the stored payload with `payload`, creating the directory
        if needed.
        """
        async with self._lock:
            tmp_path = self._temp_path()
            try:
                await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
                async with aiofiles.open(tmp_path, mode="wb") as f:
                    await f.write(payload)
                    await f.flush()
                await aiofiles.os.replace(tmp_path, self.path)
            except OSError as exc:
                with contextlib.suppress(OSError):
                    await aiofiles.os.remove(tmp_path)
                logger.debug("cache_write_failed path=%s", self.path, exc_info=True)
                raise CacheStoreError("Failed to write cached payload.") from exc


@lru_cache(maxsize=8)
def _store_for(path: str) -> CacheStore:
    # One store (and one lock) per path for the whole process.
    return CacheStore(path)


def get_cache_store() -> CacheStore:
    """
    FastAPI dependency returning the store for the configured cache file.
    """
    return _store_for(config.cache_file())
