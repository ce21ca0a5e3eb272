"""Local Image Store - writes area photos to disk and reads their pixel size.

Invariants:
    - Files land under base_dir; the stored name is the basename of the name given
    - delete() of a file that is already gone is a no-op
    - dimensions() raises PhotoProcessingError for anything Pillow cannot open
    - Blocking file IO runs in a worker thread (asyncio.to_thread)
"""

import asyncio
import logging
import os

from PIL import Image, UnidentifiedImageError

from farm_assets.core.errors import PhotoProcessingError

logger = logging.getLogger(__name__)


class LocalImageStore:
    """Filesystem-backed ImageStore."""

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def path_for(self, filename: str) -> str:
        return os.path.join(self.base_dir, os.path.basename(filename))

    async def save(self, filename: str, content: bytes) -> str:
        path = self.path_for(filename)
        try:
            await asyncio.to_thread(self._write, path, content)
        except OSError as e:
            logger.error(f"Failed to write photo {path}: {e}")
            raise PhotoProcessingError(f"Could not store photo '{filename}'")
        return path

    async def dimensions(self, path: str) -> tuple[int, int]:
        try:
            return await asyncio.to_thread(self._read_size, path)
        except (OSError, UnidentifiedImageError) as e:
            logger.warning(f"Failed to read image size of {path}: {e}")
            raise PhotoProcessingError(f"Could not read image '{os.path.basename(path)}'")

    async def delete(self, path: str) -> None:
        try:
            await asyncio.to_thread(os.remove, path)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error(f"Failed to delete photo {path}: {e}")
            raise PhotoProcessingError(f"Could not delete photo '{os.path.basename(path)}'")

    @staticmethod
    def _write(path: str, content: bytes) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)

    @staticmethod
    def _read_size(path: str) -> tuple[int, int]:
        with Image.open(path) as img:
            return img.size
