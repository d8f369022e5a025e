"""Helpers for working with stored files on disk."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class FileManager:
    """Lightweight wrapper around the storage directory.

    Filenames are joined onto the root as given by the client. There is no
    confinement to ``root``: a name such as ``../x`` resolves outside of it.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        """Return the on-disk path for ``filename``.

        Behaves like a plain path join followed by normalization, so a leading
        slash in ``filename`` does not escape to the filesystem root.
        """

        return Path(os.path.normpath(f"{self.root}/{filename}"))

    async def list_entries(self) -> List[str]:
        """Return every entry name in the root, in directory order."""

        return await asyncio.to_thread(os.listdir, self.root)

    async def read_file(self, filename: str) -> bytes:
        return await asyncio.to_thread(self.path_for(filename).read_bytes)

    async def write_file(self, filename: str, content: str) -> None:
        """Replace the whole content of ``filename`` with ``content``."""

        file_path = self.path_for(filename)
        await asyncio.to_thread(file_path.write_text, content, encoding="utf-8")

    async def delete_file(self, filename: str) -> None:
        await asyncio.to_thread(self.path_for(filename).unlink)
