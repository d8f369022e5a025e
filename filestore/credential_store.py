"""Per-file passwords backed by a JSON sidecar document."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

PASSWORD_REQUIRED = "Unauthorized - Password required"
PASSWORD_INCORRECT = "Unauthorized - Incorrect password"


class Unauthorized(Exception):
    """Raised when a request may not touch a protected file."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CredentialStore:
    """In-memory credentials table persisted as ``{"files": {name: {...}}}``.

    The table is shared by every request. Only rewrites of the sidecar file are
    serialized; the check-then-update sequence in the handlers is not.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.document: Dict[str, Any] = {"files": {}}
        self._save_lock = asyncio.Lock()

    @property
    def files(self) -> Dict[str, Dict[str, Any]]:
        return self.document["files"]

    def load(self) -> None:
        """Read the sidecar, falling back to an empty table on any error."""

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(document, dict):
                raise ValueError(f"expected a JSON object, got {type(document).__name__}")
        except (OSError, ValueError) as exc:
            logger.error("Error reading credentials file %s: %s", self.path, exc)
            self.document = {"files": {}}
            return

        if not isinstance(document.get("files"), dict):
            document["files"] = {}
        for filename, entry in document["files"].items():
            if not isinstance(entry, dict):
                logger.warning("Ignoring malformed credentials entry for %s", filename)
                document["files"][filename] = {}
        self.document = document
        logger.info("Loaded %d credential entries from %s", len(self.files), self.path)

    async def save_all(self) -> None:
        """Rewrite the whole sidecar from the current table."""

        # Snapshot on the loop so the thread never sees a table mid-update.
        payload = json.dumps(self.document, indent=2)
        async with self._save_lock:
            await asyncio.to_thread(self.path.write_text, payload, encoding="utf-8")

    def stored_password(self, filename: str) -> Optional[str]:
        entry = self.files.get(filename)
        if entry is None:
            return None
        return entry.get("password")

    def set_password(self, filename: str, password: str) -> bool:
        """Store ``password`` for ``filename``; return True if the table changed."""

        entry = self.files.setdefault(filename, {})
        if "password" in entry and entry["password"] == password:
            return False
        entry["password"] = password
        return True

    def check(self, filename: str, password: Optional[str]) -> None:
        """Raise :class:`Unauthorized` unless ``password`` opens ``filename``."""

        expected = self.stored_password(filename)
        if not expected:
            return
        if password is None:
            raise Unauthorized(PASSWORD_REQUIRED)
        if password != expected:
            raise Unauthorized(PASSWORD_INCORRECT)
