"""Append-only plain-text request log."""

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Set

logger = logging.getLogger(__name__)


def format_entry(method: str, raw_url: str, client_ip: Optional[str], when: Optional[datetime] = None) -> str:
    """Build one log line, e.g. `` [2024-01-01T00:00:00.000Z]  GET  /getFiles  Client IP: ::1``."""
    when = when or datetime.now(timezone.utc)
    timestamp = when.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f" [{timestamp}]  {method}  {raw_url}  Client IP: {client_ip}\n"


class AccessLog:
    """Writes request lines in the background without holding up responses."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._pending: Set[asyncio.Task] = set()

    def _append(self, line: str) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(line)

    async def _write(self, line: str) -> None:
        try:
            await asyncio.to_thread(self._append, line)
        except OSError as exc:
            logger.error("Oops! Something went wrong while writing to the log file %s: %s", self.path, exc)

    def record(self, method: str, raw_url: str, client_ip: Optional[str]) -> None:
        """Schedule an append and return immediately."""
        task = asyncio.create_task(self._write(format_entry(method, raw_url, client_ip)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every scheduled append to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
