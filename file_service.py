#!/usr/bin/env python3
"""A small HTTP file store with optional per-file passwords."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional

from aiohttp import web

from filestore.access_log import AccessLog
from filestore.credential_store import CredentialStore, Unauthorized
from filestore.file_manager import FileManager
from filestore.settings import (
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_LOG_FILE,
    DEFAULT_PORT,
    resolve_storage_dir,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

INTERNAL_ERROR = "Internal Server Error"


class FileStorageServer:
    """Serve create/read/list/modify/delete operations over a storage directory."""

    def __init__(
        self,
        storage_dir: str = "uploads",
        port: int = DEFAULT_PORT,
        credentials_file: str = DEFAULT_CREDENTIALS_FILE,
        log_file: str = DEFAULT_LOG_FILE,
    ) -> None:
        self.storage_root = Path(storage_dir).expanduser().resolve()
        self.port = port
        self.file_manager = FileManager(self.storage_root)
        self.credentials = CredentialStore(Path(credentials_file).expanduser())
        self.access_log = AccessLog(Path(log_file).expanduser())

    # ------------------------------------------------------------------
    # aiohttp lifecycle helpers
    # ------------------------------------------------------------------
    async def on_startup(self, app: web.Application) -> None:
        self.file_manager.ensure_root()
        self.credentials.load()
        logger.info("Serving files from %s", self.storage_root)

    async def on_cleanup(self, app: web.Application) -> None:
        await self.access_log.drain()

    # ------------------------------------------------------------------
    # Middlewares
    # ------------------------------------------------------------------
    @web.middleware
    async def log_requests(self, request: web.Request, handler: Handler) -> web.StreamResponse:
        self.access_log.record(request.method, request.raw_path, request.remote)
        return await handler(request)

    @web.middleware
    async def plain_not_found(self, request: web.Request, handler: Handler) -> web.StreamResponse:
        try:
            return await handler(request)
        except web.HTTPNotFound:
            return web.Response(text="Not Found", status=404)

    # ------------------------------------------------------------------
    # HTTP handlers
    # ------------------------------------------------------------------
    async def handle_create_file(self, request: web.Request) -> web.Response:
        return await self._create_or_modify(request, is_modify=False)

    async def handle_modify_file(self, request: web.Request) -> web.Response:
        return await self._create_or_modify(request, is_modify=True)

    async def _create_or_modify(self, request: web.Request, is_modify: bool) -> web.Response:
        query = request.rel_url.query
        filename = query.get("filename")
        content = query.get("content")
        password = query.get("password")

        logger.debug("Filename: %s, content length: %s", filename, len(content or ""))

        if not filename or not content:
            if is_modify:
                message = "Filename and new content are required for modification"
            else:
                message = "Filename and content are required for creation"
            return web.Response(text=message, status=400)

        # The new password is stored before the check, so it also authorizes this request.
        setting_password = False
        if password is not None:
            setting_password = self.credentials.set_password(filename, password)

        denied = self._authorize(filename, password)
        if denied is not None:
            return denied

        # pathlib rejects names with NUL bytes with ValueError.
        try:
            await self.file_manager.write_file(filename, content)
        except (OSError, ValueError) as exc:
            logger.error("Error writing file %s: %s", filename, exc)
            return web.Response(text=INTERNAL_ERROR, status=500)

        if setting_password:
            try:
                await self.credentials.save_all()
            except OSError as exc:
                logger.error("Error updating credentials file %s: %s", self.credentials.path, exc)

        return web.Response(text="File modified successfully" if is_modify else "File created successfully")

    async def handle_get_files(self, request: web.Request) -> web.Response:
        try:
            names = await self.file_manager.list_entries()
        except OSError as exc:
            logger.error("Error reading directory %s: %s", self.storage_root, exc)
            return web.Response(text=INTERNAL_ERROR, status=500)
        return web.json_response(names)

    async def handle_get_file(self, request: web.Request) -> web.Response:
        filename = request.rel_url.query.get("filename")
        password = request.rel_url.query.get("password")
        if not filename:
            return web.Response(text="Filename is required", status=400)

        denied = self._authorize(filename, password)
        if denied is not None:
            return denied

        try:
            data = await self.file_manager.read_file(filename)
        except (OSError, ValueError) as exc:
            logger.error("Error reading file %s: %s", filename, exc)
            return web.Response(text="File not found", status=400)

        return web.Response(body=data, content_type="text/plain")

    async def handle_delete_file(self, request: web.Request) -> web.Response:
        filename = request.rel_url.query.get("filename")
        password = request.rel_url.query.get("password")
        if not filename:
            return web.Response(text="Filename is required", status=400)

        denied = self._authorize(filename, password)
        if denied is not None:
            return denied

        # The credentials entry outlives the file and still guards the name.
        try:
            await self.file_manager.delete_file(filename)
        except (OSError, ValueError) as exc:
            logger.error("Error deleting file %s: %s", filename, exc)
            return web.Response(text=INTERNAL_ERROR, status=500)

        return web.Response(text="File deleted successfully")

    def _authorize(self, filename: str, password: Optional[str]) -> Optional[web.Response]:
        try:
            self.credentials.check(filename, password)
        except Unauthorized as exc:
            logger.info("%s (file: %s)", exc.message, filename)
            return web.Response(text=exc.message, status=401)
        return None

    # ------------------------------------------------------------------
    # Server bootstrap helpers
    # ------------------------------------------------------------------
    def create_app(self) -> web.Application:
        app = web.Application(middlewares=[self.log_requests, self.plain_not_found])
        app.router.add_route("*", "/createFile", self.handle_create_file)
        app.router.add_route("*", "/getFiles", self.handle_get_files)
        app.router.add_route("*", "/getFile", self.handle_get_file)
        app.router.add_route("*", "/modifyFile", self.handle_modify_file)
        app.router.add_route("*", "/deleteFile", self.handle_delete_file)
        app.on_startup.append(self.on_startup)
        app.on_cleanup.append(self.on_cleanup)
        return app

    def run(self) -> None:
        app = self.create_app()
        logger.info("Server is running on port %s", self.port)
        web.run_app(app, port=self.port)


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve a password-protected file store over HTTP")
    parser.add_argument("--dir", dest="dir", default=None, help="Storage directory (default: $FILESTORE_DIR or ./uploads)")
    parser.add_argument("--port", dest="port", type=int, default=DEFAULT_PORT, help="Port to bind")
    parser.add_argument("--credentials", dest="credentials", default=DEFAULT_CREDENTIALS_FILE, help="JSON file holding per-file passwords")
    parser.add_argument("--log-file", dest="log_file", default=DEFAULT_LOG_FILE, help="Append-only request log")
    args = parser.parse_args()

    server = FileStorageServer(
        storage_dir=str(resolve_storage_dir(args.dir)),
        port=args.port,
        credentials_file=args.credentials,
        log_file=args.log_file,
    )
    server.run()


if __name__ == "__main__":
    main()
