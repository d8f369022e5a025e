#!/usr/bin/env python3
"""
Example File Store Client

This script shows how to talk to the file storage server from Python.
Every operation is a single request with query-string parameters.

Usage:
    python file_client.py list
    python file_client.py create notes.txt "hello" --password s3cret
    python file_client.py get notes.txt --password s3cret
    python file_client.py modify notes.txt "bye" --password s3cret
    python file_client.py delete notes.txt --password s3cret
"""

import argparse
import asyncio
import json
import sys
from typing import Dict, Optional

import aiohttp

ENDPOINTS = {
    "list": "/getFiles",
    "get": "/getFile",
    "create": "/createFile",
    "modify": "/modifyFile",
    "delete": "/deleteFile",
}


async def call(base_url: str, action: str, params: Dict[str, str]) -> int:
    """
    Send one request and print the response.

    Args:
        base_url: Base URL of the server (default: http://localhost:5000)
        action: One of the keys in ENDPOINTS
        params: Query parameters for the request

    Returns:
        Process exit code (0 on HTTP 200)
    """
    url = f"{base_url}{ENDPOINTS[action]}"

    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    print(f"❌ HTTP {response.status}: {await response.text()}")
                    return 1

                if action == "list":
                    names = await response.json()
                    print(f"📁 {len(names)} stored file(s)")
                    for name in names:
                        print(f"  - {name}")
                else:
                    print(await response.text())
                return 0

    except aiohttp.ClientError as e:
        print(f"❌ Connection error: {e}")
        print(f"   Make sure the server is running at {base_url}")
        return 1


def build_params(filename: Optional[str], content: Optional[str], password: Optional[str]) -> Dict[str, str]:
    params = {}
    if filename is not None:
        params["filename"] = filename
    if content is not None:
        params["content"] = content
    if password is not None:
        params["password"] = password
    return params


def main():
    parser = argparse.ArgumentParser(description="Talk to the file storage server")
    parser.add_argument("action", choices=sorted(ENDPOINTS))
    parser.add_argument("filename", nargs="?")
    parser.add_argument("content", nargs="?")
    parser.add_argument("--password", default=None)
    parser.add_argument("--url", default="http://localhost:5000", help="Base URL of the server")
    args = parser.parse_args()

    params = build_params(args.filename, args.content, args.password)
    try:
        return asyncio.run(call(args.url, args.action, params))
    except KeyboardInterrupt:
        print("\n👋 Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
