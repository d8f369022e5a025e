"""Resolution of the on-disk locations used by the service."""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = "uploads"
DEFAULT_CREDENTIALS_FILE = "credentials.json"
DEFAULT_LOG_FILE = "access.log"
DEFAULT_PORT = 5000

STORAGE_DIR_ENV = "FILESTORE_DIR"


def resolve_storage_dir(dir_param: Optional[str] = None) -> Path:
    """Resolve the storage directory from various sources.

    Priority order:
    1. Explicit argument (``--dir`` on the command line)
    2. Environment variable: FILESTORE_DIR
    3. ``uploads`` in the working directory

    Args:
        dir_param: Optional directory passed by the caller

    Returns:
        Resolved Path object
    """
    if dir_param:
        target_path = Path(dir_param).expanduser().resolve()
        logger.info(f"Using storage directory from argument: {target_path}")
        return target_path

    env_path = os.environ.get(STORAGE_DIR_ENV)
    if env_path:
        target_path = Path(env_path).expanduser().resolve()
        logger.info(f"Using storage directory from environment variable: {target_path}")
        return target_path

    target_path = Path(DEFAULT_STORAGE_DIR).resolve()
    logger.info(f"Using default storage directory: {target_path}")
    return target_path
