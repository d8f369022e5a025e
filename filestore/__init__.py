"""Components package for the file storage server."""

from .access_log import AccessLog
from .credential_store import CredentialStore, Unauthorized
from .file_manager import FileManager

__all__ = ['AccessLog', 'CredentialStore', 'FileManager', 'Unauthorized']
