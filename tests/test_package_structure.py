"""Test package structure for pip installation."""
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))


def test_server_module_is_importable():
    """Verify server module can be imported."""
    import file_service
    assert hasattr(file_service, 'main')
    assert hasattr(file_service, 'FileStorageServer')


def test_components_package_is_importable():
    """Verify filestore package exposes its components."""
    from filestore import AccessLog, CredentialStore, FileManager, Unauthorized
    assert AccessLog is not None
    assert CredentialStore is not None
    assert FileManager is not None
    assert issubclass(Unauthorized, Exception)


def test_entry_point_exists():
    """Verify the filestore-server entry point target is callable."""
    import file_service
    assert callable(file_service.main), "file_service.main is not callable"


def test_default_port_matches_legacy_clients():
    from file_service import FileStorageServer
    assert FileStorageServer().port == 5000
