import json
import sys
from pathlib import Path

# Ensure imports resolve to the repository modules.
sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from filestore.credential_store import (
    PASSWORD_INCORRECT,
    PASSWORD_REQUIRED,
    CredentialStore,
    Unauthorized,
)


def test_missing_sidecar_loads_empty_table(tmp_path):
    store = CredentialStore(tmp_path / "credentials.json")
    store.load()
    assert store.document == {"files": {}}


def test_non_object_document_is_replaced(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text("[1, 2, 3]")
    store = CredentialStore(path)
    store.load()
    assert store.document == {"files": {}}


def test_document_without_files_key_gets_one(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"owner": "ops"}))
    store = CredentialStore(path)
    store.load()
    assert store.document == {"owner": "ops", "files": {}}


def test_set_password_reports_changes(tmp_path):
    store = CredentialStore(tmp_path / "credentials.json")
    assert store.set_password("a.txt", "p1") is True
    assert store.set_password("a.txt", "p1") is False
    assert store.set_password("a.txt", "p2") is True
    assert store.stored_password("a.txt") == "p2"


def test_empty_password_on_new_entry_counts_as_change(tmp_path):
    store = CredentialStore(tmp_path / "credentials.json")
    store.files["a.txt"] = {}
    assert store.set_password("a.txt", "") is True
    assert store.set_password("a.txt", "") is False


def test_check_rules(tmp_path):
    store = CredentialStore(tmp_path / "credentials.json")
    store.files.update({"open.txt": {}, "blank.txt": {"password": ""}, "locked.txt": {"password": "s3cret"}})

    store.check("unknown.txt", None)
    store.check("open.txt", "anything")
    store.check("blank.txt", "anything")
    store.check("locked.txt", "s3cret")

    with pytest.raises(Unauthorized) as missing:
        store.check("locked.txt", None)
    assert missing.value.message == PASSWORD_REQUIRED

    with pytest.raises(Unauthorized) as wrong:
        store.check("locked.txt", "S3CRET")
    assert wrong.value.message == PASSWORD_INCORRECT


@pytest.mark.asyncio
async def test_save_all_round_trips_other_keys(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"version": 1, "files": {}}))
    store = CredentialStore(path)
    store.load()
    store.set_password("a.txt", "p1")
    await store.save_all()

    text = path.read_text()
    assert text.startswith('{\n  "version": 1')
    assert json.loads(text) == {"version": 1, "files": {"a.txt": {"password": "p1"}}}


def test_non_object_entries_are_reset(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"files": {"a.txt": "x", "b.txt": ["p"], "c.txt": {"password": "p"}}}))
    store = CredentialStore(path)
    store.load()
    assert store.files == {"a.txt": {}, "b.txt": {}, "c.txt": {"password": "p"}}

    store.check("a.txt", None)
    assert store.stored_password("b.txt") is None
    assert store.set_password("a.txt", "p1") is True
    assert store.stored_password("a.txt") == "p1"
