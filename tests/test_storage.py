"""Tests for local receipt storage."""

import pytest

from resellit.domain.errors import NotFoundError, ValidationError
from resellit.storage.local import (
    DEFAULT_OWNER,
    LocalReceiptStore,
    create_local_store,
    default_owner,
)


@pytest.fixture
def receipt_file(tmp_path):
    path = tmp_path / "invoice.PDF"
    path.write_bytes(b"receipt")
    return path


def test_upload_copies_into_owner_folder(receipt_store, receipt_file):
    path = receipt_store.upload("local", 7, str(receipt_file))

    assert path.startswith("local/7-")
    assert path.endswith(".PDF")
    assert receipt_store.read(path) == b"receipt"
    assert receipt_file.exists()


def test_upload_missing_file(receipt_store, tmp_path):
    with pytest.raises(FileNotFoundError):
        receipt_store.upload("local", 7, str(tmp_path / "missing.pdf"))


def test_uploads_never_overwrite(receipt_store, receipt_file):
    first = receipt_store.upload("local", 7, str(receipt_file))
    second = receipt_store.upload("local", 7, str(receipt_file))
    assert first != second
    assert receipt_store.list_for_transaction("local", 7) == sorted([first, second])


def test_list_for_transaction_matches_whole_id(receipt_store, receipt_file):
    mine = receipt_store.upload("local", 1, str(receipt_file))
    receipt_store.upload("local", 11, str(receipt_file))
    receipt_store.upload("someone-else", 1, str(receipt_file))

    assert receipt_store.list_for_transaction("local", 1) == [mine]
    assert len(receipt_store.list("local")) == 2
    assert receipt_store.list("nobody") == []


def test_public_url_and_remove_by_url(receipt_store, receipt_file):
    path = receipt_store.upload("local", 3, str(receipt_file))
    url = receipt_store.public_url(path)
    assert url.startswith("file://")

    receipt_store.remove(url)

    assert receipt_store.list("local") == []
    with pytest.raises(NotFoundError):
        receipt_store.remove(path)
    with pytest.raises(NotFoundError):
        receipt_store.read(path)


def test_paths_outside_root_are_rejected(receipt_store, tmp_path):
    outside = tmp_path / "secret.txt"
    outside.write_text("x")

    with pytest.raises(ValidationError):
        receipt_store.read("../secret.txt")
    with pytest.raises(ValidationError):
        receipt_store.remove(outside.as_uri())


def test_create_local_store_uses_environment(tmp_path, monkeypatch):
    root = tmp_path / "from-env"
    monkeypatch.setenv("RESELLIT_RECEIPTS_DIR", str(root))

    store = create_local_store()

    assert isinstance(store, LocalReceiptStore)
    assert store.root == root
    assert root.is_dir()


def test_default_owner(monkeypatch):
    monkeypatch.delenv("RESELLIT_OWNER", raising=False)
    assert default_owner() == DEFAULT_OWNER
    monkeypatch.setenv("RESELLIT_OWNER", "alex")
    assert default_owner() == "alex"
