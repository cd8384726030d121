"""Receipt storage on the local filesystem."""

import logging
import os
import shutil
import time
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from resellit.domain.errors import NotFoundError, ValidationError
from resellit.storage.base import ReceiptStore

logger = logging.getLogger(__name__)

RECEIPTS_DIR_ENV = "RESELLIT_RECEIPTS_DIR"
OWNER_ENV = "RESELLIT_OWNER"
DEFAULT_OWNER = "local"


def default_owner() -> str:
    """Owner scope for receipts, from RESELLIT_OWNER."""
    return os.environ.get(OWNER_ENV) or DEFAULT_OWNER


class LocalReceiptStore(ReceiptStore):
    """Stores receipts as files under <root>/<owner>/."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        if path.startswith("file://"):
            candidate = Path(unquote(urlparse(path).path))
        else:
            candidate = self.root / path
        resolved = candidate.resolve()
        if self.root.resolve() not in resolved.parents:
            raise ValidationError(f"Receipt path outside storage: {path}")
        return resolved

    def upload(self, owner: str, transaction_id: int, source: str) -> str:
        """Copy a file into the owner's folder as <transaction_id>-<millis><ext>.

        Raises:
            FileNotFoundError: If the source file doesn't exist
        """
        source_path = Path(source)
        if not source_path.is_file():
            raise FileNotFoundError(f"Receipt file not found: {source}")

        owner_dir = self.root / owner
        owner_dir.mkdir(parents=True, exist_ok=True)

        stamp = int(time.time() * 1000)
        target = owner_dir / f"{transaction_id}-{stamp}{source_path.suffix}"
        while target.exists():
            stamp += 1
            target = owner_dir / f"{transaction_id}-{stamp}{source_path.suffix}"

        shutil.copyfile(source_path, target)
        logger.info("Stored receipt %s for transaction %d", target.name, transaction_id)
        return f"{owner}/{target.name}"

    def public_url(self, path: str) -> str:
        return self._resolve(path).as_uri()

    def remove(self, path: str) -> None:
        """Delete a receipt.

        Raises:
            NotFoundError: If no such receipt exists
        """
        target = self._resolve(path)
        if not target.is_file():
            raise NotFoundError(f"Receipt '{path}' not found")
        target.unlink()
        logger.info("Removed receipt %s", path)

    def list(self, owner: str, search: str = "") -> list[str]:
        owner_dir = self.root / owner
        if not owner_dir.is_dir():
            return []
        return sorted(
            f"{owner}/{entry.name}"
            for entry in owner_dir.iterdir()
            if entry.is_file() and search in entry.name
        )

    def read(self, path: str) -> bytes:
        """Return the content of a receipt.

        Raises:
            NotFoundError: If no such receipt exists
        """
        target = self._resolve(path)
        if not target.is_file():
            raise NotFoundError(f"Receipt '{path}' not found")
        return target.read_bytes()


def create_local_store(root: Optional[str] = None) -> LocalReceiptStore:
    """Create a local receipt store.

    Args:
        root: Storage directory. If None, checks RESELLIT_RECEIPTS_DIR
            environment variable, then defaults to ~/.resellit/receipts
    """
    if root is None:
        root = os.environ.get(RECEIPTS_DIR_ENV)

    if root is None:
        root_path = Path.home() / ".resellit" / "receipts"
    else:
        root_path = Path(root)

    root_path.mkdir(parents=True, exist_ok=True)
    return LocalReceiptStore(root_path)
