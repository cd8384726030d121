"""Abstract receipt storage interface."""

from abc import ABC, abstractmethod


class ReceiptStore(ABC):
    """Object storage for receipt files.

    Paths are relative to the store root and always start with the owner
    scope, e.g. "local/12-1718000000000.pdf".
    """

    @abstractmethod
    def upload(self, owner: str, transaction_id: int, source: str) -> str:
        """Store a copy of a local file as a receipt. Returns its path."""
        pass

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Return a URL from which the receipt can be fetched."""
        pass

    @abstractmethod
    def remove(self, path: str) -> None:
        """Delete a receipt."""
        pass

    def list_for_transaction(self, owner: str, transaction_id: int) -> list[str]:
        """List receipts attached to one transaction, oldest first."""
        prefix = f"{transaction_id}-"
        return sorted(
            path for path in self.list(owner, prefix) if path.rsplit("/", 1)[-1].startswith(prefix)
        )

    @abstractmethod
    def list(self, owner: str, search: str = "") -> list[str]:
        """List receipt paths for an owner whose file name contains search."""
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Return the content of a receipt."""
        pass
