"""Receipt storage for resellit application."""

from resellit.storage.base import ReceiptStore
from resellit.storage.local import LocalReceiptStore, create_local_store, default_owner

__all__ = ["ReceiptStore", "LocalReceiptStore", "create_local_store", "default_owner"]
