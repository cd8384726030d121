"""Shared accessors for objects stored on the click context."""

import click

from resellit.database.base import Database
from resellit.storage.base import ReceiptStore
from resellit.storage.local import create_local_store


def get_db(ctx: click.Context) -> Database:
    return ctx.obj["db"]


def get_receipt_store(ctx: click.Context) -> ReceiptStore:
    """Create the receipt store on first use."""
    if ctx.obj.get("store") is None:
        ctx.obj["store"] = create_local_store(ctx.obj.get("receipts_dir"))
    return ctx.obj["store"]
