"""Receipt commands."""

import click
from resellit.cli.context import get_db, get_receipt_store
from resellit.cli.error_handling import handle_domain_error
from resellit.domain.transaction import TransactionService
from resellit.storage.local import default_owner


@click.group()
def receipt_group():
    """Manage receipts attached to purchase orders."""
    pass


@receipt_group.command("upload")
@click.argument("transaction_id", type=int)
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_context
def upload(ctx, transaction_id: int, file: str):
    """Attach a receipt file to a purchase order."""
    store = get_receipt_store(ctx)
    try:
        TransactionService(get_db(ctx)).require_transaction(transaction_id)
        path = store.upload(default_owner(), transaction_id, file)
    except (ValueError, OSError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Stored {path}")
    click.echo(store.public_url(path))


@receipt_group.command("list")
@click.argument("transaction_id", type=int)
@click.pass_context
def list_receipts(ctx, transaction_id: int):
    """List receipts attached to a purchase order."""
    store = get_receipt_store(ctx)
    paths = store.list_for_transaction(default_owner(), transaction_id)
    if not paths:
        click.echo("No receipts found.")
        return
    for path in paths:
        click.echo(f"{path}  {store.public_url(path)}")


@receipt_group.command("remove")
@click.argument("path")
@click.pass_context
def remove(ctx, path: str):
    """Delete a receipt by path or URL."""
    try:
        get_receipt_store(ctx).remove(path)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed {path}")


def register_commands(cli):
    """Register receipt commands with main CLI."""
    cli.add_command(receipt_group, name="receipt")
