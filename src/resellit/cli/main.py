"""Main CLI entry point."""

import logging

import click
from resellit.database.factories import create_sqlite_database

# Import and register all commands at module level
from resellit.cli.commands import (
    budget,
    product,
    receipt,
    report,
    settlement,
    supplier,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RESELLIT_DB_PATH environment variable)",
    envvar="RESELLIT_DB_PATH",
)
@click.option(
    "--receipts-dir",
    type=click.Path(file_okay=False),
    help="Receipt storage directory (overrides RESELLIT_RECEIPTS_DIR environment variable)",
    envvar="RESELLIT_RECEIPTS_DIR",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, receipts_dir: str | None, verbose: bool):
    """resellit - Purchasing, stock and budget tracking for resellers.

    Import product catalogues, purchase orders and marketplace settlement
    reports from CSV, then track spend, profit and ROI against a monthly
    budget.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.obj["receipts_dir"] = receipts_dir

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
product.register_commands(cli)
settlement.register_commands(cli)
transaction.register_commands(cli)
supplier.register_commands(cli)
budget.register_commands(cli)
report.register_commands(cli)
receipt.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
