"""Marketplace settlement commands."""

import click
from resellit.cli.context import get_db
from resellit.cli.error_handling import report_import_state
from resellit.domain.importing import run_import
from resellit.domain.settlement_import import SettlementImportService


@click.group()
def settlement_group():
    """Manage marketplace settlement data."""
    pass


@settlement_group.command("import")
@click.argument("csv_file", type=click.Path())
@click.pass_context
def import_settlement(ctx, csv_file: str):
    """Replace all settlement rows with a settlement report.

    Existing settlement data is always cleared first, even if the file
    turns out to be invalid.
    """
    service = SettlementImportService(get_db(ctx))
    state = run_import(service.import_csv, csv_file)
    report_import_state(ctx, state)


@settlement_group.command("list")
@click.pass_context
def list_settlement(ctx):
    """List imported settlement rows."""
    rows = get_db(ctx).list_settlement_transactions()
    if not rows:
        click.echo("No settlement data found.")
        return

    click.echo(f"\n{'Date':<12} {'Type':<14} {'Order ID':<22} {'Total':>10}  Product")
    click.echo("-" * 90)
    for row in rows:
        row_date = row.date.isoformat() if row.date else "-"
        click.echo(
            f"{row_date:<12} {row.type[:14]:<14} {row.order_id[:22]:<22} "
            f"£{row.total:>9,.2f}  {row.product_details[:30]}"
        )
    click.echo(f"\n{len(rows)} row{'s' if len(rows) != 1 else ''}")


def register_commands(cli):
    """Register settlement commands with main CLI."""
    cli.add_command(settlement_group, name="settlement")
