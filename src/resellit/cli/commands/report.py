"""Reporting commands."""

import click
from datetime import date
from resellit.cli.context import get_db, get_receipt_store
from resellit.cli.error_handling import handle_domain_error
from resellit.domain.export import ExportService
from resellit.domain.reporting import ReportingService
from resellit.storage.local import default_owner


@click.group()
def report_group():
    """Financial reports and backups."""
    pass


@report_group.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show headline figures across all purchase orders."""
    m = ReportingService(get_db(ctx)).dashboard(date.today())

    click.echo("\nDashboard:")
    click.echo("-" * 44)
    click.echo(f"  Total orders:           {m.total_orders}")
    click.echo(f"  Units ordered:          {m.total_stock_ordered}")
    click.echo(f"  Estimated profit:       £{m.total_estimated_profit:,.2f}")
    click.echo(f"  Average ROI:            {m.average_roi:.1f}%")
    click.echo(f"  Spend this month:       £{m.monthly_spend:,.2f}")
    click.echo(f"  Budget remaining:       £{m.budget_remaining:,.2f}")
    click.echo(f"  Daily spend target:     £{m.pacing.daily_spend_target:,.2f}")
    click.echo(f"  Pending orders:         {m.pending_orders}")
    click.echo(f"  Delivered orders:       {m.delivered_orders}")
    click.echo(f"  On-time delivery rate:  {m.on_time_delivery_rate:.1f}%")


@report_group.command("suppliers")
@click.pass_context
def suppliers(ctx):
    """Show spend and profit per supplier, busiest first."""
    rows = ReportingService(get_db(ctx)).supplier_report()
    if not rows:
        click.echo("No suppliers found.")
        return

    click.echo(
        f"\n{'Supplier':<24} {'Orders':>6} {'Spend':>12} {'Profit':>12} {'ROI':>7} {'Avg order':>11}  Last order"
    )
    click.echo("-" * 96)
    for r in rows:
        last = r.last_order_date.isoformat() if r.last_order_date else "-"
        click.echo(
            f"{r.supplier.name[:24]:<24} {r.order_count:>6} £{r.total_spend:>11,.2f} "
            f"£{r.estimated_profit:>11,.2f} {r.roi:>6.1f}% £{r.average_order_value:>10,.2f}  {last}"
        )


@report_group.command("products")
@click.option("--all", "include_other", is_flag=True, help="Include products in the Other category")
@click.pass_context
def products(ctx, include_other: bool):
    """Show stock position per product."""
    rows = ReportingService(get_db(ctx)).product_report(stock_only=not include_other)
    if not rows:
        click.echo("No products found.")
        return

    click.echo(f"\n{'ASIN':<12} {'Avg COG':>9} {'Bought':>7} {'Packs':>6} {'Shipped':>8} {'Stored':>7}  Title")
    click.echo("-" * 90)
    for r in rows:
        p = r.product
        click.echo(
            f"{p.asin:<12} {r.average_buy_price:>9.2f} {r.total_quantity:>7} {r.adjusted_quantity:>6} "
            f"{p.shipped:>8} {r.stored:>7}  {(p.title or '-')[:36]}"
        )


@report_group.command("backup")
@click.option(
    "--output",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory to write the archive to",
)
@click.pass_context
def backup(ctx, output: str):
    """Write an expense report and all receipts to a ZIP archive."""
    service = ExportService(get_db(ctx), get_receipt_store(ctx))
    try:
        path = service.create_backup(output, default_owner())
    except (ValueError, OSError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Backup written to {path}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
