"""Supplier commands."""

import click
from resellit.cli.context import get_db
from resellit.cli.error_handling import handle_domain_error
from resellit.domain.supplier import SupplierService


@click.group()
def supplier_group():
    """Manage suppliers."""
    pass


@supplier_group.command("add")
@click.argument("name", metavar="SUPPLIER_NAME")
@click.option("--address", default="", help="Postal address")
@click.option("--email", default="", help="Contact email")
@click.option("--phone", default="", help="Contact phone number")
@click.option("--site", default="", help="Website")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def add_supplier(ctx, name: str, address: str, email: str, phone: str, site: str, notes: str):
    """Add a supplier.

    Examples:
        resellit supplier add "Acme Wholesale"
        resellit supplier add "Bargain Outlet" --site https://example.com
    """
    service = SupplierService(get_db(ctx))
    try:
        supplier_id = service.create_supplier(
            name=name, address=address, email=email, phone=phone, site=site, notes=notes
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created supplier '{name.strip()}' (ID: {supplier_id})")


@supplier_group.command("list")
@click.pass_context
def list_suppliers(ctx):
    """List all suppliers."""
    suppliers = SupplierService(get_db(ctx)).list_suppliers()
    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo("\nSuppliers:")
    click.echo("-" * 60)
    for s in suppliers:
        contact = s.email or s.phone or s.site
        click.echo(f"ID: {s.id:3d} | {s.name:24s} | {contact}")


def register_commands(cli):
    """Register supplier commands with main CLI."""
    cli.add_command(supplier_group, name="supplier")
