"""Product (ASIN) commands."""

import click
from decimal import Decimal
from resellit.cli.context import get_db
from resellit.cli.error_handling import handle_domain_error, report_import_state
from resellit.domain.entities import ProductCategory, ProductKind
from resellit.domain.export import PRODUCT_TEMPLATE_FILENAME, ExportService, product_template
from resellit.domain.importing import run_import
from resellit.domain.product import ProductService
from resellit.domain.product_import import ProductImportService
from resellit.utils.amount_parser import parse_amount


@click.group()
def product_group():
    """Manage products (ASINs)."""
    pass


@product_group.command("import")
@click.argument("csv_file", type=click.Path())
@click.pass_context
def import_products(ctx, csv_file: str):
    """Import or update products from a CSV file.

    Rows for ASINs that already exist update the stored product, so the
    same file can be imported again safely. Use 'product template' for the
    expected columns.
    """
    service = ProductImportService(get_db(ctx))
    state = run_import(service.import_csv, csv_file)
    report_import_state(ctx, state)


@product_group.command("template")
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=PRODUCT_TEMPLATE_FILENAME,
    show_default=True,
    help="Where to write the template",
)
def write_template(output: str):
    """Write an empty product import template."""
    product_template(output)
    click.echo(f"Template written to {output}")


@product_group.command("export")
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default="products_export.csv",
    show_default=True,
    help="Where to write the export",
)
@click.pass_context
def export_products(ctx, output: str):
    """Export all products, with their latest pricing, as CSV."""
    service = ExportService(get_db(ctx))
    service.export_products(output)
    click.echo(f"Products exported to {output}")


@product_group.command("list")
@click.option("--incomplete", is_flag=True, help="Only products missing title, brand or image")
@click.pass_context
def list_products(ctx, incomplete: bool):
    """List products."""
    service = ProductService(get_db(ctx))
    products = service.list_products(incomplete_only=incomplete)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"\n{'ASIN':<12} {'Type':<7} {'Pack':>4} {'Category':<8} {'Shipped':>7}  Title")
    click.echo("-" * 80)
    for p in products:
        title = p.title or "(no title)"
        flag = " [incomplete]" if p.is_incomplete else ""
        click.echo(
            f"{p.asin:<12} {p.kind:<7} {p.pack:>4} {p.category:<8} {p.shipped:>7}  {title[:40]}{flag}"
        )


@product_group.command("add")
@click.argument("asin")
@click.option("--title", default="", help="Product title")
@click.option("--brand", default="", help="Brand")
@click.option("--image-url", default="", help="Image URL")
@click.option(
    "--type",
    "kind",
    type=click.Choice([k.value for k in ProductKind]),
    default=ProductKind.SINGLE.value,
    show_default=True,
)
@click.option("--size", "pack", type=int, default=1, show_default=True, help="Units per bundle")
@click.option(
    "--category",
    type=click.Choice([c.value for c in ProductCategory]),
    default=ProductCategory.STOCK.value,
    show_default=True,
)
@click.option("--buy-price", help="Buy price")
@click.option("--sell-price", help="Sell price")
@click.option("--est-fee", help="Estimated marketplace fee")
@click.option("--weight", help="Weight")
@click.option("--weight-unit", default=None, help="Weight unit (e.g. g, kg)")
@click.option("--fnsku", default=None, help="Fulfilment network SKU")
@click.pass_context
def add_product(
    ctx,
    asin: str,
    title: str,
    brand: str,
    image_url: str,
    kind: str,
    pack: int,
    category: str,
    buy_price: str | None,
    sell_price: str | None,
    est_fee: str | None,
    weight: str | None,
    weight_unit: str | None,
    fnsku: str | None,
):
    """Add a product.

    Examples:
        resellit product add B08N5WRWNW --title "Desk lamp" --brand Acme
        resellit product add B07XJ8C8F5 --type Bundle --size 4 --buy-price 8.99
    """
    service = ProductService(get_db(ctx))

    try:
        prices = [parse_amount(v) if v else None for v in (buy_price, sell_price, est_fee)]
        weight_value = parse_amount(weight) if weight else None
        service.create_product(
            asin=asin,
            title=title,
            brand=brand,
            image_url=image_url,
            kind=kind,
            pack=pack,
            category=category,
            weight=weight_value,
            weight_unit=weight_unit,
            fnsku=fnsku,
        )
        if any(p is not None for p in prices):
            buy, sell, fee = (p if p is not None else Decimal("0") for p in prices)
            service.record_pricing(asin, buy, sell, fee)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added product {asin.strip()}")


@product_group.command("ship")
@click.argument("asin")
@click.argument("shipped", type=int)
@click.pass_context
def ship_product(ctx, asin: str, shipped: int):
    """Set how many units of a product have been shipped."""
    service = ProductService(get_db(ctx))
    try:
        service.set_shipped(asin, shipped)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{asin}: {shipped} shipped")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
