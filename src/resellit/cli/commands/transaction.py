"""Transaction (purchase order) commands."""

import click
from decimal import Decimal
from resellit.cli.context import get_db, get_receipt_store
from resellit.cli.date_filters import resolve_cli_date_range
from resellit.cli.error_handling import handle_domain_error, report_import_state
from resellit.domain.entities import TransactionStatus
from resellit.domain.errors import NotFoundError
from resellit.domain.export import TRANSACTION_TEMPLATE_FILENAME, transaction_template
from resellit.domain.importing import run_import
from resellit.domain.product import ProductService
from resellit.domain.reporting import ReportingService
from resellit.domain.transaction import TransactionService
from resellit.domain.transaction_import import TransactionImportService
from resellit.storage.local import default_owner
from resellit.utils.amount_parser import parse_amount
from resellit.utils.date_parser import parse_date

STATUS_CHOICE = click.Choice([s.value for s in TransactionStatus], case_sensitive=False)


@click.group()
def transaction_group():
    """Manage purchase orders."""
    pass


@transaction_group.command("import")
@click.argument("csv_file", type=click.Path())
@click.pass_context
def import_transactions(ctx, csv_file: str):
    """Import purchase orders from a CSV file.

    Each row is one line item. Rows sharing a TXN ID update that existing
    order; otherwise rows are grouped by PO number. Unknown suppliers and
    ASINs are created automatically.
    """
    service = TransactionImportService(get_db(ctx))
    state = run_import(service.import_csv, csv_file)
    report_import_state(ctx, state)


@transaction_group.command("template")
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=TRANSACTION_TEMPLATE_FILENAME,
    show_default=True,
    help="Where to write the template",
)
def write_template(output: str):
    """Write a purchase order import template with sample rows."""
    transaction_template(output)
    click.echo(f"Template written to {output}")


@transaction_group.command("add")
@click.option("--supplier", "supplier_name", required=True, help="Supplier name")
@click.option("--date", "ordered", default="today", show_default=True, help="Ordered date")
@click.option("--delivery-date", help="Delivery date")
@click.option("--po", "po_number", default="", help="PO number (auto-generated if omitted)")
@click.option("--category", default="", help="Category (defaults to Stock)")
@click.option("--payment", "payment_method", default="", help="Payment method")
@click.option("--status", type=STATUS_CHOICE, default=TransactionStatus.PENDING.value, show_default=True)
@click.option("--shipping", default="0", help="Shipping cost")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    supplier_name: str,
    ordered: str,
    delivery_date: str | None,
    po_number: str,
    category: str,
    payment_method: str,
    status: str,
    shipping: str,
    notes: str,
):
    """Create a purchase order.

    Examples:
        resellit transaction add --supplier "Acme Wholesale"
        resellit transaction add --supplier Acme --date 2025-01-15 --shipping 5.99
    """
    db = get_db(ctx)
    service = TransactionService(db)

    try:
        supplier = db.get_supplier_by_name(supplier_name)
        if supplier is None:
            raise NotFoundError(f"Supplier '{supplier_name}' not found")
        transaction_id = service.create_transaction(
            ordered_date=parse_date(ordered),
            delivery_date=parse_date(delivery_date) if delivery_date else None,
            supplier_id=supplier.id,
            po_number=po_number,
            category=category,
            payment_method=payment_method,
            status=status,
            shipping_cost=parse_amount(shipping),
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    transaction = service.require_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id} ({transaction.po_number})")


@transaction_group.command("add-item")
@click.argument("transaction_id", type=int)
@click.argument("asin")
@click.argument("quantity", type=int)
@click.argument("buy_price")
@click.option("--sell", "sell_price", default="0", help="Sell price per unit")
@click.option("--fee", "est_fee", default="0", help="Estimated fee per unit")
@click.pass_context
def add_item(ctx, transaction_id: int, asin: str, quantity: int, buy_price: str, sell_price: str, est_fee: str):
    """Add a line item to a purchase order.

    Unknown ASINs are created as incomplete products.
    """
    db = get_db(ctx)
    service = TransactionService(db)
    product_service = ProductService(db)

    try:
        transaction = service.require_transaction(transaction_id)
        product_service.find_or_create_stub(asin.strip(), transaction.category)
        item_id = service.add_item(
            transaction_id=transaction_id,
            asin=asin,
            quantity=quantity,
            buy_price=parse_amount(buy_price),
            sell_price=parse_amount(sell_price),
            est_fee=parse_amount(est_fee),
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added item {item_id} to transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--start-date", help="Earliest ordered date")
@click.option("--end-date", help="Latest ordered date")
@click.option("--this-month", is_flag=True, help="Orders from this month")
@click.option("--last-month", is_flag=True, help="Orders from last month")
@click.option("--this-year", is_flag=True, help="Orders from this year")
@click.option("--last-year", is_flag=True, help="Orders from last year")
@click.option("--supplier", "supplier_name", help="Only orders from this supplier")
@click.option("--status", type=STATUS_CHOICE, help="Only orders with this status")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
    supplier_name: str | None,
    status: str | None,
):
    """List purchase orders with cost, profit and ROI."""
    db = get_db(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "last-month": last_month,
            "this-year": this_year,
            "last-year": last_year,
        },
    )

    supplier_id = None
    if supplier_name is not None:
        supplier = db.get_supplier_by_name(supplier_name)
        if supplier is None:
            click.echo(f"Error: Supplier '{supplier_name}' not found", err=True)
            ctx.exit(1)
        supplier_id = supplier.id

    rows = ReportingService(db).transaction_metrics(
        start_date=start, end_date=end, supplier_id=supplier_id, status=status
    )
    if not rows:
        click.echo("No transactions found.")
        return

    suppliers = {s.id: s.name for s in db.list_suppliers()}
    click.echo(
        f"\n{'ID':>5} {'Ordered':<10} {'PO':<10} {'Supplier':<18} {'Status':<19} "
        f"{'Cost':>10} {'Profit':>10} {'ROI':>7}"
    )
    click.echo("-" * 96)
    for m in rows:
        txn = m.transaction
        ordered = txn.ordered_date.isoformat() if txn.ordered_date else "-"
        click.echo(
            f"{txn.id:>5} {ordered:<10} {txn.po_number[:10]:<10} "
            f"{suppliers.get(txn.supplier_id, '-')[:18]:<18} {txn.status:<19} "
            f"£{m.total_cost:>9,.2f} £{m.total_profit:>9,.2f} {m.total_roi:>6.1f}%"
        )

    total_cost = sum((m.total_cost for m in rows), Decimal("0"))
    total_profit = sum((m.total_profit for m in rows), Decimal("0"))
    click.echo("-" * 96)
    click.echo(f"TOTAL  Cost: £{total_cost:,.2f} | Profit: £{total_profit:,.2f} | Count: {len(rows)}")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a purchase order with its line items and receipts."""
    db = get_db(ctx)
    try:
        detail = ReportingService(db).transaction_detail(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    txn = detail.transaction
    supplier = db.get_supplier(txn.supplier_id) if txn.supplier_id else None

    click.echo(f"\nTransaction {txn.id} ({txn.po_number})")
    click.echo(f"  Supplier:  {supplier.name if supplier else '-'}")
    click.echo(f"  Ordered:   {txn.ordered_date or '-'}")
    click.echo(f"  Delivered: {txn.delivery_date or '-'}")
    click.echo(f"  Status:    {txn.status}")
    click.echo(f"  Category:  {txn.category}")
    click.echo(f"  Payment:   {txn.payment_method}")
    click.echo(f"  Shipping:  £{txn.shipping_cost:,.2f}")
    if txn.notes:
        click.echo(f"  Notes:     {txn.notes}")

    click.echo(f"\n  {'ASIN':<14} {'Qty':>5} {'Buy':>8} {'Sell':>8} {'Fee':>7} {'Cost':>10} {'Profit':>10} {'ROI':>7}")
    for m in detail.items:
        item = m.item
        qty = f"{m.display_quantity}" if m.display_quantity == item.quantity else f"{m.display_quantity}x{m.product.pack}"
        click.echo(
            f"  {item.asin:<14} {qty:>5} {item.buy_price:>8.2f} {item.sell_price:>8.2f} "
            f"{item.est_fee:>7.2f} {m.item_cost:>10.2f} {m.estimated_profit:>10.2f} {m.roi:>6.1f}%"
        )

    click.echo(
        f"\n  Total cost: £{detail.total_cost:,.2f} | Profit: £{detail.total_profit:,.2f} "
        f"| ROI: {detail.total_roi:.1f}%"
    )

    receipts = get_receipt_store(ctx).list_for_transaction(default_owner(), txn.id)
    if receipts:
        click.echo("\n  Receipts:")
        for path in receipts:
            click.echo(f"    {path}")


@transaction_group.command("status")
@click.argument("transaction_id", type=int)
@click.argument("status", type=STATUS_CHOICE)
@click.pass_context
def set_status(ctx, transaction_id: int, status: str):
    """Change the status of a purchase order."""
    service = TransactionService(get_db(ctx))
    try:
        service.update_status(transaction_id, status)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction {transaction_id} is now {status.lower()}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
