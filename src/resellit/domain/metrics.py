"""Derived financial metrics.

Everything here is a pure function of stored records. Only quantities and
unit prices are persisted, so cost, profit and ROI are recomputed on every
read; nothing is cached and inputs are never mutated.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Optional, Sequence

from resellit.domain.entities import (
    OPEN_STATUSES,
    BudgetPacing,
    Budget,
    DashboardMetrics,
    ItemMetrics,
    MonthSummary,
    Product,
    ProductKind,
    ProductMetrics,
    Supplier,
    SupplierMetrics,
    Transaction,
    TransactionItem,
    TransactionMetrics,
)
from resellit.utils.date_parser import days_left_in_month, month_key, shift_month_key

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

HISTORY_MONTHS = 3
EXPECTED_DELIVERY_DAYS = 7


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    return part / whole * HUNDRED if whole > 0 else ZERO


def display_quantity(quantity: int, product: Optional[Product]) -> int:
    """Quantity in saleable units; bundles count whole packs only.

    The remainder of a partial pack is dropped (10 units of a 4-pack is 2).
    """
    if product is not None and product.kind == ProductKind.BUNDLE.value and product.pack > 1:
        return quantity // product.pack
    return quantity


def item_metrics(item: TransactionItem, product: Optional[Product] = None) -> ItemMetrics:
    """Compute cost, profit and ROI for one line item.

    Examples:
        3 units bought at 2.00, selling at 5.00 with a 0.50 fee cost 6.00,
        make 15.00 - 6.00 - 1.50 = 7.50 profit and return 125%.
    """
    item_cost = item.buy_price * item.quantity
    revenue = item.sell_price * item.quantity
    fees = item.est_fee * item.quantity
    profit = revenue - item_cost - fees

    return ItemMetrics(
        item=item,
        product=product,
        item_cost=item_cost,
        estimated_profit=profit,
        roi=_percent(profit, item_cost),
        display_quantity=display_quantity(item.quantity, product),
    )


def transaction_metrics(
    transaction: Transaction,
    items: Iterable[TransactionItem],
    products: Mapping[str, Product],
) -> TransactionMetrics:
    """Compute totals for a transaction.

    Args:
        transaction: The purchase order
        items: Its line items
        products: Products keyed by ASIN; items with unknown ASINs still count

    Returns:
        TransactionMetrics where total cost includes shipping
    """
    per_item = tuple(item_metrics(item, products.get(item.asin)) for item in items)
    total_cost = sum((m.item_cost for m in per_item), ZERO) + transaction.shipping_cost
    total_profit = sum((m.estimated_profit for m in per_item), ZERO)

    return TransactionMetrics(
        transaction=transaction,
        items=per_item,
        total_cost=total_cost,
        total_profit=total_profit,
        total_roi=_percent(total_profit, total_cost),
    )


def build_transaction_metrics(
    transactions: Iterable[Transaction],
    items: Iterable[TransactionItem],
    products: Iterable[Product],
) -> list[TransactionMetrics]:
    """Join transactions with their items and products, then compute metrics."""
    by_transaction: dict[int, list[TransactionItem]] = defaultdict(list)
    for item in items:
        by_transaction[item.transaction_id].append(item)
    by_asin = {p.asin: p for p in products}
    return [transaction_metrics(t, by_transaction.get(t.id, []), by_asin) for t in transactions]


def _in_month(value: Optional[date], today: date) -> bool:
    return value is not None and value.year == today.year and value.month == today.month


def monthly_spend(metrics: Iterable[TransactionMetrics], today: date) -> Decimal:
    """Total cost of transactions ordered in the current month."""
    return sum(
        (m.total_cost for m in metrics if _in_month(m.transaction.ordered_date, today)),
        ZERO,
    )


def budget_pacing(budget_amount: Decimal, spend: Decimal, today: date) -> BudgetPacing:
    """Work out how much can still be spent per day this month.

    Examples:
        A 1000 budget with 400 spent on the 21st of a 30-day month leaves
        600 over 9 days, a daily target of 66.67.
    """
    remaining = budget_amount - spend
    days_left = days_left_in_month(today)
    if remaining > 0 and days_left > 0:
        daily_target = (remaining / days_left).quantize(CENT, rounding=ROUND_HALF_UP)
    else:
        daily_target = ZERO

    return BudgetPacing(
        budget_amount=budget_amount,
        monthly_spend=spend,
        budget_remaining=remaining,
        budget_percentage=_percent(spend, budget_amount),
        days_left_in_month=days_left,
        daily_spend_target=daily_target,
    )


def historical_months(
    budgets: Iterable[Budget],
    metrics: Iterable[TransactionMetrics],
    today: date,
) -> tuple[MonthSummary, ...]:
    """Summarize the three months before the current one.

    Budgets and transaction totals are merged by YYYY-MM. Only months
    strictly before the current month are kept and the three most recent of
    those are used. When fewer than three exist, earlier months with zero
    values are added one calendar month at a time, counting back from the
    earliest month found (or from the current month if none were).

    Returns:
        Exactly three MonthSummary values, oldest first
    """
    budget_by_month: dict[str, Decimal] = defaultdict(lambda: ZERO)
    spend_by_month: dict[str, Decimal] = defaultdict(lambda: ZERO)
    profit_by_month: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for budget in budgets:
        budget_by_month[budget.month_key] += budget.amount
    for m in metrics:
        ordered = m.transaction.ordered_date
        if ordered is None:
            continue
        spend_by_month[month_key(ordered)] += m.total_cost
        profit_by_month[month_key(ordered)] += m.total_profit

    current = month_key(today)
    keys = set(budget_by_month) | set(spend_by_month)
    past = sorted((k for k in keys if k < current), reverse=True)[:HISTORY_MONTHS]

    earliest = past[-1] if past else current
    while len(past) < HISTORY_MONTHS:
        earliest = shift_month_key(earliest, -1)
        past.append(earliest)

    return tuple(
        MonthSummary(
            month_key=key,
            budget=budget_by_month.get(key, ZERO),
            spend=spend_by_month.get(key, ZERO),
            profit=profit_by_month.get(key, ZERO),
        )
        for key in reversed(past)
    )


def product_metrics(product: Product, items: Iterable[TransactionItem]) -> ProductMetrics:
    """Stock position for a product across every purchase of it."""
    own = [item for item in items if item.asin == product.asin]
    total_quantity = sum(item.quantity for item in own)
    total_cost = sum((item.buy_price * item.quantity for item in own), ZERO)
    average_buy_price = total_cost / total_quantity if total_quantity > 0 else ZERO
    adjusted = total_quantity // product.pack if product.pack > 1 else total_quantity

    return ProductMetrics(
        product=product,
        average_buy_price=average_buy_price,
        total_quantity=total_quantity,
        adjusted_quantity=adjusted,
        stored=adjusted - product.shipped,
    )


def supplier_metrics(
    suppliers: Iterable[Supplier], metrics: Sequence[TransactionMetrics]
) -> list[SupplierMetrics]:
    """Aggregate orders per supplier, busiest supplier first."""
    results = []
    for supplier in suppliers:
        own = [m for m in metrics if m.transaction.supplier_id == supplier.id]
        order_count = len(own)
        total_spend = sum((m.total_cost for m in own), ZERO)
        profit = sum((m.total_profit for m in own), ZERO)
        dates = [m.transaction.ordered_date for m in own if m.transaction.ordered_date]

        results.append(
            SupplierMetrics(
                supplier=supplier,
                order_count=order_count,
                total_spend=total_spend,
                estimated_profit=profit,
                roi=_percent(profit, total_spend),
                average_order_value=total_spend / order_count if order_count else ZERO,
                last_order_date=max(dates) if dates else None,
            )
        )

    # sorted() is stable, so ties keep supplier name order
    return sorted(results, key=lambda r: r.order_count, reverse=True)


def on_time_delivery_rate(transactions: Iterable[Transaction]) -> Decimal:
    """Percentage of finalized orders delivered within a week of ordering."""
    delivered = [t for t in transactions if t.is_finalized]
    if not delivered:
        return ZERO
    on_time = [
        t
        for t in delivered
        if t.ordered_date is not None
        and t.delivery_date is not None
        and t.delivery_date <= t.ordered_date + timedelta(days=EXPECTED_DELIVERY_DAYS)
    ]
    return Decimal(len(on_time)) / Decimal(len(delivered)) * HUNDRED


def dashboard_metrics(
    metrics: Sequence[TransactionMetrics],
    budgets: Sequence[Budget],
    today: date,
) -> DashboardMetrics:
    """Compute the headline dashboard figures."""
    transactions = [m.transaction for m in metrics]
    spend = monthly_spend(metrics, today)
    current_budget = sum(
        (b.amount for b in budgets if b.year == today.year and b.month == today.month), ZERO
    )
    pacing = budget_pacing(current_budget, spend, today)

    total_cost = sum((m.total_cost for m in metrics), ZERO)
    total_profit = sum((m.total_profit for m in metrics), ZERO)

    return DashboardMetrics(
        total_orders=len(transactions),
        total_stock_ordered=sum(im.item.quantity for m in metrics for im in m.items),
        total_estimated_profit=total_profit,
        monthly_spend=spend,
        average_roi=_percent(total_profit, total_cost),
        budget_remaining=pacing.budget_remaining,
        pending_orders=sum(1 for t in transactions if t.status in OPEN_STATUSES),
        delivered_orders=sum(1 for t in transactions if t.is_finalized),
        on_time_delivery_rate=on_time_delivery_rate(transactions),
        pacing=pacing,
        history=historical_months(budgets, metrics, today),
    )
