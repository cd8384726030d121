"""Budget commands."""

import click
from datetime import date
from resellit.cli.context import get_db
from resellit.cli.error_handling import handle_domain_error
from resellit.domain.budget import BudgetService
from resellit.domain.reporting import ReportingService
from resellit.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Manage monthly budgets."""
    pass


@budget_group.command("set")
@click.argument("year", type=int)
@click.argument("month", type=int)
@click.argument("amount")
@click.pass_context
def set_budget(ctx, year: int, month: int, amount: str):
    """Set the budget for a month, replacing any previous value.

    Examples:
        resellit budget set 2025 1 1500
    """
    service = BudgetService(get_db(ctx))
    try:
        value = parse_amount(amount)
        service.set_budget(year, month, value)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Budget for {year}-{month:02d} set to £{value:,.2f}")


@budget_group.command("show")
@click.pass_context
def show_budget(ctx):
    """Show this month's pacing and the previous three months."""
    dashboard = ReportingService(get_db(ctx)).dashboard(date.today())
    pacing = dashboard.pacing

    click.echo("\nThis month:")
    click.echo(f"  Budget:       £{pacing.budget_amount:,.2f}")
    click.echo(f"  Spent:        £{pacing.monthly_spend:,.2f} ({pacing.budget_percentage:.1f}%)")
    click.echo(f"  Remaining:    £{pacing.budget_remaining:,.2f}")
    click.echo(f"  Days left:    {pacing.days_left_in_month}")
    click.echo(f"  Daily target: £{pacing.daily_spend_target:,.2f}")

    click.echo(f"\n{'Month':<9} {'Budget':>12} {'Spend':>12} {'Profit':>12}")
    click.echo("-" * 48)
    for month in dashboard.history:
        click.echo(
            f"{month.month_key:<9} £{month.budget:>11,.2f} £{month.spend:>11,.2f} £{month.profit:>11,.2f}"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
