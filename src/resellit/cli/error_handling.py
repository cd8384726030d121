"""CLI error handling helpers."""

import click

from resellit.domain.entities import ImportFailed, ImportState, ImportSucceeded
from resellit.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError | OSError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_import_state(ctx: click.Context, state: ImportState) -> None:
    """Print the single summary for a finished import.

    A rejected file prints one error and exits 1. Otherwise the summary is
    printed, followed by any row-level errors on stderr.
    """
    if isinstance(state, ImportFailed):
        click.echo(f"Error: {state.reason}", err=True)
        ctx.exit(1)
    elif isinstance(state, ImportSucceeded):
        click.echo(state.summary)
        for error in state.result.errors:
            click.echo(f"  {error}", err=True)
