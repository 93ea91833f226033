"""CLI commands for inspecting the outbox."""

from __future__ import annotations

import click

from catalog.domain.exceptions import InfrastructureError
from catalog.infrastructure.bootstrap import catalog_store
from catalog.infrastructure.persistence.schema import OutboxTable as T


@click.command("pending")
def outbox_pending() -> None:
    """List outbox events waiting to be relayed."""
    try:
        rows = catalog_store().pending_events()
    except InfrastructureError as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No pending events.")
        return

    click.echo(f"{'Created':<26} {'Type':<26} {'Aggregate':<38} Payload")
    click.echo("-" * 110)
    for row in rows:
        click.echo(
            f"{row[T.CREATED_AT]:<26} {row[T.EVENT_TYPE]:<26} "
            f"{row[T.AGGREGATE_ID]:<38} {row[T.PAYLOAD]}"
        )
