"""CLI commands for product discounts."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from catalog.application.apply_discount import ApplyDiscountHandler
from catalog.application.remove_discount import RemoveDiscountHandler
from catalog.domain.exceptions import DomainException, InfrastructureError
from catalog.infrastructure.cli.handlers import command_handler


def _as_utc(moment: datetime) -> datetime:
    # click.DateTime yields naive values; the CLI treats them as UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@click.command("apply")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--percentage", required=True, help="Percent off, e.g. 12.5.")
@click.option("--starts-at", required=True, type=click.DateTime(), help="Start (UTC).")
@click.option("--ends-at", required=True, type=click.DateTime(), help="End, exclusive (UTC).")
def discount_apply(
    product_id: str, percentage: str, starts_at: datetime, ends_at: datetime
) -> None:
    """Apply a percentage discount to an active product."""
    handler = command_handler(ApplyDiscountHandler)

    try:
        handler.handle(
            product_id=product_id,
            percentage=percentage,
            starts_at=_as_utc(starts_at),
            ends_at=_as_utc(ends_at),
        )
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Discount of {percentage}% applied to product {product_id}")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
def discount_remove(product_id: str) -> None:
    """Remove the discount from a product."""
    handler = command_handler(RemoveDiscountHandler)

    try:
        handler.handle(product_id)
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Discount removed from product {product_id}")
