import logging

import click

from catalog.infrastructure.cli.discount_commands import discount_apply, discount_remove
from catalog.infrastructure.cli.outbox_commands import outbox_pending
from catalog.infrastructure.cli.product_commands import (
    product_activate,
    product_create,
    product_deactivate,
    product_show,
    product_update,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Catalog: product catalog with transactional outbox"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def discount() -> None:
    """Manage product discounts."""


@cli.group()
def outbox() -> None:
    """Inspect outbox events."""


# Register subcommands
product.add_command(product_activate)
product.add_command(product_create)
product.add_command(product_deactivate)
product.add_command(product_show)
product.add_command(product_update)
discount.add_command(discount_apply)
discount.add_command(discount_remove)
outbox.add_command(outbox_pending)
