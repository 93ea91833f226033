"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from catalog.application.activate_product import ActivateProductHandler
from catalog.application.create_product import CreateProductHandler
from catalog.application.deactivate_product import DeactivateProductHandler
from catalog.application.get_product import GetProductHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import DomainException, InfrastructureError
from catalog.domain.service.pricing_calculator import PricingCalculator
from catalog.infrastructure.bootstrap import catalog_store, clock, product_repository
from catalog.infrastructure.cli.handlers import command_handler


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--category", required=True, help="Catalog category.")
@click.option("--price", required=True, help="Base price in minor units (e.g. 1999).")
@click.option("--currency", default="USD", show_default=True, help="ISO-4217 code.")
def product_create(
    name: str, description: str, category: str, price: str, currency: str
) -> None:
    """Add a new product to the catalog."""
    handler = command_handler(CreateProductHandler)

    try:
        product_id = handler.handle(
            name=name,
            description=description,
            category=category,
            price=price,
            currency=currency,
        )
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} '{name.strip()}' created")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a product with its current effective price."""
    handler = GetProductHandler(
        product_repo=product_repository(catalog_store()),
        pricing=PricingCalculator(),
        clock=clock(),
    )

    try:
        dto = handler.handle(product_id)
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id}")
    click.echo(f"  Name:       {dto.name}")
    click.echo(f"  Category:   {dto.category}")
    click.echo(f"  Status:     {dto.status}")
    click.echo(f"  Base price: {dto.base_price.display}")
    click.echo(f"  Price now:  {dto.effective_price.display}")
    if dto.discount is not None:
        state = "active" if dto.discount.is_active else "not in effect"
        click.echo(
            f"  Discount:   {dto.discount.percentage}% "
            f"({dto.discount.starts_at} -> {dto.discount.ends_at}, {state})"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--category", default=None, help="New category.")
@click.option("--price", default=None, help="New base price in minor units.")
def product_update(
    product_id: str,
    name: str | None,
    description: str | None,
    category: str | None,
    price: str | None,
) -> None:
    """Update product details."""
    handler = command_handler(UpdateProductHandler)

    try:
        handler.handle(
            product_id=product_id,
            name=name,
            description=description,
            category=category,
            price=price,
        )
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} updated")


@click.command("activate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_activate(product_id: str) -> None:
    """Make a product sellable."""
    handler = command_handler(ActivateProductHandler)

    try:
        handler.handle(product_id)
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} activated")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_deactivate(product_id: str) -> None:
    """Withdraw a product from sale (drops any discount)."""
    handler = command_handler(DeactivateProductHandler)

    try:
        handler.handle(product_id)
    except (DomainException, InfrastructureError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deactivated")
