"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MoneyDTO:
    amount: int  # minor units
    currency: str
    display: str  # formatted, e.g. "10.00 USD"


@dataclass(frozen=True)
class DiscountDTO:
    percentage: str
    starts_at: str  # ISO-8601
    ends_at: str
    is_active: bool


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product with its price as of the query time."""

    id: str
    name: str
    description: str
    category: str
    status: str
    base_price: MoneyDTO
    effective_price: MoneyDTO
    discount_amount: MoneyDTO
    is_discounted: bool
    discount: DiscountDTO | None
