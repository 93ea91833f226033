"""Domain service: Pricing Calculator.

Stateless price computation over the Money and Discount value objects.
Only read-side queries consult it; mutation paths never do.
"""

from __future__ import annotations

from datetime import datetime

from catalog.domain.exceptions import ErrorKind, ValidationError
from catalog.domain.model.value_objects import Discount, Money


class PricingCalculator:

    def effective_price(
        self, base_price: Money, discount: Discount | None, now: datetime
    ) -> Money:
        """Price a buyer pays at ``now``.

        Returns ``base_price`` unchanged unless ``discount`` is in effect.
        """
        _require_base_price(base_price)
        if not self.is_discounted(discount, now):
            return base_price
        return base_price.apply_percentage_discount(discount.percentage_value)

    def discount_amount(
        self, base_price: Money, discount: Discount | None, now: datetime
    ) -> Money:
        """Absolute saving at ``now``; zero in ``base_price``'s currency if none."""
        _require_base_price(base_price)
        if not self.is_discounted(discount, now):
            return Money(0, base_price.currency)
        return base_price - self.effective_price(base_price, discount, now)

    @staticmethod
    def is_discounted(discount: Discount | None, now: datetime) -> bool:
        return discount is not None and discount.is_valid_at(now)


def _require_base_price(base_price: Money | None) -> None:
    if base_price is None:
        raise ValidationError(
            ErrorKind.BASE_PRICE_REQUIRED, "Base price is required", field="base_price"
        )
