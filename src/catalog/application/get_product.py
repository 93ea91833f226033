"""Application service: Get Product use case (query).

Read-only: loads the product and prices it with the PricingCalculator
at the current clock time.  Nothing is written and no events are raised.
"""

from __future__ import annotations

from catalog.application.dto import DiscountDTO, MoneyDTO, ProductDTO
from catalog.domain.clock import Clock
from catalog.domain.exceptions import EntityNotFoundError, ErrorKind
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductRepository
from catalog.domain.service.pricing_calculator import PricingCalculator


class GetProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        pricing: PricingCalculator,
        clock: Clock,
    ) -> None:
        self._product_repo = product_repo
        self._pricing = pricing
        self._clock = clock

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(
                ErrorKind.PRODUCT_NOT_FOUND,
                f"Product with ID '{product_id}' not found",
                field="id",
                value=product_id,
            )

        now = self._clock.now()
        base = product.base_price
        discount = product.discount

        discount_dto = None
        if discount is not None:
            discount_dto = DiscountDTO(
                percentage=discount.percentage,
                starts_at=discount.starts_at.isoformat(),
                ends_at=discount.ends_at.isoformat(),
                is_active=discount.is_valid_at(now),
            )

        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            category=product.category,
            status=product.status.value,
            base_price=_money_dto(base),
            effective_price=_money_dto(self._pricing.effective_price(base, discount, now)),
            discount_amount=_money_dto(self._pricing.discount_amount(base, discount, now)),
            is_discounted=self._pricing.is_discounted(discount, now),
            discount=discount_dto,
        )


def _money_dto(money: Money) -> MoneyDTO:
    return MoneyDTO(amount=money.amount, currency=money.currency, display=str(money))
