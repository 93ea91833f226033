"""Application service: Apply Discount use case."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from catalog.application.commit_plan import Applier, commit_product
from catalog.domain.clock import Clock
from catalog.domain.exceptions import EntityNotFoundError, ErrorKind
from catalog.domain.model.value_objects import Discount
from catalog.domain.repository.event_repository import EventRepository
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ApplyDiscountHandler:

    def __init__(
        self,
        applier: Applier,
        product_repo: ProductRepository,
        event_repo: EventRepository,
        clock: Clock,
    ) -> None:
        self._applier = applier
        self._product_repo = product_repo
        self._event_repo = event_repo
        self._clock = clock

    def handle(
        self,
        product_id: str,
        percentage: str | Decimal,
        starts_at: datetime,
        ends_at: datetime,
    ) -> None:
        """Attach a percentage discount valid over [starts_at, ends_at).

        The product must be ACTIVE and the window must contain the
        current time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(
                ErrorKind.PRODUCT_NOT_FOUND,
                f"Product with ID '{product_id}' not found",
                field="id",
                value=product_id,
            )

        discount = Discount(percentage=percentage, starts_at=starts_at, ends_at=ends_at)
        product.apply_discount(discount, self._clock.now())
        commit_product(product, self._product_repo, self._event_repo, self._applier)
        logger.info("Applied discount %s to product %s", discount, product_id)
