"""Application service: Update Product use case.

Only the fields passed in are touched.  Values equal to the current ones
are ignored by the aggregate, so an update that changes nothing writes
nothing and raises no event.
"""

from __future__ import annotations

import logging

from catalog.application.commit_plan import Applier, commit_product
from catalog.domain.clock import Clock
from catalog.domain.exceptions import EntityNotFoundError, ErrorKind
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.event_repository import EventRepository
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

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
        name: str | None = None,
        description: str | None = None,
        category: str | None = None,
        price: int | str | None = None,
    ) -> None:
        """Update product details.

        ``price`` is in minor units and keeps the product's currency.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(
                ErrorKind.PRODUCT_NOT_FOUND,
                f"Product with ID '{product_id}' not found",
                field="id",
                value=product_id,
            )

        if name is not None:
            product.set_name(name)
        if description is not None:
            product.set_description(description)
        if category is not None:
            product.set_category(category)
        if price is not None:
            product.set_base_price(Money.of(price, product.base_price.currency))

        changed = sorted(f.value for f in product.changes.dirty_fields())
        product.record_update(self._clock.now())
        commit_product(product, self._product_repo, self._event_repo, self._applier)
        logger.info("Updated product %s, changed fields: %s", product_id, changed or "none")
