"""Application service: Create Product use case."""

from __future__ import annotations

import logging

from catalog.application.commit_plan import Applier, commit_product
from catalog.domain.clock import Clock
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.event_repository import EventRepository
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateProductHandler:

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
        name: str,
        description: str,
        category: str,
        price: int | str,
        currency: str,
    ) -> str:
        """Add a new ACTIVE product to the catalog and return its ID.

        ``price`` is expressed in minor units of ``currency``.
        """
        product = Product.create(
            name=name,
            description=description,
            category=category,
            base_price=Money.of(price, currency),
            now=self._clock.now(),
        )
        commit_product(
            product, self._product_repo, self._event_repo, self._applier, is_new=True
        )
        logger.info("Created product %s (%s)", product.id, product.name)
        return product.id
