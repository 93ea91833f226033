"""Application service: Activate Product use case."""

from __future__ import annotations

import logging

from catalog.application.commit_plan import Applier, commit_product
from catalog.domain.clock import Clock
from catalog.domain.exceptions import EntityNotFoundError, ErrorKind
from catalog.domain.repository.event_repository import EventRepository
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ActivateProductHandler:

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

    def handle(self, product_id: str) -> None:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(
                ErrorKind.PRODUCT_NOT_FOUND,
                f"Product with ID '{product_id}' not found",
                field="id",
                value=product_id,
            )

        product.activate(self._clock.now())
        commit_product(product, self._product_repo, self._event_repo, self._applier)
        logger.info("Product %s is active", product_id)
