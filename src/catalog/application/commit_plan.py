"""Commit planning: one atomic write per use case.

A Plan collects the opaque mutation descriptors produced by the
repositories (one for the product row, one per outbox event) and the
Applier submits them as a single all-or-nothing operation.  This is what
guarantees that every committed state change has its outbox rows.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator

from catalog.domain.exceptions import EventSerializationError
from catalog.domain.model.product import Product
from catalog.domain.repository.event_repository import EventRepository
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class Plan:
    """Ordered collection of mutation descriptors."""

    def __init__(self) -> None:
        self._mutations: list[object] = []

    def add(self, mutation: object) -> None:
        if mutation is None:
            raise ValueError("Cannot add an empty mutation to a plan")
        self._mutations.append(mutation)

    @property
    def mutations(self) -> tuple[object, ...]:
        return tuple(self._mutations)

    def __len__(self) -> int:
        return len(self._mutations)

    def __iter__(self) -> Iterator[object]:
        return iter(tuple(self._mutations))


class Applier(ABC):

    @abstractmethod
    def apply(self, plan: Plan) -> None:
        """Apply every mutation in ``plan`` atomically.

        Either all descriptors take effect or none do.  Storage failures
        are raised as InfrastructureError subclasses.
        """


def build_commit_plan(
    product: Product,
    product_repo: ProductRepository,
    event_repo: EventRepository,
    *,
    is_new: bool = False,
) -> Plan:
    """Translate a mutated product and its pending events into a Plan.

    New products get a full insert; loaded ones get an update limited to
    dirty fields, which may legitimately be absent.  Any event that cannot
    be encoded aborts the whole plan.
    """
    plan = Plan()

    if is_new:
        plan.add(product_repo.build_insert_mutation(product))
    else:
        mutation = product_repo.build_update_mutation(product)
        if mutation is not None:
            plan.add(mutation)

    for event in product.pending_events:
        mutation = event_repo.build_insert_mutation(event)
        if mutation is None:
            raise EventSerializationError(
                f"No outbox mutation produced for {event.event_name}", value=event
            )
        plan.add(mutation)

    return plan


def commit_product(
    product: Product,
    product_repo: ProductRepository,
    event_repo: EventRepository,
    applier: Applier,
    *,
    is_new: bool = False,
) -> Plan:
    """Build the plan for ``product`` and submit it.

    An empty plan (idempotent no-op) is not submitted.  On success the
    product's queued events and dirty set are cleared.
    """
    plan = build_commit_plan(product, product_repo, event_repo, is_new=is_new)
    if not plan:
        logger.debug("Nothing to commit for product %s", product.id)
        return plan

    applier.apply(plan)
    logger.debug(
        "Committed %d mutation(s) for product %s (%d event(s))",
        len(plan),
        product.id,
        len(product.pending_events),
    )
    product.clear_events()
    product.changes.clear()
    return plan
