"""Domain events raised by the Product aggregate.

Events are immutable facts.  The aggregate queues them while a use case
runs; the outbox repository turns each one into a row written in the same
commit as the state change it describes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from catalog.domain.model.change_tracking import Field
    from catalog.domain.model.product import ProductStatus
    from catalog.domain.model.value_objects import Money


@dataclass(frozen=True)
class DomainEvent:
    """Base class for every product event.

    ``event_name`` is the stable type string written to the outbox; it must
    never change once consumers depend on it.
    """

    event_name: ClassVar[str]

    product_id: str
    occurred_at: datetime


@dataclass(frozen=True)
class ProductCreated(DomainEvent):
    event_name: ClassVar[str] = "product.created"

    name: str
    category: str
    base_price: Money
    status: ProductStatus


@dataclass(frozen=True)
class ProductUpdated(DomainEvent):
    event_name: ClassVar[str] = "product.updated"

    changed_fields: frozenset[Field]


@dataclass(frozen=True)
class ProductActivated(DomainEvent):
    event_name: ClassVar[str] = "product.activated"


@dataclass(frozen=True)
class ProductDeactivated(DomainEvent):
    event_name: ClassVar[str] = "product.deactivated"


@dataclass(frozen=True)
class DiscountApplied(DomainEvent):
    event_name: ClassVar[str] = "product.discount_applied"

    percentage: str
    starts_at: datetime
    ends_at: datetime


@dataclass(frozen=True)
class DiscountRemoved(DomainEvent):
    event_name: ClassVar[str] = "product.discount_removed"
