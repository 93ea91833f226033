"""Product aggregate.

The Product is the aggregate root of the catalog.  Every state mutation
goes through its methods, which enforce invariants, mark the changed
fields dirty and queue domain events for the outbox.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from catalog.domain.exceptions import BusinessRuleViolation, ErrorKind, ValidationError
from catalog.domain.model.change_tracking import ChangeTracker, Field
from catalog.domain.model.events import (
    DiscountApplied,
    DiscountRemoved,
    DomainEvent,
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductUpdated,
)
from catalog.domain.model.value_objects import Discount, Money


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Product:
    """Aggregate root for catalog items.

    Use ``Product.create()`` for new products: it validates input, assigns
    a fresh identity and raises ``ProductCreated``.  Repositories use
    ``Product.reconstitute()`` to rebuild persisted state; that path raises
    no events and starts with an empty dirty set.

    Invariants:
    - ``name`` is never empty
    - ``base_price`` is always present
    - a discount can only be *applied* while the product is ACTIVE, and
      deactivation clears any discount
    """

    def __init__(
        self,
        product_id: str,
        name: str,
        description: str,
        category: str,
        base_price: Money,
        discount: Discount | None,
        status: ProductStatus,
    ) -> None:
        self._id = product_id
        self._name = name
        self._description = description
        self._category = category
        self._base_price = base_price
        self._discount = discount
        self._status = status
        self._changes = ChangeTracker()
        self._events: list[DomainEvent] = []

    # --- Factories ------------------------------------------------------------

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        category: str,
        base_price: Money | None,
        now: datetime,
    ) -> Product:
        """Create a brand-new ACTIVE product and raise ``ProductCreated``."""
        _require_name(name)
        _require_base_price(base_price)

        product = cls(
            product_id=str(uuid.uuid4()),
            name=name.strip(),
            description=description,
            category=category,
            base_price=base_price,
            discount=None,
            status=ProductStatus.ACTIVE,
        )
        product._events.append(
            ProductCreated(
                product_id=product.id,
                occurred_at=now,
                name=product.name,
                category=product.category,
                base_price=product.base_price,
                status=product.status,
            )
        )
        return product

    @classmethod
    def reconstitute(
        cls,
        product_id: str,
        name: str,
        description: str,
        category: str,
        base_price: Money | None,
        discount: Discount | None,
        status: ProductStatus | str,
    ) -> Product:
        """Rebuild a product from persisted state without raising events."""
        if not product_id:
            raise ValidationError(ErrorKind.ID_REQUIRED, "Product id is required", field="id")
        _require_name(name)
        _require_base_price(base_price)
        try:
            status = ProductStatus(status)
        except ValueError as exc:
            raise ValidationError(
                ErrorKind.INVALID_STATUS,
                f"Invalid product status: {status!r}",
                field="status",
                value=status,
            ) from exc

        return cls(
            product_id=product_id,
            name=name,
            description=description,
            category=category,
            base_price=base_price,
            discount=discount,
            status=status,
        )

    # --- Read accessors -------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def category(self) -> str:
        return self._category

    @property
    def base_price(self) -> Money:
        return self._base_price

    @property
    def discount(self) -> Discount | None:
        return self._discount

    @property
    def status(self) -> ProductStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == ProductStatus.ACTIVE

    @property
    def changes(self) -> ChangeTracker:
        return self._changes

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def clear_events(self) -> None:
        """Drop queued events once they have been committed."""
        self._events.clear()

    # --- Field setters --------------------------------------------------------

    def set_name(self, name: str) -> None:
        _require_name(name)
        name = name.strip()
        if name == self._name:
            return
        self._name = name
        self._changes.mark_dirty(Field.NAME)

    def set_description(self, description: str) -> None:
        if description == self._description:
            return
        self._description = description
        self._changes.mark_dirty(Field.DESCRIPTION)

    def set_category(self, category: str) -> None:
        if category == self._category:
            return
        self._category = category
        self._changes.mark_dirty(Field.CATEGORY)

    def set_base_price(self, price: Money | None) -> None:
        _require_base_price(price)
        if price == self._base_price:
            return
        self._base_price = price
        self._changes.mark_dirty(Field.BASE_PRICE)

    # --- State transitions ----------------------------------------------------

    def activate(self, now: datetime) -> None:
        """Transition to ACTIVE.  Already-active products are left untouched."""
        if self._status == ProductStatus.ACTIVE:
            return
        self._status = ProductStatus.ACTIVE
        self._changes.mark_dirty(Field.STATUS)
        self._events.append(ProductActivated(product_id=self._id, occurred_at=now))

    def deactivate(self, now: datetime) -> None:
        """Transition to INACTIVE, clearing any discount first.

        Raises ``DiscountRemoved`` (when a discount existed) followed by
        ``ProductDeactivated``.  Already-inactive products are left untouched.
        """
        if self._status == ProductStatus.INACTIVE:
            return
        self._status = ProductStatus.INACTIVE
        self._changes.mark_dirty(Field.STATUS)
        if self._discount is not None:
            self._discount = None
            self._changes.mark_dirty(Field.DISCOUNT)
            self._events.append(DiscountRemoved(product_id=self._id, occurred_at=now))
        self._events.append(ProductDeactivated(product_id=self._id, occurred_at=now))

    def apply_discount(self, discount: Discount | None, now: datetime) -> None:
        """Attach ``discount``, replacing any existing one.

        Fails without mutating anything if the product is not ACTIVE or the
        discount window does not contain ``now``.
        """
        if self._status != ProductStatus.ACTIVE:
            raise BusinessRuleViolation(
                ErrorKind.PRODUCT_NOT_ACTIVE,
                f"Product {self._id} is not active",
                field="status",
                value=self._status.value,
            )
        if discount is None:
            raise ValidationError(
                ErrorKind.DISCOUNT_REQUIRED, "Discount is required", field="discount"
            )
        if not discount.is_valid_at(now):
            raise ValidationError(
                ErrorKind.DISCOUNT_NOT_IN_EFFECT,
                f"Discount window does not contain {now.isoformat()}",
                field="discount",
                value=str(discount),
            )

        self._discount = discount
        self._changes.mark_dirty(Field.DISCOUNT)
        self._events.append(
            DiscountApplied(
                product_id=self._id,
                occurred_at=now,
                percentage=discount.percentage,
                starts_at=discount.starts_at,
                ends_at=discount.ends_at,
            )
        )

    def remove_discount(self, now: datetime) -> None:
        if self._discount is None:
            raise BusinessRuleViolation(
                ErrorKind.NO_ACTIVE_DISCOUNT,
                f"Product {self._id} has no active discount",
                field="discount",
            )
        self._discount = None
        self._changes.mark_dirty(Field.DISCOUNT)
        self._events.append(DiscountRemoved(product_id=self._id, occurred_at=now))

    def record_update(self, now: datetime) -> None:
        """Raise a single ``ProductUpdated`` listing every dirty field.

        Call once, after all setters, so several field edits produce one
        event.  Does nothing when no field changed.
        """
        dirty = self._changes.dirty_fields()
        if not dirty:
            return
        self._events.append(
            ProductUpdated(product_id=self._id, occurred_at=now, changed_fields=dirty)
        )

    def __repr__(self) -> str:
        return (
            f"Product(id={self._id!r}, name={self._name!r}, "
            f"status={self._status.value}, dirty={len(self._changes)}, "
            f"pending_events={len(self._events)})"
        )


# --- Internal helpers ---------------------------------------------------------


def _require_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError(ErrorKind.NAME_REQUIRED, "Product name is required", field="name")


def _require_base_price(price: Money | None) -> None:
    if price is None:
        raise ValidationError(
            ErrorKind.BASE_PRICE_REQUIRED, "Product base price is required", field="base_price"
        )
