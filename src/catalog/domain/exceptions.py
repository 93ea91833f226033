"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each error carries an ``ErrorKind`` so adapters can map it 1:1 to a
protocol-level status without parsing messages.

Failures coming from storage or serialization ports are *not* domain
errors; they derive from InfrastructureError and are propagated unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    # Validation
    ID_REQUIRED = "id_required"
    NAME_REQUIRED = "name_required"
    BASE_PRICE_REQUIRED = "base_price_required"
    INVALID_STATUS = "invalid_status"
    INVALID_AMOUNT = "invalid_amount"
    NEGATIVE_AMOUNT = "negative_amount"
    INVALID_CURRENCY = "invalid_currency"
    CURRENCY_MISMATCH = "currency_mismatch"
    MISSING_OPERAND = "missing_operand"
    NEGATIVE_RESULT = "negative_result"
    NEGATIVE_FACTOR = "negative_factor"
    INVALID_DISCOUNT_PERCENTAGE = "invalid_discount_percentage"
    INVALID_DISCOUNT_PERIOD = "invalid_discount_period"
    DISCOUNT_REQUIRED = "discount_required"
    DISCOUNT_NOT_IN_EFFECT = "discount_not_in_effect"
    # Business rules
    PRODUCT_NOT_ACTIVE = "product_not_active"
    NO_ACTIVE_DISCOUNT = "no_active_discount"
    # Lookup
    PRODUCT_NOT_FOUND = "product_not_found"
    # Infrastructure
    EVENT_SERIALIZATION = "event_serialization"
    STORAGE_CONFLICT = "storage_conflict"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class _CatalogError(Exception):

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.value = value


class DomainException(_CatalogError):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Caller input violates an invariant of a value or entity."""


class BusinessRuleViolation(DomainException):
    """The input is well-formed but the aggregate's state forbids the operation."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InfrastructureError(_CatalogError):
    """A storage or serialization port failed."""


class EventSerializationError(InfrastructureError):
    """A domain event could not be turned into an outbox mutation."""

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(ErrorKind.EVENT_SERIALIZATION, message, value=value)


class ConcurrencyConflictError(InfrastructureError):
    """The store rejected a plan because a row changed underneath it."""

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(ErrorKind.STORAGE_CONFLICT, message, value=value)


class StorageUnavailableError(InfrastructureError):
    """The store could not be read or written."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.STORAGE_UNAVAILABLE, message)
