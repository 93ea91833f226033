"""Outbox implementation of EventRepository.

Each domain event becomes one ``outbox_events`` row inserted in the same
plan as the product mutation.  Payloads are built field by field per
event class so the JSON keys stay stable even if the Python classes are
renamed.  An event this module cannot encode fails the whole commit.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from catalog.domain.exceptions import EventSerializationError
from catalog.domain.model.events import (
    DiscountApplied,
    DiscountRemoved,
    DomainEvent,
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductUpdated,
)
from catalog.domain.repository.event_repository import EventRepository
from catalog.infrastructure.persistence.mutations import COMMIT_TIMESTAMP, Mutation, insert
from catalog.infrastructure.persistence.schema import OutboxTable as T

logger = logging.getLogger(__name__)


def _rfc3339(moment: datetime) -> str:
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _created_payload(event: ProductCreated) -> dict[str, Any]:
    return {
        "product_id": event.product_id,
        "name": event.name,
        "category": event.category,
        "status": event.status.value,
    }


def _updated_payload(event: ProductUpdated) -> dict[str, Any]:
    return {
        "product_id": event.product_id,
        "changed_fields": sorted(field.value for field in event.changed_fields),
    }


def _discount_applied_payload(event: DiscountApplied) -> dict[str, Any]:
    return {
        "product_id": event.product_id,
        "percentage": event.percentage,
        "starts_at": _rfc3339(event.starts_at),
        "ends_at": _rfc3339(event.ends_at),
    }


def _id_only_payload(event: DomainEvent) -> dict[str, Any]:
    return {"product_id": event.product_id}


PAYLOAD_BUILDERS: dict[type[DomainEvent], Callable[[Any], dict[str, Any]]] = {
    ProductCreated: _created_payload,
    ProductUpdated: _updated_payload,
    ProductActivated: _id_only_payload,
    ProductDeactivated: _id_only_payload,
    DiscountApplied: _discount_applied_payload,
    DiscountRemoved: _id_only_payload,
}


class OutboxEventRepository(EventRepository):

    def build_insert_mutation(self, event: DomainEvent) -> Mutation:
        builder = PAYLOAD_BUILDERS.get(type(event))
        if builder is None:
            raise EventSerializationError(
                f"Unknown event type: {type(event).__name__}", value=event
            )

        try:
            payload = json.dumps(builder(event))
        except (TypeError, ValueError, AttributeError) as exc:
            logger.error("Failed to encode %s for product %s", event.event_name, event.product_id)
            raise EventSerializationError(
                f"Cannot encode {event.event_name} payload: {exc}", value=event
            ) from exc

        event_id = str(uuid.uuid4())
        values = {
            T.EVENT_ID: event_id,
            T.EVENT_TYPE: event.event_name,
            T.AGGREGATE_ID: event.product_id,
            T.PAYLOAD: payload,
            T.STATUS: T.STATUS_PENDING,
            T.CREATED_AT: COMMIT_TIMESTAMP,
            T.PROCESSED_AT: None,
        }
        return insert(T.NAME, event_id, values)
