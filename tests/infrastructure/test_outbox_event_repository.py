"""Tests for outbox row and payload encoding."""

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from catalog.domain.exceptions import ErrorKind, EventSerializationError
from catalog.domain.model.change_tracking import Field
from catalog.domain.model.events import (
    DiscountApplied,
    DiscountRemoved,
    DomainEvent,
    ProductActivated,
    ProductCreated,
    ProductDeactivated,
    ProductUpdated,
)
from catalog.domain.model.product import ProductStatus
from catalog.domain.model.value_objects import Money
from catalog.infrastructure.persistence.mutations import COMMIT_TIMESTAMP, MutationOp
from catalog.infrastructure.persistence.outbox_event_repository import (
    PAYLOAD_BUILDERS,
    OutboxEventRepository,
)
from catalog.infrastructure.persistence.schema import OutboxTable as T

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _payload(event: DomainEvent) -> dict:
    mutation = OutboxEventRepository().build_insert_mutation(event)
    return json.loads(mutation.values[T.PAYLOAD])


class TestOutboxRow:

    def test_row_columns(self):
        event = ProductActivated(product_id="p-1", occurred_at=T0)
        mutation = OutboxEventRepository().build_insert_mutation(event)

        assert mutation.op is MutationOp.INSERT
        assert mutation.table == T.NAME
        assert mutation.key == mutation.values[T.EVENT_ID]
        uuid.UUID(mutation.values[T.EVENT_ID])
        assert mutation.values[T.EVENT_TYPE] == "product.activated"
        assert mutation.values[T.AGGREGATE_ID] == "p-1"
        assert mutation.values[T.STATUS] == "pending"
        assert mutation.values[T.CREATED_AT] is COMMIT_TIMESTAMP
        assert mutation.values[T.PROCESSED_AT] is None

    def test_event_ids_are_unique(self):
        repo = OutboxEventRepository()
        event = ProductActivated(product_id="p-1", occurred_at=T0)
        assert repo.build_insert_mutation(event).key != repo.build_insert_mutation(event).key


class TestPayloads:

    def test_created(self):
        event = ProductCreated(
            product_id="p-1",
            occurred_at=T0,
            name="Laptop",
            category="computers",
            base_price=Money(100, "USD"),
            status=ProductStatus.ACTIVE,
        )
        assert _payload(event) == {
            "product_id": "p-1",
            "name": "Laptop",
            "category": "computers",
            "status": "active",
        }

    def test_updated_lists_fields_sorted(self):
        event = ProductUpdated(
            product_id="p-1",
            occurred_at=T0,
            changed_fields=frozenset({Field.NAME, Field.CATEGORY, Field.BASE_PRICE}),
        )
        assert _payload(event) == {
            "product_id": "p-1",
            "changed_fields": ["base_price", "category", "name"],
        }

    @pytest.mark.parametrize("event_cls", [ProductActivated, ProductDeactivated, DiscountRemoved])
    def test_id_only_events(self, event_cls):
        assert _payload(event_cls(product_id="p-1", occurred_at=T0)) == {"product_id": "p-1"}

    def test_discount_applied_uses_rfc3339(self):
        event = DiscountApplied(
            product_id="p-1",
            occurred_at=T0,
            percentage="12.5",
            starts_at=T0 - timedelta(hours=1),
            ends_at=datetime(2025, 3, 2, 9, 30, tzinfo=timezone(timedelta(hours=7))),
        )
        assert _payload(event) == {
            "product_id": "p-1",
            "percentage": "12.5",
            "starts_at": "2025-03-01T11:00:00Z",
            "ends_at": "2025-03-02T09:30:00+07:00",
        }


class TestFailures:

    def test_every_event_type_has_a_payload(self):
        declared = {
            cls for cls in DomainEvent.__subclasses__() if cls.__module__ == DomainEvent.__module__
        }
        assert set(PAYLOAD_BUILDERS) == declared

    def test_unknown_event_type_rejected(self):
        @dataclass(frozen=True)
        class ProductArchived(DomainEvent):
            event_name = "product.archived"

        with pytest.raises(EventSerializationError, match="Unknown event type") as exc_info:
            OutboxEventRepository().build_insert_mutation(
                ProductArchived(product_id="p-1", occurred_at=T0)
            )
        assert exc_info.value.kind is ErrorKind.EVENT_SERIALIZATION

    def test_unencodable_payload_rejected(self):
        event = ProductCreated(
            product_id="p-1",
            occurred_at=T0,
            name=object(),  # type: ignore[arg-type]
            category="computers",
            base_price=Money(100, "USD"),
            status=ProductStatus.ACTIVE,
        )
        with pytest.raises(EventSerializationError, match="Cannot encode product.created"):
            OutboxEventRepository().build_insert_mutation(event)
