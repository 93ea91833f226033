"""Use cases running against the real JSON store and outbox repository."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from catalog.application.apply_discount import ApplyDiscountHandler
from catalog.application.commit_plan import commit_product
from catalog.application.create_product import CreateProductHandler
from catalog.application.deactivate_product import DeactivateProductHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import ConcurrencyConflictError
from catalog.infrastructure.persistence.json_catalog_store import JsonCatalogStore
from catalog.infrastructure.persistence.json_product_repository import JsonProductRepository
from catalog.infrastructure.persistence.outbox_event_repository import OutboxEventRepository
from catalog.infrastructure.persistence.schema import OutboxTable, ProductTable
from tests.fakes import FixedClock

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def wiring(tmp_path):
    clock = FixedClock(T0)
    store = JsonCatalogStore(tmp_path / "catalog.json", clock=clock)
    deps = dict(
        applier=store,
        product_repo=JsonProductRepository(store),
        event_repo=OutboxEventRepository(),
        clock=clock,
    )
    return store, deps


def test_every_state_change_has_its_outbox_rows(wiring):
    store, deps = wiring

    product_id = CreateProductHandler(**deps).handle("Laptop", "", "computers", 100, "USD")
    UpdateProductHandler(**deps).handle(product_id, name="Laptop")  # unchanged
    UpdateProductHandler(**deps).handle(product_id, description="14 inch")
    ApplyDiscountHandler(**deps).handle(
        product_id, "10", T0 - timedelta(hours=1), T0 + timedelta(hours=24)
    )
    DeactivateProductHandler(**deps).handle(product_id)
    DeactivateProductHandler(**deps).handle(product_id)

    events = store.pending_events()
    assert [e[OutboxTable.EVENT_TYPE] for e in events] == [
        "product.created",
        "product.updated",
        "product.discount_applied",
        "product.discount_removed",
        "product.deactivated",
    ]
    assert all(e[OutboxTable.AGGREGATE_ID] == product_id for e in events)
    assert json.loads(events[1][OutboxTable.PAYLOAD])["changed_fields"] == ["description"]

    row = store.get_row(ProductTable.NAME, product_id)
    assert row[ProductTable.STATUS] == "inactive"
    assert row[ProductTable.DESCRIPTION] == "14 inch"
    assert row[ProductTable.DISCOUNT_PERCENT] is None
    assert row[ProductTable.CREATED_AT] == T0.isoformat()


def test_racing_deactivations_commit_once(wiring):
    store, deps = wiring
    clock = deps["clock"]
    product_id = CreateProductHandler(**deps).handle("Laptop", "", "computers", 100, "USD")

    first_repo = JsonProductRepository(store)
    second_repo = JsonProductRepository(store)
    first = first_repo.get_by_id(product_id)
    second = second_repo.get_by_id(product_id)

    clock.advance(timedelta(seconds=1))
    first.deactivate(clock.now())
    commit_product(first, first_repo, deps["event_repo"], store)

    second.deactivate(clock.now())
    with pytest.raises(ConcurrencyConflictError):
        commit_product(second, second_repo, deps["event_repo"], store)

    assert [e[OutboxTable.EVENT_TYPE] for e in store.pending_events()] == [
        "product.created",
        "product.deactivated",
    ]
    assert len(second.pending_events) == 1
