"""Tests for commit planning: what goes into a plan and when it is submitted."""

from datetime import datetime, timedelta, timezone

import pytest

from catalog.application.commit_plan import Plan, build_commit_plan, commit_product
from catalog.domain.exceptions import ConcurrencyConflictError, EventSerializationError
from catalog.domain.model.events import DiscountRemoved
from catalog.domain.model.product import Product, ProductStatus
from catalog.domain.model.value_objects import Discount, Money
from tests.fakes import FakeApplier, FakeEventRepository, FakeProductRepository

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _loaded(discount: Discount | None = None) -> Product:
    return Product.reconstitute(
        "p-1", "Laptop", "", "computers", Money(100, "USD"), discount, ProductStatus.ACTIVE
    )


class TestPlan:

    def test_keeps_insertion_order(self):
        plan = Plan()
        plan.add("a")
        plan.add("b")
        assert plan.mutations == ("a", "b")
        assert len(plan) == 2

    def test_rejects_empty_mutation(self):
        with pytest.raises(ValueError):
            Plan().add(None)


class TestBuildCommitPlan:

    def test_new_product_gets_insert_and_created_event(self):
        product = Product.create("Laptop", "", "computers", Money(100, "USD"), T0)
        plan = build_commit_plan(
            product, FakeProductRepository(), FakeEventRepository(), is_new=True
        )
        assert [m.kind for m in plan] == ["product.insert", "event.insert"]

    def test_unchanged_product_yields_empty_plan(self):
        product = _loaded()
        product.activate(T0)  # already active
        plan = build_commit_plan(product, FakeProductRepository(), FakeEventRepository())
        assert len(plan) == 0

    def test_state_update_precedes_events(self):
        product = _loaded(Discount("10", T0, T0 + timedelta(hours=1)))
        product.deactivate(T0)
        plan = build_commit_plan(product, FakeProductRepository(), FakeEventRepository())
        assert [m.kind for m in plan] == ["product.update", "event.insert", "event.insert"]
        assert plan.mutations[0].payload == {"status": ProductStatus.INACTIVE, "discount": None}

    def test_serialization_failure_aborts_plan(self):
        product = _loaded(Discount("10", T0, T0 + timedelta(hours=1)))
        product.deactivate(T0)
        with pytest.raises(EventSerializationError):
            build_commit_plan(
                product, FakeProductRepository(), FakeEventRepository(fail_on=DiscountRemoved)
            )

    def test_port_returning_nothing_for_an_event_aborts_plan(self):
        class SilentEventRepository(FakeEventRepository):
            def build_insert_mutation(self, event):
                return None

        product = _loaded()
        product.deactivate(T0)
        with pytest.raises(EventSerializationError, match="product.deactivated"):
            build_commit_plan(product, FakeProductRepository(), SilentEventRepository())


class TestCommitProduct:

    def test_applies_and_clears_pending_state(self):
        product = _loaded()
        repo = FakeProductRepository([product])
        applier = FakeApplier(repo)

        product.deactivate(T0)
        commit_product(product, repo, FakeEventRepository(), applier)

        assert len(applier.plans) == 1
        assert applier.event_names == ["product.deactivated"]
        assert product.pending_events == ()
        assert len(product.changes) == 0

    def test_empty_plan_is_not_submitted(self):
        product = _loaded()
        repo = FakeProductRepository([product])
        applier = FakeApplier(repo)

        product.activate(T0)
        commit_product(product, repo, FakeEventRepository(), applier)

        assert applier.plans == []

    def test_applier_error_propagates_unchanged_and_keeps_events(self):
        product = _loaded()
        repo = FakeProductRepository([product])
        applier = FakeApplier(repo)
        conflict = ConcurrencyConflictError("row changed")
        applier.fail_with = conflict

        product.deactivate(T0)
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            commit_product(product, repo, FakeEventRepository(), applier)

        assert exc_info.value is conflict
        assert len(product.pending_events) == 1
        assert repo.rows["p-1"]["status"] is ProductStatus.ACTIVE
