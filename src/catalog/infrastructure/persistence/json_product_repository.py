"""JSON-store-backed implementation of ProductRepository.

The repository remembers the ``updated_at`` of every row it loads and
sends it with the next update of that product, so the store rejects an
update built from a row another writer has changed since.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from catalog.domain.model.change_tracking import Field
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Discount, Money
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.json_catalog_store import JsonCatalogStore
from catalog.infrastructure.persistence.mutations import COMMIT_TIMESTAMP, Mutation, insert, update
from catalog.infrastructure.persistence.schema import ProductTable as T


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonCatalogStore) -> None:
        self._store = store
        self._loaded_versions: dict[str, Any] = {}

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._store.get_row(T.NAME, product_id)
        if row is None:
            return None
        self._loaded_versions[product_id] = row.get(T.UPDATED_AT)
        return self._to_domain(row)

    def build_insert_mutation(self, product: Product) -> Mutation:
        values = {
            T.PRODUCT_ID: product.id,
            T.NAME_COLUMN: product.name,
            T.DESCRIPTION: product.description,
            T.CATEGORY: product.category,
            T.STATUS: product.status.value,
            T.CREATED_AT: COMMIT_TIMESTAMP,
            T.UPDATED_AT: COMMIT_TIMESTAMP,
            T.ARCHIVED_AT: None,
            **self._price_columns(product),
            **self._discount_columns(product),
        }
        return insert(T.NAME, product.id, values)

    def build_update_mutation(self, product: Product) -> Mutation | None:
        changes = product.changes
        values: dict[str, Any] = {}

        if changes.is_dirty(Field.NAME):
            values[T.NAME_COLUMN] = product.name
        if changes.is_dirty(Field.DESCRIPTION):
            values[T.DESCRIPTION] = product.description
        if changes.is_dirty(Field.CATEGORY):
            values[T.CATEGORY] = product.category
        if changes.is_dirty(Field.BASE_PRICE):
            values.update(self._price_columns(product))
        if changes.is_dirty(Field.STATUS):
            values[T.STATUS] = product.status.value
        if changes.is_dirty(Field.DISCOUNT):
            values.update(self._discount_columns(product))

        if not values:
            return None

        values[T.UPDATED_AT] = COMMIT_TIMESTAMP
        expected = None
        if product.id in self._loaded_versions:
            expected = {T.UPDATED_AT: self._loaded_versions[product.id]}
        return update(T.NAME, product.id, values, expected)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _price_columns(product: Product) -> dict[str, Any]:
        return {
            T.BASE_PRICE_AMOUNT: product.base_price.amount,
            T.BASE_PRICE_CURRENCY: product.base_price.currency,
        }

    @staticmethod
    def _discount_columns(product: Product) -> dict[str, Any]:
        discount = product.discount
        if discount is None:
            return {T.DISCOUNT_PERCENT: None, T.DISCOUNT_START_DATE: None, T.DISCOUNT_END_DATE: None}
        return {
            T.DISCOUNT_PERCENT: discount.percentage,
            T.DISCOUNT_START_DATE: discount.starts_at,
            T.DISCOUNT_END_DATE: discount.ends_at,
        }

    @staticmethod
    def _to_domain(row: dict[str, Any]) -> Product:
        discount = None
        if (
            row.get(T.DISCOUNT_PERCENT) is not None
            and row.get(T.DISCOUNT_START_DATE) is not None
            and row.get(T.DISCOUNT_END_DATE) is not None
        ):
            discount = Discount(
                percentage=row[T.DISCOUNT_PERCENT],
                starts_at=datetime.fromisoformat(row[T.DISCOUNT_START_DATE]),
                ends_at=datetime.fromisoformat(row[T.DISCOUNT_END_DATE]),
            )

        return Product.reconstitute(
            product_id=row[T.PRODUCT_ID],
            name=row[T.NAME_COLUMN],
            description=row.get(T.DESCRIPTION) or "",
            category=row[T.CATEGORY],
            base_price=Money(row[T.BASE_PRICE_AMOUNT], row[T.BASE_PRICE_CURRENCY]),
            discount=discount,
            status=row[T.STATUS],
        )
