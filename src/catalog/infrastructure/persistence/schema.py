"""Table and column names of the catalog store."""

from __future__ import annotations


class ProductTable:
    NAME = "products"

    PRODUCT_ID = "product_id"
    NAME_COLUMN = "name"
    DESCRIPTION = "description"
    CATEGORY = "category"
    BASE_PRICE_AMOUNT = "base_price_amount"
    BASE_PRICE_CURRENCY = "base_price_currency"
    DISCOUNT_PERCENT = "discount_percent"
    DISCOUNT_START_DATE = "discount_start_date"
    DISCOUNT_END_DATE = "discount_end_date"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    # Persisted but not driven by the aggregate; no archive transition exists.
    ARCHIVED_AT = "archived_at"


class OutboxTable:
    NAME = "outbox_events"

    EVENT_ID = "event_id"
    EVENT_TYPE = "event_type"
    AGGREGATE_ID = "aggregate_id"
    PAYLOAD = "payload"
    STATUS = "status"
    CREATED_AT = "created_at"
    PROCESSED_AT = "processed_at"

    STATUS_PENDING = "pending"


TABLES = (ProductTable.NAME, OutboxTable.NAME)
