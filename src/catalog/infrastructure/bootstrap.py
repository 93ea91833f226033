"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from catalog.domain.clock import Clock, SystemClock
from catalog.infrastructure.persistence.json_catalog_store import JsonCatalogStore
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from catalog.infrastructure.persistence.outbox_event_repository import (
    OutboxEventRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
# CATALOG_DATA_DIR overrides it (tests, deployments).
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DATA_DIR_ENV = "CATALOG_DATA_DIR"
STORE_FILE_NAME = "catalog.json"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def clock() -> Clock:
    return SystemClock()


def catalog_store() -> JsonCatalogStore:
    return JsonCatalogStore(data_dir() / STORE_FILE_NAME, clock=clock())


def product_repository(store: JsonCatalogStore) -> JsonProductRepository:
    return JsonProductRepository(store)


def event_repository() -> OutboxEventRepository:
    return OutboxEventRepository()
