"""Builds application handlers from the composition root for CLI commands."""

from __future__ import annotations

from typing import TypeVar

from catalog.infrastructure.bootstrap import (
    catalog_store,
    clock,
    event_repository,
    product_repository,
)

H = TypeVar("H")


def command_handler(handler_cls: type[H]) -> H:
    """Instantiate a mutating use-case handler wired to the JSON store."""
    store = catalog_store()
    return handler_cls(  # type: ignore[call-arg]
        applier=store,
        product_repo=product_repository(store),
        event_repo=event_repository(),
        clock=clock(),
    )
