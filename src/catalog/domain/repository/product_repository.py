"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  The repository does not write anything itself: it
translates an aggregate into opaque mutation descriptors that the
application layer adds to a commit plan.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a reconstituted product by its ID, or None if not found."""

    @abstractmethod
    def build_insert_mutation(self, product: Product) -> object:
        """Return a descriptor inserting the full row of a new product."""

    @abstractmethod
    def build_update_mutation(self, product: Product) -> object | None:
        """Return a descriptor writing only the dirty fields.

        Returns None when nothing changed; that is a normal outcome.
        """
