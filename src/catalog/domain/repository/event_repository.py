"""Abstract repository for the transactional outbox."""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.events import DomainEvent


class EventRepository(ABC):

    @abstractmethod
    def build_insert_mutation(self, event: DomainEvent) -> object:
        """Return a descriptor inserting one outbox row for ``event``.

        Raises EventSerializationError when the event cannot be encoded;
        it must never return an empty result instead.
        """
