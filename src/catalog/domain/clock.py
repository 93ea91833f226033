"""Clock port.

Every time-dependent rule takes ``now`` from an injected Clock so tests
can pin time to a fixed instant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""


class SystemClock(Clock):
    """Wall-clock time in UTC. Used outside of tests."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
