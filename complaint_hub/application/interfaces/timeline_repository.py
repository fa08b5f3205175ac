"""Abstract repository interface (port) for TimelineEvent persistence."""

from abc import ABC, abstractmethod

from complaint_hub.domain.entities import TimelineEvent


class TimelineRepository(ABC):
    """Port for the append-only complaint timeline."""

    @abstractmethod
    async def append(
        self, complaint_id: str, status: str, note: str | None = None
    ) -> TimelineEvent:
        """Persist a new event stamped with the current time."""
        ...

    @abstractmethod
    async def list_by_complaint_id(self, complaint_id: str) -> list[TimelineEvent]:
        """Return all events for a complaint, oldest first."""
        ...
