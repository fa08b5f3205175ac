"""Abstract repository interface (port) for Complaint persistence."""

from abc import ABC, abstractmethod

from complaint_hub.domain.entities import Complaint


class ComplaintRepository(ABC):
    """Port for complaint persistence, implemented in the infrastructure layer."""

    @abstractmethod
    async def insert(self, complaint: Complaint) -> Complaint:
        """Persist a new complaint.

        Raises DuplicateEntityError when the complaint_id is already taken.
        """
        ...

    @abstractmethod
    async def get_by_complaint_id(self, complaint_id: str) -> Complaint | None:
        """Retrieve a complaint by its public identifier."""
        ...

    @abstractmethod
    async def update_status(self, complaint_id: str, status: str) -> bool:
        """Set the current status. Returns False if the complaint does not exist."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored complaints."""
        ...
