"""Concrete repository implementation for Complaint backed by SQLAlchemy."""

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_hub.application.interfaces import ComplaintRepository
from complaint_hub.domain.entities import Complaint
from complaint_hub.domain.exceptions import DuplicateEntityError
from complaint_hub.infrastructure.database.models import ComplaintModel


class SQLAlchemyComplaintRepository(ComplaintRepository):
    """Implements the ComplaintRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ComplaintModel) -> Complaint:
        """Map ORM model → domain entity."""
        return Complaint(
            id=model.id,
            complaint_id=model.complaint_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            title=model.title,
            details=model.details,
            category=model.category,
            location=model.location,
            priority=model.priority,
            attachment=model.attachment,
            status=model.status,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Complaint) -> ComplaintModel:
        """Map domain entity → ORM model (for creation)."""
        return ComplaintModel(
            complaint_id=entity.complaint_id,
            name=entity.name,
            email=entity.email,
            phone=entity.phone,
            title=entity.title,
            details=entity.details,
            category=entity.category,
            location=entity.location,
            priority=entity.priority,
            attachment=entity.attachment,
            status=entity.status,
            created_at=entity.created_at,
        )

    async def insert(self, complaint: Complaint) -> Complaint:
        model = self._to_model(complaint)
        # The savepoint keeps the request transaction usable after a collision
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError(
                "Complaint", "complaint_id", complaint.complaint_id
            ) from exc
        return self._to_entity(model)

    async def get_by_complaint_id(self, complaint_id: str) -> Complaint | None:
        stmt = select(ComplaintModel).where(ComplaintModel.complaint_id == complaint_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update_status(self, complaint_id: str, status: str) -> bool:
        stmt = (
            update(ComplaintModel)
            .where(ComplaintModel.complaint_id == complaint_id)
            .values(status=status)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def count(self) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(ComplaintModel)
        )
        return result.scalar_one()
