"""Concrete repository implementation for the complaint timeline."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_hub.application.interfaces import TimelineRepository
from complaint_hub.domain.entities import TimelineEvent
from complaint_hub.infrastructure.database.models import TimelineEventModel


class SQLAlchemyTimelineRepository(TimelineRepository):
    """Implements the TimelineRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: TimelineEventModel) -> TimelineEvent:
        return TimelineEvent(
            id=model.id,
            complaint_id=model.complaint_id,
            status=model.status,
            note=model.note,
            created_at=model.created_at,
        )

    async def append(
        self, complaint_id: str, status: str, note: str | None = None
    ) -> TimelineEvent:
        event = TimelineEvent(complaint_id=complaint_id, status=status, note=note)
        model = TimelineEventModel(
            complaint_id=event.complaint_id,
            status=event.status,
            note=event.note,
            created_at=event.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def list_by_complaint_id(self, complaint_id: str) -> list[TimelineEvent]:
        stmt = (
            select(TimelineEventModel)
            .where(TimelineEventModel.complaint_id == complaint_id)
            .order_by(TimelineEventModel.created_at.asc(), TimelineEventModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
