"""SQLAlchemy ORM model for complaint timeline events."""

from datetime import datetime, timezone

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from complaint_hub.infrastructure.database.base import Base, UTCDateTime


class TimelineEventModel(Base):
    """ORM model — maps to the 'complaint_timeline' table.

    ``complaint_id`` is a logical reference to ``complaints.complaint_id``;
    no foreign key is declared.
    """

    __tablename__ = "complaint_timeline"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    complaint_id: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(100), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_complaint_timeline_complaint", "complaint_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimelineEventModel(id={self.id}, "
            f"complaint_id='{self.complaint_id}', status='{self.status}')>"
        )
