from .base import Base
from .session import (
    create_engine,
    create_session_factory,
    get_db_session,
    init_models,
)
from .models import ComplaintModel, TimelineEventModel

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "get_db_session",
    "init_models",
    "ComplaintModel",
    "TimelineEventModel",
]
