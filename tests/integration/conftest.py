"""Shared fixtures for integration tests: a real app on a throwaway SQLite file."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from complaint_hub.config import Settings
from complaint_hub.infrastructure.database.repositories import SQLAlchemyComplaintRepository
from complaint_hub.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        app_env="test",
        database_url=f"sqlite:///{tmp_path / 'complaints.sqlite'}",
        upload_dir=str(tmp_path / "uploads"),
        max_upload_size_mb=1,
    )


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def complaint_count(app):
    """Count stored complaints through a fresh session."""

    async def _count() -> int:
        async with app.state.session_factory() as session:
            return await SQLAlchemyComplaintRepository(session).count()

    return _count
