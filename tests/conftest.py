import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config_file import get_settings
from app.core.db.deps import get_db
from app.core.db.session import Base
from app.core.pubsub import EventPublisher, get_event_publisher
from app.main import app
from app.modules.query_builder.models import CustomReportTypeRecord  # noqa: F401  registers the table
from app.modules.reports.models.report import ReportRecord  # noqa: F401  registers the table

# Load environment variables from .env files
# Priority: .env (current dir) > ../.env (parent dir) > system env vars
backend_dir = Path(__file__).parent.parent
for env_file in (backend_dir / ".env", backend_dir.parent / ".env"):
    if env_file.exists():
        load_dotenv(env_file, override=False)  # Don't override existing env vars

# Tenant flags are pinned so results do not depend on the local .env
os.environ["DATALAKE_V2_ACTIVE"] = "false"
os.environ["DATALAKE_V3_ACTIVE"] = "false"
os.environ["REPORT_DOWNLOAD_PERMISSION_LINK"] = "false"

# Clear settings cache to force reload with new env vars
get_settings.cache_clear()

# In-memory document store shared by every session of a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session with empty tables for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def event_publisher():
    """Event publisher double: publish() succeeds and records its calls."""
    publisher = MagicMock(spec=EventPublisher)
    publisher.publish = AsyncMock(return_value="1000-0")
    return publisher


@pytest.fixture(scope="function")
def client(db_session, event_publisher):
    """Create a test client with database and publisher dependency overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_publisher] = lambda: event_publisher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
