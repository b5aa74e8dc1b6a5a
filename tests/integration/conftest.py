"""
Integration test fixtures. Overrides get_db with a fresh in-memory DB per test,
for both TestClient route tests and in-process harness runs.
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker


@pytest.fixture
def override_get_db():
    """Create in-memory engine and session factory for API tests."""
    import api.models  # noqa: F401
    from api.config import Base, build_engine
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    yield _get_db
    engine.dispose()


@pytest.fixture
def api_client(override_get_db):
    """FastAPI TestClient with in-memory DB override."""
    from fastapi.testclient import TestClient
    from api.api import app
    from api.config import get_db
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def harness_connection(override_get_db):
    """Harness connection wired to the app in-process through ASGITransport."""
    from api.api import app
    from api.config import get_db
    from harness.connection import Connection
    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield Connection(host="http://test", client=client)
    app.dependency_overrides.clear()
