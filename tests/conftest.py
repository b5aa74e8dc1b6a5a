"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path, points the service at an in-memory database and
provides common fixtures for unit and integration tests.
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Must be set before api.config is imported anywhere.
os.environ.setdefault("BOARD_DATABASE_URL", "sqlite://")
os.environ.setdefault("BOARD_BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="board-logs-"))

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ----- In-memory DB (for tests that need DB without touching real DB) -----
@pytest.fixture
def in_memory_engine():
    """Create an in-memory SQLite engine for tests."""
    from api.config import build_engine
    engine = build_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(in_memory_engine):
    """Create an in-memory database session. Uses api.config.Base for schema."""
    import api.models  # noqa: F401
    from api.config import Base
    from sqlalchemy.orm import sessionmaker
    Base.metadata.create_all(in_memory_engine)
    SessionLocal = sessionmaker(bind=in_memory_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def test_member(db_session):
    """A member with an account, straight in the DB."""
    from api.models.models import Member, UserAccount
    account = UserAccount(id="account-1", email="member@example.com", password_hash="x")
    member = Member(id="member-1", user_account_id=account.id, nickname="member-one", status="active")
    db_session.add_all([account, member])
    db_session.commit()
    return member
