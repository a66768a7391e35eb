import os
import pytest
from fastapi.testclient import TestClient

from sikus.core.config import Settings
from sikus.db.base import Base
from sikus.main import create_app

# register tables on Base.metadata
import sikus.models.user  # noqa: F401
import sikus.models.report  # noqa: F401


TEST_SECRET_KEY = "test-secret-key-not-for-production-0123456789"


@pytest.fixture()
def settings(tmp_path):
    """Test settings: TEST_DATABASE_URL if set, otherwise a throwaway SQLite file"""
    db_url = os.getenv("TEST_DATABASE_URL") or f"sqlite:///{tmp_path / 'sikus_test.db'}"
    return Settings(
        _env_file=None,
        DATABASE_URL=db_url,
        SECRET_KEY=TEST_SECRET_KEY,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings):
    """Fresh app + schema per test"""
    fastapi_app = create_app(settings)
    engine = fastapi_app.state.engine
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield fastapi_app
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(app):
    """Session for tests that touch the database directly"""
    session = app.state.session_factory()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
