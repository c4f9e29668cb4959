import httpx
import pytest

from evalsync.core.config import Settings
from evalsync.main import open_engine
from evalsync.schemas.auth import User
from tests.fake_backend import TOKEN, FakeBackend

TEST_API_URL = "http://testserver"


@pytest.fixture()
def backend():
    """Fresh fake server state for each test."""
    return FakeBackend()


@pytest.fixture()
def settings():
    # short interval so polling tests finish quickly
    return Settings(API_URL=TEST_API_URL, POLL_INTERVAL_SECONDS=0.01, REQUEST_TIMEOUT_SECONDS=5)


@pytest.fixture()
async def anonymous_engine(backend, settings):
    async with open_engine(settings, transport=httpx.ASGITransport(app=backend.app)) as engine:
        yield engine


@pytest.fixture()
async def engine(anonymous_engine):
    anonymous_engine.context.session.set(User(id="u1", email="instructor1@example.com", name="Teacher"), TOKEN)
    return anonymous_engine


@pytest.fixture()
def assignment(backend):
    """totalMarks=100, passPercentage=0.6, no submissions yet."""
    return backend.add_assignment(total_marks=100, pass_percentage=0.6)
