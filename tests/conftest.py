"""
Podcast Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches persistence gets its own SQLite file under
       pytest's tmp_path, so ids always start at 1 and tests never share rows.

Fixture Hierarchy (all function-scoped):
    ├── engine / store: throwaway SQLite database with all tables created
    ├── token_service / credential_store / catalog_service: real services
    ├── mock_credentials: AsyncMock standing in for the CredentialStore
    ├── test_client: HTTPX AsyncClient talking to a fresh FastAPI app
    └── graphql: helper that POSTs a document to /graphql and returns the JSON
"""

import os
import tempfile

# Must run before any podcast_backend import reads the settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="podcast_backend_test_"), "default.db"
)
os.environ["SECRET_KEY"] = "test-secret-not-real"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from podcast_backend.database import build_engine, build_session_factory, create_all  # noqa: E402
from podcast_backend.main import create_app  # noqa: E402
from podcast_backend.repositories import Store  # noqa: E402
from podcast_backend.services.catalog_service import CatalogService  # noqa: E402
from podcast_backend.services.credential_store import CredentialStore  # noqa: E402
from podcast_backend.services.token_service import TokenService  # noqa: E402

TEST_SECRET = "test-secret-not-real"


@pytest_asyncio.fixture
async def engine(tmp_path):
    """A fresh SQLite database with every table created."""
    db_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_all(db_engine)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return Store(session_factory)


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def credential_store(store):
    return CredentialStore(store, bcrypt_rounds=4)


@pytest.fixture
def catalog_service(store):
    return CatalogService(store)


@pytest.fixture
def mock_credentials():
    """
    AsyncMock with the CredentialStore interface.

    Usage:
        mock_credentials.find_by_id.return_value = user
    """
    return AsyncMock(spec=CredentialStore)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient routed straight into a FastAPI app (no server).

    The app's store is bound to this test's SQLite database.
    """
    app = create_app(session_factory=session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def graphql(test_client):
    """
    Execute a GraphQL document, optionally authenticated.

    Usage:
        body = await graphql("{ me { email } }", token=token)
    """

    async def execute(query, token=None, variables=None):
        headers = {"X-JWT": token} if token else {}
        response = await test_client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return response.json()

    return execute
