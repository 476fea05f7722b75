import os

import anyio
import pytest
from fastapi.testclient import TestClient

from partner_portal.api.deps import get_certificate_storage, get_document_storage, get_store
from partner_portal.main import app
from partner_portal.object_storage import InMemoryObjectStorage
from partner_portal.scripts.seed_dev_data import seed_dev_data
from partner_portal.store import InMemoryStore


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(scope="session")
def sync_dsn() -> str:
    """Synchronous (psycopg) DSN derived from async SQLAlchemy DATABASE_URL."""

    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        pytest.skip("DATABASE_URL is not set")
    return dsn.replace("postgresql+asyncpg://", "postgresql://")


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seeded(store: InMemoryStore):
    return anyio.run(seed_dev_data, store)


@pytest.fixture
def certificate_objects() -> InMemoryObjectStorage:
    return InMemoryObjectStorage("certificates")


@pytest.fixture
def document_objects() -> InMemoryObjectStorage:
    return InMemoryObjectStorage("documents")


@pytest.fixture
def client(store, certificate_objects, document_objects):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_certificate_storage] = lambda: certificate_objects
    app.dependency_overrides[get_document_storage] = lambda: document_objects
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(seeded) -> dict[str, str]:
    return {"X-User-Id": str(seeded.admin_user_id)}


@pytest.fixture
def partner_headers(seeded) -> dict[str, str]:
    return {"X-User-Id": str(seeded.partner_user_id)}
