import pytest

from partner_portal.api.deps import get_certificate_storage, get_document_storage
from partner_portal.main import app
from partner_portal.object_storage import InMemoryObjectStorage

from tests._client import get_async_client


@pytest.mark.anyio
async def test_health_check():
    async with get_async_client() as client:
        r = await client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class _Unreachable(InMemoryObjectStorage):
    async def check(self) -> bool:
        return False


@pytest.mark.anyio
async def test_storage_health_reports_each_bucket():
    app.dependency_overrides[get_certificate_storage] = lambda: InMemoryObjectStorage("certificates")
    app.dependency_overrides[get_document_storage] = lambda: _Unreachable("documents")
    try:
        async with get_async_client() as client:
            r = await client.get("/api/v1/storage/health")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 503
    assert r.json() == {"status": "unavailable", "buckets": {"certificates": True, "documents": False}}
