from datetime import timedelta

import httpx
import pytest
import pytest_asyncio
from fastapi import Depends
from sqlalchemy import select

from procurement_sync import create_app
from procurement_sync.config import settings
from procurement_sync.database import get_db_session
from procurement_sync.dependencies import get_current_user, get_service_registry
from procurement_sync.models import ERPSyncLog
from procurement_sync.services import HttpDispatcher, create_service_registry

SYNC_URL = "/api/erp-sync"


class FakeERP:
    """MockTransport handler dengan response yang bisa diatur per test"""
    def __init__(self):
        self.requests = []
        self.status_code = 201

    def __call__(self, request):
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"id": f"erp-{len(self.requests)}"})


@pytest.fixture
def fake_erp():
    return FakeERP()


@pytest_asyncio.fixture
async def client(session_factory, fake_erp, recording_sleep):
    app = create_app()

    async def override_db_session():
        async with session_factory() as session:
            yield session

    async def override_service_registry(
        db_session=Depends(get_db_session),
        current_user: str = Depends(get_current_user)
    ):
        dispatcher = HttpDispatcher(transport=httpx.MockTransport(fake_erp), sleep=recording_sleep)
        return create_service_registry(db_session, settings.model_dump(), current_user, dispatcher=dispatcher)

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_service_registry] = override_service_registry

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token(sub='user-42')}"}


class TestSystemRoutes:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client, make_integration):
        integration = await make_integration()

        response = await client.post(SYNC_URL, json={"integrationId": integration.id, "action": "sync_all"})

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        response = await client.post(SYNC_URL, json={"integrationId": "x", "action": "sync_all"},
                                     headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, client, make_token):
        token = make_token(expires_in=timedelta(minutes=-5))
        response = await client.post(SYNC_URL, json={"integrationId": "x", "action": "sync_all"},
                                     headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    @pytest.mark.asyncio
    async def test_logs_require_token(self, client):
        response = await client.get(f"{SYNC_URL}/logs")
        assert response.status_code == 401


class TestRequestValidation:
    @pytest.mark.asyncio
    async def test_missing_integration_id(self, client, auth_headers):
        response = await client.post(SYNC_URL, json={"action": "sync_all"}, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert any("integrationId" in detail["field"] for detail in body["details"])

    @pytest.mark.asyncio
    async def test_unknown_action(self, client, auth_headers):
        response = await client.post(SYNC_URL, json={"integrationId": "x", "action": "sync_some"},
                                     headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_sync_entity_requires_entity_fields(self, client, auth_headers):
        response = await client.post(SYNC_URL, json={"integrationId": "x", "action": "sync_entity",
                                                     "entityType": "invoice"},
                                     headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_entity_type(self, client, auth_headers):
        response = await client.post(SYNC_URL, json={"integrationId": "x", "action": "sync_entity",
                                                     "entityType": "receipt", "entityId": "r-1"},
                                     headers=auth_headers)
        assert response.status_code == 400


class TestRunSync:
    @pytest.mark.asyncio
    async def test_inactive_integration(self, client, auth_headers, make_integration, fake_erp):
        integration = await make_integration(is_active=False)

        response = await client.post(SYNC_URL, json={"integrationId": integration.id, "action": "sync_all"},
                                     headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"
        assert response.json()["error_code"] == "NOT_FOUND"
        assert fake_erp.requests == []

    @pytest.mark.asyncio
    async def test_invalid_stored_config(self, client, auth_headers, make_integration):
        integration = await make_integration(request_timeout_seconds=0)

        response = await client.post(SYNC_URL, json={"integrationId": integration.id, "action": "sync_all"},
                                     headers=auth_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Integration Misconfigured"
        assert body["error_code"] == "INTEGRATION_CONFIG_ERROR"
        assert body["details"]["errors"][0]["field"] == "request_timeout_seconds"

    @pytest.mark.asyncio
    async def test_broken_purchase_order_mapping_does_not_block_invoices(self, client, auth_headers,
                                                                         make_integration, make_invoice,
                                                                         make_purchase_order, fake_erp):
        integration = await make_integration(endpoint_mappings={
            "invoice": {"create": "/invoices"},
            "purchase_order": {"create": "/purchase-orders", "method": "RE MOVE"},
        })
        await make_invoice()
        await make_purchase_order()

        response = await client.post(SYNC_URL, json={"integrationId": integration.id, "action": "sync_all"},
                                     headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "synced": 1, "failed": 1}
        assert [request.url.path for request in fake_erp.requests] == ["/invoices"]

    @pytest.mark.asyncio
    async def test_sync_all(self, client, auth_headers, make_integration, make_invoice, make_purchase_order,
                            fake_erp, db_session):
        integration = await make_integration()
        await make_invoice()
        await make_invoice()
        await make_purchase_order()

        response = await client.post(SYNC_URL, json={"integrationId": integration.id, "action": "sync_all"},
                                     headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "synced": 3, "failed": 0}
        assert len(fake_erp.requests) == 3
        assert all(request.headers["Authorization"] == "Bearer erp-token" for request in fake_erp.requests)

        logs = (await db_session.execute(select(ERPSyncLog))).scalars().all()
        assert {log.triggered_by for log in logs} == {"user-42"}

    @pytest.mark.asyncio
    async def test_per_entity_failure_still_returns_200(self, client, auth_headers, make_integration,
                                                        make_invoice, fake_erp):
        integration = await make_integration(sync_purchase_orders=False)
        await make_invoice()
        fake_erp.status_code = 409

        response = await client.post(SYNC_URL, json={"integrationId": integration.id, "action": "sync_all"},
                                     headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "synced": 0, "failed": 1}

    @pytest.mark.asyncio
    async def test_sync_entity(self, client, auth_headers, make_integration, make_purchase_order, fake_erp):
        integration = await make_integration()
        purchase_order = await make_purchase_order()

        response = await client.post(SYNC_URL, json={
            "integrationId": integration.id,
            "action": "sync_entity",
            "entityType": "purchase_order",
            "entityId": purchase_order.id,
        }, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "synced": 1, "failed": 0}
        assert fake_erp.requests[0].url.path == "/purchase-orders"

    @pytest.mark.asyncio
    async def test_sync_entity_missing(self, client, auth_headers, make_integration):
        integration = await make_integration()

        response = await client.post(SYNC_URL, json={
            "integrationId": integration.id,
            "action": "sync_entity",
            "entityType": "invoice",
            "entityId": "does-not-exist",
        }, headers=auth_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, session_factory, auth_headers):
        app = create_app()

        class BrokenSyncService:
            async def run(self, request, triggered_by=None):
                raise RuntimeError("database exploded")

        class BrokenRegistry:
            erp_sync_service = BrokenSyncService()

        async def override_service_registry(current_user: str = Depends(get_current_user)):
            return BrokenRegistry()

        app.dependency_overrides[get_service_registry] = override_service_registry
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(SYNC_URL, json={"integrationId": "x", "action": "sync_all"},
                                         headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error", "message": "An unexpected error occurred"}


class TestSyncLogs:
    @pytest.mark.asyncio
    async def test_list_logs(self, client, auth_headers, make_integration, make_invoice, fake_erp):
        integration = await make_integration(name="SAP Prod", sync_purchase_orders=False)
        invoice = await make_invoice()
        await client.post(SYNC_URL, json={"integrationId": integration.id, "action": "sync_all"},
                          headers=auth_headers)

        response = await client.get(f"{SYNC_URL}/logs", params={"integration_id": integration.id,
                                                               "status": "success"},
                                    headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["entity_id"] == invoice.id
        assert data[0]["entity_reference"] == invoice.invoice_number
        assert data[0]["integration_name"] == "SAP Prod"
        assert data[0]["erp_reference_id"] == "erp-1"

    @pytest.mark.asyncio
    async def test_invalid_status_filter(self, client, auth_headers):
        response = await client.get(f"{SYNC_URL}/logs", params={"status": "bogus"}, headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_pending_is_not_a_log_status(self, client, auth_headers):
        response = await client.get(f"{SYNC_URL}/logs", params={"status": "pending"}, headers=auth_headers)
        assert response.status_code == 400
