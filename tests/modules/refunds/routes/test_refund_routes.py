# -*- coding: utf-8 -*-
"""
Suite: Refunds Routes
Rutas objetivo:
  - POST /refunds/check-eligibility
  - POST /refunds/process
Propósito:
  - Validar autenticación (401), validación (400), not found (404),
    reembolso repetido (409)
  - Validar forma camelCase de las respuestas
  - Validar el cuerpo de error {"error": ..., "details": ...} del procesador

Autor: Ixchel Beristain
Fecha: 2026-10-11
"""

from collections.abc import AsyncIterator
from http import HTTPStatus

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from app.modules.auth.security import create_access_token
from app.modules.refunds.routes.refunds import get_eligibility_evaluator, get_settlement_executor
from app.shared.database.database import get_async_session


@pytest.fixture
def app(db_session, make_evaluator, make_executor):
    from app.main import create_app

    fastapi_app = create_app()

    async def _session():
        yield db_session

    fastapi_app.dependency_overrides[get_async_session] = _session
    fastapi_app.dependency_overrides[get_eligibility_evaluator] = lambda: make_evaluator()
    fastapi_app.dependency_overrides[get_settlement_executor] = lambda: make_executor()
    return fastapi_app


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest.fixture
def auth_headers(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


class TestAuthAndValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/refunds/check-eligibility", "/refunds/process"])
    async def test_missing_token(self, async_client, path):
        r = await async_client.post(path, json={"enrollmentId": "x"})
        assert r.status_code == HTTPStatus.UNAUTHORIZED
        assert r.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_invalid_token(self, async_client):
        r = await async_client.post(
            "/refunds/check-eligibility",
            json={"enrollmentId": "x"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert r.status_code == HTTPStatus.UNAUTHORIZED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/refunds/check-eligibility", "/refunds/process"])
    async def test_missing_enrollment_id(self, async_client, auth_headers, path):
        r = await async_client.post(path, json={}, headers=auth_headers)
        assert r.status_code == HTTPStatus.BAD_REQUEST
        assert r.json() == {"error": "Enrollment ID required"}

    @pytest.mark.asyncio
    async def test_unknown_enrollment(self, async_client, auth_headers):
        r = await async_client.post(
            "/refunds/check-eligibility", json={"enrollmentId": "missing"}, headers=auth_headers
        )
        assert r.status_code == HTTPStatus.NOT_FOUND
        assert r.json() == {"error": "Enrollment not found"}

    @pytest.mark.asyncio
    async def test_already_refunded_is_409(self, async_client, auth_headers, seed, processor):
        _, (enrollment,) = await seed()
        body = {"enrollmentId": enrollment.id}

        first = await async_client.post("/refunds/process", json=body, headers=auth_headers)
        second = await async_client.post("/refunds/process", json=body, headers=auth_headers)

        assert first.status_code == HTTPStatus.OK
        assert second.status_code == HTTPStatus.CONFLICT
        assert second.json() == {"error": "This item has already been refunded."}
        assert len(processor.calls) == 1


class TestCheckEligibility:

    @pytest.mark.asyncio
    async def test_eligible_response_shape(self, async_client, auth_headers, seed):
        _, (enrollment,) = await seed()

        r = await async_client.post(
            "/refunds/check-eligibility", json={"enrollmentId": enrollment.id}, headers=auth_headers
        )

        assert r.status_code == HTTPStatus.OK, r.text
        data = r.json()
        assert data["eligible"] is True
        assert "reason" not in data
        details = data["details"]
        assert details["enrollmentId"] == enrollment.id
        assert details["daysElapsed"] == 1
        assert details["refundAmount"] == 100.0
        assert details["estimatedRefundAmount"] == 100.0
        assert details["processingFeeApplied"] is False
        assert details["processingFeePercent"] == pytest.approx(0.05)
        assert details["purchaseDate"].endswith("Z")

    @pytest.mark.asyncio
    async def test_ineligible_response_has_reason_only(self, async_client, auth_headers, seed, now):
        from datetime import timedelta

        _, (enrollment,) = await seed(paid_at=now - timedelta(days=4))

        r = await async_client.post(
            "/refunds/check-eligibility", json={"enrollmentId": enrollment.id}, headers=auth_headers
        )

        assert r.status_code == HTTPStatus.OK
        assert r.json() == {
            "eligible": False,
            "reason": (
                "Refund requests for courses must be made within 3 days of purchase. "
                "Your purchase was 4 days ago."
            ),
        }

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, app, async_client, auth_headers):
        class _Exploding:
            async def check_eligibility(self, *args, **kwargs):
                raise RuntimeError("boom")

        app.dependency_overrides[get_eligibility_evaluator] = lambda: _Exploding()

        r = await async_client.post(
            "/refunds/check-eligibility", json={"enrollmentId": "x"}, headers=auth_headers
        )

        assert r.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert r.json() == {"error": "Internal server error"}


class TestProcess:

    @pytest.mark.asyncio
    async def test_success(self, async_client, auth_headers, seed):
        _, (enrollment,) = await seed()

        r = await async_client.post(
            "/refunds/process",
            json={"enrollmentId": enrollment.id, "refundReason": "Changed my mind"},
            headers=auth_headers,
        )

        assert r.status_code == HTTPStatus.OK, r.text
        assert r.json() == {"success": True, "refundId": "re_1", "amount": 100.0}

    @pytest.mark.asyncio
    async def test_processor_failure_body(self, async_client, auth_headers, seed, processor):
        _, (enrollment,) = await seed()
        processor.error = "Your card was declined."

        r = await async_client.post(
            "/refunds/process", json={"enrollmentId": enrollment.id}, headers=auth_headers
        )

        assert r.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert r.json() == {"error": "Refund processing failed", "details": "Your card was declined."}

    @pytest.mark.asyncio
    async def test_other_users_enrollment_is_404(self, async_client, seed):
        _, (enrollment,) = await seed()
        headers = {"Authorization": f"Bearer {create_access_token('someone-else')}"}

        r = await async_client.post("/refunds/process", json={"enrollmentId": enrollment.id}, headers=headers)

        assert r.status_code == HTTPStatus.NOT_FOUND
        assert r.json() == {"error": "Enrollment not found"}


class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_health(self, async_client):
        r = await async_client.get("/health")
        assert r.status_code == HTTPStatus.OK
        assert r.json()["status"] in {"ok", "degraded"}

    @pytest.mark.asyncio
    async def test_metrics_exposes_refund_counters(self, async_client):
        r = await async_client.get("/metrics")
        assert r.status_code == HTTPStatus.OK
        assert "coursestore_refunds_eligibility_verdicts" in r.text
