"""
Tests for operational endpoints, static assets and request middleware.
"""

import pytest
from httpx import AsyncClient

from cammcomedy.core.config import Settings
from cammcomedy.core.logging import app_context


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["cache"] == {"status": "disabled"}


@pytest.mark.asyncio
async def test_metrics_exposes_lineup_counters(client: AsyncClient):
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "lineup_assignments_total" in response.text


@pytest.mark.asyncio
async def test_static_event_script(client: AsyncClient):
    response = await client.get("/static/event.js")
    assert response.status_code == 200
    assert "comicSelect" in response.text


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/")
    assert len(response.headers["X-Request-ID"]) == 8
    assert response.headers["X-Response-Time"].endswith("ms")


def test_log_events_carry_deployment_fields():
    processor = app_context(Settings(APP_NAME="Cammcomedy", ENVIRONMENT="test", STORE_BACKEND="json"))

    event = processor(None, "info", {"event": "gig_created", "gig_id": 1})

    assert event == {
        "event": "gig_created",
        "gig_id": 1,
        "app": "Cammcomedy",
        "env": "test",
        "store_backend": "json",
    }


def test_log_event_fields_win_over_deployment_fields():
    processor = app_context(Settings(STORE_BACKEND="sql"))
    event = processor(None, "info", {"event": "json_store_ready", "store_backend": "json"})
    assert event["store_backend"] == "json"
