"""Health probes — unauthenticated liveness, readiness reflects both stores."""

from unittest.mock import AsyncMock, MagicMock

import thryv.infrastructure.database as database
import thryv.infrastructure.dynamodb as dynamodb


async def test_liveness_needs_no_token(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


async def test_readiness_without_stores_is_503(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    monkeypatch.setattr(dynamodb, "kv_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["checks"] == {"postgresql": "unavailable", "dynamodb": "unavailable"}


async def test_readiness_with_healthy_stores(client, monkeypatch):
    db = MagicMock(health_check=AsyncMock(return_value=True))
    kv = MagicMock(health_check=AsyncMock(return_value=True))
    monkeypatch.setattr(database, "db_manager", db)
    monkeypatch.setattr(dynamodb, "kv_manager", kv)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "ready"
    kv.health_check.assert_awaited_once_with(dynamodb.company_table_name)
