import pytest


@pytest.mark.asyncio
async def test_health_endpoint_returns_200(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_health_endpoint_has_required_fields(client):
    response = await client.get("/api/v1/health")
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    assert data["storage"] == "healthy"
    assert "timestamp" in data
    assert "environment" in data


@pytest.mark.asyncio
async def test_health_endpoint_reports_version(client):
    response = await client.get("/api/v1/health")
    assert response.json()["version"] == "0.1.0"


@pytest.mark.asyncio
async def test_request_id_header(client):
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_run_uses_configured_host_and_port(monkeypatch):
    import uvicorn

    from prolist import main

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(main.settings, "backend_host", "127.0.0.1")
    monkeypatch.setattr(main.settings, "backend_port", 9100)
    monkeypatch.setattr(main.settings, "environment", "production")

    main.run()

    assert calls == [("prolist.main:app", {"host": "127.0.0.1", "port": 9100, "reload": False})]
