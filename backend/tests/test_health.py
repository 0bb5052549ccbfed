"""
Tests for health check endpoints.
"""


def test_root_endpoint(client):
    """Test the root endpoint returns welcome message."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "Taskboard" in data["message"]
    assert "version" in data
    assert data["docs"] == "/docs"
    assert data["health"] == "/health"


def test_health_check(client):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "healthy"
    assert data["app_name"] == "Taskboard"
    assert data["database"] == "connected"
    assert data["timestamp"].endswith("Z")


def test_readiness_check(client):
    """Schema present and database reachable means ready."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()

    assert data["ready"] is True
    assert data["checks"] == {"database": "ok", "schema": "ok"}


def test_readiness_check_without_schema(client, test_engine):
    """Missing tables report not ready with 503."""
    from taskboard.database import Base

    Base.metadata.drop_all(bind=test_engine)

    response = client.get("/health/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["ready"] is False
    assert "missing tables" in data["checks"]["schema"]


def test_health_endpoints_cors(client):
    """Test that CORS headers are set for the dashboard origin."""
    response = client.options(
        "/health",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        }
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
