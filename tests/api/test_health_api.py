"""
Test suite for health endpoint.

System role: Verification of the liveness route and request middleware
"""

from fastapi import status
from fastapi.testclient import TestClient

from session_desk.api.main import create_app


def test_health_check() -> None:
    client = TestClient(create_app())

    response = client.get("/api/v1/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_correlation_id_is_echoed() -> None:
    client = TestClient(create_app())

    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_correlation_id_is_generated() -> None:
    client = TestClient(create_app())

    response = client.get("/api/v1/health")

    assert response.headers["X-Correlation-ID"]
