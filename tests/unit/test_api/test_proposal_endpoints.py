"""
Unit tests for API endpoints.

Tests endpoint behavior using FastAPI TestClient against an in-memory
database.
"""

import pytest
from fastapi.testclient import TestClient

from meetdown.api.main import create_app
from meetdown.exceptions import ProposalError
from meetdown.services.proposals import ProposalStore


PAYLOAD = {
    "name": "Team dinner",
    "day_ranges": ["[2025-01-05,2025-01-05]", "[2025-01-10,2025-01-12]"],
    "start_time": "18:00",
    "end_time": "21:30",
}


@pytest.fixture
def client(database, settings):
    """Create test client serving the test database."""
    app = create_app(database=database, settings=settings)
    with TestClient(app) as client:
        yield client


class TestHealthEndpoint:
    """Test /health endpoint."""

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert data["database_connected"] is True

    def test_health_check_has_request_id(self, client):
        response = client.get("/health")

        assert "X-Request-ID" in response.headers
        assert "X-Response-Time" in response.headers


class TestCreateProposalEndpoint:
    """Test POST /proposals endpoint."""

    def test_create_proposal_success(self, client, settings):
        response = client.post("/proposals", json=PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert len(data["short_id"]) == settings.short_id_length
        assert data["url"] == f"https://meetdown.test/events/{data['short_id']}"

    @pytest.mark.parametrize(
        "override",
        [
            {"name": ""},
            {"day_ranges": []},
            {"day_ranges": ["[2025-01-12,2025-01-10]"]},
            {"day_ranges": ["[0001-01-01,9999-12-31]"]},
            {"start_time": "9am"},
            {"end_time": "17:00"},
        ],
    )
    def test_create_proposal_validation_error(self, client, override):
        response = client.post("/proposals", json={**PAYLOAD, **override})
        assert response.status_code == 422

    def test_create_proposal_missing_fields(self, client):
        response = client.post("/proposals", json={"name": "Team dinner"})
        assert response.status_code == 422

    def test_storage_failure_is_retryable(self, client, monkeypatch):
        def fail(self, draft):
            raise ProposalError("Failed to persist proposal", retryable=True)

        monkeypatch.setattr(ProposalStore, "create", fail)
        response = client.post("/proposals", json=PAYLOAD)

        assert response.status_code == 503
        data = response.json()
        assert data["error_type"] == "storage_error"
        assert data["retryable"] is True


class TestGetProposalEndpoint:
    """Test GET /proposals/{short_id} endpoint."""

    def test_get_proposal(self, client):
        short_id = client.post("/proposals", json=PAYLOAD).json()["short_id"]

        response = client.get(f"/proposals/{short_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["short_id"] == short_id
        assert data["name"] == "Team dinner"
        assert data["day_ranges"] == PAYLOAD["day_ranges"]
        assert data["days"] == ["2025-01-05", "2025-01-10", "2025-01-11", "2025-01-12"]
        assert data["start_time"] == "18:00"
        assert data["end_time"] == "21:30"
        assert data["created_at"] is not None

    def test_get_unknown_proposal(self, client):
        response = client.get("/proposals/unknown-id")

        assert response.status_code == 404
        data = response.json()
        assert data["error_type"] == "not_found"
        assert data["retryable"] is False
