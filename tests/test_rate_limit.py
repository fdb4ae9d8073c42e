import pytest
from fastapi.testclient import TestClient

from store_inventory.core.config import Settings
from store_inventory.main import create_app


@pytest.fixture()
def limited_client(engine):
    app_settings = Settings(
        DATABASE_URL="sqlite://",
        RATE_LIMIT_ENABLED=True,
        RATE_LIMIT_MAX=2,
        RATE_LIMIT_WINDOW_SECONDS=60,
    )
    return TestClient(create_app(app_settings, engine=engine))


class TestRateLimit:
    def test_requests_within_limit(self, limited_client):
        response = limited_client.get("/api/v1/alive")
        assert response.status_code == 200
        assert response.headers["X-RateLimit-Limit"] == "2"
        assert response.headers["X-RateLimit-Remaining"] == "1"

    @pytest.mark.parametrize("path", ["/api/v1/stores", "/api/v1/products", "/api/v1/inventory"])
    def test_router_endpoints_are_counted(self, limited_client, path):
        first = limited_client.get(path)
        second = limited_client.get(path)
        blocked = limited_client.get(path)

        assert first.status_code == 200
        assert first.headers["X-RateLimit-Remaining"] == "1"
        assert second.headers["X-RateLimit-Remaining"] == "0"
        assert blocked.status_code == 429

    def test_limit_exceeded(self, limited_client):
        limited_client.get("/api/v1/stores")
        limited_client.get("/api/v1/products")

        response = limited_client.get("/api/v1/inventory")
        assert response.status_code == 429
        assert response.json() == {"status": "fail", "message": "Too many requests, please try again later."}
        assert "Retry-After" in response.headers

    def test_window_is_shared_across_routes(self, limited_client):
        limited_client.get("/api/v1/alive")
        limited_client.get("/api/v1/stores")

        response = limited_client.post("/api/v1/products", json={"sku": "TEST-001"})
        assert response.status_code == 429

    def test_limited_response_keeps_request_context(self, limited_client):
        for _ in range(2):
            limited_client.get("/api/v1/stores")

        response = limited_client.get("/api/v1/stores", headers={"X-Request-ID": "req-429"})
        assert response.status_code == 429
        assert response.headers["X-Request-ID"] == "req-429"
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_clients_are_counted_separately(self, limited_client):
        for _ in range(2):
            limited_client.get("/api/v1/alive", headers={"X-Forwarded-For": "10.0.0.1"})

        blocked = limited_client.get("/api/v1/alive", headers={"X-Forwarded-For": "10.0.0.1"})
        other = limited_client.get("/api/v1/alive", headers={"X-Forwarded-For": "10.0.0.2, 10.0.0.1"})
        assert blocked.status_code == 429
        assert other.status_code == 200

    def test_disabled_limiter(self, client):
        for _ in range(5):
            response = client.get("/api/v1/stores")
        assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers
