import uuid

import pytest


@pytest.fixture()
def store(client):
    response = client.post("/api/v1/stores", json={"name": "Test Store"})
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture()
def product(client):
    response = client.post(
        "/api/v1/products",
        json={"sku": "TEST-001", "name": "Test Product", "category": "Electronics", "price": 99.99},
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestCreateStore:
    def test_create_store_derives_slug(self, client):
        response = client.post("/api/v1/stores", json={"name": "  Downtown Market #1 "})
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == "Store created"
        assert body["data"]["name"] == "Downtown Market #1"
        assert body["data"]["slug"] == "downtown-market-1"
        assert body["data"]["createdAt"].endswith("Z")

    def test_create_store_lowercases_slug(self, client):
        response = client.post("/api/v1/stores", json={"name": "Uptown", "slug": " UpTown-Store "})
        assert response.json()["data"]["slug"] == "uptown-store"

    def test_create_store_requires_name(self, client):
        response = client.post("/api/v1/stores", json={"name": "   "})
        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "fail"
        assert body["message"].startswith("name:")

    def test_duplicate_slug_is_conflict(self, client, store):
        response = client.post("/api/v1/stores", json={"name": "Another", "slug": store["slug"]})
        assert response.status_code == 409
        assert "already exists" in response.json()["message"]

    def test_slug_reusable_after_delete(self, client, store):
        client.delete(f"/api/v1/stores/{store['_id']}")
        response = client.post("/api/v1/stores", json={"name": "Test Store"})
        assert response.status_code == 201


class TestGetStores:
    def test_list_stores_with_product_count(self, client, store, product):
        client.post("/api/v1/stores", json={"name": "Empty Store"})
        client.patch(f"/api/v1/stores/{store['_id']}/inventory/{product['_id']}", json={"quantity": 5})

        response = client.get("/api/v1/stores")
        assert response.status_code == 200
        data = response.json()["data"]
        assert [item["name"] for item in data] == ["Test Store", "Empty Store"]
        assert data[0]["productCount"] == 1
        assert data[1]["productCount"] == 0

    def test_removed_inventory_not_counted(self, client, store, product):
        client.patch(f"/api/v1/stores/{store['_id']}/inventory/{product['_id']}", json={"quantity": 5})
        client.delete(f"/api/v1/stores/{store['_id']}/inventory/{product['_id']}")

        data = client.get("/api/v1/stores").json()["data"]
        assert data[0]["productCount"] == 0

    def test_get_store_by_id_and_slug(self, client, store):
        by_id = client.get(f"/api/v1/stores/{store['_id']}")
        by_slug = client.get(f"/api/v1/stores/{store['slug']}")
        assert by_id.status_code == 200
        assert by_slug.status_code == 200
        assert by_id.json()["data"]["_id"] == by_slug.json()["data"]["_id"]

    def test_get_missing_store(self, client):
        response = client.get(f"/api/v1/stores/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"status": "fail", "message": "Store not found"}


class TestUpdateStore:
    def test_update_store(self, client, store):
        response = client.patch(f"/api/v1/stores/{store['_id']}", json={"name": "Renamed Store"})
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Renamed Store"
        assert response.json()["data"]["slug"] == store["slug"]

    def test_update_with_invalid_id(self, client):
        response = client.patch("/api/v1/stores/not-an-id", json={"name": "Renamed"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid store ID"

    def test_update_deleted_store(self, client, store):
        client.delete(f"/api/v1/stores/{store['_id']}")
        response = client.patch(f"/api/v1/stores/{store['_id']}", json={"name": "Renamed"})
        assert response.status_code == 404


class TestDeleteStore:
    def test_delete_store(self, client, store):
        response = client.delete(f"/api/v1/stores/{store['_id']}")
        assert response.status_code == 200
        assert response.json() == {"status": "success", "message": "Store deleted"}
        assert client.get(f"/api/v1/stores/{store['_id']}").status_code == 404

    def test_delete_store_hides_its_inventory(self, client, store, product):
        client.patch(f"/api/v1/stores/{store['_id']}/inventory/{product['_id']}", json={"quantity": 10})

        client.delete(f"/api/v1/stores/{store['_id']}")

        response = client.get("/api/v1/inventory", params={"storeId": store["_id"]})
        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["pagination"]["total"] == 0

    def test_delete_twice(self, client, store):
        client.delete(f"/api/v1/stores/{store['_id']}")
        assert client.delete(f"/api/v1/stores/{store['_id']}").status_code == 404

    def test_delete_with_invalid_id(self, client):
        response = client.delete("/api/v1/stores/123")
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid store ID"
