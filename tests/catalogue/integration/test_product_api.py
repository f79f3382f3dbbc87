"""Integration tests for the product catalog endpoints."""


def _create(client, admin, **overrides):
    body = {"name": "Steel Bottle", "price": 200.0, "discount": 10, "stock": 5}
    body.update(overrides)
    response = client.post("/products", json=body, headers=admin)
    assert response.status_code == 201
    return response.json()["product_id"]


class TestProductAPI:
    def test_create_and_get(self, client, admin):
        product_id = _create(client, admin, tags=["steel"])

        body = client.get(f"/products/{product_id}").json()
        assert body["final_price"] == 180.0
        assert body["tags"] == ["steel"]

    def test_customers_cannot_create(self, client, customer):
        response = client.post("/products", json={"name": "X", "price": 1.0}, headers=customer)
        assert response.status_code == 403

    def test_list_filters(self, client, admin):
        office = client.post("/categories", json={"name": "Office"}, headers=admin).json()["category_id"]
        _create(client, admin, name="Steel Bottle")
        _create(client, admin, name="Desk", category_id=office)

        names = [p["name"] for p in client.get("/products", params={"category_id": office}).json()]
        assert names == ["Desk"]

        names = [p["name"] for p in client.get("/products", params={"q": "bottle"}).json()]
        assert names == ["Steel Bottle"]

    def test_update_recomputes_final_price(self, client, admin):
        product_id = _create(client, admin)
        response = client.put(f"/products/{product_id}", json={"discount": 50}, headers=admin)
        assert response.status_code == 200
        assert client.get(f"/products/{product_id}").json()["final_price"] == 100.0

    def test_invalid_body_is_rejected(self, client, admin):
        response = client.post("/products", json={"name": "X", "price": -5}, headers=admin)
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_delete(self, client, admin):
        product_id = _create(client, admin)
        assert client.delete(f"/products/{product_id}", headers=admin).status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_unknown_category_is_not_found(self, client, admin):
        body = {"name": "Desk", "price": 100.0, "category_id": "no-such-category"}
        response = client.post("/products", json=body, headers=admin)
        assert response.status_code == 404
        assert response.json()["error"] == "category_not_found"
