"""API tests for the /cart endpoints via TestClient."""

from decimal import Decimal

import pytest

from conftest import VALID_ADDRESS


def _create_user(client, email="shopper@example.com", wallet_money="100", address=VALID_ADDRESS):
    payload = {"email": email, "name": "Shopper", "wallet_money": wallet_money}
    if address:
        payload["address"] = address
    response = client.post("/users", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


def _add_item(client, user_id, product_id="productA", quantity=1):
    return client.post(
        "/cart",
        params={"user_id": user_id},
        json={"productId": product_id, "quantity": quantity},
    )


@pytest.fixture
def user_id(client):
    return _create_user(client)


class TestGetCartEndpoint:
    def test_missing_cart_returns_404(self, client, user_id):
        response = client.get("/cart", params={"user_id": user_id})

        assert response.status_code == 404
        assert response.json()["detail"] == "User does not have a cart"

    def test_user_id_is_required(self, client):
        assert client.get("/cart").status_code == 422


class TestCartItemEndpoints:
    def test_add_item_returns_cart(self, client, user_id):
        response = _add_item(client, user_id, "productA", 2)

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == user_id
        assert len(data["items"]) == 1
        assert data["items"][0]["product_id"] == "productA"
        assert data["items"][0]["quantity"] == 2
        assert Decimal(data["total"]) == Decimal("20")

    def test_add_duplicate_returns_400(self, client, user_id):
        _add_item(client, user_id, "productA")

        response = _add_item(client, user_id, "productA")

        assert response.status_code == 400
        assert "already in cart" in response.json()["detail"]

    def test_add_unknown_product_returns_400(self, client, user_id):
        response = _add_item(client, user_id, "nope")

        assert response.status_code == 400

    def test_zero_quantity_fails_validation(self, client, user_id):
        response = _add_item(client, user_id, "productA", 0)

        assert response.status_code == 422

    def test_update_item_quantity(self, client, user_id):
        _add_item(client, user_id, "productA", 1)
        _add_item(client, user_id, "productB", 1)

        response = client.put(
            "/cart",
            params={"user_id": user_id},
            json={"productId": "productA", "quantity": 5},
        )

        assert response.status_code == 200
        items = response.json()["items"]
        assert [(i["product_id"], i["quantity"]) for i in items] == [
            ("productA", 5),
            ("productB", 1),
        ]

    def test_update_without_cart_returns_400(self, client, user_id):
        response = client.put(
            "/cart",
            params={"user_id": user_id},
            json={"productId": "productA", "quantity": 5},
        )

        assert response.status_code == 400

    def test_delete_item(self, client, user_id):
        _add_item(client, user_id, "productA")
        _add_item(client, user_id, "productB")

        response = client.delete("/cart/items/productA", params={"user_id": user_id})

        assert response.status_code == 204
        items = client.get("/cart", params={"user_id": user_id}).json()["items"]
        assert [i["product_id"] for i in items] == ["productB"]

    def test_delete_absent_item_returns_400(self, client, user_id):
        _add_item(client, user_id, "productA")

        response = client.delete("/cart/items/productB", params={"user_id": user_id})

        assert response.status_code == 400


class TestCheckoutEndpoint:
    def test_checkout_flow(self, client, user_id, notifications):
        _add_item(client, user_id, "productA", 2)
        _add_item(client, user_id, "productB", 1)

        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 204
        assert client.get("/cart", params={"user_id": user_id}).json()["items"] == []
        wallet = client.get(f"/users/{user_id}").json()["wallet_money"]
        assert Decimal(wallet) == Decimal("75")
        assert len(notifications.sent) == 1

    def test_checkout_without_cart_returns_404(self, client, user_id):
        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 404

    def test_checkout_without_address_returns_400(self, client):
        user_id = _create_user(client, email="noaddr@example.com", address=None)
        _add_item(client, user_id, "productA")

        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 400

    def test_checkout_with_insufficient_balance_returns_400(self, client):
        user_id = _create_user(client, email="poor@example.com", wallet_money="5")
        _add_item(client, user_id, "productA", 1)

        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 400
        assert response.json()["detail"] == "Insufficient wallet balance"
        assert len(client.get("/cart", params={"user_id": user_id}).json()["items"]) == 1

    def test_checkout_while_locked_returns_409(self, client, user_id, locks):
        _add_item(client, user_id, "productA")
        locks.held[user_id] = "someone-else"

        response = client.put("/cart/checkout", params={"user_id": user_id})

        assert response.status_code == 409


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
