"""Tests for the HTTP routers."""

from conftest import ADMIN, ALICE, BOB, BOOK_A, BOOK_B, MISSING_BOOK, auth


def _fill_cart(client, user_id=ALICE):
    client.post("/cart/add", json={"book_id": BOOK_A, "quantity": 2}, headers=auth(user_id))
    return client.post("/cart/add", json={"book_id": BOOK_B}, headers=auth(user_id))


def _checkout(client, user_id=ALICE):
    return client.post("/checkout/", json={"shipping_address": "1 Main Street"}, headers=auth(user_id))


class TestIdentity:
    def test_missing_user_header(self, client) -> None:
        """Requests without a caller id are unauthorised."""
        response = client.get("/cart/")
        assert response.status_code == 401

    def test_admin_routes_need_admin_role(self, client) -> None:
        """Regular users cannot reach admin routes."""
        response = client.get("/admin/orders", headers=auth(ALICE))
        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"


class TestCartApi:
    def test_add_and_view(self, client) -> None:
        """Cart endpoints return the cart view."""
        response = _fill_cart(client)

        assert response.status_code == 200
        assert response.json()["total_items"] == 2

        response = client.get("/cart/", headers=auth(ALICE))
        assert response.status_code == 200
        assert float(response.json()["total_price"]) == 25.0

    def test_unknown_book_is_404(self, client) -> None:
        """Domain errors map onto their status codes."""
        response = client.post("/cart/add", json={"book_id": MISSING_BOOK}, headers=auth(ALICE))

        assert response.status_code == 404
        assert response.json()["detail"] == f"Book not found with ID: {MISSING_BOOK}"

    def test_bad_quantity_is_422(self, client) -> None:
        """Quantities below one are rejected."""
        _fill_cart(client)
        response = client.put(f"/cart/update/{BOOK_A}", json={"quantity": 0}, headers=auth(ALICE))
        assert response.status_code == 422

    def test_remove_and_clear(self, client) -> None:
        """Lines can be removed one by one or all at once."""
        _fill_cart(client)

        response = client.delete(f"/cart/remove/{BOOK_A}", headers=auth(ALICE))
        assert [i["book_id"] for i in response.json()["items"]] == [BOOK_B]

        response = client.delete(f"/cart/remove/{BOOK_A}", headers=auth(ALICE))
        assert response.status_code == 404

        response = client.delete("/cart/clear", headers=auth(ALICE))
        assert response.json()["items"] == []


class TestCheckoutAndOrdersApi:
    def test_checkout_then_cancel(self, client) -> None:
        """A placed order can be read and cancelled by its owner."""
        _fill_cart(client)

        response = _checkout(client)
        assert response.status_code == 200
        order_id = response.json()["order_id"]
        assert float(response.json()["total_amount"]) == 25.0

        response = client.get(f"/orders/{order_id}", headers=auth(ALICE))
        assert response.json()["status"] == "pending"

        response = client.put(f"/orders/{order_id}/cancel", headers=auth(ALICE))
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

        response = client.put(f"/orders/{order_id}/cancel", headers=auth(ALICE))
        assert response.status_code == 400

    def test_empty_cart_checkout(self, client) -> None:
        """Checking out twice in a row fails the second time."""
        _fill_cart(client)
        _checkout(client)

        response = _checkout(client)
        assert response.status_code == 400

    def test_blank_address_rejected(self, client) -> None:
        """A shipping address is required."""
        _fill_cart(client)
        response = client.post("/checkout/", json={"shipping_address": ""}, headers=auth(ALICE))
        assert response.status_code == 422

    def test_foreign_order_is_403(self, client) -> None:
        """Owners cannot read each other's orders."""
        _fill_cart(client)
        order_id = _checkout(client).json()["order_id"]

        response = client.get(f"/orders/{order_id}", headers=auth(BOB))
        assert response.status_code == 403

    def test_admin_status_override(self, client) -> None:
        """Admins can set any status and list every order."""
        _fill_cart(client)
        order_id = _checkout(client).json()["order_id"]
        admin = auth(ADMIN, role="admin")

        response = client.put(f"/admin/orders/{order_id}/status", json={"status": "SHIPPED"}, headers=admin)
        assert response.status_code == 200
        assert response.json()["status"] == "shipped"

        response = client.put(f"/admin/orders/{order_id}/status", json={"status": "lost"}, headers=admin)
        assert response.status_code == 400

        response = client.get("/admin/orders", params={"status": "shipped"}, headers=admin)
        assert response.json()["total_items"] == 1

        response = client.get(f"/orders/{order_id}/timeline", headers=auth(ALICE))
        assert [e["event_type"] for e in response.json()] == ["order_placed", "status_changed"]


class TestWishlistApi:
    def test_wishlist_flow(self, client) -> None:
        """Create, fill in bulk, inspect and delete a wishlist."""
        response = client.post("/wishlists/", json={"name": "Holiday"}, headers=auth(ALICE))
        assert response.status_code == 201
        wishlist_id = response.json()["id"]

        response = client.post("/wishlists/", json={"name": "holiday"}, headers=auth(ALICE))
        assert response.status_code == 409

        response = client.post(
            f"/wishlists/{wishlist_id}/bulk/add",
            json={"book_ids": [BOOK_A, BOOK_B, MISSING_BOOK]},
            headers=auth(ALICE),
        )
        assert response.status_code == 200
        body = response.json()
        assert (body["successfully_processed"], body["skipped"], body["failed"]) == (2, 0, 1)

        response = client.get(f"/wishlists/{wishlist_id}/stats", headers=auth(ALICE))
        assert response.json()["total_books"] == 2

        response = client.delete(f"/wishlists/{wishlist_id}/books/{BOOK_A}", headers=auth(ALICE))
        assert [b["book_id"] for b in response.json()["books"]] == [BOOK_B]

        response = client.delete(f"/wishlists/{wishlist_id}", headers=auth(ALICE))
        assert response.status_code == 200

        response = client.get(f"/wishlists/{wishlist_id}", headers=auth(ALICE))
        assert response.status_code == 404

    def test_bulk_limit(self, client) -> None:
        """Oversized batches are rejected."""
        wishlist_id = client.post("/wishlists/", json={"name": "Big"}, headers=auth(ALICE)).json()["id"]

        response = client.post(
            f"/wishlists/{wishlist_id}/bulk/add",
            json={"book_ids": list(range(1, 52))},
            headers=auth(ALICE),
        )
        assert response.status_code == 422


class TestHealthApi:
    def test_database_reachable(self, client) -> None:
        """The health check runs a query through the session."""
        response = client.get("/health/check")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "ok"
