"""Integration tests for the storefront API via TestClient."""

from decimal import Decimal


def _create_cart(client):
    """Helper: POST /api/cart and return the cart_id."""
    response = client.post("/api/cart")
    assert response.status_code == 201
    return response.json()["cart"]["cart_id"]


def _add(client, cart_id, item_id="p1", quantity=1):
    response = client.post(
        f"/api/cart/{cart_id}/items",
        json={"item_id": item_id, "quantity": quantity},
    )
    assert response.status_code == 200
    return response.json()


class TestAppEndpoints:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy", "service": "storefront"}

    def test_home_shows_brand(self, client):
        brand = client.get("/").json()["brand"]
        assert brand["name"] == "T&T Botanica"
        assert brand["email"] == "hello@ttbotanica.com"
        assert "instagram" in brand["social"]


class TestCatalogEndpoints:
    def test_list_all(self, client):
        data = client.get("/api/products").json()
        assert data["total"] == 4
        assert data["facets"]["categories"] == ["All", "Alocasia", "Aroids", "Hoyas"]
        assert data["items"][0]["on_sale"] is True

    def test_query(self, client):
        data = client.get("/api/products", params={"query": "HOYA"}).json()
        assert [view["item"]["id"] for view in data["items"]] == ["p2"]

    def test_facets_compose(self, client):
        data = client.get("/api/products", params={"category": "Aroids", "type": "Cutting"}).json()
        assert [view["item"]["id"] for view in data["items"]] == ["p3"]

    def test_facets_endpoint(self, client):
        data = client.get("/api/products/facets").json()
        assert data["types"][0] == "All"

    def test_get_item(self, client):
        item = client.get("/api/products/p1").json()
        assert item["name"] == "Monstera deliciosa"
        assert Decimal(item["price"]) == Decimal("38")

    def test_get_missing_item(self, client):
        assert client.get("/api/products/nope").status_code == 404


class TestCartEndpoints:
    def test_new_cart_is_empty(self, client):
        cart_id = _create_cart(client)
        data = client.get(f"/api/cart/{cart_id}").json()

        assert data["cart"]["lines"] == []
        assert data["cart"]["destination"]["city"] == "Tacoma"
        assert data["pricing"]["display"]["total"] == "$8.00"

    def test_unknown_cart(self, client):
        assert client.get("/api/cart/missing").status_code == 404

    def test_add_item(self, client):
        cart_id = _create_cart(client)
        data = _add(client, cart_id, "p1", 2)

        assert data["status"] == "added"
        assert data["commands"] == ["open_cart"]
        assert data["cart"]["item_count"] == 2
        assert data["pricing"]["display"] == {
            "subtotal": "$76.00",
            "shipping": "$0.00",
            "tax": "$7.75",
            "total": "$83.75",
        }
        assert Decimal(data["pricing"]["total"]) == Decimal("83.752")

    def test_add_beyond_stock_is_limited(self, client):
        cart_id = _create_cart(client)
        data = _add(client, cart_id, "p3", 10)

        assert data["status"] == "limited"
        assert data["cart"]["lines"][0]["quantity"] == 6

    def test_add_out_of_stock(self, client, app):
        app.state.sessions.catalog.set_stock("p4", 0)
        cart_id = _create_cart(client)
        data = _add(client, cart_id, "p4")

        assert data["status"] == "out_of_stock"
        assert data["commands"] == []
        assert data["cart"]["lines"] == []

    def test_add_unknown_item(self, client):
        cart_id = _create_cart(client)
        response = client.post(f"/api/cart/{cart_id}/items", json={"item_id": "nope"})
        assert response.status_code == 404

    def test_add_rejects_zero_quantity(self, client):
        cart_id = _create_cart(client)
        response = client.post(f"/api/cart/{cart_id}/items", json={"item_id": "p1", "quantity": 0})
        assert response.status_code == 422

    def test_update_quantity_to_zero_removes_line(self, client):
        cart_id = _create_cart(client)
        _add(client, cart_id, "p1", 2)
        _add(client, cart_id, "p2")

        response = client.patch(f"/api/cart/{cart_id}/items/p1", json={"delta": -5})
        assert response.status_code == 200
        assert [line["item_id"] for line in response.json()["cart"]["lines"]] == ["p2"]

    def test_update_missing_line(self, client):
        cart_id = _create_cart(client)
        response = client.patch(f"/api/cart/{cart_id}/items/p1", json={"delta": 1})
        assert response.status_code == 404

    def test_remove_and_clear(self, client):
        cart_id = _create_cart(client)
        _add(client, cart_id, "p1")
        _add(client, cart_id, "p2")

        data = client.delete(f"/api/cart/{cart_id}/items/p1").json()
        assert [line["item_id"] for line in data["cart"]["lines"]] == ["p2"]

        data = client.delete(f"/api/cart/{cart_id}").json()
        assert data["cart"]["lines"] == []

    def test_destination_changes_tax(self, client):
        cart_id = _create_cart(client)
        _add(client, cart_id, "p1")

        response = client.put(
            f"/api/cart/{cart_id}/destination",
            json={"country": "US", "state": "CA", "city": "Oakland", "postal_code": "94607"},
        )
        pricing = response.json()["pricing"]
        assert pricing["tax"] is None
        assert pricing["display"]["total"] == "$46.00"

    def test_stock_issues_and_reconcile(self, client, app):
        cart_id = _create_cart(client)
        _add(client, cart_id, "p1", 3)
        app.state.sessions.catalog.set_stock("p1", 1)

        issues = client.get(f"/api/cart/{cart_id}").json()["stock_issues"]
        assert issues == [{"item_id": "p1", "name": "Monstera deliciosa", "quantity": 3, "available": 1}]

        data = client.post(f"/api/cart/{cart_id}/reconcile").json()
        assert len(data["adjusted"]) == 1
        assert data["cart"]["lines"][0]["quantity"] == 1
        assert data["stock_issues"] == []


class TestCheckoutEndpoints:
    def test_empty_cart_rejected(self, client):
        cart_id = _create_cart(client)
        response = client.post("/api/checkout", json={"cart_id": cart_id})
        assert response.status_code == 400

    def test_unknown_cart(self, client):
        response = client.post("/api/checkout", json={"cart_id": "missing"})
        assert response.status_code == 404

    def test_composed_message(self, client):
        cart_id = _create_cart(client)
        _add(client, cart_id, "p1", 2)

        response = client.post(
            "/api/checkout",
            json={"cart_id": cart_id, "notes": "Gift for mom"},
        )
        assert response.status_code == 200
        outcome = response.json()["outcome"]

        assert outcome["kind"] == "composed_message"
        assert outcome["recipient"] == "hello@ttbotanica.com"
        assert "Total: $83.75" in outcome["body"]
        assert "Notes: Gift for mom" in outcome["body"]
        assert outcome["mailto_url"].startswith("mailto:hello@ttbotanica.com?")

    def test_destination_override(self, client):
        cart_id = _create_cart(client)
        _add(client, cart_id, "p1")

        response = client.post(
            "/api/checkout",
            json={"cart_id": cart_id, "destination": {"country": "US", "state": "CA"}},
        )
        data = response.json()
        assert data["pricing"]["display"]["total"] == "$46.00"
        assert "tax" not in data["outcome"]["body"].lower()

    def test_overrides_do_not_change_cart(self, client):
        cart_id = _create_cart(client)
        _add(client, cart_id, "p1")
        client.put(f"/api/cart/{cart_id}/notes", json={"notes": "Porch"})

        response = client.post(
            "/api/checkout",
            json={
                "cart_id": cart_id,
                "destination": {"country": "US", "state": "CA"},
                "notes": "Gift wrap",
            },
        )
        assert "Notes: Gift wrap" in response.json()["outcome"]["body"]

        cart = client.get(f"/api/cart/{cart_id}").json()
        assert cart["cart"]["destination"]["state"] == "WA"
        assert cart["cart"]["notes"] == "Porch"
        assert cart["pricing"]["display"]["total"] == "$49.88"

        outcome = client.post("/api/checkout", json={"cart_id": cart_id}).json()["outcome"]
        assert "Notes: Porch" in outcome["body"]
        assert "Ship to: Tacoma, WA 98402, US" in outcome["body"]

    def test_direct_payment(self, client, app):
        catalog = app.state.sessions.catalog
        catalog.get_item("p1").payment_link = "https://pay.example/p1"
        catalog.get_item("p2").payment_link = "https://pay.example/p2"

        cart_id = _create_cart(client)
        _add(client, cart_id, "p2")
        _add(client, cart_id, "p1")

        outcome = client.post("/api/checkout", json={"cart_id": cart_id}).json()["outcome"]
        assert outcome == {
            "kind": "direct_payment",
            "payment_links": ["https://pay.example/p2", "https://pay.example/p1"],
        }

    def test_rules(self, client):
        data = client.get("/api/checkout/rules").json()
        assert [rule["id"] for rule in data["shipping"]] == ["free_over_75", "standard_under_75"]
        assert [rule["id"] for rule in data["tax"]] == ["wa_tacoma", "wa_statewide_fallback"]
