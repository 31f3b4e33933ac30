from decimal import Decimal


def register(client, email="rosa@tiendamistica.mx"):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Rosa", "email": email, "password": "Velas2024x"},
    )
    assert resp.status_code == 201
    return resp.json()


def create_address(client, user_id):
    resp = client.post(
        "/api/addresses",
        json={
            "user_id": user_id,
            "street": "Calle 5 de Mayo 3",
            "colony": "Centro",
            "city": "Puebla",
            "state": "Puebla",
            "country": "México",
            "zip_code": "72000",
        },
    )
    assert resp.status_code == 201
    return resp.json()


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_register_and_login(client):
    user = register(client)

    ok = client.post("/api/auth/login", json={"email": "rosa@tiendamistica.mx", "password": "Velas2024x"})
    bad = client.post("/api/auth/login", json={"email": "rosa@tiendamistica.mx", "password": "wrong-pass"})
    dup = client.post(
        "/api/auth/register",
        json={"name": "Rosa", "email": "rosa@tiendamistica.mx", "password": "Velas2024x"},
    )

    assert ok.status_code == 200 and ok.json()["id"] == user["id"]
    assert "password" not in ok.json()
    assert bad.status_code == 401
    assert dup.status_code == 409


def test_catalog_endpoints(client):
    products = client.get("/api/products").json()
    velas = client.get("/api/products", params={"category": 1}).json()
    search = client.get("/api/products", params={"search": "MIEL"}).json()
    detail = client.get("/api/products/1").json()

    assert len(products) == 4
    assert [p["name"] for p in velas] == ["Vela Aromática Lavanda"]
    assert [p["id"] for p in search] == [2]
    assert len(detail["galleries"]) == 1
    assert client.get("/api/products/99").status_code == 404
    assert len(client.get("/api/categories").json()) == 4


def test_cart_flow(client):
    user = register(client)

    first = client.post("/api/cart/add", json={"user_id": user["id"], "product_id": 1, "quantity": 2})
    again = client.post("/api/cart/add", json={"user_id": user["id"], "product_id": 1, "quantity": 1})
    assert first.status_code == 200
    assert again.json()["id"] == first.json()["id"]
    assert again.json()["quantity"] == 3

    cart = client.get(f"/api/cart/{user['id']}").json()
    assert Decimal(cart["total"]) == Decimal("45.00")
    assert cart["item_count"] == 3

    item_id = first.json()["id"]
    updated = client.put(f"/api/cart/update/{item_id}", json={"quantity": 5})
    assert updated.json()["quantity"] == 5

    removed = client.put(f"/api/cart/update/{item_id}", json={"quantity": 0})
    assert removed.status_code == 200
    assert client.get(f"/api/cart/{user['id']}").json()["items"] == []

    assert client.delete(f"/api/cart/remove/{item_id}").status_code == 404


def test_cart_add_rejects_zero_quantity(client):
    user = register(client)

    resp = client.post("/api/cart/add", json={"user_id": user["id"], "product_id": 1, "quantity": 0})

    assert resp.status_code == 400


def test_cart_add_refuses_stale_client_price(client):
    user = register(client)
    payload = {"user_id": user["id"], "product_id": 1, "quantity": 1}

    stale = client.post("/api/cart/add", json={**payload, "price_at_moment": "9.99"})
    current = client.post("/api/cart/add", json={**payload, "price_at_moment": "15.00"})

    assert stale.status_code == 409
    assert current.status_code == 200
    assert Decimal(current.json()["price_at_moment"]) == Decimal("15.00")

def test_coupon_validate_endpoint(client):
    below = client.post("/api/coupons/validate", json={"code": "BIENVENIDO10", "user_id": 1, "total": "49.99"})
    ok = client.post("/api/coupons/validate", json={"code": "verano25", "user_id": 1, "total": "300"})

    assert below.json()["valid"] is False
    assert Decimal(below.json()["discount"]) == 0
    assert ok.json()["valid"] is True
    assert Decimal(ok.json()["discount"]) == Decimal("50.00")
    assert ok.json()["coupon"]["code"] == "VERANO25"


def test_coupon_apply_endpoint(client):
    coupon = client.get("/api/coupons/VERANO25").json()

    resp = client.post("/api/coupons/apply", json={"user_id": 1, "coupon_id": coupon["id"]})
    missing = client.post("/api/coupons/apply", json={"user_id": 1, "coupon_id": 999})

    assert resp.status_code == 200
    assert client.get("/api/coupons/VERANO25").json()["used_count"] == coupon["used_count"] + 1
    assert missing.status_code == 404


def test_checkout_endpoint(client):
    user = register(client)
    address = create_address(client, user["id"])
    client.post("/api/cart/add", json={"user_id": user["id"], "product_id": 3, "quantity": 3})

    resp = client.post(
        "/api/orders",
        json={"user_id": user["id"], "address_id": address["id"], "coupon_code": "VERANO25"},
    )

    assert resp.status_code == 201
    order = resp.json()
    assert Decimal(order["total"]) == Decimal("101.25")
    assert order["status"] == "pending"
    assert order["currency"] == "MXN"
    assert client.get(f"/api/cart/{user['id']}").json()["items"] == []

    status = client.put(f"/api/orders/{order['id']}/status", json={"status": "delivered"})
    assert status.status_code == 409

    unread = client.get(f"/api/notifications/{user['id']}", params={"unread_only": True}).json()
    assert len(unread) == 1
    client.put(f"/api/notifications/user/{user['id']}/read-all")
    assert client.get(f"/api/notifications/{user['id']}", params={"unread_only": True}).json() == []


def test_checkout_empty_cart_endpoint(client):
    user = register(client)
    address = create_address(client, user["id"])

    resp = client.post("/api/orders", json={"user_id": user["id"], "address_id": address["id"]})

    assert resp.status_code == 400
