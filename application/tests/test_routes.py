"""Test the HTTP surface."""
from conftest import gift_line, purchase_line, variant_gid


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_run_returns_camel_case_instruction(client):
    payload = {"cart": {"lines": [purchase_line(1, free_gift_id=variant_gid(100)), gift_line(100)]}}
    response = client.post("/functions/v1/free-gift/run", json=payload)

    assert response.status_code == 200
    assert response.json() == {
        "discounts": [{
            "targets": [{"productVariant": {"id": variant_gid(100), "quantity": 1}}],
            "value": {"percentage": {"value": "100.0"}},
            "message": "Free gift with purchase",
        }],
        "discountApplicationStrategy": "MAXIMUM",
    }
    assert response.headers["x-request-id"]


def test_run_without_qualifying_purchase(client):
    payload = {"cart": {"lines": [purchase_line(2), gift_line(100)]}}
    response = client.post("/functions/v1/free-gift/run", json=payload)
    assert response.status_code == 200
    assert response.json() == {"discounts": [], "discountApplicationStrategy": "ALL"}


def test_run_with_malformed_cart_does_not_block_checkout(client):
    response = client.post("/functions/v1/free-gift/run", json={"cart": {"lines": [{"quantity": "many"}]}})
    assert response.status_code == 200
    assert response.json() == {"discounts": [], "discountApplicationStrategy": "ALL"}


def test_run_with_one_malformed_line_keeps_valid_pair(client):
    bad_line = purchase_line(3)
    bad_line["merchandise"]["id"] = None
    payload = {"cart": {"lines": [purchase_line(1, free_gift_id=variant_gid(100)), gift_line(100), bad_line]}}

    response = client.post("/functions/v1/free-gift/run", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["discountApplicationStrategy"] == "MAXIMUM"
    assert body["discounts"][0]["targets"] == [{"productVariant": {"id": variant_gid(100), "quantity": 1}}]


PRODUCT = {
    "options": [
        {"name": "Color", "position": 1, "values": ["Black", "Sand"]},
        {"name": "Size", "position": 2, "values": ["S", "M"]},
    ],
    "variants": [
        {"id": "v-black-s", "options": ["Black", "S"], "available": True},
        {"id": "v-black-m", "options": ["Black", "M"], "available": False},
        {"id": "v-sand-s", "options": ["Sand", "S"], "available": True},
    ],
    "media": [{"associated_color": "black", "variant_image": "https://cdn.example.com/black.jpg"}],
    "size_chart_image": "https://cdn.example.com/chart.png",
}


def test_product_options_view(client):
    response = client.post("/storefront/v1/product-options/view", json={
        "product": PRODUCT,
        "selected_options": ["Black", "S"],
        "select": {"group_name": "Size", "value": "M"},
    })
    assert response.status_code == 200
    body = response.json()
    assert body["selected_options"] == ["Black", "M"]
    assert body["selected_variant"] == "v-black-m"
    assert body["scroll_to_top"] is False
    size_group = body["groups"][1]
    assert size_group["label"] == "Size: M"
    assert {v["value"]: v["availability"] for v in size_group["values"]} == {"S": "available", "M": "option--oos"}


def test_product_options_unknown_value_is_bad_request(client):
    response = client.post("/storefront/v1/product-options/view", json={
        "product": PRODUCT,
        "select": {"group_name": "Size", "value": "XXL"},
    })
    assert response.status_code == 400
    assert response.json()["message"]["error_code"] == "INVALID_OPTION"


def test_product_options_invalid_body_is_unprocessable(client):
    response = client.post("/storefront/v1/product-options/view", json={"selected_options": []})
    assert response.status_code == 422
