from dataclasses import replace

import pytest

from ticket_api.app import create_app

CART = [
    {"premiumQuantity": 2},
    {"standardQuantity": 0},
    {"studentQuantity": 0},
    {"totalPrice": "130.00"},
]


@pytest.mark.integration
def test_health(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_json() == "running church API"


@pytest.mark.integration
def test_create_order_relays_provider_response(client, paypal_post, paypal_response, token_response):
    created = {"id": "5O190127TN364715T", "status": "CREATED"}
    paypal_post.side_effect = [token_response(), paypal_response(201, created)]

    resp = client.post("/api/orders", json={"cart": CART})

    assert resp.status_code == 201
    assert resp.get_json() == created
    payload = paypal_post.call_args.kwargs["json"]
    unit = payload["purchase_units"][0]
    assert unit["amount"]["value"] == "130.00"
    assert unit["items"] == [
        {
            "name": "Premium tickets",
            "unit_amount": {"currency_code": "USD", "value": "65.00"},
            "quantity": "2",
        }
    ]


@pytest.mark.integration
def test_create_order_mirrors_provider_error_status(client, paypal_post, paypal_response, token_response):
    error = {"name": "UNPROCESSABLE_ENTITY", "details": [{"issue": "ITEM_TOTAL_MISMATCH"}]}
    paypal_post.side_effect = [token_response(), paypal_response(422, error)]

    resp = client.post("/api/orders", json={"cart": CART})

    assert resp.status_code == 422
    assert resp.get_json() == error


@pytest.mark.integration
def test_token_rejection_becomes_generic_500(client, paypal_post, paypal_response, log_capture):
    paypal_post.return_value = paypal_response(401, {"error": "invalid_client"})

    resp = client.post("/api/orders", json={"cart": CART})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to create order."}
    assert paypal_post.call_count == 1
    assert "Failed to create order" in log_capture.text


@pytest.mark.integration
def test_missing_credentials_become_generic_500(config, paypal_post):
    app = create_app(replace(config, client_secret=None))
    resp = app.test_client().post("/api/orders", json={"cart": CART})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to create order."}
    paypal_post.assert_not_called()


@pytest.mark.integration
@pytest.mark.parametrize(
    "body",
    [
        {"cart": CART[:3]},
        {"cart": [{"premiumQuantity": "x"}] + CART[1:]},
        {"cart": [{"premiumQuantity": "²"}] + CART[1:]},
        {"items": CART},
        ["not", "an", "object"],
    ],
    ids=["short-cart", "bad-quantity", "superscript-quantity", "no-cart", "not-an-object"],
)
def test_invalid_cart_is_a_400(client, paypal_post, body):
    resp = client.post("/api/orders", json=body)

    assert resp.status_code == 400
    assert "error" in resp.get_json()
    paypal_post.assert_not_called()


@pytest.mark.integration
def test_non_json_body_is_a_400(client, paypal_post):
    resp = client.post("/api/orders", data="cart=1", content_type="text/plain")
    assert resp.status_code == 400
    paypal_post.assert_not_called()


@pytest.mark.integration
def test_capture_relays_provider_response(client, paypal_post, paypal_response, token_response):
    captured = {"id": "5O190127TN364715T", "status": "COMPLETED"}
    paypal_post.side_effect = [token_response("tok-cap"), paypal_response(201, captured)]

    resp = client.post("/api/orders/5O190127TN364715T/capture")

    assert resp.status_code == 201
    assert resp.get_json() == captured
    args, kwargs = paypal_post.call_args
    assert args[0] == "https://paypal.test/v2/checkout/orders/5O190127TN364715T/capture"
    assert kwargs["headers"]["Authorization"] == "Bearer tok-cap"


@pytest.mark.integration
@pytest.mark.parametrize("path_id", ["bad%20id", "ABC%0A", "5O190127TN364715T%0A"], ids=["space", "newline", "trailing-newline"])
def test_capture_with_invalid_id_is_a_400(client, paypal_post, path_id):
    resp = client.post(f"/api/orders/{path_id}/capture")
    assert resp.status_code == 400
    paypal_post.assert_not_called()


@pytest.mark.integration
def test_capture_non_json_upstream_is_generic_500(client, paypal_post, paypal_response, token_response):
    paypal_post.side_effect = [token_response(), paypal_response(503, text="Service Unavailable")]

    resp = client.post("/api/orders/5O190127TN364715T/capture")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to capture order."}


@pytest.mark.integration
def test_cors_allows_configured_origin_only(client):
    allowed = client.get("/", headers={"Origin": "http://localhost:5173"})
    assert allowed.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"

    denied = client.get("/", headers={"Origin": "https://evil.example"})
    assert "Access-Control-Allow-Origin" not in denied.headers


@pytest.mark.integration
def test_static_frontend_is_served(config, tmp_path):
    (tmp_path / "app.js").write_text("console.log('tickets')")
    app = create_app(replace(config, static_dir=str(tmp_path)))

    resp = app.test_client().get("/app.js")

    assert resp.status_code == 200
    assert b"tickets" in resp.data
