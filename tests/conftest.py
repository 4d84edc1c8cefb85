import json
import logging
from unittest.mock import patch

import pytest
import requests

from ticket_api.app import create_app
from ticket_api.config import Config
from ticket_api.paypal import OrderGateway, TokenProvider

PAYPAL_BASE = "https://paypal.test"


def _make_response(status_code=200, body=None, text=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp.encoding = "utf-8"
    if body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = (text or "").encode("utf-8")
        resp.headers["Content-Type"] = "text/html"
    return resp


@pytest.fixture
def paypal_response():
    """Factory for requests.Response objects shaped like PayPal's."""
    return _make_response


@pytest.fixture
def token_response():
    def _token(token="A21AAtoken", expires_in=32400):
        return _make_response(200, {"access_token": token, "token_type": "Bearer", "expires_in": expires_in})
    return _token


@pytest.fixture
def config():
    return Config(
        client_id="test-client",
        client_secret="test-secret",
        base_url=PAYPAL_BASE,
        cors_origins=("http://localhost:5173",),
        static_dir="does-not-exist",
    )


@pytest.fixture
def gateway(config):
    return OrderGateway(config, TokenProvider(config))


@pytest.fixture
def client(config):
    app = create_app(config)
    app.testing = True
    return app.test_client()


@pytest.fixture
def paypal_post():
    with patch("ticket_api.paypal.requests.post") as post:
        yield post


@pytest.fixture
def log_capture(caplog):
    caplog.set_level(logging.INFO, logger="ticket_api")
    return caplog
