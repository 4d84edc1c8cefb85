"""
PayPal REST client
------------------
Token provider and Orders v2 gateway.

Flow per operation:
  1. POST {base}/v1/oauth2/token          → bearer access token
  2. POST {base}/v2/checkout/orders       → create order from a cart
     POST {base}/v2/checkout/orders/{id}/capture → capture a created order
  3. handle_response()                     → (body, status_code) as PayPal sent it

Docs:
  https://developer.paypal.com/api/rest/authentication/
  https://developer.paypal.com/docs/api/orders/v2/
"""

import base64
import hashlib
import logging
import re
import threading
import time
from typing import Any, Dict, Optional, Tuple

import requests

from ticket_api.config import Config
from ticket_api.errors import (
    CredentialError,
    InvalidOrderIdError,
    UpstreamAuthError,
    UpstreamResponseError,
)
from ticket_api.pricing import build_order_payload, parse_cart

logger = logging.getLogger(__name__)

ORDER_ID_RE = re.compile(r"[A-Za-z0-9-]{1,64}")

# Seconds shaved off expires_in so a cached token is never used at the edge.
TOKEN_EXPIRY_MARGIN = 60


def handle_response(response: requests.Response) -> Tuple[Any, int]:
    """Return PayPal's JSON body and status, or raise with the raw text."""
    try:
        body = response.json()
    except ValueError:
        raise UpstreamResponseError(response.text, response.status_code) from None
    return body, response.status_code


class TokenCache:
    """In-memory access tokens keyed by credential pair, dropped on expiry."""

    def __init__(self, margin: int = TOKEN_EXPIRY_MARGIN, clock=time.monotonic):
        self.margin = margin
        self.clock = clock
        self._tokens: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key_for(client_id: str, client_secret: str) -> str:
        return hashlib.sha256(f"{client_id}:{client_secret}".encode()).hexdigest()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._tokens.get(key)
            if entry is None:
                return None
            token, expires_at = entry
            if self.clock() >= expires_at:
                del self._tokens[key]
                return None
            return token

    def put(self, key: str, token: str, expires_in) -> None:
        try:
            ttl = float(expires_in) - self.margin
        except (TypeError, ValueError):
            return
        if ttl <= 0:
            return
        with self._lock:
            self._tokens[key] = (token, self.clock() + ttl)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()


class TokenProvider:
    """Exchanges client credentials for a bearer token."""

    def __init__(self, config: Config, cache: Optional[TokenCache] = None):
        self.config = config
        if cache is None and config.token_cache:
            cache = TokenCache()
        self.cache = cache

    @property
    def token_url(self) -> str:
        return f"{self.config.base_url}/v1/oauth2/token"

    def get_access_token(self) -> str:
        client_id = self.config.client_id
        client_secret = self.config.client_secret
        if not client_id or not client_secret:
            raise CredentialError("MISSING_API_CREDENTIALS")

        cache_key = None
        if self.cache is not None:
            cache_key = TokenCache.key_for(client_id, client_secret)
            token = self.cache.get(cache_key)
            if token:
                return token

        auth = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode()
        try:
            resp = requests.post(
                self.token_url,
                data="grant_type=client_credentials",
                headers={
                    "Authorization": f"Basic {auth}",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamAuthError(f"Token request failed: {e}") from e

        if not resp.ok:
            raise UpstreamAuthError(f"Token request rejected with HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError:
            raise UpstreamAuthError(f"Token endpoint returned non-JSON body: {resp.text}") from None

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise UpstreamAuthError("Token endpoint response has no access_token")

        if cache_key is not None:
            self.cache.put(cache_key, token, data.get("expires_in"))
        return token


class OrderGateway:
    """Creates and captures PayPal orders on behalf of the storefront."""

    def __init__(self, config: Config, token_provider: Optional[TokenProvider] = None):
        self.config = config
        self.token_provider = token_provider or TokenProvider(config)

    @property
    def orders_url(self) -> str:
        return f"{self.config.base_url}/v2/checkout/orders"

    def create_order(self, raw_cart) -> Tuple[Any, int]:
        logger.info(f"Shopping cart received from the frontend: {raw_cart}")
        cart = parse_cart(raw_cart)
        payload = build_order_payload(cart)
        return self._post(self.orders_url, payload)

    def capture_order(self, order_id) -> Tuple[Any, int]:
        if not isinstance(order_id, str) or not ORDER_ID_RE.fullmatch(order_id):
            raise InvalidOrderIdError(f"Invalid order id: {order_id!r}")
        return self._post(f"{self.orders_url}/{order_id}/capture")

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token_provider.get_access_token()}",
        }
        if self.config.mock_response:
            headers["PayPal-Mock-Response"] = self.config.mock_response
        return headers

    def _post(self, url: str, payload=None) -> Tuple[Any, int]:
        headers = self._headers()
        logger.info(f"POST {url}")
        try:
            resp = requests.post(url, json=payload, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise UpstreamResponseError(str(e)) from e
        body, status = handle_response(resp)
        logger.info(f"PayPal answered {status} for {url}")
        return body, status
