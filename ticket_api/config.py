import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

# PayPal configuration
PAYPAL_CLIENT_ID = os.getenv("PAYPAL_CLIENT_ID")
PAYPAL_CLIENT_SECRET = os.getenv("PAYPAL_CLIENT_SECRET")
PAYPAL_BASE_URL = os.getenv("PAYPAL_BASE_URL", "https://api-m.sandbox.paypal.com")
PAYPAL_TIMEOUT_SEC = os.getenv("PAYPAL_TIMEOUT_SEC")
PAYPAL_TOKEN_CACHE = os.getenv("PAYPAL_TOKEN_CACHE", "false").lower() == "true"
# Sandbox only: https://developer.paypal.com/tools/sandbox/negative-testing/request-headers/
PAYPAL_MOCK_RESPONSE = os.getenv("PAYPAL_MOCK_RESPONSE")

# Server configuration
PORT = int(os.getenv("PORT", "8888"))
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:5173,https://greenlawn-presbyterian-church-concert.netlify.app",
)
STATIC_DIR = os.getenv("STATIC_DIR", "client/dist")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
GUNICORN_WORKERS = os.getenv("GUNICORN_WORKERS", "4")


@dataclass(frozen=True)
class Config:
    """Read-only settings handed to the token provider, gateway and app."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    base_url: str = "https://api-m.sandbox.paypal.com"
    timeout: Optional[float] = None
    token_cache: bool = False
    mock_response: Optional[str] = None
    port: int = 8888
    cors_origins: Tuple[str, ...] = field(default_factory=tuple)
    static_dir: str = "client/dist"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            client_id=PAYPAL_CLIENT_ID or None,
            client_secret=PAYPAL_CLIENT_SECRET or None,
            base_url=PAYPAL_BASE_URL.rstrip("/"),
            timeout=float(PAYPAL_TIMEOUT_SEC) if PAYPAL_TIMEOUT_SEC else None,
            token_cache=PAYPAL_TOKEN_CACHE,
            mock_response=PAYPAL_MOCK_RESPONSE or None,
            port=PORT,
            cors_origins=tuple(o.strip() for o in CORS_ORIGINS.split(",") if o.strip()),
            static_dir=STATIC_DIR,
            log_level=LOG_LEVEL.upper(),
        )
