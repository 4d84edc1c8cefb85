import logging
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS

from ticket_api.blueprints.health import health_bp
from ticket_api.blueprints.orders import orders_bp
from ticket_api.config import Config
from ticket_api.paypal import OrderGateway

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(name)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def create_app(config: Optional[Config] = None, gateway: Optional[OrderGateway] = None) -> Flask:
    config = config or Config.from_env()
    configure_logging(config.log_level)

    static_dir = os.path.abspath(config.static_dir)
    if os.path.isdir(static_dir):
        app = Flask(__name__, static_folder=static_dir, static_url_path="")
    else:
        app = Flask(__name__, static_folder=None)

    CORS(app, origins=list(config.cors_origins))

    app.extensions["order_gateway"] = gateway or OrderGateway(config)

    # Register Blueprints
    app.register_blueprint(health_bp)
    app.register_blueprint(orders_bp, url_prefix="/api")

    if not config.client_id or not config.client_secret:
        app.logger.warning("PayPal credentials are not configured; order calls will fail")
    app.logger.info(f"Ticket API ready, PayPal base {config.base_url}")
    return app


if __name__ == "__main__":
    cfg = Config.from_env()
    create_app(cfg).run(host="0.0.0.0", port=cfg.port)
