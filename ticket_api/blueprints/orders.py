from flask import Blueprint, current_app, jsonify, request
import logging

from ticket_api.errors import InvalidCartError, InvalidRequestError

logger = logging.getLogger(__name__)
orders_bp = Blueprint("orders", __name__)


def _gateway():
    return current_app.extensions["order_gateway"]


@orders_bp.route("/orders", methods=["POST"])
def create_order():
    """Create a PayPal order from the storefront cart."""
    try:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or "cart" not in payload:
            raise InvalidCartError("request body must be JSON with a 'cart' field")
        body, status = _gateway().create_order(payload["cart"])
        return jsonify(body), status
    except InvalidRequestError as e:
        logger.warning(f"Rejected create order request: {e}")
        return jsonify({"error": str(e)}), e.status_code
    except Exception:
        logger.exception("Failed to create order")
        return jsonify({"error": "Failed to create order."}), 500


@orders_bp.route("/orders/<order_id>/capture", methods=["POST"])
def capture_order(order_id):
    """Capture payment for a previously created order."""
    try:
        body, status = _gateway().capture_order(order_id)
        return jsonify(body), status
    except InvalidRequestError as e:
        logger.warning(f"Rejected capture request: {e}")
        return jsonify({"error": str(e)}), e.status_code
    except Exception:
        logger.exception(f"Failed to capture order {order_id}")
        return jsonify({"error": "Failed to capture order."}), 500
