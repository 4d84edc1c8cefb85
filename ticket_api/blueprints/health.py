from flask import Blueprint, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify("running church API"), 200
