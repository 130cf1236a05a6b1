from flask import Blueprint, jsonify

bp = Blueprint("health", __name__)

SERVICE_NAME = "product-sync"


@bp.get("/")
@bp.get("/health")
def health():
    return jsonify({"ok": True, "status": "ok", "service": SERVICE_NAME})


@bp.get("/ping")
def ping():
    return "pong", 200, {"Content-Type": "text/plain; charset=utf-8"}
