from flask import Blueprint, request, jsonify, current_app

from ..errors import ValidationError
from ..extensions import get_sync
from ..models import Seed

bp = Blueprint("products", __name__)


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _seed(data: dict) -> Seed | None:
    seed = data.get("seed")
    if seed is None:
        return None
    return Seed.from_dict(seed)


@bp.post("/update-images")
def update_images():
    data = _body()
    if not data.get("productIds"):
        return jsonify({"ok": False, "error": "Missing or invalid productIds array."}), 400

    report = get_sync().update_images(data["productIds"], data.get("count"))
    current_app.logger.info("update-images: %d/%d updated", report.success_count, len(report.results))
    return jsonify({
        "success": True,
        "ok": True,
        "updated_count": report.success_count,
        "updated": report.to_list(),
    })


@bp.post("/generate-product")
def generate_product():
    seed = _seed(_body())
    generated = get_sync().generate_product(seed)
    return jsonify({"ok": True, "product": generated.to_dict()})


@bp.post("/create-product")
def create_product():
    product = _body().get("product")
    if not product:
        return jsonify({"ok": False, "error": "Missing product data in body.product"}), 400
    shop_resp = get_sync().create_product(product)
    return jsonify({"ok": True, "shopify": shop_resp})


@bp.post("/generate-and-create")
def generate_and_create():
    seed = _seed(_body())
    generated, shop_resp = get_sync().generate_and_create(seed)
    return jsonify({"ok": True, "generated": generated.to_dict(), "shopify": shop_resp})


@bp.post("/bulk-generate")
def bulk_generate():
    data = _body()
    report = get_sync().bulk_generate(data.get("seeds"), data.get("count"))
    current_app.logger.info("bulk-generate: %d/%d created", report.success_count, len(report.results))
    return jsonify({
        "ok": True,
        "created_count": report.success_count,
        "results": report.to_list(),
    })
