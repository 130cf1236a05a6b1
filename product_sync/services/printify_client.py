import logging

import httpx

from ..errors import ProductSyncError
from .http import json_body, raise_for_status, transport_error

PRINTIFY_API_BASE = "https://api.printify.com/v1"

# Men's tee on Monster Digital; one enabled variant is enough to get mockups rendered.
MOCKUP_BLUEPRINT_ID = 6
MOCKUP_PRINT_PROVIDER_ID = 1
MOCKUP_VARIANT_ID = 4012
MOCKUP_VARIANT_PRICE = 1999

log = logging.getLogger(__name__)


class PrintifyClient:
    def __init__(self, api_token: str | None = None, shop_id: str | None = None, timeout: float = 60,
                 blueprint_id: int = MOCKUP_BLUEPRINT_ID, print_provider_id: int = MOCKUP_PRINT_PROVIDER_ID,
                 variant_id: int = MOCKUP_VARIANT_ID, variant_price: int = MOCKUP_VARIANT_PRICE):
        self.api_token = api_token
        self.shop_id = shop_id
        self.timeout = timeout
        self.blueprint_id = blueprint_id
        self.print_provider_id = print_provider_id
        self.variant_id = variant_id
        self.variant_price = variant_price
        self.headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json"
        }

    @property
    def configured(self) -> bool:
        return bool(self.api_token)

    def _request(self, method: str, path: str, json: dict | None = None, expected: type = dict):
        url = f"{PRINTIFY_API_BASE}/{path}"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.request(method, url, headers=self.headers, json=json)
        except httpx.RequestError as e:
            raise transport_error(e, "Printify") from e
        raise_for_status(r, "Printify")
        return json_body(r, "Printify", expected)

    def list_shops(self) -> list[dict]:
        return self._request("GET", "shops.json", expected=list)

    def resolve_shop_id(self) -> str:
        """Configured shop id, else the first shop connected to the token."""
        if self.shop_id:
            return str(self.shop_id)
        shops = self.list_shops()
        if not shops or not isinstance(shops[0], dict) or not shops[0].get("id"):
            raise ProductSyncError("No Printify shop found.")
        return str(shops[0]["id"])

    def upload_image_by_url(self, *, url: str, file_name: str = "art.png") -> dict:
        """Upload an image into the Printify media library by URL; returns the upload JSON incl. 'id'."""
        return self._request("POST", "uploads/images.json", json={"file_name": file_name, "url": url})

    def create_product(self, shop_id: str, product_spec: dict) -> dict:
        """Create a product draft in Printify.
        product_spec should include blueprint_id, print_provider_id, variants, print_areas, title, description
        """
        return self._request("POST", f"shops/{shop_id}/products.json", json=product_spec)

    def mockup_spec(self, *, title: str, description: str, image_id: str) -> dict:
        return {
            "title": title,
            "description": description,
            "blueprint_id": self.blueprint_id,
            "print_provider_id": self.print_provider_id,
            "variants": [{"id": self.variant_id, "price": self.variant_price, "is_enabled": True}],
            "print_areas": [{
                "variant_ids": [self.variant_id],
                "placeholders": [{
                    "position": "front",
                    "images": [{"id": image_id, "x": 0.5, "y": 0.5, "scale": 1.0, "angle": 0}],
                }],
            }],
            "visible": False,
        }

    def create_mockup(self, title: str, description: str, image_url: str) -> str | None:
        """Create a hidden draft product from ``image_url`` and return its first mockup URL.

        Never raises: a missing token, a missing shop or any API failure is
        logged and reported as ``None`` (no mockup produced).
        """
        if not self.configured:
            log.warning("Printify API token not configured; no mockup for %r", title)
            return None
        try:
            shop_id = self.resolve_shop_id()
            upload = self.upload_image_by_url(url=image_url, file_name="design.png")
            image_id = upload.get("id")
            if not image_id:
                log.error("Printify upload returned no image id for %s", image_url)
                return None
            created = self.create_product(
                shop_id, self.mockup_spec(title=title, description=description or "", image_id=image_id)
            )
        except ProductSyncError as e:
            log.error("Printify mockup failed for %r: %s", title, getattr(e, "detail", e))
            return None

        images = created.get("images")
        first = images[0] if isinstance(images, list) and images else None
        src = first.get("src") if isinstance(first, dict) else None
        if not isinstance(src, str):
            src = None
        if not src:
            log.warning("Printify product %s has no mockup images yet", created.get("id"))
        return src or None
