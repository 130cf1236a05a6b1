import httpx

from ..errors import UpstreamNotFound
from ..models import ProductSnapshot
from .http import json_body, json_object, raise_for_status, transport_error


class ShopifyClient:
    def __init__(self, store_domain: str, admin_token: str, api_version: str = "2024-10",
                 timeout: float = 60):
        self.domain = store_domain
        self.token = admin_token
        self.api_version = api_version
        self.timeout = timeout
        self.base = f"https://{self.domain}/admin/api/{self.api_version}"
        self.headers = {
            "X-Shopify-Access-Token": self.token,
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, json: dict | None = None) -> httpx.Response:
        url = f"{self.base}/{path}"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                return client.request(method, url, headers=self.headers, json=json)
        except httpx.RequestError as e:
            raise transport_error(e, "Shopify") from e

    def get_product(self, product_id) -> dict | None:
        """Fetch a single product by ID. Returns ``None`` when Shopify answers 404."""
        r = self._request("GET", f"products/{product_id}.json")
        if r.status_code == 404:
            return None
        raise_for_status(r, "Shopify")
        # Shopify returns { "product": { ... } }
        return json_object(json_body(r, "Shopify"), "product", "Shopify") or None

    def get_product_snapshot(self, product_id) -> ProductSnapshot:
        """Title and description of a product; raises ``UpstreamNotFound`` for an unknown ID."""
        product = self.get_product(product_id)
        if product is None:
            raise UpstreamNotFound(f"Shopify product {product_id} not found")
        snapshot = ProductSnapshot.from_shopify(product)
        if not snapshot.id:
            snapshot = ProductSnapshot(str(product_id), snapshot.title, snapshot.description_html)
        return snapshot

    def update_product(self, product_id, payload: dict) -> dict:
        """Update a Shopify product.

        Args:
            product_id: The Shopify product ID
            payload: Product fields to update (title, body_html, images, status, etc.)

        Returns:
            The updated product dictionary from Shopify
        """
        # Shopify API requires the payload to be wrapped in a "product" key
        request_payload = {"product": {"id": product_id, **payload}}
        r = self._request("PUT", f"products/{product_id}.json", json=request_payload)
        raise_for_status(r, "Shopify")
        return json_object(json_body(r, "Shopify"), "product", "Shopify")

    def replace_images(self, product_id, image_url: str) -> dict:
        """Replace the product's whole image set with a single image."""
        return self.update_product(product_id, {"images": [{"src": image_url}]})

    def append_image(self, product_id, image_url: str) -> dict:
        """Add one image to the product, keeping the existing ones."""
        r = self._request("POST", f"products/{product_id}/images.json",
                          json={"image": {"src": image_url}})
        raise_for_status(r, "Shopify")
        return json_object(json_body(r, "Shopify"), "image", "Shopify")

    def create_product(self, product: dict) -> dict:
        """Create a product. Always sent as a draft so nothing goes live by accident.

        Returns the full response body (``{"product": {...}}``).
        """
        body = {"product": {**product, "status": "draft"}}
        r = self._request("POST", "products.json", json=body)
        raise_for_status(r, "Shopify")
        data = json_body(r, "Shopify")
        json_object(data, "product", "Shopify")
        return data
