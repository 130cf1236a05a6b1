"""
Batch workflows over the storefront.

Every batch is a fold over its input: each item yields exactly one
``SyncResult`` in input order and a failing item never stops the batch. Only
problems with the request as a whole (bad shape, bad ``count``) raise.
"""

import logging
from dataclasses import dataclass, field

import httpx

from ..errors import ProductSyncError, UpstreamNotFound, UpstreamRequestError, ValidationError
from ..models import BatchReport, GeneratedProduct, Seed, SyncResult
from ..pricing import PriceQuote, PricingConfig, coerce_amount, fixed_quote, format_price, quote_generated
from ..utils.images import PLACEHOLDER_IMAGE_BASE, placeholder_image_url
from ..utils.seeds import default_seed, demo_seeds
from .pacing import NoDelayPacer, Pacer

log = logging.getLogger(__name__)

MAX_TAGS = 20
# Errors that belong to one item; anything else is a bug and propagates.
ITEM_ERRORS = (ProductSyncError, httpx.HTTPError)


@dataclass(frozen=True)
class SyncSettings:
    pricing: PricingConfig = field(default_factory=PricingConfig)
    vendor: str = "Scary Fast"
    image_source: str = "placeholder"
    image_write_mode: str = "replace"
    design_image_url: str | None = None
    placeholder_base: str = PLACEHOLDER_IMAGE_BASE
    default_count: int = 20

    @classmethod
    def from_config(cls, config) -> "SyncSettings":
        return cls(
            pricing=PricingConfig.from_config(config),
            vendor=config.get("STORE_VENDOR") or "Scary Fast",
            image_source=config.get("IMAGE_SOURCE") or "placeholder",
            image_write_mode=config.get("IMAGE_WRITE_MODE") or "replace",
            design_image_url=config.get("DESIGN_IMAGE_URL") or None,
            placeholder_base=config.get("PLACEHOLDER_IMAGE_BASE") or PLACEHOLDER_IMAGE_BASE,
            default_count=int(config.get("BULK_DEFAULT_COUNT") or 20),
        )


def describe_error(e: Exception):
    """Provider error payload when there is one, else the message."""
    if isinstance(e, UpstreamRequestError):
        return e.detail
    return str(e) or type(e).__name__


def parse_count(count, default: int) -> int:
    if count is None or count == "":
        return default
    if isinstance(count, bool):
        raise ValidationError("count must be a positive integer")
    try:
        n = int(count)
    except (TypeError, ValueError):
        raise ValidationError(f"count must be a positive integer, got {count!r}")
    if n < 1 or (isinstance(count, float) and n != count):
        raise ValidationError(f"count must be a positive integer, got {count!r}")
    return n


def parse_product_ids(product_ids) -> list[str]:
    if not isinstance(product_ids, list) or not product_ids:
        raise ValidationError("Missing or invalid productIds array.")
    ids = []
    for pid in product_ids:
        if isinstance(pid, bool) or not isinstance(pid, (str, int)) or not str(pid).strip():
            raise ValidationError(f"Invalid product id: {pid!r}")
        ids.append(str(pid).strip())
    return ids


def parse_seeds(seeds) -> list[Seed] | None:
    if seeds is None:
        return None
    if not isinstance(seeds, list):
        raise ValidationError("seeds must be an array of objects")
    return [Seed.from_dict(s) for s in seeds]


def build_product_payload(product: GeneratedProduct, price: PriceQuote, *, vendor: str,
                          product_type: str | None = None, images: list[str] | None = None) -> dict:
    """Shopify product body for a generated product, always a draft."""
    payload = {
        "title": product.title,
        "body_html": product.long_description or product.short_description or f"{vendor} product",
        "vendor": vendor,
        "product_type": product_type or "Apparel",
        "status": "draft",
        "tags": ",".join(product.tags[:MAX_TAGS]),
    }
    retail = format_price(price.retail_price)
    option = product.variant_options[0] if product.variant_options else None
    if option and option.values:
        payload["options"] = [{"name": option.name}]
        payload["variants"] = [{"option1": v, "price": retail} for v in option.values]
    else:
        payload["variants"] = [{"option1": "Default Title", "price": retail}]
    if images:
        payload["images"] = [{"src": url} for url in images]
    return payload


class ProductSync:
    def __init__(self, shopify, printify, generator, settings: SyncSettings | None = None,
                 pacer: Pacer | None = None):
        self.shopify = shopify
        self.printify = printify
        self.generator = generator
        self.settings = settings or SyncSettings()
        self.pacer = pacer or NoDelayPacer()

    def _fold(self, items, step) -> BatchReport:
        report = BatchReport()
        for index, item in enumerate(items):
            if index:
                self.pacer.wait()
            report.results.append(step(index, item))
        log.info("Batch finished: %d/%d ok", report.success_count, len(report.results))
        return report

    # ---- image backfill ----

    def derive_image(self, snapshot) -> str | None:
        placeholder = placeholder_image_url(snapshot.title, base_url=self.settings.placeholder_base)
        if self.settings.image_source != "mockup":
            return placeholder
        source = self.settings.design_image_url or placeholder
        return self.printify.create_mockup(snapshot.title, snapshot.description_html, source)

    def write_image(self, product_id: str, image_url: str):
        if self.settings.image_write_mode == "append":
            return self.shopify.append_image(product_id, image_url)
        return self.shopify.replace_images(product_id, image_url)

    def _update_one(self, index: int, product_id: str) -> SyncResult:
        log.info("Updating product %s...", product_id)
        try:
            snapshot = self.shopify.get_product_snapshot(product_id)
        except UpstreamNotFound:
            log.warning("Product %s not found; skipping", product_id)
            return SyncResult(ok=False, ref=product_id, error="Product not found")
        except ITEM_ERRORS as e:
            log.error("Failed to fetch product %s: %s", product_id, describe_error(e))
            return SyncResult(ok=False, ref=product_id, error=describe_error(e))

        try:
            image = self.derive_image(snapshot)
        except ITEM_ERRORS as e:
            log.error("Failed to derive an image for %s: %s", product_id, describe_error(e))
            return SyncResult(ok=False, ref=product_id, title=snapshot.title, error=describe_error(e))
        if not image:
            return SyncResult(ok=False, ref=product_id, title=snapshot.title, error="No mockup produced")

        try:
            self.write_image(product_id, image)
        except ITEM_ERRORS as e:
            log.error("Failed to update images for %s: %s", product_id, describe_error(e))
            return SyncResult(ok=False, ref=product_id, title=snapshot.title, error=describe_error(e))

        log.info("Updated %s with image %s", product_id, image)
        return SyncResult(ok=True, ref=product_id, title=snapshot.title, image=image)

    def update_images(self, product_ids, count=None) -> BatchReport:
        ids = parse_product_ids(product_ids)
        n = parse_count(count, len(ids))
        return self._fold(ids[:n], self._update_one)

    # ---- generation ----

    def generate_product(self, seed: Seed | None = None) -> GeneratedProduct:
        """Generate one product; fills ``recommended_price`` from the base cost when missing."""
        generated = self.generator.generate(seed or default_seed(self.settings.vendor))
        if generated.recommended_price is None and generated.base_cost is not None:
            generated.recommended_price = quote_generated(generated, self.settings.pricing).retail_price
        return generated

    def _create_generated(self, generated: GeneratedProduct, seed: Seed) -> dict:
        price = quote_generated(generated, self.settings.pricing)
        log.info("Pricing %r: %s", generated.title, price.to_dict())
        payload = build_product_payload(
            generated, price, vendor=self.settings.vendor, product_type=seed.product_type,
        )
        return self.shopify.create_product(payload)

    def generate_and_create(self, seed: Seed | None = None) -> tuple[GeneratedProduct, dict]:
        seed = seed or default_seed(self.settings.vendor)
        generated = self.generator.generate(seed)
        return generated, self._create_generated(generated, seed)

    def _generate_one(self, index: int, seed: Seed) -> SyncResult:
        try:
            generated = self.generator.generate(seed)
        except ITEM_ERRORS as e:
            log.error("Generation failed for seed %d: %s", index, e)
            return SyncResult(ok=False, seed_index=index, error=f"OpenAI error: {e}")

        try:
            response = self._create_generated(generated, seed)
        except ITEM_ERRORS as e:
            log.error("Shopify create failed for seed %d: %s", index, describe_error(e))
            return SyncResult(ok=False, seed_index=index, title=generated.title, error=describe_error(e))

        created = response.get("product") if isinstance(response, dict) else None
        if not isinstance(created, dict):
            log.error("Shopify create for seed %d returned no product: %r", index, response)
            return SyncResult(ok=False, seed_index=index, title=generated.title,
                              error="Shopify returned no product")
        return SyncResult(ok=True, seed_index=index, shopify_id=created.get("id"),
                          title=created.get("title") or generated.title)

    def bulk_generate(self, seeds=None, count=None) -> BatchReport:
        parsed = parse_seeds(seeds)
        if parsed is None:
            parsed = demo_seeds(self.settings.vendor)
        n = parse_count(count, self.settings.default_count)
        return self._fold(parsed[:n], self._generate_one)

    # ---- direct creation ----

    def create_product(self, data) -> dict:
        """Create a draft product from a caller-supplied, generated-like product."""
        if not isinstance(data, dict) or not data:
            raise ValidationError("Missing product data in body.product")
        # Caller-supplied amounts are validated strictly rather than dropped.
        for key in ("price", "price_base", "recommended_price"):
            if data.get(key) is not None:
                coerce_amount(data[key], key)

        generated = GeneratedProduct.from_dict(data)
        if not generated.long_description and data.get("body_html"):
            generated.long_description = str(data["body_html"])

        if data.get("price") is not None:
            price = fixed_quote(data["price"], self.settings.pricing)
        else:
            price = quote_generated(generated, self.settings.pricing)

        images = _image_urls(data.get("images"))
        payload = build_product_payload(
            generated, price, vendor=data.get("vendor") or self.settings.vendor,
            product_type=data.get("product_type"), images=images,
        )
        if data.get("variants") is not None:
            payload["variants"] = _explicit_variants(data["variants"])
            payload.pop("options", None)
            if data.get("options"):
                payload["options"] = data["options"]
        return self.shopify.create_product(payload)


def _image_urls(images) -> list[str]:
    if images is None:
        return []
    if not isinstance(images, list):
        raise ValidationError("images must be an array")
    urls = []
    for img in images:
        src = img.get("src") if isinstance(img, dict) else img
        if not isinstance(src, str) or not src.strip():
            raise ValidationError(f"Invalid image: {img!r}")
        urls.append(src.strip())
    return urls


def _explicit_variants(variants) -> list[dict]:
    if not isinstance(variants, list) or not variants:
        raise ValidationError("variants must be a non-empty array")
    out = []
    for v in variants:
        if not isinstance(v, dict):
            raise ValidationError(f"Invalid variant: {v!r}")
        v = dict(v)
        if v.get("price") is not None:
            v["price"] = format_price(coerce_amount(v["price"], "variant price"))
        out.append(v)
    return out
