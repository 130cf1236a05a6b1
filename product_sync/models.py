"""
Data models passed between the clients, the generator and the orchestrator.

Plain dataclasses; the only logic here is translating to and from the JSON
shapes used on the wire.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .pricing import coerce_amount

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductSnapshot:
    """A storefront product as read from Shopify."""
    id: str
    title: str
    description_html: str = ""

    @classmethod
    def from_shopify(cls, product: dict) -> "ProductSnapshot":
        return cls(
            id=str(product.get("id") or ""),
            title=str(product.get("title") or ""),
            description_html=str(product.get("body_html") or ""),
        )


@dataclass(frozen=True)
class Seed:
    """Input descriptor for product generation."""
    brand: str = ""
    theme_notes: str = ""
    product_type: str = ""
    style_notes: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    _ALIASES = {
        "brand": ("brand",),
        "theme_notes": ("theme", "theme_notes", "themeNotes"),
        "product_type": ("product_type", "productType"),
        "style_notes": ("style_notes", "styleNotes"),
    }

    @classmethod
    def from_dict(cls, data) -> "Seed":
        if not isinstance(data, dict):
            raise ValidationError("seed must be a JSON object")
        known = set()
        values = {}
        for attr, keys in cls._ALIASES.items():
            known.update(keys)
            for k in keys:
                if data.get(k) is not None:
                    values[attr] = str(data[k])
                    break
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(extra=extra, **values)

    def to_prompt_dict(self) -> dict:
        """Keys as the generation prompt has always described them."""
        out = {
            "brand": self.brand,
            "theme": self.theme_notes,
            "product_type": self.product_type,
            "style_notes": self.style_notes,
        }
        out.update(self.extra)
        return {k: v for k, v in out.items() if v not in (None, "")}


@dataclass(frozen=True)
class VariantOption:
    name: str
    values: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["VariantOption"]:
        if not isinstance(data, dict):
            return None
        name = data.get("name") or data.get("optionName") or data.get("option1") or data.get("option")
        values = data.get("values") or []
        if isinstance(values, str):
            values = [v.strip() for v in values.split(",") if v.strip()]
        if not isinstance(values, list):
            return None
        return cls(name=str(name or "Option"), values=[str(v) for v in values if str(v).strip()])

    def to_dict(self) -> dict:
        return {"option1": self.name, "values": list(self.values)}


def _optional_amount(data: dict, key: str):
    value = data.get(key)
    if value in (None, ""):
        return None
    try:
        return coerce_amount(value, key)
    except ValidationError as e:
        log.warning("Ignoring unusable %s in generated product: %s", key, e)
        return None


def _tags(raw) -> List[str]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        return []
    seen = []
    for t in raw:
        t = str(t).strip()
        if t and t not in seen:
            seen.append(t)
    return seen


@dataclass
class GeneratedProduct:
    title: str
    short_description: str = ""
    long_description: str = ""
    base_cost: Optional[float] = None
    recommended_price: Optional[float] = None
    tags: List[str] = field(default_factory=list)
    variant_options: List[VariantOption] = field(default_factory=list)
    print_provider_product: str = ""
    mockup_notes: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratedProduct":
        if not isinstance(data, dict):
            raise ValidationError("product must be a JSON object")
        title = str(data.get("title") or "").strip()
        if not title:
            raise ValidationError("product is missing a title")

        raw_options = data.get("variant_options") or data.get("variantOptions") or []
        options = []
        for raw in raw_options if isinstance(raw_options, list) else []:
            opt = VariantOption.from_dict(raw)
            if opt and opt.values:
                options.append(opt)

        return cls(
            title=title,
            short_description=data.get("short_description") or data.get("shortDescription") or "",
            long_description=data.get("long_description") or data.get("longDescription") or "",
            base_cost=_optional_amount(data, "price_base" if "price_base" in data else "baseCost"),
            recommended_price=_optional_amount(
                data, "recommended_price" if "recommended_price" in data else "recommendedPrice"
            ),
            tags=_tags(data.get("tags")),
            variant_options=options,
            print_provider_product=data.get("printify_base_product") or "",
            mockup_notes=data.get("mockup_notes") or "",
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "short_description": self.short_description,
            "long_description": self.long_description,
            "price_base": self.base_cost,
            "recommended_price": self.recommended_price,
            "tags": list(self.tags),
            "printify_base_product": self.print_provider_product,
            "mockup_notes": self.mockup_notes,
            "variant_options": [o.to_dict() for o in self.variant_options],
        }


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one batch item. Exactly one of ``ref``/``seed_index`` is set."""
    ok: bool
    ref: Optional[str] = None
    seed_index: Optional[int] = None
    title: Optional[str] = None
    image: Optional[str] = None
    shopify_id: Optional[Any] = None
    error: Any = None

    def to_dict(self) -> dict:
        out: Dict[str, Any] = {}
        if self.seed_index is not None:
            out["seedIndex"] = self.seed_index
        else:
            out["id"] = self.ref
        out["ok"] = self.ok
        if self.title is not None:
            out["title"] = self.title
        if self.image is not None:
            out["image"] = self.image
        if self.shopify_id is not None:
            out["shopifyId"] = self.shopify_id
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass
class BatchReport:
    results: List[SyncResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.ok)

    def to_list(self) -> List[dict]:
        return [r.to_dict() for r in self.results]
