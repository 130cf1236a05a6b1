"""
Retail price computation.

The base cost is the print provider's per-unit cost. Retail covers inflation,
our margin, and sales tax, applied in that order:

    inflated    = base * (1 + inflation_rate)
    with_margin = inflated * (1 + margin)
    retail      = with_margin * (1 + tax_rate)

rounded half-up to the cent.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from .errors import ValidationError

CENT = Decimal("0.01")


def _fraction(name: str, value) -> float:
    try:
        f = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not 0 <= f < 1:
        raise ValidationError(f"{name} must be a fraction in [0, 1), got {f}")
    return f


@dataclass(frozen=True)
class PricingConfig:
    inflation_rate: float = 0.05
    tax_rate: float = 0.07
    margin: float = 0.35

    def __post_init__(self):
        # Normalize and range-check; frozen dataclass needs object.__setattr__
        object.__setattr__(self, "inflation_rate", _fraction("inflation_rate", self.inflation_rate))
        object.__setattr__(self, "tax_rate", _fraction("tax_rate", self.tax_rate))
        object.__setattr__(self, "margin", _fraction("margin", self.margin))

    @classmethod
    def from_config(cls, config) -> "PricingConfig":
        return cls(
            inflation_rate=config.get("INFLATION_RATE", 0.05),
            tax_rate=config.get("SALES_TAX_RATE", 0.07),
            margin=config.get("PROFIT_MARGIN", 0.35),
        )


@dataclass(frozen=True)
class PriceQuote:
    base_cost: float | None
    retail_price: float
    pricing: PricingConfig

    def to_dict(self) -> dict:
        return {
            "base_cost": self.base_cost,
            "retail_price": self.retail_price,
            "inflation_rate": self.pricing.inflation_rate,
            "tax_rate": self.pricing.tax_rate,
            "margin": self.pricing.margin,
        }


def coerce_amount(value, name: str = "base_cost") -> float:
    """Return ``value`` as a non-negative finite float or raise ValidationError.

    Accepts ints, floats and numeric strings. Booleans are rejected even though
    Python treats them as ints.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(amount):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    if amount < 0:
        raise ValidationError(f"{name} must not be negative, got {value!r}")
    return amount


def _cents(amount) -> Decimal:
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def round_cents(amount) -> float:
    """Round half-up to the cent: ``2.675`` gives ``2.68`` where ``round`` gives ``2.67``."""
    return float(_cents(amount))


def format_price(amount) -> str:
    """Shopify variant price string, e.g. ``"12.10"``."""
    return str(_cents(amount))


def compute_retail_price(base_cost, pricing: PricingConfig | None = None) -> float:
    pricing = pricing or PricingConfig()
    base = Decimal(str(coerce_amount(base_cost)))

    inflated = base * (1 + Decimal(str(pricing.inflation_rate)))
    with_margin = inflated * (1 + Decimal(str(pricing.margin)))
    retail = with_margin * (1 + Decimal(str(pricing.tax_rate)))
    return round_cents(retail)


def quote(base_cost, pricing: PricingConfig | None = None) -> PriceQuote:
    pricing = pricing or PricingConfig()
    return PriceQuote(
        base_cost=coerce_amount(base_cost),
        retail_price=compute_retail_price(base_cost, pricing),
        pricing=pricing,
    )


def fixed_quote(price, pricing: PricingConfig | None = None, name: str = "price") -> PriceQuote:
    """Quote for a price given outright; there is no base cost behind it."""
    return PriceQuote(
        base_cost=None,
        retail_price=round_cents(coerce_amount(price, name)),
        pricing=pricing or PricingConfig(),
    )


DEFAULT_BASE_COST = 8.0


def quote_generated(generated, pricing: PricingConfig | None = None,
                    fallback_base_cost: float = DEFAULT_BASE_COST) -> PriceQuote:
    """Price a generated product.

    The model's own ``recommended_price`` wins when it is usable; otherwise the
    price is computed from its ``base_cost``, and failing that from
    ``fallback_base_cost``.
    """
    if generated.recommended_price is not None:
        fixed = fixed_quote(generated.recommended_price, pricing, "recommended_price")
        return PriceQuote(generated.base_cost, fixed.retail_price, fixed.pricing)
    base = generated.base_cost if generated.base_cost is not None else fallback_base_cost
    return quote(base, pricing)
