import os
from dotenv import load_dotenv

from .errors import MissingConfigurationError, ValidationError

load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise MissingConfigurationError(f"{name} must be a number, got {raw!r}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise MissingConfigurationError(f"{name} must be an integer, got {raw!r}")


class Config:
    SHOPIFY_STORE_DOMAIN = os.getenv("SHOPIFY_STORE_DOMAIN")
    SHOPIFY_ADMIN_TOKEN = os.getenv("SHOPIFY_ADMIN_TOKEN")
    SHOPIFY_API_VERSION = os.getenv("SHOPIFY_API_VERSION", "2024-10")
    PRINTIFY_API_TOKEN = os.getenv("PRINTIFY_API_TOKEN")
    PRINTIFY_SHOP_ID = os.getenv("PRINTIFY_SHOP_ID")
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_BASE = os.getenv("OPENAI_BASE", "https://api.openai.com/v1")

    # Pricing fractions applied to the print-provider base cost
    INFLATION_RATE = _float_env("INFLATION_RATE", 0.05)
    SALES_TAX_RATE = _float_env("SALES_TAX_RATE", 0.07)
    PROFIT_MARGIN = _float_env("PROFIT_MARGIN", 0.35)

    STORE_VENDOR = os.getenv("STORE_VENDOR", "Scary Fast")

    # "placeholder" or "mockup"
    IMAGE_SOURCE = os.getenv("IMAGE_SOURCE", "placeholder")
    # "replace" or "append"
    IMAGE_WRITE_MODE = os.getenv("IMAGE_WRITE_MODE", "replace")
    DESIGN_IMAGE_URL = os.getenv("DESIGN_IMAGE_URL")
    PLACEHOLDER_IMAGE_BASE = os.getenv("PLACEHOLDER_IMAGE_BASE", "https://placehold.co")

    BATCH_DELAY_MS = _int_env("BATCH_DELAY_MS", 800)
    BULK_DEFAULT_COUNT = _int_env("BULK_DEFAULT_COUNT", 20)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False


REQUIRED_KEYS = ("SHOPIFY_STORE_DOMAIN", "SHOPIFY_ADMIN_TOKEN", "OPENAI_API_KEY")
IMAGE_SOURCES = {"placeholder", "mockup"}
IMAGE_WRITE_MODES = {"replace", "append"}


def validate_config(config) -> None:
    """Fail at startup when credentials or settings are unusable.

    ``config`` is any mapping with Flask config semantics (``app.config``).
    Printify credentials are optional: without them mockup creation simply
    produces nothing.
    """
    missing = [key for key in REQUIRED_KEYS if not config.get(key)]
    if missing:
        raise MissingConfigurationError(
            "Missing required configuration: " + ", ".join(missing)
        )

    if config.get("IMAGE_SOURCE") not in IMAGE_SOURCES:
        raise MissingConfigurationError(
            f"IMAGE_SOURCE must be one of {sorted(IMAGE_SOURCES)}, got {config.get('IMAGE_SOURCE')!r}"
        )
    if config.get("IMAGE_WRITE_MODE") not in IMAGE_WRITE_MODES:
        raise MissingConfigurationError(
            f"IMAGE_WRITE_MODE must be one of {sorted(IMAGE_WRITE_MODES)}, got {config.get('IMAGE_WRITE_MODE')!r}"
        )
    if int(config.get("BATCH_DELAY_MS", 0)) < 0:
        raise MissingConfigurationError("BATCH_DELAY_MS must not be negative")
    if int(config.get("BULK_DEFAULT_COUNT", 0)) < 1:
        raise MissingConfigurationError("BULK_DEFAULT_COUNT must be at least 1")

    from .pricing import PricingConfig

    try:
        PricingConfig.from_config(config)
    except ValidationError as e:
        raise MissingConfigurationError(str(e)) from e
