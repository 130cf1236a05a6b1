"""
Shared test fixtures and configuration for the product sync tests.
"""
import pytest
from flask import Flask
from flask.testing import FlaskClient

from product_sync import create_app
from product_sync.config import Config


class TestingConfig(Config):
    TESTING = True
    SHOPIFY_STORE_DOMAIN = "test-store.myshopify.com"
    SHOPIFY_ADMIN_TOKEN = "test_shopify_token"
    SHOPIFY_API_VERSION = "2024-10"
    PRINTIFY_API_TOKEN = "test_printify_token"
    PRINTIFY_SHOP_ID = "test_shop_123"
    OPENAI_API_KEY = "test_openai_key"
    OPENAI_MODEL = "gpt-4o-mini"
    OPENAI_BASE = "https://api.openai.com/v1"
    INFLATION_RATE = 0.05
    SALES_TAX_RATE = 0.07
    PROFIT_MARGIN = 0.35
    STORE_VENDOR = "Scary Fast"
    IMAGE_SOURCE = "placeholder"
    IMAGE_WRITE_MODE = "replace"
    DESIGN_IMAGE_URL = None
    PLACEHOLDER_IMAGE_BASE = "https://placehold.co"
    BATCH_DELAY_MS = 0
    BULK_DEFAULT_COUNT = 20
    LOG_LEVEL = "DEBUG"


class MockupConfig(TestingConfig):
    IMAGE_SOURCE = "mockup"
    IMAGE_WRITE_MODE = "append"
    DESIGN_IMAGE_URL = "https://designs.example.com/default-design.png"


@pytest.fixture
def app() -> Flask:
    """Create and configure a test Flask application instance."""
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def mockup_client() -> FlaskClient:
    """Test client for an app that backfills Printify mockups by appending images."""
    return create_app(MockupConfig).test_client()


@pytest.fixture
def shopify_client():
    """Create a ShopifyClient instance for testing."""
    from product_sync.services.shopify_client import ShopifyClient
    return ShopifyClient(
        store_domain="test-store.myshopify.com",
        admin_token="test_shopify_token",
        api_version="2024-10",
    )


@pytest.fixture
def printify_client():
    """Create a PrintifyClient instance for testing."""
    from product_sync.services.printify_client import PrintifyClient
    return PrintifyClient(api_token="test_printify_token", shop_id="test_shop_123")


@pytest.fixture
def generator():
    from product_sync.services.openai_svc import ProductGenerator
    return ProductGenerator(api_key="test_openai_key")


@pytest.fixture
def sample_shopify_product() -> dict:
    return {
        "product": {
            "id": 987654321,
            "title": "Test Shopify Product",
            "body_html": "<p>Fast and loud.</p>",
            "images": [],
        }
    }


@pytest.fixture
def sample_generated() -> dict:
    return {
        "title": "Speed Limit None Dad Cap",
        "short_description": "Low-profile cap for the fast lane.",
        "long_description": "<p>Embroidered dad cap with a reflective SPEED LIMIT NONE plate.</p>",
        "price_base": 8,
        "tags": ["hat", "scary fast", "license plate"],
        "printify_base_product": "Dad Hat with Leather Patch",
        "mockup_notes": "Front embroidery, black cap",
        "variant_options": [{"option1": "Color", "values": ["Black", "Charcoal"]}],
    }


@pytest.fixture
def make_app():
    """Build an app from the test config with some settings overridden."""
    def _make(**overrides) -> Flask:
        config_class = type("OverrideConfig", (TestingConfig,), overrides)
        return create_app(config_class)
    return _make
