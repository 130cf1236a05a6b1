# product_sync/extensions.py
from flask import current_app
from flask_cors import CORS

from .services.openai_svc import ProductGenerator
from .services.printify_client import PrintifyClient
from .services.shopify_client import ShopifyClient
from .sync.orchestrator import ProductSync, SyncSettings
from .sync.pacing import pacer_from_config

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

EXTENSION_KEY = "product_sync"


class Clients:
    """Builds the API clients and the orchestrator from app config, once per app."""

    def init_app(self, app):
        config = app.config
        shopify = ShopifyClient(
            store_domain=config["SHOPIFY_STORE_DOMAIN"],
            admin_token=config["SHOPIFY_ADMIN_TOKEN"],
            api_version=config.get("SHOPIFY_API_VERSION", "2024-10"),
        )
        printify = PrintifyClient(
            api_token=config.get("PRINTIFY_API_TOKEN"),
            shop_id=config.get("PRINTIFY_SHOP_ID"),
        )
        generator = ProductGenerator(
            api_key=config["OPENAI_API_KEY"],
            model=config.get("OPENAI_MODEL", "gpt-4o-mini"),
            base_url=config.get("OPENAI_BASE", "https://api.openai.com/v1"),
            brand=config.get("STORE_VENDOR") or "Scary Fast",
        )
        app.extensions[EXTENSION_KEY] = ProductSync(
            shopify=shopify,
            printify=printify,
            generator=generator,
            settings=SyncSettings.from_config(config),
            pacer=pacer_from_config(config),
        )


clients = Clients()


def get_sync() -> ProductSync:
    return current_app.extensions[EXTENSION_KEY]
