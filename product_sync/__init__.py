from flask import Flask
from .config import Config, validate_config
from .errors import register_error_handlers
from .extensions import cors, clients
from .log_config import setup_logging

def create_app(config_class: type[Config] = Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Refuse to start without credentials
    validate_config(app.config)
    setup_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Extensions
    cors.init_app(app)
    clients.init_app(app)

    register_error_handlers(app)

    # Blueprints
    from .routes.health import bp as health_bp
    from .routes.products import bp as products_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(products_bp)

    return app
