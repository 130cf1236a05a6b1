from flask import jsonify
from werkzeug.exceptions import HTTPException


class ProductSyncError(Exception):
    """Base class for every error this service raises on purpose."""


class ValidationError(ProductSyncError):
    """Request or value has the wrong shape; maps to HTTP 400."""


class MissingConfigurationError(ProductSyncError):
    """Credentials or settings absent/invalid at startup."""


class UpstreamNotFound(ProductSyncError):
    pass


class UpstreamRequestError(ProductSyncError):
    """A Shopify, Printify or OpenAI call failed.

    ``payload`` is the decoded error body of the upstream response when one was
    available (Shopify returns ``{"errors": ...}``), else ``None``.
    """

    def __init__(self, message: str, status_code: int | None = None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def detail(self):
        return self.payload if self.payload is not None else str(self)


class GenerationFormatError(ProductSyncError):
    """The text-generation response could not be read as a product JSON object."""


def _error_body(message: str, details=None):
    body = {"ok": False, "error": message}
    if details is not None:
        body["details"] = details
    return body


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def _validation(e):
        return jsonify(_error_body(str(e))), 400

    @app.errorhandler(UpstreamRequestError)
    def _upstream(e):
        app.logger.error("Upstream request failed: %s", e)
        return jsonify(_error_body(str(e), e.payload)), 500

    @app.errorhandler(ProductSyncError)
    def _sync(e):
        app.logger.error("%s: %s", type(e).__name__, e)
        return jsonify(_error_body(str(e))), 500

    @app.errorhandler(Exception)
    def _unexpected(e):
        if isinstance(e, HTTPException):
            return e
        app.logger.exception("Unexpected error")
        return jsonify(_error_body(str(e))), 500
