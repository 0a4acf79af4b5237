"""Error taxonomy shared by services and routes.

Services raise these; ``register_error_handlers`` turns them into JSON
responses of the form ``{"error": <message>, "kind": <kind>}``.
"""
from core.imports import jsonify, SQLAlchemyError
from werkzeug.exceptions import HTTPException


class MarketplaceError(Exception):
    """Base class for every failure surfaced to API callers."""

    kind = "error"
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {"error": self.message, "kind": self.kind}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(MarketplaceError):
    """Missing or malformed input, or a referenced entity that does not exist."""

    kind = "validation"
    status_code = 400


class AuthError(MarketplaceError):
    kind = "auth"
    status_code = 401


class ForbiddenError(MarketplaceError):
    kind = "forbidden"
    status_code = 403


class NotFoundError(MarketplaceError):
    """The targeted id does not exist."""

    kind = "not_found"
    status_code = 404

    def __init__(self, entity, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(MarketplaceError):
    """Duplicate of an existing unique record."""

    kind = "conflict"
    status_code = 400


class InvalidStateError(MarketplaceError):
    """Requested status change is not allowed from the current status."""

    kind = "invalid_state"
    status_code = 409


class StorageError(MarketplaceError):
    kind = "storage"
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(MarketplaceError)
    def handle_marketplace_error(err):
        if err.status_code >= 500:
            app.logger.error("%s: %s", err.kind, err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(err):
        app.logger.exception("Unhandled database error")
        return jsonify(StorageError("Database error").to_dict()), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"error": err.description, "kind": "http"}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        app.logger.exception("Unexpected error")
        return jsonify({"error": "Internal server error", "kind": "internal"}), 500
