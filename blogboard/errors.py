from flask import jsonify

from blogboard.db import db


class InvalidPasswordError(Exception):
    """Raised when a submitted password does not match the stored hash."""

    def __init__(self, message="Invalid password"):
        super().__init__(message)


class EntityNotFoundError(ValueError):
    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class FileStorageError(Exception):
    pass


def error_response(error, status):
    db.session.rollback()
    return jsonify({"error": str(error)}), status


def register_error_handlers(app):
    # Backstop for errors escaping a route's own try/except.

    @app.errorhandler(InvalidPasswordError)
    def handle_invalid_password(e):
        return error_response(e, 403)

    @app.errorhandler(EntityNotFoundError)
    def handle_not_found(e):
        return error_response(e, 404)

    @app.errorhandler(FileStorageError)
    def handle_storage_error(e):
        return error_response(e, 503)

    @app.errorhandler(ValueError)
    def handle_value_error(e):
        return error_response(e, 400)

    @app.errorhandler(413)
    def handle_too_large(e):
        return jsonify({"error": "Upload too large"}), 413
