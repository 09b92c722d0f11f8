from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
import logging

logger = logging.getLogger(__name__)


class MessagelyError(Exception):
    """Base exception for request failures, carries the HTTP status to answer with."""

    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self):
        return {"message": self.message, "status": self.status}


class BadRequestError(MessagelyError):
    status = 400


class UnauthorizedError(MessagelyError):
    status = 401


class NotFoundError(MessagelyError):
    status = 404


def error_response(message, status):
    return jsonify({"error": {"message": message, "status": status}}), status


def register_error_handlers(app, db):
    @app.errorhandler(MessagelyError)
    def handle_messagely_error(error):
        return error_response(error.message, error.status)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception("Database error")
        return error_response("Internal server error", 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception("Unhandled error")
        return error_response("Internal server error", 500)
