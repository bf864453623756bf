from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException


class BadRequestBody(Exception):
    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


def error_response(message: str, status: int, details=None):
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return jsonify(body), status


def validation_details(exc: ValidationError) -> list:
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg"),
            "type": err.get("type"),
        }
        for err in exc.errors()
    ]


def register_error_handlers(app):
    @app.errorhandler(BadRequestBody)
    def _bad_body(exc: BadRequestBody):
        return error_response(exc.message, 400, exc.details)

    @app.errorhandler(ValidationError)
    def _invalid(exc: ValidationError):
        return error_response("invalid request body", 400, validation_details(exc))

    @app.errorhandler(HTTPException)
    def _http(exc: HTTPException):
        if exc.code == 413:
            return error_response("request body too large", 413)
        return error_response(exc.description or exc.name, exc.code or 500)


__all__ = [
    "BadRequestBody",
    "error_response",
    "validation_details",
    "register_error_handlers",
]
