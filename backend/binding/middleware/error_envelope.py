"""
Error envelope middleware - the fault boundary around bound endpoints.

Endpoints only handle business outcomes (Results). Everything else lands
here and gets a consistent JSON body:
{
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "requestId": "uuid"
    }
}

A Result raised outside a bound endpoint (a before_request hook, a plain
view) is encoded the same way an endpoint would encode it.
"""

import logging
from flask import Flask, jsonify, g
from werkzeug.exceptions import HTTPException

from binding.endpoints.results import Result, write_result


logger = logging.getLogger('binding.middleware.error')


def setup_error_handlers(app: Flask) -> None:
    """
    Set up error handlers on the Flask app.

    Handles:
    - Results raised outside bound endpoints
    - HTTP exceptions (404, 405, ...) keep their status codes
    - Unhandled Python exceptions become a logged 500
    """

    @app.errorhandler(Result)
    def handle_result(result):
        return write_result(app.response_class(), result)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        # "Not Found" -> "NOT_FOUND"
        code = error.name.upper().replace(' ', '_')
        return _envelope(code, error.description, error.code)

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        logger.exception(
            f"Unhandled error: {error}",
            extra={
                "event": "unhandled_error",
                "request_id": getattr(g, 'request_id', None),
                "error_type": type(error).__name__,
            }
        )
        return _envelope("INTERNAL_ERROR", "An unexpected error occurred", 500)


def _envelope(code: str, message: str, status_code: int):
    request_id = getattr(g, 'request_id', None)
    response = jsonify({
        "error": {
            "code": code,
            "message": message,
            "requestId": request_id,
        }
    })
    if request_id:
        response.headers['X-Request-ID'] = request_id
    return response, status_code
