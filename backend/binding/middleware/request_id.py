"""
Request ID middleware - correlate log lines and responses.

Every request gets g.request_id (the caller's X-Request-ID, or a fresh
UUID), and every response echoes it back, including 400s produced by
endpoint validation.
"""

import uuid
from flask import Flask, request, g


REQUEST_ID_HEADER = 'X-Request-ID'


def setup_request_id_middleware(app: Flask) -> None:
    """Install before/after hooks that assign and echo the request ID."""

    @app.before_request
    def inject_request_id():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

    @app.after_request
    def add_request_id_header(response):
        if hasattr(g, 'request_id'):
            response.headers[REQUEST_ID_HEADER] = g.request_id
        return response

