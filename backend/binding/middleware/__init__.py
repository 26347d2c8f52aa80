"""
Global middleware for bound endpoints.

Provides:
- Request ID injection (X-Request-ID)
- Error envelope for faults the endpoint layer does not handle
- Request usage logging (sampling + watchlist)
"""

from .request_id import setup_request_id_middleware
from .error_envelope import setup_error_handlers
from .request_logging import setup_request_logging_middleware

__all__ = [
    'setup_request_id_middleware',
    'setup_error_handlers',
    'setup_request_logging_middleware',
]
