"""
Request logging middleware - sampled usage log for /api routes.

One line per logged request, including which bound endpoint answered and
which services it evaluated (set on g by EndpointBinder):

    api_request path=/api/isme/1 method=GET status=200 endpoint=api.isme
        services=['user'] duration_ms=1.42 request_id=<uuid>
"""

import logging
import os
import random
import time
from typing import List

from flask import Flask, g, request


logger = logging.getLogger("binding.request")


def _parse_watchlist(raw: str) -> List[str]:
    return [p.strip() for p in (raw or "").split(",") if p.strip()]


def _should_log(path: str, watchlist: List[str], sample_rate: float) -> bool:
    if watchlist:
        return any(path.startswith(prefix) for prefix in watchlist)
    return sample_rate >= 1 or (sample_rate > 0 and random.random() <= sample_rate)


def setup_request_logging_middleware(app: Flask) -> None:
    """
    Env vars:
      - REQUEST_LOG_ENABLED (default: true)
      - REQUEST_LOG_SAMPLE_RATE (default: 0.0)
      - REQUEST_LOG_ENDPOINTS (comma-separated path prefixes to always log)
    """
    if os.environ.get("REQUEST_LOG_ENABLED", "true").lower() != "true":
        return
    try:
        sample_rate = float(os.environ.get("REQUEST_LOG_SAMPLE_RATE", "0.0"))
    except ValueError:
        sample_rate = 0.0
    watchlist = _parse_watchlist(os.environ.get("REQUEST_LOG_ENDPOINTS", ""))

    @app.before_request
    def _start_timer():
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if not request.path.startswith("/api"):
            return response
        if not _should_log(request.path, watchlist, sample_rate):
            return response

        start = getattr(g, "request_start", None)
        duration_ms = round((time.perf_counter() - start) * 1000, 2) if start else None
        logger.info(
            "api_request path=%s method=%s status=%s endpoint=%s services=%s "
            "duration_ms=%s request_id=%s",
            request.path,
            request.method,
            response.status_code,
            request.endpoint,
            getattr(g, "services_computed", []),
            duration_ms,
            getattr(g, "request_id", None),
        )
        return response
