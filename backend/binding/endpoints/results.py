"""
Endpoint results - the closed set of outcomes an endpoint can send.

    Success  status (200), body, MIME type (JSON), optional headers/cookies
    Error    status, message body (sent as text/plain)

Results are exceptions, so a handler or a service factory can raise one to
stop early (e.g. `raise error_result(401)`) as well as return it. Anything
else raised is left for Flask's error handlers.

A handler's plain return value is wrapped in a Success by the endpoint
wrapper; see wrap_value().
"""

import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from flask import Response
from pydantic import BaseModel

from .schema import Schema


JSON_MIME = "application/json"
HTML_MIME = "text/html"
TEXT_MIME = "text/plain"

BAD_REQUEST = 400


@dataclass(eq=False)
class Result(Exception):
    """Base for Success and Error."""
    status_code: int = 200
    body: str = ""

    def __str__(self):
        return f"{self.status_code} {self.body}".rstrip()


@dataclass(eq=False)
class Success(Result):
    """A response to send as-is; bodies are never re-shaped."""
    mime_type: str = JSON_MIME
    headers: Optional[Dict[str, str]] = None
    cookies: Optional[Dict[str, Optional[str]]] = None


@dataclass(eq=False)
class Error(Result):
    """A business-level rejection (unauthorized, not found, bad params)."""
    status_code: int = BAD_REQUEST


def text_result(
    body: str,
    mime_type: str,
    headers: Optional[Dict[str, str]] = None,
    cookies: Optional[Dict[str, Optional[str]]] = None,
    status_code: int = 200,
) -> Success:
    """Success with an arbitrary MIME type."""
    return Success(
        status_code=status_code,
        body=body,
        mime_type=mime_type,
        headers=headers,
        cookies=cookies,
    )


def html_result(
    markup: str,
    headers: Optional[Dict[str, str]] = None,
    cookies: Optional[Dict[str, Optional[str]]] = None,
    status_code: int = 200,
) -> Success:
    return text_result(markup, HTML_MIME, headers, cookies, status_code)


def json_result(
    value: Any,
    headers: Optional[Dict[str, str]] = None,
    cookies: Optional[Dict[str, Optional[str]]] = None,
    status_code: int = 200,
) -> Success:
    """Success with `value` JSON encoded (pydantic models and dates allowed)."""
    return text_result(_dumps(value), JSON_MIME, headers, cookies, status_code)


def error_result(status_code: int, message: str = "") -> Error:
    return Error(status_code=status_code, body=message)


def param_error(message: str) -> Error:
    """400 for input that failed its declared shape."""
    return error_result(BAD_REQUEST, message)


def wrap_value(value: Any, output: Optional[Schema] = None) -> Success:
    """
    Turn a plain handler return value into a Success.

    - With an output schema, the value is cast through it (undeclared fields dropped)
    - Without one, the value is JSON encoded unchanged
    - None without an output schema is an empty 200
    """
    if output is not None:
        return json_result(output.cast(value))
    if value is None:
        return Success()
    return json_result(value)


def write_result(response: Response, result: Result) -> Response:
    """
    Encode a result onto the response.

    Status first; for a Success, cookies (None deletes) and headers; then
    the body. Depends on nothing but the result itself.
    """
    response.status_code = result.status_code
    if isinstance(result, Success):
        for name, value in (result.cookies or {}).items():
            if value is None:
                response.delete_cookie(name)
            else:
                response.set_cookie(name, value)
        for name, value in (result.headers or {}).items():
            response.headers[name] = value
        response.mimetype = result.mime_type
    else:
        response.mimetype = TEXT_MIME
    response.set_data(result.body)
    return response


def _dumps(value: Any) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True)
    return json.dumps(value, default=_json_serializer)


def _json_serializer(obj: Any) -> Any:
    """JSON serializer for objects not serializable by default."""
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
