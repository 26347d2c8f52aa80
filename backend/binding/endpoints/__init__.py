"""
Endpoint binding package.

Provides the schema adapter, result model, lazy services and the
EndpointBinder that ties them to Flask views.
"""

from .schema import BaseShape, Schema, ValidationError
from .results import (
    Result,
    Success,
    Error,
    json_result,
    html_result,
    text_result,
    error_result,
    param_error,
    write_result,
)
from .services import LazyServices
from .wrapper import EndpointBinder, RequestContext, EMPTY

__all__ = [
    'BaseShape',
    'Schema',
    'ValidationError',
    'Result',
    'Success',
    'Error',
    'json_result',
    'html_result',
    'text_result',
    'error_result',
    'param_error',
    'write_result',
    'LazyServices',
    'EndpointBinder',
    'RequestContext',
    'EMPTY',
]
