"""
Binding package - declarative request binding for Flask.

This package provides:
- Schema adapter over pydantic shapes
- Result model (Success / Error) and response encoding
- Lazy per-request services
- EndpointBinder for route enforcement
- Global middleware (request_id, error_envelope, request_logging)
"""

from .endpoints import EndpointBinder, BaseShape, json_result, error_result

__all__ = ['EndpointBinder', 'BaseShape', 'json_result', 'error_result']
