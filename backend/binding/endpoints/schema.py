"""
Schema adapter - the validate/cast capability endpoints are declared with.

Shapes are pydantic types (usually BaseShape subclasses). Each Schema wraps
one shape in a TypeAdapter built once at declaration time:

- validate(category, raw): typed value, or ValidationError with the first
  violation found ("query.id: Input should be a valid integer ...")
- cast(value): output encoding. Unknown fields are stripped, objects are read
  by attribute. Failures here mean the handler broke its own output contract,
  so they are not caught.

Usage:
    class IdRequired(BaseShape):
        id: int

    schema = Schema(IdRequired)
    schema.validate("query", {"id": "3"}).id  # -> 3
"""

import types
from typing import Any, Dict, Optional, Set, Union, get_args, get_origin

from flask import Request
from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError


_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class ValidationError(ValueError):
    """Raised when raw input does not match its declared shape."""

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value


class BaseShape(BaseModel):
    """
    Base model for endpoint shapes.

    - Frozen after creation (shared across handlers, never mutated)
    - Whitespace stripped from strings
    - Both alias and field name accepted
    - Unknown fields ignored (and dropped on output)
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',
    )


class Schema:
    """A declared shape plus the adapter that validates and casts against it."""

    def __init__(self, shape: Any):
        self.shape = shape
        self._adapter = TypeAdapter(shape)

    def __repr__(self) -> str:
        return f"Schema({getattr(self.shape, '__name__', self.shape)!r})"

    def validate(self, category: str, raw: Any) -> Any:
        """
        Validate raw request data for one input category.

        Args:
            category: "params", "query" or "body" (prefixes the message)
            raw: Collected request data

        Raises:
            ValidationError: Carrying the first violation pydantic reports
        """
        try:
            return self._adapter.validate_python(raw)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            prefix = f"{category}.{field}" if field else category
            raise ValidationError(
                f"{prefix}: {first['msg']}",
                field=field or None,
                received_value=first.get("input"),
            ) from e

    def cast(self, value: Any) -> Any:
        """Coerce a handler return value to JSON-ready data, dropping undeclared fields."""
        typed = self._adapter.validate_python(value, from_attributes=True)
        return self._adapter.dump_python(typed, mode="json", by_alias=True)


def as_schema(shape: Any) -> Optional[Schema]:
    """Wrap a shape once; None and existing Schema objects pass through."""
    if shape is None or isinstance(shape, Schema):
        return shape
    return Schema(shape)


def collect_params(request: Request) -> Dict[str, Any]:
    """Path parameters as captured by the URL rule."""
    return dict(request.view_args or {})


def collect_query(request: Request, schema: Optional[Schema] = None) -> Dict[str, Any]:
    """
    Query string as a plain dict.

    Single-valued keys keep their first value; keys the shape declares as
    list/tuple/set keep every value (?bedroom=2&bedroom=3).
    """
    multi = _sequence_fields(schema.shape) if schema else set()
    raw = {}
    for key in request.args.keys():
        raw[key] = request.args.getlist(key) if key in multi else request.args.get(key)
    return raw


def collect_body(request: Request) -> Any:
    """JSON body for JSON requests (None when malformed), form fields otherwise."""
    if request.is_json:
        return request.get_json(silent=True)
    return request.form.to_dict()


def _sequence_fields(shape: Any) -> Set[str]:
    if not (isinstance(shape, type) and issubclass(shape, BaseModel)):
        return set()
    names = set()
    for name, info in shape.model_fields.items():
        if _is_sequence(info.annotation):
            names.add(name)
            if info.alias:
                names.add(info.alias)
    return names


def _is_sequence(annotation: Any) -> bool:
    if annotation in _SEQUENCE_TYPES:
        return True
    origin = get_origin(annotation)
    if origin in _SEQUENCE_TYPES:
        return True
    if origin is Union or origin is types.UnionType:
        return any(
            _is_sequence(arg) for arg in get_args(annotation) if arg is not type(None)
        )
    return False
