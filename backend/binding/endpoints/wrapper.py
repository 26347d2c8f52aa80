"""
EndpointBinder - declarative input binding and output encoding for Flask views.

Usage:
    binder = EndpointBinder({"user": load_user})

    @api_bp.route("/isme/<id>", methods=["GET"])
    @binder.endpoint(params=IdRequired, output=IsMeResponse)
    def isme(ctx):
        user = ctx.services["user"]
        return {"user": user, "isme": ctx.params.id == user.id}

Per request the wrapper:
1. Validates params, query, body (in that order, first failure -> 400)
2. Builds a RequestContext (validated inputs, lazy services, raw request/response)
3. Calls the handler (sync or async)
4. Classifies the outcome: a returned or raised Result is sent as-is, a plain
   value is cast through the output shape (undeclared fields dropped)
5. Writes status, cookies, headers and body onto the response

Exceptions that are not Results are not caught here; Flask's error
handlers own them.
"""

import functools
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from flask import Request, Response, current_app, g, request

from .results import Result, param_error, wrap_value, write_result
from .schema import (
    Schema,
    ValidationError,
    as_schema,
    collect_body,
    collect_params,
    collect_query,
)
from .services import LazyServices, freeze_services


logger = logging.getLogger('binding.endpoints')

# Value of an input category that has no declared shape.
EMPTY = MappingProxyType({})


@dataclass(frozen=True)
class Inputs:
    """Validated input values, one per category."""
    params: Any
    query: Any
    body: Any


@dataclass
class EndpointDeclaration:
    """Handler plus its declared shapes. Built once per route."""
    handler: Callable
    params: Optional[Schema] = None
    query: Optional[Schema] = None
    body: Optional[Schema] = None
    output: Optional[Schema] = None
    name: str = field(default="")

    def __post_init__(self):
        if not self.name:
            self.name = getattr(self.handler, "__name__", repr(self.handler))


@dataclass
class RequestContext:
    """Everything a handler receives. Created per request, never shared."""
    request: Request
    response: Response
    params: Any
    query: Any
    body: Any
    services: LazyServices


class EndpointBinder:
    """
    Binds handlers to Flask views against a fixed service declaration.

    Args:
        services: Mapping of service name -> factory(request, response).
            Frozen at construction.
    """

    def __init__(self, services: Optional[Mapping[str, Callable]] = None):
        self.services = freeze_services(services)

    def endpoint(
        self,
        handler: Optional[Callable] = None,
        *,
        params: Any = None,
        query: Any = None,
        body: Any = None,
        output: Any = None,
    ) -> Callable:
        """
        Wrap a handler into a Flask view function.

        Works as a call (`binder.endpoint(fn, query=Q)`) or as a decorator
        (`@binder.endpoint(query=Q)`). Shapes are pydantic types or Schema
        objects; omitted input categories are passed as empty mappings.
        """
        def decorator(fn: Callable) -> Callable:
            declaration = EndpointDeclaration(
                handler=fn,
                params=as_schema(params),
                query=as_schema(query),
                body=as_schema(body),
                output=as_schema(output),
            )

            @functools.wraps(fn)
            def view(*args, **kwargs) -> Response:
                return self.dispatch(declaration)

            view.declaration = declaration
            return view

        if handler is not None:
            return decorator(handler)
        return decorator

    def dispatch(self, declaration: EndpointDeclaration) -> Response:
        """Run one request through an endpoint. Needs a Flask request context."""
        req = request._get_current_object()
        response = current_app.response_class()

        inputs = validate_inputs(req, declaration)
        if isinstance(inputs, Result):
            logger.debug(
                f"endpoint rejected name={declaration.name} "
                f"status={inputs.status_code} message={inputs.body}"
            )
            return write_result(response, inputs)

        services = LazyServices(self.services, req, response)
        ctx = RequestContext(
            request=req,
            response=response,
            params=inputs.params,
            query=inputs.query,
            body=inputs.body,
            services=services,
        )

        result = run_handler(declaration, ctx)
        g.services_computed = services.computed()

        logger.debug(
            f"endpoint handled name={declaration.name} status={result.status_code} "
            f"services={g.services_computed}"
        )
        return write_result(response, result)


def validate_inputs(
    req: Request, declaration: EndpointDeclaration
) -> Union[Inputs, Result]:
    """
    Validate params, then query, then body.

    Returns Inputs, or a 400 Error for the first category that fails (the
    remaining categories are not looked at).
    """
    steps: Tuple[Tuple[str, Optional[Schema], Callable[[], Any]], ...] = (
        ("params", declaration.params, lambda: collect_params(req)),
        ("query", declaration.query, lambda: collect_query(req, declaration.query)),
        ("body", declaration.body, lambda: collect_body(req)),
    )
    values = {}
    for category, schema, collect in steps:
        if schema is None:
            values[category] = EMPTY
            continue
        try:
            values[category] = schema.validate(category, collect())
        except ValidationError as e:
            return param_error(str(e))
    return Inputs(**values)


def run_handler(declaration: EndpointDeclaration, ctx: RequestContext) -> Result:
    """
    Call the handler and classify the outcome.

    A raised Result (from the handler or a service it read) is the outcome;
    any other exception propagates.
    """
    try:
        outcome = current_app.ensure_sync(declaration.handler)(ctx)
        if isinstance(outcome, Result):
            return outcome
        return wrap_value(outcome, declaration.output)
    except Result as raised:
        return raised
