"""
Fixtures shared by endpoint binding tests.
"""

import pytest

from binding.endpoints import EndpointBinder


@pytest.fixture
def binder():
    return EndpointBinder({
        "baz": lambda request, response: 5,
        "bar": lambda request, response: "a",
        "foo": lambda request, response: True,
    })


@pytest.fixture
def bind(bare_app):
    """Register a bound view on the bare app and return its test client."""
    def register(view, rule="/test", methods=("GET", "POST")):
        bare_app.add_url_rule(rule, view_func=view, methods=list(methods))
        return bare_app.test_client()
    return register
