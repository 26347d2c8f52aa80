"""
Tests for lazy per-request services.
"""

from unittest.mock import MagicMock

import pytest

from binding.endpoints.results import Error, error_result
from binding.endpoints.services import LazyServices, freeze_services


@pytest.fixture
def request_pair():
    return object(), object()


class TestLazyServices:
    def test_factory_not_called_until_read(self, request_pair):
        factory = MagicMock(return_value=1)
        LazyServices({"a": factory}, *request_pair)
        factory.assert_not_called()

    def test_factory_called_once_per_request(self, request_pair):
        factory = MagicMock(return_value=1)
        services = LazyServices({"a": factory}, *request_pair)

        assert services["a"] == 1
        assert services["a"] == 1
        assert services.get("a") == 1
        factory.assert_called_once()

    def test_factory_receives_request_and_response(self, request_pair):
        factory = MagicMock()
        services = LazyServices({"a": factory}, *request_pair)
        services["a"]
        factory.assert_called_once_with(*request_pair)

    def test_membership_and_iteration_do_not_compute(self, request_pair):
        factory = MagicMock()
        services = LazyServices({"a": factory, "b": factory}, *request_pair)

        assert "a" in services
        assert "c" not in services
        assert list(services) == ["a", "b"]
        assert len(services) == 2
        factory.assert_not_called()

    def test_computed_follows_read_order(self, request_pair):
        services = LazyServices(
            {"a": lambda req, res: 1, "b": lambda req, res: 2}, *request_pair
        )
        services["b"]
        services["a"]
        assert services.computed() == ["b", "a"]

    def test_unknown_service_raises_key_error(self, request_pair):
        with pytest.raises(KeyError):
            LazyServices({}, *request_pair)["missing"]

    def test_falsy_values_are_cached(self, request_pair):
        factory = MagicMock(return_value=None)
        services = LazyServices({"a": factory}, *request_pair)
        services["a"]
        services["a"]
        factory.assert_called_once()

    def test_raised_result_propagates(self, request_pair):
        def denied(req, res):
            raise error_result(401, "login required")

        services = LazyServices({"user": denied}, *request_pair)
        with pytest.raises(Error) as exc:
            services["user"]
        assert exc.value.status_code == 401

    def test_separate_requests_do_not_share_cache(self):
        factory = MagicMock(side_effect=lambda req, res: req)
        declared = freeze_services({"who": factory})

        first = LazyServices(declared, "req-1", "res-1")
        second = LazyServices(declared, "req-2", "res-2")

        assert first["who"] == "req-1"
        assert second["who"] == "req-2"
        assert factory.call_count == 2


class TestFreezeServices:
    def test_declaration_is_read_only(self):
        frozen = freeze_services({"a": lambda req, res: 1})
        with pytest.raises(TypeError):
            frozen["b"] = lambda req, res: 2

    def test_later_changes_to_source_are_ignored(self):
        source = {"a": lambda req, res: 1}
        frozen = freeze_services(source)
        source["b"] = lambda req, res: 2
        assert "b" not in frozen

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            freeze_services({"a": 5})

    def test_none_is_empty(self):
        assert len(freeze_services(None)) == 0
