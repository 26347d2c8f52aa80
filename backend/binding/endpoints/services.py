"""
Lazy per-request services.

A service is a named value derived from the raw request/response pair
(the logged-in user, a DB handle, a feature-flag snapshot). Declaring one
costs nothing: its factory runs the first time a handler reads it, and the
value is cached for the rest of that request.

    services = LazyServices({"user": load_user}, request, response)
    services["user"]   # calls load_user(request, response)
    services["user"]   # cached

Factories never see validated inputs. If one raises a Result (e.g. a 401
Error) it propagates exactly like the handler raising it.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Optional

from flask import Request, Response


logger = logging.getLogger('binding.endpoints.services')

ServiceFactory = Callable[[Request, Response], Any]

_UNSET = object()


def freeze_services(factories: Optional[Mapping]) -> Mapping:
    """Read-only copy of a service declaration, safe to share between requests."""
    frozen = dict(factories or {})
    for name, factory in frozen.items():
        if not callable(factory):
            raise TypeError(f"Service '{name}' factory is not callable: {factory!r}")
    return MappingProxyType(frozen)


class LazyServices(Mapping):
    """
    Read-only mapping of service name -> value, computed on first read.

    Membership tests, len() and iteration over names never evaluate a
    factory. Reading values (services[name], .get(), .values()) does.
    """

    def __init__(self, factories: Mapping, request: Request, response: Response):
        self._factories = factories
        self._request = request
        self._response = response
        self._cache: Dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        value = self._cache.get(name, _UNSET)
        if value is not _UNSET:
            return value
        factory = self._factories[name]
        value = factory(self._request, self._response)
        self._cache[name] = value
        logger.debug(f"service computed name={name}")
        return value

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"LazyServices(declared={list(self._factories)}, computed={self.computed()})"

    def computed(self) -> List[str]:
        """Names evaluated so far, in the order the handler read them."""
        return list(self._cache)
