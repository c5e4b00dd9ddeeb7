"""A small thread-safe dependency injection container."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Getter = Callable[[str], Any]
ServiceConstructor = Callable[[Getter], Any]


@dataclass
class _Service:
    constructor: ServiceConstructor
    instance: Any = None


class Container:
    """Holds service constructors and lazily builds singleton instances of them.

    A constructor is called with a getter that looks up other services in the
    same container, so services may depend on one another.
    """

    def __init__(self, service_constructors: Mapping[str, ServiceConstructor] | None = None):
        self._services: dict[str, _Service] = {}
        self._lock = threading.Lock()
        if service_constructors is not None:
            self.update(service_constructors)

    def update(self, service_constructors: Mapping[str, ServiceConstructor]) -> None:
        """Add or replace constructors; replaced services are rebuilt on next access."""
        with self._lock:
            for name, constructor in service_constructors.items():
                self._services[name] = _Service(constructor)

    def _get(self, service_name: str) -> Any:
        service = self._services.get(service_name)
        if service is None:
            return None
        if service.instance is None:
            service.instance = service.constructor(self._get)
        return service.instance

    def get(self, service_name: str) -> Any:
        """Return the instance for service_name, building it on first use, or None if unknown."""
        with self._lock:
            return self._get(service_name)


def type_instance_to_name(value: Any) -> str:
    """Return a unique name for the type of value, or for value itself when it is a class."""
    cls = value if isinstance(value, type) else type(value)
    return f"{cls.__module__}.{cls.__qualname__}"