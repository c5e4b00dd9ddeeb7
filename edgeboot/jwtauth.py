"""Adds the service's own JWT to outgoing request headers."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Protocol


class _SelfJWTSource(Protocol):
    def get_self_jwt(self) -> str: ...


class JWTSecretProvider:
    """Authentication injector that uses a secret provider's self JWT as a bearer token."""

    def __init__(self, secret_provider: _SelfJWTSource | None):
        self.secret_provider = secret_provider

    def add_authentication_data(self, headers: MutableMapping[str, str]) -> None:
        """Set an ``Authorization: Bearer`` header when a non-empty token is available.

        With no secret provider nothing is done. Errors from the provider propagate.
        """
        if self.secret_provider is None:
            return
        jwt = self.secret_provider.get_self_jwt()
        if jwt:
            headers["Authorization"] = f"Bearer {jwt}"