"""Secret provider that serves secrets held in the service configuration."""

from __future__ import annotations

import logging
import os
import posixpath
import threading
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Protocol

from .config import InsecureSecretsInfo

ENV_SECRET_STORE = "EDGEX_SECURITY_SECRET_STORE"
USERNAME_KEY = "username"
PASSWORD_KEY = "password"
WILDCARD_NAME = "*"
"""Secret name under which a callback is invoked for any updated secret."""

SECRETS_REQUESTED_METRIC_NAME = "SecuritySecretsRequested"
SECRETS_STORED_METRIC_NAME = "SecuritySecretsStored"

SecretCallback = Callable[[str], Any]


def is_security_enabled() -> bool:
    """Whether security is enabled; only the value ``false`` disables it."""
    return os.environ.get(ENV_SECRET_STORE) != "false"


def add_secret_name_prefix(secret_name: str) -> str:
    """Return the secret store base path for a secret name, or "" for a blank name."""
    trimmed = secret_name.strip()
    if not trimmed:
        return ""
    joined = posixpath.normpath("/".join(("v1", "secret", "edgex", trimmed)))
    return "/" + joined.lstrip("/")


class Counter:
    """A thread-safe monotonically adjusted metric counter."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return self._count

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._count += amount


class _Configuration(Protocol):
    def get_insecure_secrets(self) -> Mapping[str, InsecureSecretsInfo] | None: ...


class InsecureProvider:
    """Serves secrets from the ``InsecureSecrets`` section of a service's configuration."""

    def __init__(self, configuration: _Configuration | None, logger: logging.Logger | None = None):
        self._configuration = configuration
        self._logger = logger or logging.getLogger(__name__)
        self._last_updated = datetime.now()
        self._callbacks: dict[str, SecretCallback] = {}
        self._requested = Counter()
        self._stored = Counter()

    def _insecure_secrets(self, message: str) -> Mapping[str, InsecureSecretsInfo]:
        secrets = (
            self._configuration.get_insecure_secrets()
            if self._configuration is not None
            else None
        )
        if secrets is None:
            raise ValueError(message)
        return secrets

    def get_secret(self, secret_name: str, *args: str) -> dict[str, str]:
        """Return the requested keys of a secret, or all of its data when no keys are given."""
        self._requested.inc(1)
        keys = args
        insecure = self._insecure_secrets("InsecureSecrets missing from configuration")

        results: dict[str, str] = {}
        found = False
        missing: list[str] = []
        for info in insecure.values():
            if info.secret_name != secret_name:
                continue
            if not keys:
                return dict(info.secret_data)
            found = True
            for key in keys:
                if key in info.secret_data:
                    results[key] = info.secret_data[key]
                else:
                    missing.append(key)

        if missing:
            raise LookupError(f"No value for the keys: [{','.join(missing)}] exists")
        if not found:
            raise LookupError(
                f"Error, secretName ({secret_name}) doesn't exist in secret store"
            )
        return results

    def secrets_updated(self) -> None:
        """Mark the secrets as updated now."""
        self._last_updated = datetime.now()

    def secrets_last_updated(self) -> datetime:
        """When the secrets were last updated."""
        return self._last_updated

    def has_secret(self, secret_name: str) -> bool:
        """Whether a secret with this name is configured."""
        insecure = self._insecure_secrets("InsecureSecret missing from configuration")
        return any(info.secret_name == secret_name for info in insecure.values())

    def list_secret_names(self) -> list[str]:
        """Names of all configured secrets."""
        insecure = self._insecure_secrets("InsecureSecrets missing from configuration")
        return [info.secret_name for info in insecure.values()]

    def register_secret_updated_callback(
        self, secret_name: str, callback: SecretCallback
    ) -> None:
        """Register a callback for a secret name, or for any secret with WILDCARD_NAME.

        A callback for a specific name takes precedence over the wildcard one.
        """
        if secret_name in self._callbacks:
            raise ValueError(
                f"there is a callback already registered for secretName '{secret_name}'"
            )
        self._callbacks[secret_name] = callback

    def secret_updated_at_secret_name(self, secret_name: str) -> None:
        """Record an update of a secret and invoke the matching callback."""
        self._stored.inc(1)
        self._last_updated = datetime.now()

        callback = self._callbacks.get(secret_name)
        if callback is not None:
            self._logger.debug("invoking callback registered for secretName: '%s'", secret_name)
            callback(secret_name)
            return
        callback = self._callbacks.get(WILDCARD_NAME)
        if callback is not None:
            self._logger.debug("invoking wildcard callback for secretName: '%s'", secret_name)
            callback(secret_name)

    def deregister_secret_updated_callback(self, secret_name: str) -> None:
        """Remove the callback registered for a secret name, if any."""
        self._callbacks.pop(secret_name, None)

    def get_metrics_to_register(self) -> dict[str, Counter]:
        """Metric objects that need to be registered."""
        return {
            SECRETS_REQUESTED_METRIC_NAME: self._requested,
            SECRETS_STORED_METRIC_NAME: self._stored,
        }

    def get_self_jwt(self) -> str:
        """An empty token: without security no token is issued."""
        return ""

    def is_jwt_valid(self, jwt: str) -> bool:
        """Every token is accepted without security."""
        self._logger.debug(
            "security disabled; accepting token of length %d without validation", len(jwt)
        )
        return True

    def is_zero_trust_enabled(self) -> bool:
        return False

    def enable_zero_trust(self) -> None:
        """Zero trust is not available without security; the request is only logged."""
        self._logger.debug("zero trust requested, but security is disabled; ignoring")