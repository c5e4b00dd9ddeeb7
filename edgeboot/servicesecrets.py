"""The list of secrets a service seeds into its secret store, and its JSON form."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

_MISSING = object()

_JSON_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}


class SecretsValidationError(ValueError):
    """Raised when a service secrets document fails validation."""

    def __init__(self, message: str, errors: Sequence[str] = ()):
        super().__init__(message)
        self.errors = list(errors) or [message]

    @classmethod
    def from_errors(cls, errors: Sequence[str]) -> SecretsValidationError:
        """Combine several errors into one, listing each on its own line."""
        noun = "error" if len(errors) == 1 else "errors"
        points = "\n".join(f"\t* {err}" for err in errors)
        return cls(f"{len(errors)} {noun} occurred:\n{points}\n\n", errors)


@dataclass
class SecretDataKeyValue:
    key: str = ""
    value: str = ""


@dataclass
class ServiceSecret:
    """One secret to import into a service's secret store."""

    secret_name: str = ""
    imported: bool = False
    secret_data: list[SecretDataKeyValue] = field(default_factory=list)


@dataclass
class ServiceSecrets:
    """The secrets to import into a service's secret store."""

    secrets: list[ServiceSecret] = field(default_factory=list)

    def marshal_json(self) -> str:
        """Render the secrets as compact JSON."""
        payload = {
            "secrets": [
                {
                    "secretName": secret.secret_name,
                    "imported": secret.imported,
                    "secretData": [
                        {"key": pair.key, "value": pair.value} for pair in secret.secret_data
                    ],
                }
                for secret in self.secrets
            ]
        }
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        return text.translate(_JSON_ESCAPES)


@dataclass
class _RawSecret:
    name: str
    imported: bool
    data: list[SecretDataKeyValue] | None


def _lookup(obj: dict[str, Any], name: str) -> Any:
    if name in obj:
        return obj[name]
    lowered = name.lower()
    for key, value in obj.items():
        if key.lower() == lowered:
            return value
    return _MISSING


def _object(value: Any, what: str) -> dict[str, Any]:
    if value is None or value is _MISSING:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"cannot unmarshal {type(value).__name__} into {what}")
    return value


def _string(value: Any, what: str) -> str:
    if value is None or value is _MISSING:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"cannot unmarshal {type(value).__name__} into {what} of type string")
    return value


def _boolean(value: Any, what: str) -> bool:
    if value is None or value is _MISSING:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"cannot unmarshal {type(value).__name__} into {what} of type bool")
    return value


def _array(value: Any, what: str) -> list[Any] | None:
    if value is None or value is _MISSING:
        return None
    if not isinstance(value, list):
        raise ValueError(f"cannot unmarshal {type(value).__name__} into {what} of type array")
    return value


def _parse_pair(item: Any) -> SecretDataKeyValue:
    obj = _object(item, "SecretDataKeyValue")
    return SecretDataKeyValue(
        key=_string(_lookup(obj, "key"), "SecretDataKeyValue.key"),
        value=_string(_lookup(obj, "value"), "SecretDataKeyValue.value"),
    )


def _parse_secret(item: Any) -> _RawSecret:
    obj = _object(item, "ServiceSecret")
    data = _array(_lookup(obj, "secretData"), "ServiceSecret.secretData")
    return _RawSecret(
        name=_string(_lookup(obj, "secretName"), "ServiceSecret.secretName"),
        imported=_boolean(_lookup(obj, "imported"), "ServiceSecret.imported"),
        data=None if data is None else [_parse_pair(pair) for pair in data],
    )


def _validate(secrets: list[_RawSecret] | None) -> list[str]:
    prefix = "ServiceSecrets.Secrets"
    if secrets is None:
        return [f"{prefix} field is required"]
    if not secrets:
        return [f"{prefix} field should greater than 0"]

    problems = []
    for i, secret in enumerate(secrets):
        namespace = f"{prefix}[{i}]"
        if not secret.name.strip():
            problems.append(f"{namespace}.SecretName field should not be empty string")
        if secret.data is None:
            problems.append(f"{namespace}.SecretData field is required")
            continue
        for j, pair in enumerate(secret.data):
            if not pair.key:
                problems.append(f"{namespace}.SecretData[{j}].Key field is required")
            if not pair.value:
                problems.append(f"{namespace}.SecretData[{j}].Value field is required")
    return problems


def unmarshal_service_secrets_json(data: str | bytes) -> ServiceSecrets:
    """Parse and validate a service secrets JSON document.

    Raises ValueError for malformed JSON and SecretsValidationError for invalid content.
    """
    doc = _object(json.loads(data), "ServiceSecrets")
    raw_list = _array(_lookup(doc, "secrets"), "ServiceSecrets.secrets")
    raw = None if raw_list is None else [_parse_secret(item) for item in raw_list]

    problems = _validate(raw)
    if problems:
        raise SecretsValidationError("; ".join(problems), problems)
    assert raw is not None

    empty = [
        f"SecretData for '{secret.name}' must not be empty when Imported=false"
        for secret in raw
        if not secret.imported and not secret.data
    ]
    if empty:
        raise SecretsValidationError.from_errors(empty)

    return ServiceSecrets(
        [
            ServiceSecret(secret_name=s.name, imported=s.imported, secret_data=list(s.data or []))
            for s in raw
        ]
    )