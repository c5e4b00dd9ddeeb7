import time
from dataclasses import dataclass

import pytest

from edgeboot.config import InsecureSecretsInfo
from edgeboot.insecure import (
    PASSWORD_KEY,
    SECRETS_REQUESTED_METRIC_NAME,
    SECRETS_STORED_METRIC_NAME,
    USERNAME_KEY,
    WILDCARD_NAME,
    Counter,
    InsecureProvider,
    add_secret_name_prefix,
    is_security_enabled,
)

EXPECTED_SECRET_NAME = "redisdb"
EXPECTED_SECRETS = {"username": "admin", "password": "password"}


@dataclass
class FakeConfig:
    insecure_secrets: dict | None = None

    def get_insecure_secrets(self):
        return self.insecure_secrets


def all_secrets():
    return FakeConfig(
        {"DB": InsecureSecretsInfo(secret_name=EXPECTED_SECRET_NAME, secret_data=dict(EXPECTED_SECRETS))}
    )


def missing_secrets():
    return FakeConfig({"DB": InsecureSecretsInfo(secret_name="redis")})


@pytest.mark.parametrize(
    "secret_name, keys, config",
    [
        (EXPECTED_SECRET_NAME, ["username", "password"], all_secrets()),
        (EXPECTED_SECRET_NAME, [], all_secrets()),
    ],
)
def test_get_secret_valid(secret_name, keys, config):
    target = InsecureProvider(config)
    assert target.get_secret(secret_name, *keys) == EXPECTED_SECRETS


@pytest.mark.parametrize(
    "secret_name, config",
    [
        (EXPECTED_SECRET_NAME, missing_secrets()),
        ("bogus", all_secrets()),
    ],
)
def test_get_secret_invalid(secret_name, config):
    target = InsecureProvider(config)
    with pytest.raises(LookupError):
        target.get_secret(secret_name, "username", "password")


def test_get_secret_missing_key_names_it():
    target = InsecureProvider(all_secrets())
    with pytest.raises(LookupError, match=r"\[other\]"):
        target.get_secret(EXPECTED_SECRET_NAME, "username", "other")


def test_get_secret_without_configuration():
    target = InsecureProvider(FakeConfig())
    with pytest.raises(ValueError):
        target.get_secret(EXPECTED_SECRET_NAME)


def test_get_secret_returns_copy():
    config = all_secrets()
    target = InsecureProvider(config)
    result = target.get_secret(EXPECTED_SECRET_NAME)
    result["username"] = "changed"
    assert config.insecure_secrets["DB"].secret_data["username"] == "admin"


def test_secrets_updated_moves_last_updated_forward():
    target = InsecureProvider(None)
    previous = target.secrets_last_updated()
    time.sleep(0.01)
    target.secrets_updated()
    assert target.secrets_last_updated() > previous


def test_get_self_jwt_is_empty():
    assert InsecureProvider(None).get_self_jwt() == ""


def test_is_jwt_valid():
    null_jwt = "eyJhbGciOiJOb25lIiwidHlwIjoiSldUIn0.e30."
    assert InsecureProvider(None).is_jwt_valid(null_jwt) is True


def test_zero_trust_stays_disabled():
    target = InsecureProvider(None)
    target.enable_zero_trust()
    assert target.is_zero_trust_enabled() is False


@pytest.mark.parametrize(
    "config, expected",
    [
        (
            FakeConfig(
                {
                    "REDIS": InsecureSecretsInfo(secret_name="redisdb", secret_data=dict(EXPECTED_SECRETS)),
                    "KONG": InsecureSecretsInfo(secret_name="kongdb", secret_data=dict(EXPECTED_SECRETS)),
                }
            ),
            ["redisdb", "kongdb"],
        ),
        (FakeConfig({"DB": InsecureSecretsInfo(secret_name="redisdb")}), ["redisdb"]),
    ],
)
def test_list_secret_names(config, expected):
    target = InsecureProvider(config)
    assert sorted(target.list_secret_names()) == sorted(expected)


def test_list_secret_names_without_configuration():
    with pytest.raises(ValueError):
        InsecureProvider(FakeConfig()).list_secret_names()


@pytest.mark.parametrize(
    "secret_name, config, expected",
    [
        (EXPECTED_SECRET_NAME, all_secrets(), True),
        (EXPECTED_SECRET_NAME, missing_secrets(), False),
        ("bogus", all_secrets(), False),
    ],
)
def test_has_secret(secret_name, config, expected):
    assert InsecureProvider(config).has_secret(secret_name) is expected


def test_has_secret_without_configuration():
    with pytest.raises(ValueError):
        InsecureProvider(FakeConfig()).has_secret("bogus")


@pytest.mark.parametrize(
    "with_callback, with_wildcard",
    [(True, False), (False, False), (False, True), (True, True)],
)
def test_secret_updated_at_secret_name(with_callback, with_wildcard):
    called = []
    wildcard_called = []
    target = InsecureProvider(all_secrets())
    if with_callback:
        target.register_secret_updated_callback(EXPECTED_SECRET_NAME, called.append)
    if with_wildcard:
        target.register_secret_updated_callback(WILDCARD_NAME, wildcard_called.append)

    target.secret_updated_at_secret_name(EXPECTED_SECRET_NAME)

    assert called == ([EXPECTED_SECRET_NAME] if with_callback else [])
    assert wildcard_called == (
        [EXPECTED_SECRET_NAME] if with_wildcard and not with_callback else []
    )


def test_register_twice_raises():
    target = InsecureProvider(all_secrets())
    target.register_secret_updated_callback(EXPECTED_SECRET_NAME, lambda name: None)
    with pytest.raises(ValueError, match=EXPECTED_SECRET_NAME):
        target.register_secret_updated_callback(EXPECTED_SECRET_NAME, lambda name: None)


def test_deregister_removes_callback():
    called = []
    target = InsecureProvider(all_secrets())
    target.register_secret_updated_callback(EXPECTED_SECRET_NAME, called.append)
    target.deregister_secret_updated_callback(EXPECTED_SECRET_NAME)
    target.secret_updated_at_secret_name(EXPECTED_SECRET_NAME)
    assert called == []
    target.register_secret_updated_callback(EXPECTED_SECRET_NAME, called.append)
    target.secret_updated_at_secret_name(EXPECTED_SECRET_NAME)
    assert called == [EXPECTED_SECRET_NAME]


def test_metrics_count_requests_and_updates():
    target = InsecureProvider(all_secrets())
    target.get_secret(EXPECTED_SECRET_NAME)
    with pytest.raises(LookupError):
        target.get_secret("bogus")
    target.secret_updated_at_secret_name(EXPECTED_SECRET_NAME)
    metrics = target.get_metrics_to_register()
    assert set(metrics) == {"SecuritySecretsRequested", "SecuritySecretsStored"}
    assert metrics[SECRETS_REQUESTED_METRIC_NAME].count == 2
    assert metrics[SECRETS_STORED_METRIC_NAME].count == 1


def test_counter_inc():
    counter = Counter()
    counter.inc(3)
    counter.inc()
    assert counter.count == 4


def test_get_secret_with_key_constants():
    target = InsecureProvider(all_secrets())
    result = target.get_secret(EXPECTED_SECRET_NAME, USERNAME_KEY, PASSWORD_KEY)
    assert result == {"username": "admin", "password": "password"}


@pytest.mark.parametrize(
    "value, expected",
    [("false", False), ("true", True), ("", True)],
)
def test_is_security_enabled(monkeypatch, value, expected):
    monkeypatch.setenv("EDGEX_SECURITY_SECRET_STORE", value)
    assert is_security_enabled() is expected


def test_is_security_enabled_when_unset(monkeypatch):
    monkeypatch.delenv("EDGEX_SECURITY_SECRET_STORE", raising=False)
    assert is_security_enabled() is True


@pytest.mark.parametrize(
    "name, expected",
    [
        ("core-data", "/v1/secret/edgex/core-data"),
        ("  core-data  ", "/v1/secret/edgex/core-data"),
        ("   ", ""),
        ("", ""),
    ],
)
def test_add_secret_name_prefix(name, expected):
    assert add_secret_name_prefix(name) == expected