# edgeboot

Building blocks for starting up edge microservices. The package has no
third-party dependencies.

- `edgeboot.config` – configuration dataclasses (`ServiceInfo`, `ClientInfo`,
  `RegistryInfo`, `MessageBusInfo`, `SecretStoreInfo`, `TelemetryInfo`,
  `BootstrapConfiguration`, ...) and `new_secret_store_info()` for secret
  store defaults.
- `edgeboot.di` – a small thread-safe dependency injection `Container` whose
  services are built lazily, once, by constructor callables, and
  `type_instance_to_name()`.
- `edgeboot.timer` – a startup `Timer` for retry loops with a total duration
  and a sleep interval, and `format_duration()`.
- `edgeboot.maputils` – helpers to turn configuration objects into nested
  dictionaries and back, merge them, prune unused settings and deep-copy them.
- `edgeboot.insecure` – an `InsecureProvider` that serves secrets held in
  the service configuration, with update callbacks and metric counters, plus
  `is_security_enabled()` and `add_secret_name_prefix()`.
- `edgeboot.jwtauth` – `JWTSecretProvider`, which adds a bearer token from a
  secret provider to outgoing request headers.
- `edgeboot.servicesecrets` – parsing, validation and JSON output of service
  secrets files.
- `edgeboot.logadapter` – routes standard `logging` records to a service's
  logging client.

## Installation

```
pip install edgeboot
```

## Configuration

```python
from edgeboot.config import ServiceInfo, MessageBusInfo, TelemetryInfo, new_secret_store_info

service = ServiceInfo(host="localhost", port=59880)
service.url()            # "http://localhost:59880"
service.health_check()   # "http://localhost:59880/api/v3/ping"

MessageBusInfo().get_base_topic_prefix()   # "edgex" when no prefix is set

store = new_secret_store_info("core-data")
store.token_file   # "/tmp/edgex/secrets/core-data/secrets-token.json"

telemetry = TelemetryInfo(metrics={"MyMetric": True})
telemetry.get_enabled_metric_name("MyMetric-1234")   # ("MyMetric", True)
telemetry.get_enabled_metric_name("1234-MyMetric")   # ("", False)
```

## Dependency injection

```python
from edgeboot.di import Container

container = Container({
    "foo": lambda get: {"message": "foo"},
    "bar": lambda get: {"message": "bar", "foo": get("foo")},
})

bar = container.get("bar")
print(bar["foo"]["message"])      # foo
print(container.get("unknown"))   # None
```

Each service is built on first use and the same instance is returned
afterwards. `container.update({...})` adds or replaces constructors; a
replaced service is built again on its next access.

## Retrying during startup

```python
from edgeboot.timer import Timer, format_duration

timer = Timer(duration=60, interval=1)
while timer.has_not_elapsed():
    if connected():          # your own readiness check
        break
    timer.sleep_for_interval()
print("time left:", timer.remaining_as_string())

format_duration(62.5)   # "1m2.5s"
```

## Merging configuration

```python
from dataclasses import dataclass, field
from edgeboot.maputils import convert_to_map, merge_maps, merge_values, deep_copy

@dataclass
class Writable:
    log_level: str = "INFO"
    retries: int = 3

@dataclass
class Settings:
    writable: Writable = field(default_factory=Writable)

settings = Settings()
merge_values(settings, {"writable": {"retries": 5}})
settings.writable.retries   # 5, log_level unchanged

copy = deep_copy(settings)   # independent Settings instance
```

`remove_unused_settings(obj, base_key, used_keys)` returns the object as a
dictionary holding only the settings whose `/`-joined key appears in
`used_keys`; `build_base_key()` and `string_slice_to_map()` help build
those keys.

## Secrets from configuration

```python
from edgeboot.config import InsecureSecretsInfo
from edgeboot.insecure import InsecureProvider

class Config:
    def get_insecure_secrets(self):
        return {"DB": InsecureSecretsInfo(secret_name="redisdb",
                                          secret_data={"username": "user", "password": "password"})}

provider = InsecureProvider(Config())
provider.get_secret("redisdb", "username")   # {"username": "user"}
provider.list_secret_names()                 # ["redisdb"]
provider.register_secret_updated_callback("*", print)
provider.secret_updated_at_secret_name("redisdb")   # calls print("redisdb")
```

Unknown secret names or keys raise `LookupError`; a configuration without
insecure secrets raises `ValueError`. `get_self_jwt()` returns an empty
string and `is_jwt_valid()` accepts every token. `is_security_enabled()` is
false only when `EDGEX_SECURITY_SECRET_STORE` is `false`.

## Bearer tokens on requests

```python
from edgeboot.jwtauth import JWTSecretProvider

headers = {}
JWTSecretProvider(provider).add_authentication_data(headers)
```

The `Authorization: Bearer ...` header is set only when the provider returns
a non-empty token.

## Service secrets files

```python
from edgeboot.servicesecrets import unmarshal_service_secrets_json

data = '{"secrets": [{"secretName": "auth", "imported": false,' \
       ' "secretData": [{"key": "user1", "value": "password"}]}]}'
secrets = unmarshal_service_secrets_json(data)
print(secrets.marshal_json())
```

Malformed JSON raises `ValueError`; invalid content raises
`SecretsValidationError`, whose `errors` attribute lists each problem.

## Forwarding log records

```python
from edgeboot.logadapter import adapt_logging

handler = adapt_logging(client, "openziti")
```

`client` needs `debug`, `info`, `warning` and `error` methods. Records from
the named logger are passed to them prefixed with `openziti: ` and no longer
propagate to parent loggers.

## What the package does not do

- There is no client for a secure secret store: `InsecureProvider` only reads
  secrets from configuration and cannot write secrets anywhere.
- It does not register services with a registry, talk to a configuration
  provider or message bus, or start HTTP servers or listeners; the
  configuration classes only describe such settings.
- There is no zero-trust networking; `enable_zero_trust()` does nothing.
- It provides no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```