"""Configuration structures shared by services during bootstrap."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_HTTP_PROTOCOL = "http"

SERVICE_TYPE_APP = "app-service"
SERVICE_TYPE_DEVICE = "device-service"
SERVICE_TYPE_OTHER = "other"

COMMON_CONFIG_DONE = "IsCommonConfigReady"

API_BASE = "/api/v3"
API_PING_ROUTE = API_BASE + "/ping"
DEFAULT_BASE_TOPIC = "edgex"
DEFAULT_SECRET_STORE = "openbao"


@dataclass
class CORSConfigurationInfo:
    """Cross-origin resource sharing settings."""

    enable_cors: bool = False
    cors_allow_credentials: bool = False
    cors_allowed_origin: str = ""
    cors_allowed_methods: str = ""
    cors_allowed_headers: str = ""
    cors_expose_headers: str = ""
    cors_max_age: int = 0


@dataclass
class ServiceInfo:
    """Settings needed for the basic operation of any service."""

    health_check_interval: str = ""
    host: str = ""
    port: int = 0
    server_bind_addr: str = ""
    startup_msg: str = ""
    max_result_count: int = 0
    max_request_size: int = 0
    request_timeout: str = ""
    enable_name_field_escape: bool = False
    cors_configuration: CORSConfigurationInfo = field(default_factory=CORSConfigurationInfo)
    security_options: dict[str, str] = field(default_factory=dict)

    def health_check(self) -> str:
        """URL of the health check endpoint used by the registry."""
        return f"http://{self.host}:{self.port}{API_PING_ROUTE}"

    def url(self) -> str:
        """Full URL of the host service."""
        return f"{DEFAULT_HTTP_PROTOCOL}://{self.host}:{self.port}"


@dataclass
class ConfigProviderInfo:
    """Type and location of the configuration provider."""

    host: str = ""
    port: int = 0
    type: str = ""


@dataclass
class RegistryInfo:
    """Type and location of the service registry."""

    host: str = ""
    port: int = 0
    type: str = ""


@dataclass
class ClientInfo:
    """Host and port of another service."""

    host: str = ""
    port: int = 0
    protocol: str = ""
    use_message_bus: bool = False
    security_options: dict[str, str] = field(default_factory=dict)

    def url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


@dataclass
class AuthenticationInfo:
    """How to authenticate against the secret store."""

    auth_type: str = ""
    auth_token: str = ""


@dataclass
class RuntimeTokenProviderInfo:
    """Settings for obtaining a secret store token at runtime."""

    enabled: bool = False
    protocol: str = ""
    host: str = ""
    port: int = 0
    trust_domain: str = ""
    endpoint_socket: str = ""
    required_secrets: str = ""


@dataclass
class SecretStoreInfo:
    """Properties used to create a secret store client."""

    type: str = ""
    host: str = ""
    port: int = 0
    store_name: str = ""
    protocol: str = ""
    namespace: str = ""
    root_ca_cert_path: str = ""
    server_name: str = ""
    authentication: AuthenticationInfo = field(default_factory=AuthenticationInfo)
    token_file: str = ""
    secrets_file: str = ""
    disable_scrub_secrets_file: bool = False
    runtime_token_provider: RuntimeTokenProviderInfo = field(
        default_factory=RuntimeTokenProviderInfo
    )


def new_secret_store_info(service_key: str) -> SecretStoreInfo:
    """Return the default secret store settings for a service."""
    return SecretStoreInfo(
        type=DEFAULT_SECRET_STORE,
        protocol="http",
        host="localhost",
        port=8200,
        store_name=service_key,
        token_file=f"/tmp/edgex/secrets/{service_key}/secrets-token.json",
        disable_scrub_secrets_file=False,
        namespace="",
        root_ca_cert_path="",
        server_name="",
        secrets_file="",
        authentication=AuthenticationInfo(auth_type="X-Vault-Token", auth_token=""),
        runtime_token_provider=RuntimeTokenProviderInfo(
            enabled=False,
            protocol="https",
            host="localhost",
            port=59841,
            trust_domain="edgexfoundry.org",
            endpoint_socket="/tmp/edgex/secrets/spiffe/public/api.sock",
            required_secrets="redisdb",
        ),
    )


@dataclass
class Database:
    type: str = ""
    timeout: str = ""
    host: str = ""
    port: int = 0
    name: str = ""


@dataclass
class Credentials:
    """Username and password pair."""

    username: str = ""
    password: str = ""


@dataclass
class CertKeyPair:
    """Public certificate and private key pair."""

    cert: str = ""
    key: str = ""


@dataclass
class InsecureSecretsInfo:
    """A named group of secrets held in configuration."""

    secret_name: str = ""
    secret_data: dict[str, str] = field(default_factory=dict)


@dataclass
class MessageBusInfo:
    """Parameters for connecting to the message bus."""

    disabled: bool = False
    type: str = ""
    protocol: str = ""
    host: str = ""
    port: int = 0
    auth_mode: str = ""
    secret_name: str = ""
    base_topic_prefix: str = ""
    optional: dict[str, str] = field(default_factory=dict)

    def get_base_topic_prefix(self) -> str:
        """The configured base topic prefix, or the default one when unset."""
        return self.base_topic_prefix or DEFAULT_BASE_TOPIC

    def url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


@dataclass
class ExternalMQTTInfo:
    """Settings for connecting to an external MQTT broker."""

    url: str = ""
    subscribe_topics: str = ""
    publish_topic: str = ""
    topics: dict[str, str] = field(default_factory=dict)
    client_id: str = ""
    connect_timeout: str = ""
    auto_reconnect: bool = False
    keep_alive: int = 0
    qos: int = 0
    retain: bool = False
    skip_cert_verify: bool = False
    secret_name: str = ""
    auth_mode: str = ""
    retry_duration: int = 0
    retry_interval: int = 0
    enabled: bool = False


@dataclass
class BootstrapConfiguration:
    """Configuration elements required by the bootstrap."""

    clients: dict[str, ClientInfo] | None = None
    service: ServiceInfo | None = None
    config: ConfigProviderInfo | None = None
    registry: RegistryInfo | None = None
    message_bus: MessageBusInfo | None = None
    database: Database | None = None
    external_mqtt: ExternalMQTTInfo | None = None


@dataclass
class TelemetryInfo:
    """Metrics collection settings of a service."""

    interval: str = ""
    metrics: dict[str, bool] = field(default_factory=dict)
    tags: dict[str, str] = field(default_factory=dict)

    def get_enabled_metric_name(self, metric_name: str) -> tuple[str, bool]:
        """Return the configured metric name that prefixes metric_name and whether it is enabled."""
        for config_name, enabled in self.metrics.items():
            if metric_name.startswith(config_name):
                return config_name, enabled
        return "", False