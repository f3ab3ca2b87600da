"""
Stack configuration loaded from pulumi.Config().

Provides a typed, immutable view of stack settings. Settings are read from
Pulumi config (e.g. Pulumi.<stack>.yaml or pulumi config set). ``zone_name``
and ``dns_name`` are required; the rest have defaults. Used by
__main__.main() to name the zone, build the custom domain and load the
OpenAPI document for the gateway.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

import pulumi

from components._helpers import ensure_trailing_dot, fqdn, strip_trailing_dot
from resource_graph.errors import ConfigurationError

_TRUE_VALUES = ("1", "true", "yes")
_FALSE_VALUES = ("0", "false", "no")


def _require_str(config: pulumi.Config, key: str) -> str:
    try:
        return config.require(key)
    except pulumi.ConfigMissingError as exc:
        raise ConfigurationError(
            "Missing required config value", {"key": key}
        ) from exc


def _optional_str(default: str) -> Callable[[pulumi.Config, str], str]:
    def parse(config: pulumi.Config, key: str) -> str:
        return config.get(key) or default

    return parse


def _optional_bool(default: bool) -> Callable[[pulumi.Config, str], bool]:
    def parse(config: pulumi.Config, key: str) -> bool:
        raw = config.get(key)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        value = str(raw).strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ConfigurationError(
            "Config value is not a boolean", {"key": key, "value": raw}
        )

    return parse


def _optional_int(default: int) -> Callable[[pulumi.Config, str], int]:
    def parse(config: pulumi.Config, key: str) -> int:
        raw = config.get(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError as exc:
            raise ConfigurationError(
                "Config value is not an integer", {"key": key, "value": raw}
            ) from exc

    return parse


# (key, parser); parser receives (config, key) and returns value.
_CONFIG_SPEC: list[tuple[str, Callable[[pulumi.Config, str], Any]]] = [
    ("zone_name", _require_str),
    ("dns_name", _require_str),
    ("subdomain", _optional_str("api")),
    ("region", _optional_str("us-central1")),
    ("openapi_path", _optional_str("openapi.yaml")),
    ("enable_cdn", _optional_bool(True)),
    ("record_ttl", _optional_int(300)),
]


@dataclass(frozen=True)
class ResourceNames:
    """Fixed GCP identifiers for the gateway and load balancer resources."""

    api_id: str = "api"
    gateway_id: str = "api-gateway"
    api_config_prefix: str = "api-config-"
    neg: str = "apigw-neg"
    backend: str = "apigw-lb-backend"
    url_map: str = "apigw-url-map"
    certificate: str = "apigw-ssl-cert"
    proxy: str = "apigw-target-proxy"
    address: str = "apigw-fwd-rule-address"
    forwarding_rule: str = "apigw-fwd-rule"


@dataclass(frozen=True)
class StackConfig:
    """
    Stack configuration from Pulumi config.

    Attributes:
        zone_name: Cloud DNS managed zone name (required).
        dns_name: Zone DNS suffix, e.g. "my-domain.com." (required). A
            trailing dot is added when missing.
        subdomain: Leading label of the custom domain (default "api").
        region: Region of the API Gateway (default "us-central1").
        openapi_path: Path of the OpenAPI document embedded in the gateway
            config (default "openapi.yaml").
        enable_cdn: Whether Cloud CDN is enabled on the backend service.
        record_ttl: TTL in seconds for the A record (default 300).
        names: GCP resource identifiers.
    """

    zone_name: str
    dns_name: str
    subdomain: str = "api"
    region: str = "us-central1"
    openapi_path: str = "openapi.yaml"
    enable_cdn: bool = True
    record_ttl: int = 300
    names: ResourceNames = field(default_factory=ResourceNames)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dns_name", ensure_trailing_dot(self.dns_name))

    @property
    def record_name(self) -> str:
        """A record name with trailing dot, e.g. "api.my-domain.com."."""
        return fqdn(self.dns_name, self.subdomain)

    @property
    def custom_domain(self) -> str:
        """Certificate domain, e.g. "api.my-domain.com"."""
        return strip_trailing_dot(self.record_name)

    @classmethod
    def from_pulumi_config(cls, config: pulumi.Config) -> "StackConfig":
        """
        Build StackConfig from pulumi.Config(). Keys without a default in
        _CONFIG_SPEC are required.
        """
        kwargs = {key: parser(config, key) for key, parser in _CONFIG_SPEC}
        return cls(**kwargs)
