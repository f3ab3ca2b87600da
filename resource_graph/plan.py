"""
Declaration plan for the custom-domain stack, plus preflight checks.

``build_declarations`` mirrors the references the Pulumi components wire
with Outputs, so the same graph can be validated before deployment.
``preflight`` runs every check and returns the creation order; __main__
calls it before declaring any resource.
"""

from typing import TYPE_CHECKING

from components._helpers import (
    ensure_trailing_dot,
    is_subdomain_of,
    is_valid_dns_suffix,
)
from resource_graph.errors import ConfigurationError, DomainValidationError
from resource_graph.graph import DeclarationSet

if TYPE_CHECKING:
    from config import StackConfig


def build_declarations(config: "StackConfig") -> DeclarationSet:
    """Return the declaration set for ``config``."""
    names = config.names
    plan = DeclarationSet()

    zone = plan.declare("ManagedZone", config.zone_name, dns_name=config.dns_name)
    api = plan.declare("Api", names.api_id)
    api_config = plan.declare(
        "ApiConfig",
        names.api_config_prefix,
        (api.key,),
        document_path=config.openapi_path,
    )
    gateway = plan.declare(
        "Gateway", names.gateway_id, (api_config.key,), region=config.region
    )

    neg = plan.declare(
        "NetworkEndpointGroup", names.neg, network_endpoint_type="INTERNET_FQDN_PORT"
    )
    plan.declare(
        "NetworkEndpoint",
        f"{names.neg}-endpoint",
        (neg.key, gateway.key),
        port=443,
    )
    backend = plan.declare(
        "BackendService",
        names.backend,
        (neg.key, gateway.key),
        protocol="HTTP2",
        enable_cdn=config.enable_cdn,
    )
    url_map = plan.declare("UrlMap", names.url_map, (backend.key,))

    address = plan.declare("GlobalAddress", names.address)
    record = plan.declare(
        "RecordSet",
        config.record_name,
        (zone.key, address.key),
        type="A",
        ttl=config.record_ttl,
    )
    certificate = plan.declare(
        "ManagedSslCertificate",
        names.certificate,
        (record.key,),
        domains=(config.custom_domain,),
    )
    proxy = plan.declare(
        "TargetHttpsProxy", names.proxy, (url_map.key, certificate.key)
    )
    plan.declare(
        "GlobalForwardingRule",
        names.forwarding_rule,
        (address.key, proxy.key),
        port_range="443",
        ip_protocol="TCP",
    )
    return plan


def check_domains(plan: DeclarationSet) -> None:
    """
    Check that DNS names can support managed certificate validation.

    Every zone must be a fully-qualified DNS suffix, every RecordSet name must
    be a fully-qualified subdomain of its zone, and every
    certificate domain must be the name of an A record declared in a zone.
    """
    zones = {}
    for zone in plan.of_kind("ManagedZone"):
        dns_name = zone.attributes["dns_name"]
        if not is_valid_dns_suffix(dns_name):
            raise DomainValidationError(
                "Managed zone dns_name is not a fully-qualified DNS suffix",
                {"zone": zone.name, "dns_name": dns_name},
            )
        zones[zone.key] = dns_name

    a_records = set()
    for record in plan.of_kind("RecordSet"):
        zone_keys = [ref for ref in record.references if ref in zones]
        if not zone_keys:
            raise DomainValidationError(
                "Record set does not belong to a managed zone",
                {"record": record.name},
            )
        dns_name = zones[zone_keys[0]]
        if not is_subdomain_of(record.name, dns_name) or not is_valid_dns_suffix(
            record.name
        ):
            raise DomainValidationError(
                "Record name is not a valid subdomain of its zone",
                {"record": record.name, "dns_name": dns_name},
            )
        if record.attributes.get("type") == "A":
            a_records.add(record.name.lower())

    for certificate in plan.of_kind("ManagedSslCertificate"):
        for domain in certificate.attributes.get("domains", ()):
            if ensure_trailing_dot(domain).lower() not in a_records:
                raise DomainValidationError(
                    "Certificate domain has no A record in a managed zone",
                    {"certificate": certificate.name, "domain": domain},
                )


def check_config(config: "StackConfig") -> None:
    if config.record_ttl <= 0:
        raise ConfigurationError(
            "record_ttl must be positive", {"record_ttl": config.record_ttl}
        )
    if not config.zone_name:
        raise ConfigurationError("zone_name must not be empty")


def preflight(config: "StackConfig") -> list[str]:
    """
    Validate ``config`` and its declaration graph.

    Raises:
        ConfigurationError: unusable config values.
        DanglingReferenceError, DependencyCycleError: broken wiring.
        DomainValidationError: certificate cannot validate against the zone.

    Returns:
        Keys in creation order.
    """
    check_config(config)
    plan = build_declarations(config)
    order = plan.validate()
    check_domains(plan)
    return order
