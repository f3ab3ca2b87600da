"""
API Gateway custom domain - Pulumi entrypoint.

Wires three ComponentResources using Pulumi config and output chaining:

- **Gateway**: API, API config and gateway from the OpenAPI document. The
  generated hostname is passed to the load balancer as the NEG endpoint and
  Host header.
- **DNS**: Cloud DNS managed zone, reserved global address and the A record
  ``<subdomain>.<dns_name>``. The record is passed to the load balancer so the
  certificate is requested only after it exists.
- **Load balancer**: NEG, backend service, URL map, managed certificate, HTTPS
  proxy and forwarding rule on the reserved address.

Preflight checks run before any resource is declared. Stack exports:
gateway_hostname, custom_domain_url, ip_address, name_servers,
certificate_id.
"""

from pathlib import Path

import pulumi

from components import ApiGatewayInfra, DnsInfra, LoadBalancerInfra
from config import StackConfig
from resource_graph import ConfigurationError, preflight


def _read_openapi(path: str) -> bytes:
    try:
        contents = Path(path).read_bytes()
    except OSError as exc:
        raise ConfigurationError(
            "Cannot read OpenAPI document", {"path": path}
        ) from exc
    if not contents.strip():
        raise ConfigurationError("OpenAPI document is empty", {"path": path})
    return contents


def main():
    """
    Validate config, build the gateway, DNS and load balancer components and
    export stack outputs.
    """
    config = StackConfig.from_pulumi_config(pulumi.Config())
    names = config.names

    order = preflight(config)
    pulumi.log.info(
        f"Deploying https://{config.custom_domain} "
        f"(zone {config.zone_name}, {config.dns_name})"
    )
    pulumi.log.info(f"Creation order: {', '.join(order)}")

    gateway = ApiGatewayInfra(
        name="apigw",
        openapi_contents=_read_openapi(config.openapi_path),
        openapi_path=Path(config.openapi_path).name,
        region=config.region,
        api_id=names.api_id,
        gateway_id=names.gateway_id,
        api_config_prefix=names.api_config_prefix,
    )

    dns = DnsInfra(
        name="apigw-dns",
        zone_name=config.zone_name,
        dns_name=config.dns_name,
        subdomain=config.subdomain,
        address_name=names.address,
        ttl=config.record_ttl,
    )

    lb = LoadBalancerInfra(
        name="apigw",
        gateway_hostname=gateway.default_hostname,
        domains=[config.custom_domain],
        address=dns.address,
        enable_cdn=config.enable_cdn,
        neg_name=names.neg,
        backend_name=names.backend,
        url_map_name=names.url_map,
        proxy_name=names.proxy,
        forwarding_rule_name=names.forwarding_rule,
        certificate_depends_on=[dns.record],
    )

    pulumi.log.warn(
        f"Managed certificate for {config.custom_domain} becomes ACTIVE only "
        "after the zone is delegated and DNS propagates; expect TLS errors "
        "until then."
    )

    for output_name, value in [
        ("gateway_hostname", gateway.default_hostname),
        ("custom_domain_url", f"https://{config.custom_domain}"),
        ("ip_address", dns.ip_address),
        ("name_servers", dns.name_servers),
        ("certificate_id", lb.certificate_id),
    ]:
        pulumi.export(output_name, value)


if __name__ == "__main__":
    main()
