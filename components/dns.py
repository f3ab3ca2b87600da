"""
GCP Cloud DNS: managed zone, reserved global address and the A record.

This component creates a Cloud DNS managed zone for ``dns_name``, reserves the
global IPv4 address the load balancer listens on, and points
``<subdomain>.<dns_name>`` at it. The address is created here rather than in
the load balancer component so the record, and with it the certificate's DNS
prerequisite, exists before the certificate is requested: pass ``record`` to
``LoadBalancerInfra(certificate_depends_on=...)``.

After deployment, the domain must be delegated at the registrar to the zone's
name servers (exposed as ``name_servers``).
"""

import pulumi
import pulumi_gcp as gcp

from components._helpers import ensure_trailing_dot, fqdn

ID = "apigw:gcp:DnsInfra"


class DnsInfra(pulumi.ComponentResource):
    """
    Cloud DNS managed zone with an A record for the custom domain.

    Record: ``<subdomain>.<dns_name>`` → reserved global address (TTL 300).
    """

    def __init__(
        self,
        name: str,
        zone_name: str,
        dns_name: str,
        subdomain: str = "api",
        address_name: str = "apigw-fwd-rule-address",
        ttl: int = 300,
    ):
        """
        Create the managed zone, the global address and the A record set.

        Args:
            name: Pulumi resource name prefix.
            zone_name: Managed zone name (e.g. "example-zone").
            dns_name: Zone suffix (e.g. "my-domain.com."); trailing dot is
                added when missing.
            subdomain: Leading label of the custom domain.
            address_name: Name of the reserved global address.
            ttl: TTL in seconds for the A record.

        Outputs (set on self, registered for the component):
            name_servers: Zone name servers; delegate the domain to these at
                the registrar.
            ip_address: Reserved global IPv4 address.
            hostname: Record name with trailing dot.
        """
        super().__init__(ID, name)

        child_opts = pulumi.ResourceOptions(parent=self)

        # Trailing dot required by Cloud DNS for zone FQDN.
        zone_dns = ensure_trailing_dot(dns_name)
        self.zone = gcp.dns.ManagedZone(
            resource_name=f"{name}-zone",
            name=zone_name,
            dns_name=zone_dns,
            description=f"Managed zone for {zone_dns} API Gateway custom domain",
            opts=child_opts,
        )

        self.address = gcp.compute.GlobalAddress(
            resource_name=f"{name}-address",
            name=address_name,
            opts=child_opts,
        )

        self.hostname = fqdn(zone_dns, subdomain)
        self.record = gcp.dns.RecordSet(
            resource_name=f"{name}-a-record",
            name=self.hostname,
            managed_zone=self.zone.name,
            type="A",
            ttl=ttl,
            rrdatas=[self.address.address],
            opts=child_opts,
        )

        self.name_servers: pulumi.Output[list[str]] = self.zone.name_servers
        self.ip_address: pulumi.Output[str] = self.address.address
        self.register_outputs(
            {
                "name_servers": self.name_servers,
                "ip_address": self.ip_address,
                "hostname": self.hostname,
            }
        )
