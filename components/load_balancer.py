"""
Global external HTTPS load balancer in front of an API Gateway.

This component routes HTTPS traffic for a custom domain to an API Gateway's
generated hostname. The gateway is reached through an Internet FQDN network
endpoint group (NEG) over HTTP/2, and the backend service rewrites the Host
header to the gateway hostname because API Gateway routes on it. TLS is
terminated with a Google-managed certificate for the custom domain.

The certificate is provisioned by Google only once the domain resolves to the
forwarding rule's address. Until it is ACTIVE the load balancer answers with
TLS errors or 502s; pass the DNS record in ``certificate_depends_on`` so the
record exists before the certificate is requested.
"""

from typing import Optional, Sequence

import pulumi
import pulumi_gcp as gcp

from components._helpers import host_header

ID: str = "apigw:gcp:LoadBalancerInfra"

HTTPS_PORT: int = 443


class LoadBalancerInfra(pulumi.ComponentResource):
    """
    NEG → backend service → URL map → HTTPS proxy → forwarding rule.

    Resources: GlobalNetworkEndpointGroup, GlobalNetworkEndpoint,
    BackendService, URLMap, ManagedSslCertificate, TargetHttpsProxy,
    GlobalForwardingRule. The global address is passed in.
    """

    def __init__(
        self,
        name: str,
        gateway_hostname: pulumi.Input[str],
        domains: Sequence[str],
        address: gcp.compute.GlobalAddress,
        enable_cdn: bool = True,
        neg_name: str = "apigw-neg",
        backend_name: str = "apigw-lb-backend",
        url_map_name: str = "apigw-url-map",
        proxy_name: str = "apigw-target-proxy",
        forwarding_rule_name: str = "apigw-fwd-rule",
        certificate_depends_on: Optional[Sequence[pulumi.Resource]] = None,
    ):
        """
        Create the load balancer chain for ``domains``.

        Args:
            name: Pulumi resource name prefix.
            gateway_hostname: API Gateway default hostname (str or Output).
            domains: Certificate domains, without trailing dots.
            address: Reserved global address for the forwarding rule.
            enable_cdn: Whether Cloud CDN is enabled on the backend service.
            neg_name, backend_name, url_map_name, proxy_name,
            forwarding_rule_name: GCP resource names.
            certificate_depends_on: Resources that must exist before the
                certificate is requested (the domain's A record).

        Outputs (set on self, registered for the component):
            certificate_id: Managed certificate id.
            url_map_id: URL map id.
        """
        super().__init__(ID, name)

        child_opts = pulumi.ResourceOptions(parent=self)
        hostname = pulumi.Output.from_input(gateway_hostname)

        self.neg = gcp.compute.GlobalNetworkEndpointGroup(
            resource_name=f"{name}-neg",
            name=neg_name,
            network_endpoint_type="INTERNET_FQDN_PORT",
            opts=child_opts,
        )

        self.endpoint = gcp.compute.GlobalNetworkEndpoint(
            resource_name=f"{name}-neg-endpoint",
            global_network_endpoint_group=self.neg.name,
            fqdn=hostname,
            port=HTTPS_PORT,
            opts=child_opts,
        )

        # Gateway rejects requests whose Host is not its own hostname.
        self.backend = gcp.compute.BackendService(
            resource_name=f"{name}-backend",
            name=backend_name,
            protocol="HTTP2",
            enable_cdn=enable_cdn,
            custom_request_headers=[hostname.apply(host_header)],
            backends=[
                gcp.compute.BackendServiceBackendArgs(
                    group=self.neg.id,
                )
            ],
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.endpoint]),
        )

        self.url_map = gcp.compute.URLMap(
            resource_name=f"{name}-url-map",
            name=url_map_name,
            default_service=self.backend.id,
            opts=child_opts,
        )

        # No fixed name: auto-naming lets a replacement certificate be created
        # and reach ACTIVE before the old one is deleted.
        certificate_opts = pulumi.ResourceOptions(
            parent=self,
            depends_on=list(certificate_depends_on or []),
            delete_before_replace=False,
        )
        self.certificate = gcp.compute.ManagedSslCertificate(
            resource_name=f"{name}-ssl-cert",
            managed=gcp.compute.ManagedSslCertificateManagedArgs(
                domains=list(domains),
            ),
            opts=certificate_opts,
        )

        self.proxy = gcp.compute.TargetHttpsProxy(
            resource_name=f"{name}-target-proxy",
            name=proxy_name,
            url_map=self.url_map.id,
            ssl_certificates=[self.certificate.id],
            opts=child_opts,
        )

        self.forwarding_rule = gcp.compute.GlobalForwardingRule(
            resource_name=f"{name}-fwd-rule",
            name=forwarding_rule_name,
            target=self.proxy.id,
            ip_address=address.address,
            ip_protocol="TCP",
            port_range=str(HTTPS_PORT),
            opts=child_opts,
        )

        self.certificate_id: pulumi.Output[str] = self.certificate.id
        self.url_map_id: pulumi.Output[str] = self.url_map.id
        self.register_outputs(
            {
                "certificate_id": self.certificate_id,
                "url_map_id": self.url_map_id,
            }
        )
