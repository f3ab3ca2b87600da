"""Tests for the Pulumi components, run against mocks from conftest"""

import base64

import pulumi

from components import ApiGatewayInfra, DnsInfra, LoadBalancerInfra
from tests.conftest import GATEWAY_HOSTNAME, NAME_SERVERS, RESERVED_ADDRESS

OPENAPI = b"swagger: '2.0'\ninfo:\n  title: api\n  version: 1.0.0\npaths: {}\n"


def _load_balancer(prefix, **kwargs):
    dns = DnsInfra(
        f"{prefix}-dns", zone_name="example-zone", dns_name="my-domain.com."
    )
    return LoadBalancerInfra(
        f"{prefix}-lb",
        gateway_hostname=GATEWAY_HOSTNAME,
        domains=["api.my-domain.com"],
        address=dns.address,
        certificate_depends_on=[dns.record],
        **kwargs,
    )


class TestApiGatewayInfra:
    @pulumi.runtime.test
    def test_exposes_generated_hostname(self):
        gateway = ApiGatewayInfra("t-gw", openapi_contents=OPENAPI)

        def check(hostname):
            assert hostname == GATEWAY_HOSTNAME

        return gateway.default_hostname.apply(check)

    @pulumi.runtime.test
    def test_embeds_openapi_document_base64(self):
        gateway = ApiGatewayInfra(
            "t-gw-doc", openapi_contents=OPENAPI, openapi_path="gateway.yaml"
        )

        def check(documents):
            document = documents[0].document
            assert document.path == "gateway.yaml"
            assert base64.b64decode(document.contents) == OPENAPI

        return gateway.api_config.openapi_documents.apply(check)

    @pulumi.runtime.test
    def test_gateway_identifiers(self):
        gateway = ApiGatewayInfra("t-gw-ids", openapi_contents=OPENAPI)

        def check(args):
            api_id, gateway_id, region = args
            assert api_id == "api"
            assert gateway_id == "api-gateway"
            assert region == "us-central1"

        return pulumi.Output.all(
            gateway.api.api_id, gateway.gateway.gateway_id, gateway.gateway.region
        ).apply(check)


class TestDnsInfra:
    @pulumi.runtime.test
    def test_zone(self):
        dns = DnsInfra("t-dns-zone", zone_name="example-zone", dns_name="my-domain.com")

        def check(args):
            name, dns_name, name_servers = args
            assert name == "example-zone"
            assert dns_name == "my-domain.com."
            assert name_servers == NAME_SERVERS

        return pulumi.Output.all(
            dns.zone.name, dns.zone.dns_name, dns.name_servers
        ).apply(check)

    @pulumi.runtime.test
    def test_a_record_points_at_reserved_address(self):
        dns = DnsInfra("t-dns-rec", zone_name="example-zone", dns_name="my-domain.com.")

        def check(args):
            name, record_type, ttl, rrdatas, zone = args
            assert name == "api.my-domain.com."
            assert record_type == "A"
            assert ttl == 300
            assert rrdatas == [RESERVED_ADDRESS]
            assert zone == "example-zone"

        return pulumi.Output.all(
            dns.record.name,
            dns.record.type,
            dns.record.ttl,
            dns.record.rrdatas,
            dns.record.managed_zone,
        ).apply(check)

    @pulumi.runtime.test
    def test_address_name(self):
        dns = DnsInfra("t-dns-addr", zone_name="example-zone", dns_name="my-domain.com.")

        def check(args):
            name, ip_address = args
            assert name == "apigw-fwd-rule-address"
            assert ip_address == RESERVED_ADDRESS

        return pulumi.Output.all(dns.address.name, dns.ip_address).apply(check)


class TestLoadBalancerInfra:
    @pulumi.runtime.test
    def test_neg_targets_gateway_hostname(self):
        lb = _load_balancer("t1")

        def check(args):
            neg_type, fqdn, port = args
            assert neg_type == "INTERNET_FQDN_PORT"
            assert fqdn == GATEWAY_HOSTNAME
            assert port == 443

        return pulumi.Output.all(
            lb.neg.network_endpoint_type, lb.endpoint.fqdn, lb.endpoint.port
        ).apply(check)

    @pulumi.runtime.test
    def test_backend_overrides_host_header(self):
        lb = _load_balancer("t2")

        def check(args):
            name, protocol, enable_cdn, headers = args
            assert name == "apigw-lb-backend"
            assert protocol == "HTTP2"
            assert enable_cdn is True
            assert headers == [f"Host: {GATEWAY_HOSTNAME}"]

        return pulumi.Output.all(
            lb.backend.name,
            lb.backend.protocol,
            lb.backend.enable_cdn,
            lb.backend.custom_request_headers,
        ).apply(check)

    @pulumi.runtime.test
    def test_cdn_can_be_disabled(self):
        lb = _load_balancer("t3", enable_cdn=False)

        def check(enable_cdn):
            assert enable_cdn is False

        return lb.backend.enable_cdn.apply(check)

    @pulumi.runtime.test
    def test_certificate_domains(self):
        lb = _load_balancer("t4")

        def check(managed):
            assert managed.domains == ["api.my-domain.com"]

        return lb.certificate.managed.apply(check)

    @pulumi.runtime.test
    def test_proxy_binds_certificate_and_url_map(self):
        lb = _load_balancer("t5")

        def check(args):
            certificates, url_map, certificate_id, url_map_id = args
            assert certificates == [certificate_id]
            assert url_map == url_map_id

        return pulumi.Output.all(
            lb.proxy.ssl_certificates,
            lb.proxy.url_map,
            lb.certificate_id,
            lb.url_map_id,
        ).apply(check)

    @pulumi.runtime.test
    def test_forwarding_rule_on_reserved_address(self):
        lb = _load_balancer("t6")

        def check(args):
            name, port_range, protocol, ip_address, target, proxy_id = args
            assert name == "apigw-fwd-rule"
            assert port_range == "443"
            assert protocol == "TCP"
            assert ip_address == RESERVED_ADDRESS
            assert target == proxy_id

        return pulumi.Output.all(
            lb.forwarding_rule.name,
            lb.forwarding_rule.port_range,
            lb.forwarding_rule.ip_protocol,
            lb.forwarding_rule.ip_address,
            lb.forwarding_rule.target,
            lb.proxy.id,
        ).apply(check)

    @pulumi.runtime.test
    def test_certificate_named_under_component(self):
        first = _load_balancer("t7")
        second = _load_balancer("t8")

        def check(urns):
            assert urns[0].endswith("::t7-lb-ssl-cert")
            assert urns[1].endswith("::t8-lb-ssl-cert")

        return pulumi.Output.all(first.certificate.urn, second.certificate.urn).apply(
            check
        )
