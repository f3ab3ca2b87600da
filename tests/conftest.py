"""Pulumi mocks for component tests.

Mocks must be installed before components are imported, so they are set here
at collection time. Provider outputs that GCP computes (gateway hostname,
reserved address, name servers) are filled in with fixed values.
"""

import pulumi

GATEWAY_HOSTNAME = "api-gateway-1a2b3c4d.uc.gateway.dev"
RESERVED_ADDRESS = "203.0.113.10"
NAME_SERVERS = ["ns-cloud-a1.googledomains.com.", "ns-cloud-a2.googledomains.com."]


class GcpMocks(pulumi.runtime.Mocks):
    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        if args.typ == "gcp:apigateway/gateway:Gateway":
            outputs["defaultHostname"] = GATEWAY_HOSTNAME
        elif args.typ == "gcp:compute/globalAddress:GlobalAddress":
            outputs["address"] = RESERVED_ADDRESS
        elif args.typ == "gcp:dns/managedZone:ManagedZone":
            outputs["nameServers"] = NAME_SERVERS
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}


pulumi.runtime.set_mocks(
    GcpMocks(),
    project="apigw-custom-domain",
    stack="test",
    preview=False,
)
