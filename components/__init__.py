"""
GCP infrastructure components for an API Gateway custom domain.

Each concern is encapsulated in its own ComponentResource for clear ownership,
testability, and reuse. Use from the Pulumi entrypoint (e.g. __main__.py) with
config and output chaining:

- **ApiGatewayInfra**: API, API config (OpenAPI document) and gateway; exposes
  default_hostname for the load balancer.
- **DnsInfra**: Cloud DNS zone, reserved global address and the custom
  domain's A record; exposes name_servers and ip_address.
- **LoadBalancerInfra**: Internet FQDN NEG, backend service, URL map, managed
  certificate, HTTPS proxy and forwarding rule; accepts the gateway hostname
  (str or Output[str]) and the address from DnsInfra.
"""

from components.dns import DnsInfra
from components.gateway import ApiGatewayInfra
from components.load_balancer import LoadBalancerInfra

__all__ = ["ApiGatewayInfra", "DnsInfra", "LoadBalancerInfra"]
