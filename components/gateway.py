"""
API Gateway: API, API config from an OpenAPI document, and the gateway.

The OpenAPI document is embedded base64-encoded in the API config. The
gateway's generated ``default_hostname`` (e.g.
``api-gateway-xxxx.uc.gateway.dev``) is exposed as an ``Output[str]`` so the
load balancer component can target it with an Internet FQDN endpoint.
"""

import pulumi
import pulumi_gcp as gcp

from components._helpers import encode_document

ID = "apigw:gcp:ApiGatewayInfra"


class ApiGatewayInfra(pulumi.ComponentResource):
    """
    API Gateway API, config and gateway.

    Resources: Api, ApiConfig (OpenAPI document), Gateway.
    """

    def __init__(
        self,
        name: str,
        openapi_contents: bytes,
        openapi_path: str = "openapi.yaml",
        region: str = "us-central1",
        api_id: str = "api",
        gateway_id: str = "api-gateway",
        api_config_prefix: str = "api-config-",
    ):
        """
        Create the API, its config and the gateway.

        Args:
            name: Pulumi resource name prefix.
            openapi_contents: Raw OpenAPI document bytes.
            openapi_path: Document path recorded in the API config.
            region: Gateway region.
            api_id: API identifier.
            gateway_id: Gateway identifier.
            api_config_prefix: Prefix for generated API config ids.

        Outputs (set on self, registered for the component):
            default_hostname: Generated gateway hostname.
        """
        super().__init__(ID, name)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.api = gcp.apigateway.Api(
            resource_name=f"{name}-api",
            api_id=api_id,
            opts=child_opts,
        )

        # Configs are immutable; a prefix lets a replacement config be created
        # before the old one is deleted while the gateway still points at it.
        document = gcp.apigateway.ApiConfigOpenapiDocumentArgs(
            document=gcp.apigateway.ApiConfigOpenapiDocumentDocumentArgs(
                path=openapi_path,
                contents=encode_document(openapi_contents),
            ),
        )
        self.api_config = gcp.apigateway.ApiConfig(
            resource_name=f"{name}-config",
            api=self.api.api_id,
            api_config_id_prefix=api_config_prefix,
            openapi_documents=[document],
            opts=child_opts,
        )

        self.gateway = gcp.apigateway.Gateway(
            resource_name=f"{name}-gateway",
            gateway_id=gateway_id,
            api_config=self.api_config.id,
            region=region,
            opts=child_opts,
        )

        self.default_hostname: pulumi.Output[str] = self.gateway.default_hostname
        self.register_outputs({"default_hostname": self.default_hostname})
