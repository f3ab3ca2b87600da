"""
Pure helpers for DNS names, headers and document encoding. Testable without
Pulumi runtime.

Used by the stack config (ensure_trailing_dot, fqdn, strip_trailing_dot), the
gateway component (encode_document), the load balancer component
(host_header) and the resource graph domain checks (is_valid_label,
is_valid_dns_suffix, is_subdomain_of). No Pulumi types; all functions accept
and return plain Python types so they can be unit-tested without a Pulumi
stack.
"""

import base64
import re

# RFC 1123 hostname label: letters, digits, hyphens; no leading/trailing hyphen.
_LABEL_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")

MAX_NAME_LENGTH = 253


def ensure_trailing_dot(
    domain: str,
) -> str:
    """
    Return domain with a single trailing dot for DNS FQDN.

    Cloud DNS (and many DNS APIs) expect zone and record names with a trailing
    dot when they are fully qualified. Idempotent if already present.
    """
    return domain if domain.endswith(".") else f"{domain}."


def strip_trailing_dot(
    domain: str,
) -> str:
    """Return domain without its trailing dot (certificate domain form)."""
    return domain[:-1] if domain.endswith(".") else domain


def fqdn(
    domain: str,
    subdomain: str,
) -> str:
    """
    Build FQDN like 'api.example.com.' from domain and subdomain.

    Args:
        domain: Base domain (e.g. "example.com"); trailing dot is ensured.
        subdomain: Leading label (e.g. "api").

    Returns:
        FQDN with trailing dot (e.g. "api.example.com.").
    """
    return f"{subdomain}.{ensure_trailing_dot(domain)}"


def is_valid_label(
    label: str,
) -> bool:
    """True if label is a single valid hostname label (1-63 chars, LDH)."""
    return bool(_LABEL_RE.match(label))


def is_valid_dns_suffix(
    name: str,
) -> bool:
    """
    True if name is a fully-qualified DNS suffix such as "my-domain.com.".

    The name must end with a dot, every label must be a valid hostname label,
    and the name without the root dot must fit in 253 characters.
    """
    if not name.endswith(".") or name == ".":
        return False
    bare = name[:-1]
    if len(bare) > MAX_NAME_LENGTH:
        return False
    return all(is_valid_label(label) for label in bare.split("."))


def is_subdomain_of(
    name: str,
    suffix: str,
) -> bool:
    """
    True if name is a strict subdomain of suffix. Comparison ignores case and
    trailing dots, so "api.example.com" is a subdomain of "example.com.".
    """
    child = strip_trailing_dot(name).lower()
    parent = strip_trailing_dot(suffix).lower()
    return child.endswith(f".{parent}") and child != parent


def host_header(
    hostname: str,
) -> str:
    """
    Return the custom request header that overrides Host on the backend.

    API Gateway routes on the Host header, so requests for the custom domain
    must reach it with the gateway's own hostname.
    """
    return f"Host: {hostname}"


def encode_document(
    contents: bytes,
) -> str:
    """
    Base64-encode a document for ApiConfig openapi_documents contents.

    The API Gateway API expects the OpenAPI document as base64 text.
    """
    return base64.b64encode(contents).decode("ascii")
