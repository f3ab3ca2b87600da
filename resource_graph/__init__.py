"""
Resource dependency graph and preflight checks, usable without Pulumi.

- **DeclarationSet**: declared resources keyed by ``Kind.name``; resolves
  references into a DAG and yields creation/deletion order.
- **build_declarations**: the custom-domain stack as a DeclarationSet,
  mirroring the Output wiring in ``components``.
- **preflight**: config, wiring and DNS checks; run before any resource is
  declared so a certificate that cannot validate never gets provisioned.
"""

from resource_graph.errors import (
    ApigwError,
    ConfigurationError,
    DanglingReferenceError,
    DependencyCycleError,
    DomainValidationError,
    DuplicateDeclarationError,
)
from resource_graph.graph import Declaration, DeclarationSet
from resource_graph.plan import build_declarations, check_domains, preflight

__all__ = [
    "ApigwError",
    "ConfigurationError",
    "DanglingReferenceError",
    "Declaration",
    "DeclarationSet",
    "DependencyCycleError",
    "DomainValidationError",
    "DuplicateDeclarationError",
    "build_declarations",
    "check_domains",
    "preflight",
]
