"""Exception types raised before any resource is declared.

Exception Hierarchy:
    ApigwError (base)
    ├── ConfigurationError - Missing or unusable stack configuration
    ├── DuplicateDeclarationError - Two declarations share a key
    ├── DanglingReferenceError - A reference names an undeclared resource
    ├── DependencyCycleError - References form a cycle
    └── DomainValidationError - Zone, record or certificate names disagree
"""

from typing import Any, Dict, Optional


class ApigwError(Exception):
    """Base exception for preflight errors.

    Attributes:
        message: Human-readable error description
        context: Additional contextual information (e.g. resource keys, domains)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigurationError(ApigwError):
    """Raised when stack configuration cannot be used.

    Examples:
        - OpenAPI document path does not exist or is empty
        - TTL is not positive
    """

    pass


class DuplicateDeclarationError(ApigwError):
    """Raised when a declaration key is added twice."""

    pass


class DanglingReferenceError(ApigwError):
    """Raised when a declaration references a key that was never declared."""

    pass


class DependencyCycleError(ApigwError):
    """Raised when reference edges form a cycle and no creation order exists."""

    pass


class DomainValidationError(ApigwError):
    """Raised when DNS names cannot support certificate validation.

    Examples:
        - Zone dns_name is not fully qualified
        - A record outside its managed zone
        - Certificate domain with no A record in the zone
    """

    pass
