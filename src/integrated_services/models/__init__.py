"""Shared data models.

All models follow these conventions:
- Field names: lowercase snake_case, camelCase on the wire
- Enums: uppercase SNAKE_CASE members
"""

# Base
from .base import (
    ComponentSpec,
    IntegratedServiceModel,
    ServiceSpecModel,
    ValidationPolicy,
)

# Wire documents
from .document import (
    Document,
    IntegratedServiceDetails,
    OutputItems,
    SecretItem,
    SecretKind,
    ServiceStatus,
    VersionOutput,
)

# Ingress
from .ingress import BaseIngressSpec, IngressSpecWithSecret

__all__ = [
    # Base
    "ComponentSpec",
    "IntegratedServiceModel",
    "ServiceSpecModel",
    "ValidationPolicy",
    # Documents
    "Document",
    "IntegratedServiceDetails",
    "OutputItems",
    "SecretItem",
    "SecretKind",
    "ServiceStatus",
    "VersionOutput",
    # Ingress
    "BaseIngressSpec",
    "IngressSpecWithSecret",
]
