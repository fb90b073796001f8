"""Integrated service configuration engine.

- codec: untyped document <-> typed spec
- secrets: credential selection by name
- builder / ingress: question tree helpers
- validation: business rules before transmission
- table: details display tables
- registry: the manager abstraction and its registry
"""

from .builder import SKIP, ask_enabled, ask_one, choose, parse_unsigned
from .codec import carry_extras, decode_spec, encode_spec, merge_document, normalize_keys
from .ingress import ask_ingress, ask_ingress_with_secret
from .registry import IntegratedServiceManager, ServiceRegistry
from .secrets import SecretLister, SecretResolver, default_secret_name, skip_option
from .table import DisplayTable, ingress_component_rows, output_rows, render_table
from .validation import collect_violations, validate_spec

__all__ = [
    # Builder
    "SKIP",
    "ask_enabled",
    "ask_one",
    "choose",
    "parse_unsigned",
    "ask_ingress",
    "ask_ingress_with_secret",
    # Codec
    "carry_extras",
    "decode_spec",
    "encode_spec",
    "merge_document",
    "normalize_keys",
    # Secrets
    "SecretLister",
    "SecretResolver",
    "default_secret_name",
    "skip_option",
    # Validation
    "collect_violations",
    "validate_spec",
    # Display
    "DisplayTable",
    "ingress_component_rows",
    "output_rows",
    "render_table",
    # Registry
    "IntegratedServiceManager",
    "ServiceRegistry",
]
