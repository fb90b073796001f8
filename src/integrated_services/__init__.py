"""Integrated Services configuration engine.

This package lets an operator activate, update and inspect the integrated
services (monitoring, logging) of a cluster:
- config: Configuration management
- observability: Structured logging
- models: Pydantic base models and the untyped document types
- prompts: Interactive question primitive
- clients: Pipeline backend API client
- engine: Spec codec, secret resolver, builder helpers, validation, tables, registry
- services: Concrete integrated service managers
- cli: Command line interface
"""

__version__ = "0.1.0"
