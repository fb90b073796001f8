"""Base model configuration for all Pydantic models.

Conventions:
- Attribute names are lowercase snake_case
- Wire keys are camelCase (secret_id <-> secretId)
- Unknown wire keys are kept, so a decoded document re-encodes without loss
"""

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel


class IntegratedServiceModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="allow",
    )


class ValidationPolicy(BaseModel):
    """Business rules that depend on operator configuration."""

    require_ingress_auth: bool = False


class ComponentSpec(IntegratedServiceModel):
    """Independently toggleable sub-component of a service spec.

    When ``enabled`` is false the remaining fields carry no meaning.
    """

    enabled: bool = False

    @model_serializer(mode="wrap")
    def serialize_component(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.enabled:
            return data
        # A disabled component is sent as {"enabled": false} plus unknown keys.
        extras = self.model_extra or {}
        return {key: value for key, value in data.items() if key == "enabled" or key in extras}


class ServiceSpecModel(IntegratedServiceModel):
    """Top-level spec of one integrated service kind."""

    def iter_violations(self, policy: ValidationPolicy) -> Iterator[str]:
        """Yield rule violations, in question order."""
        yield from ()
