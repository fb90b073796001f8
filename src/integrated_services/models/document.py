"""Untyped documents exchanged with the Pipeline backend and their typed views."""

from enum import Enum
from typing import Any

from pydantic import Field, JsonValue, field_validator

from .base import IntegratedServiceModel

# Wire form of every spec and output. Never sent in any other shape.
Document = dict[str, JsonValue]


class ServiceStatus(str, Enum):
    """Lifecycle status reported by the backend."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    ERROR = "ERROR"


class SecretKind(str, Enum):
    """Credential kinds the builders ask for."""

    PASSWORD = "password"
    HTPASSWD = "htpasswd"
    SLACK = "slack"
    PAGERDUTY = "pagerduty"
    AMAZON = "amazon"
    AZURE = "azure"
    GOOGLE = "google"
    ALIBABA = "alibaba"


class SecretItem(IntegratedServiceModel):
    """Stored credential as listed by the backend. Never carries the values."""

    id: str
    name: str
    type: str = ""


class IntegratedServiceDetails(IntegratedServiceModel):
    """Live state of one integrated service on a cluster.

    ``spec`` and ``output`` stay untyped here; each manager decodes them into
    its own models and reports a non-object document as a schema mismatch.
    """

    status: str = ServiceStatus.INACTIVE.value
    spec: Any = Field(default_factory=dict)
    output: Any = Field(default_factory=dict)

    @field_validator("spec", "output", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class OutputItems(IntegratedServiceModel):
    """Backend-reported endpoint of a component."""

    url: str = ""
    secret_id: str = ""
    version: str = ""
    service_url: str = ""


class VersionOutput(IntegratedServiceModel):
    """Status-only child, such as an operator."""

    version: str = ""
