"""Integrated service kinds known to the engine."""

from integrated_services.engine import SecretResolver, ServiceRegistry
from integrated_services.models import ValidationPolicy
from integrated_services.prompts import Prompter

from .logging import LoggingManager
from .monitoring import MonitoringManager

MANAGER_TYPES = (MonitoringManager, LoggingManager)


def build_registry(
    prompter: Prompter,
    secrets: SecretResolver,
    policy: ValidationPolicy | None = None,
) -> ServiceRegistry:
    """Registry holding one manager per supported service kind."""
    return ServiceRegistry([manager_type(prompter, secrets, policy) for manager_type in MANAGER_TYPES])


__all__ = ["MANAGER_TYPES", "LoggingManager", "MonitoringManager", "build_registry"]
