"""Logging integrated service."""

from .manager import STORAGE_PROVIDER_MENU, LoggingManager
from .models import (
    ClusterOutputSpec,
    LoggingOperatorOutput,
    LoggingOperatorSpec,
    LoggingOutput,
    LoggingSpec,
    LokiSpec,
    OutputProviderSpec,
    StorageProvider,
)

__all__ = [
    "STORAGE_PROVIDER_MENU",
    "ClusterOutputSpec",
    "LoggingManager",
    "LoggingOperatorOutput",
    "LoggingOperatorSpec",
    "LoggingOutput",
    "LoggingSpec",
    "LokiSpec",
    "OutputProviderSpec",
    "StorageProvider",
]
