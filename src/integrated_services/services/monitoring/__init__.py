"""Monitoring integrated service."""

from .manager import MonitoringManager, default_notification_provider
from .models import (
    AlertmanagerProviders,
    AlertmanagerSpec,
    ExporterBaseSpec,
    ExportersSpec,
    GrafanaSpec,
    MonitoringOutput,
    MonitoringSpec,
    NotificationProvider,
    PagerDutyIntegrationType,
    PagerDutySpec,
    PrometheusSpec,
    PushgatewaySpec,
    SlackSpec,
    StorageSpec,
)

__all__ = [
    "MonitoringManager",
    "default_notification_provider",
    "AlertmanagerProviders",
    "AlertmanagerSpec",
    "ExporterBaseSpec",
    "ExportersSpec",
    "GrafanaSpec",
    "MonitoringOutput",
    "MonitoringSpec",
    "NotificationProvider",
    "PagerDutyIntegrationType",
    "PagerDutySpec",
    "PrometheusSpec",
    "PushgatewaySpec",
    "SlackSpec",
    "StorageSpec",
]
