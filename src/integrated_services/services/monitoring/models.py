"""Monitoring spec and output models.

Wire shape of the spec:

    {
        "grafana": {"enabled", "secretId", "dashboards", "ingress"},
        "prometheus": {"enabled", "storage": {"class", "size", "retention"}, "ingress"},
        "alertmanager": {"enabled", "provider": {"slack", "pagerDuty"}, "ingress"},
        "pushgateway": {"enabled", "ingress"},
        "exporters": {"enabled", "nodeExporter", "kubeStateMetrics"},
    }
"""

import re
from collections.abc import Iterator
from enum import Enum

from pydantic import Field

from integrated_services.models import (
    BaseIngressSpec,
    ComponentSpec,
    IngressSpecWithSecret,
    IntegratedServiceModel,
    OutputItems,
    SecretKind,
    ServiceSpecModel,
    ValidationPolicy,
    VersionOutput,
)

RETENTION_PATTERN = re.compile(r"^[0-9]+[smhdwy]$")


class NotificationProvider(str, Enum):
    """Alertmanager notification providers, valued by their wire key."""

    SLACK = "slack"
    PAGERDUTY = "pagerDuty"

    @property
    def display_name(self) -> str:
        return NOTIFICATION_PROVIDER_NAMES[self]

    @property
    def secret_kind(self) -> SecretKind:
        return NOTIFICATION_PROVIDER_SECRETS[self]


NOTIFICATION_PROVIDER_NAMES: dict[NotificationProvider, str] = {
    NotificationProvider.SLACK: "Slack",
    NotificationProvider.PAGERDUTY: "PagerDuty",
}

NOTIFICATION_PROVIDER_SECRETS: dict[NotificationProvider, SecretKind] = {
    NotificationProvider.SLACK: SecretKind.SLACK,
    NotificationProvider.PAGERDUTY: SecretKind.PAGERDUTY,
}


class PagerDutyIntegrationType(str, Enum):
    """PagerDuty integration types, valued by their wire key."""

    PROMETHEUS = "prometheus"
    EVENTS_API_V2 = "eventsApiV2"

    @property
    def display_name(self) -> str:
        return PAGERDUTY_INTEGRATION_NAMES[self]


PAGERDUTY_INTEGRATION_NAMES: dict[PagerDutyIntegrationType, str] = {
    PagerDutyIntegrationType.PROMETHEUS: "Prometheus",
    PagerDutyIntegrationType.EVENTS_API_V2: "Events API v2",
}


class GrafanaSpec(ComponentSpec):
    secret_id: str = ""
    dashboards: bool = False
    ingress: BaseIngressSpec = Field(default_factory=BaseIngressSpec)


class StorageSpec(IntegratedServiceModel):
    storage_class: str = Field(default="", alias="class")
    size: int = 0
    retention: str = ""


class PrometheusSpec(ComponentSpec):
    storage: StorageSpec = Field(default_factory=StorageSpec)
    ingress: IngressSpecWithSecret = Field(default_factory=IngressSpecWithSecret)


class SlackSpec(ComponentSpec):
    channel: str = ""
    secret_id: str = ""
    send_resolved: bool = False


class PagerDutySpec(ComponentSpec):
    url: str = ""
    integration_type: PagerDutyIntegrationType = PagerDutyIntegrationType.PROMETHEUS
    secret_id: str = ""
    send_resolved: bool = False


class AlertmanagerProviders(IntegratedServiceModel):
    slack: SlackSpec = Field(default_factory=SlackSpec)
    pager_duty: PagerDutySpec = Field(default_factory=PagerDutySpec)

    def get(self, provider: NotificationProvider) -> SlackSpec | PagerDutySpec:
        if provider is NotificationProvider.SLACK:
            return self.slack
        return self.pager_duty


class AlertmanagerSpec(ComponentSpec):
    provider: AlertmanagerProviders = Field(default_factory=AlertmanagerProviders)
    ingress: IngressSpecWithSecret = Field(default_factory=IngressSpecWithSecret)


class PushgatewaySpec(ComponentSpec):
    ingress: IngressSpecWithSecret = Field(default_factory=IngressSpecWithSecret)


class ExporterBaseSpec(ComponentSpec):
    pass


class ExportersSpec(ComponentSpec):
    node_exporter: ExporterBaseSpec = Field(default_factory=ExporterBaseSpec)
    kube_state_metrics: ExporterBaseSpec = Field(default_factory=ExporterBaseSpec)


class MonitoringSpec(ServiceSpecModel):
    """Spec of the monitoring integrated service."""

    grafana: GrafanaSpec = Field(default_factory=GrafanaSpec)
    prometheus: PrometheusSpec = Field(default_factory=PrometheusSpec)
    alertmanager: AlertmanagerSpec = Field(default_factory=AlertmanagerSpec)
    pushgateway: PushgatewaySpec = Field(default_factory=PushgatewaySpec)
    exporters: ExportersSpec = Field(default_factory=ExportersSpec)

    def iter_violations(self, policy: ValidationPolicy) -> Iterator[str]:
        if self.grafana.enabled:
            yield from self.grafana.ingress.iter_violations("Grafana", policy)

        if self.prometheus.enabled:
            storage = self.prometheus.storage
            if storage.size < 0:
                yield "Prometheus storage size must not be negative"
            if not RETENTION_PATTERN.match(storage.retention):
                yield "Prometheus retention must look like 10d (units: s, m, h, d, w, y)"
            yield from self.prometheus.ingress.iter_violations("Prometheus", policy)

        if self.alertmanager.enabled:
            slack = self.alertmanager.provider.slack
            if slack.enabled:
                if not slack.secret_id:
                    yield "Slack notification provider requires a secret"
                if not slack.channel:
                    yield "Slack notification provider requires a channel"
            pager_duty = self.alertmanager.provider.pager_duty
            if pager_duty.enabled:
                if not pager_duty.secret_id:
                    yield "PagerDuty notification provider requires a secret"
                if not pager_duty.url:
                    yield "PagerDuty notification provider requires a service endpoint"
            yield from self.alertmanager.ingress.iter_violations("Alertmanager", policy)

        if self.pushgateway.enabled:
            yield from self.pushgateway.ingress.iter_violations("Pushgateway", policy)


class MonitoringOutput(IntegratedServiceModel):
    """Backend-reported state of the monitoring components."""

    alertmanager: OutputItems = Field(default_factory=OutputItems)
    grafana: OutputItems = Field(default_factory=OutputItems)
    prometheus: OutputItems = Field(default_factory=OutputItems)
    prometheus_operator: VersionOutput = Field(default_factory=VersionOutput)
    pushgateway: OutputItems = Field(default_factory=OutputItems)
