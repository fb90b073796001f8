"""Monitoring integrated service: Grafana, Prometheus, Alertmanager, Pushgateway."""

from integrated_services.engine import (
    SKIP,
    DisplayTable,
    IntegratedServiceManager,
    ask_enabled,
    ask_ingress,
    ask_ingress_with_secret,
    ask_one,
    carry_extras,
    choose,
    ingress_component_rows,
    output_rows,
    parse_unsigned,
)
from integrated_services.errors import error_context
from integrated_services.models import (
    BaseIngressSpec,
    IngressSpecWithSecret,
    IntegratedServiceModel,
    SecretKind,
)
from integrated_services.prompts import ConfirmQuestion, InputQuestion, SelectQuestion

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

# Checked in this order when picking the preselected provider.
PROVIDER_PRECEDENCE = (NotificationProvider.PAGERDUTY, NotificationProvider.SLACK)

PROVIDER_MENU: dict[str, NotificationProvider | None] = {
    SKIP: None,
    NotificationProvider.SLACK.display_name: NotificationProvider.SLACK,
    NotificationProvider.PAGERDUTY.display_name: NotificationProvider.PAGERDUTY,
}

INTEGRATION_TYPE_MENU: dict[str, PagerDutyIntegrationType] = {
    member.display_name: member for member in PagerDutyIntegrationType
}


def default_notification_provider(providers: AlertmanagerProviders) -> str:
    """Menu entry to preselect: the first enabled provider, PagerDuty before Slack."""
    for provider in PROVIDER_PRECEDENCE:
        if providers.get(provider).enabled:
            return provider.display_name
    return SKIP


class MonitoringManager(IntegratedServiceManager[MonitoringSpec, MonitoringOutput]):
    """Builds and displays the monitoring spec."""

    readable_name = "Monitoring"
    service_name = "monitoring"
    spec_model = MonitoringSpec
    output_model = MonitoringOutput

    def default_baseline(self) -> MonitoringSpec:
        return MonitoringSpec(
            grafana=GrafanaSpec(
                enabled=True,
                dashboards=True,
                ingress=BaseIngressSpec(enabled=True, path="/grafana"),
            ),
            prometheus=PrometheusSpec(
                enabled=True,
                storage=StorageSpec(size=100, retention="10d"),
                ingress=IngressSpecWithSecret(enabled=True, path="/prometheus"),
            ),
            alertmanager=AlertmanagerSpec(
                enabled=True,
                ingress=IngressSpecWithSecret(enabled=True, path="/alertmanager"),
                provider=AlertmanagerProviders(
                    slack=SlackSpec(enabled=False, send_resolved=True),
                    pager_duty=PagerDutySpec(enabled=False, send_resolved=True),
                ),
            ),
            pushgateway=PushgatewaySpec(
                enabled=False,
                ingress=IngressSpecWithSecret(enabled=False, path="/pushgateway"),
            ),
            exporters=ExportersSpec(
                enabled=True,
                node_exporter=ExporterBaseSpec(enabled=True),
                kube_state_metrics=ExporterBaseSpec(enabled=True),
            ),
        )

    def ask_spec(self, defaults: MonitoringSpec) -> dict[str, IntegratedServiceModel]:
        # Exporters are not configurable interactively.
        built: dict[str, IntegratedServiceModel] = {}
        with error_context("error during getting Grafana options"):
            built["grafana"] = self.ask_grafana(defaults.grafana)
        with error_context("error during getting Prometheus options"):
            built["prometheus"] = self.ask_prometheus(defaults.prometheus)
        with error_context("error during getting Alertmanager options"):
            built["alertmanager"] = self.ask_alertmanager(defaults.alertmanager)
        with error_context("error during getting Pushgateway options"):
            built["pushgateway"] = self.ask_pushgateway(defaults.pushgateway)
        return built

    def ask_grafana(self, defaults: GrafanaSpec) -> GrafanaSpec:
        if not ask_enabled(self.prompter, "Grafana", defaults.enabled):
            return GrafanaSpec(enabled=False, **carry_extras(defaults))

        with error_context("error during getting Grafana secret"):
            secret_id = self.secrets.resolve(SecretKind.PASSWORD, defaults.secret_id, allow_skip=True)

        with error_context("error during getting Grafana ingress options"):
            ingress = ask_ingress(self.prompter, "Grafana", defaults.ingress)

        dashboards = ask_one(
            self.prompter,
            ConfirmQuestion(
                name="dashboards",
                message="Do you want to add default dashboards to Grafana?",
                default=defaults.dashboards,
            ),
        )

        return GrafanaSpec(
            enabled=True,
            secret_id=secret_id,
            dashboards=dashboards,
            ingress=ingress,
            **carry_extras(defaults),
        )

    def ask_prometheus(self, defaults: PrometheusSpec) -> PrometheusSpec:
        if not ask_enabled(self.prompter, "Prometheus", defaults.enabled):
            return PrometheusSpec(enabled=False, **carry_extras(defaults))

        answers = self.prompter.ask(
            [
                InputQuestion(
                    name="class",
                    message="Please provide storage class name for Prometheus:",
                    help="Leave empty to use default storage class",
                    default=defaults.storage.storage_class,
                ),
                InputQuestion(
                    name="size",
                    message="Please provide storage size for Prometheus:",
                    default=str(defaults.storage.size),
                ),
                InputQuestion(
                    name="retention",
                    message="Please provide retention for Prometheus:",
                    default=defaults.storage.retention,
                ),
            ]
        )
        storage = StorageSpec(
            storage_class=answers["class"],
            size=parse_unsigned("storage size", answers["size"]),
            retention=answers["retention"],
            **carry_extras(defaults.storage),
        )

        with error_context("error during getting Prometheus ingress options"):
            ingress = ask_ingress_with_secret(self.prompter, self.secrets, "Prometheus", defaults.ingress)

        return PrometheusSpec(enabled=True, storage=storage, ingress=ingress, **carry_extras(defaults))

    def ask_alertmanager(self, defaults: AlertmanagerSpec) -> AlertmanagerSpec:
        if not ask_enabled(self.prompter, "Alertmanager", defaults.enabled):
            return AlertmanagerSpec(enabled=False, **carry_extras(defaults))

        answer = ask_one(
            self.prompter,
            SelectQuestion(
                name="provider",
                message="Select notification provider",
                options=list(PROVIDER_MENU),
                default=default_notification_provider(defaults.provider),
            ),
        )
        chosen = choose(PROVIDER_MENU, answer, "provider type")

        slack = SlackSpec(enabled=False)
        pager_duty = PagerDutySpec(enabled=False)
        if chosen is NotificationProvider.SLACK:
            with error_context("error during getting Slack provider options"):
                slack = self.ask_slack(defaults.provider.slack)
        elif chosen is NotificationProvider.PAGERDUTY:
            with error_context("error during getting PagerDuty provider options"):
                pager_duty = self.ask_pager_duty(defaults.provider.pager_duty)

        with error_context("error during getting Alertmanager ingress options"):
            ingress = ask_ingress_with_secret(self.prompter, self.secrets, "Alertmanager", defaults.ingress)

        return AlertmanagerSpec(
            enabled=True,
            provider=AlertmanagerProviders(
                slack=slack,
                pager_duty=pager_duty,
                **carry_extras(defaults.provider),
            ),
            ingress=ingress,
            **carry_extras(defaults),
        )

    def ask_slack(self, defaults: SlackSpec) -> SlackSpec:
        with error_context("error during getting Slack secret"):
            secret_id = self.secrets.resolve(
                NotificationProvider.SLACK.secret_kind, defaults.secret_id, allow_skip=False
            )

        answers = self.prompter.ask(
            [
                InputQuestion(
                    name="channel",
                    message="Provide Slack channel name for the alerts:",
                    default=defaults.channel,
                ),
                ConfirmQuestion(
                    name="send_resolved",
                    message="Send resolved notifications as well",
                    default=defaults.send_resolved,
                ),
            ]
        )

        return SlackSpec(
            enabled=True,
            channel=answers["channel"],
            secret_id=secret_id,
            send_resolved=answers["send_resolved"],
            **carry_extras(defaults),
        )

    def ask_pager_duty(self, defaults: PagerDutySpec) -> PagerDutySpec:
        url = ask_one(
            self.prompter,
            InputQuestion(
                name="url",
                message="Provide PagerDuty service endpoint:",
                default=defaults.url,
            ),
        )

        answer = ask_one(
            self.prompter,
            SelectQuestion(
                name="integration_type",
                message="Select PagerDuty integration type:",
                options=list(INTEGRATION_TYPE_MENU),
                default=PagerDutyIntegrationType(defaults.integration_type).display_name,
            ),
        )
        integration_type = choose(INTEGRATION_TYPE_MENU, answer, "integration type")

        with error_context("error during getting PagerDuty secret"):
            secret_id = self.secrets.resolve(
                NotificationProvider.PAGERDUTY.secret_kind, defaults.secret_id, allow_skip=False
            )

        send_resolved = ask_one(
            self.prompter,
            ConfirmQuestion(
                name="send_resolved",
                message="Send resolved notifications as well",
                default=defaults.send_resolved,
            ),
        )

        return PagerDutySpec(
            enabled=True,
            url=url,
            integration_type=integration_type,
            secret_id=secret_id,
            send_resolved=send_resolved,
            **carry_extras(defaults),
        )

    def ask_pushgateway(self, defaults: PushgatewaySpec) -> PushgatewaySpec:
        if not ask_enabled(self.prompter, "Pushgateway", defaults.enabled):
            return PushgatewaySpec(enabled=False, **carry_extras(defaults))

        with error_context("error during getting Pushgateway ingress options"):
            ingress = ask_ingress_with_secret(self.prompter, self.secrets, "Pushgateway", defaults.ingress)

        return PushgatewaySpec(enabled=True, ingress=ingress, **carry_extras(defaults))

    def add_details_sections(
        self,
        table: DisplayTable,
        spec: MonitoringSpec,
        output: MonitoringOutput,
    ) -> None:
        if spec.alertmanager.enabled:
            table.add_section(
                "Alertmanager",
                ingress_component_rows(output.alertmanager, spec.alertmanager.ingress),
            )

        if spec.grafana.enabled:
            table.add_section(
                "Grafana",
                {
                    **output_rows(output.grafana),
                    "secretID": spec.grafana.secret_id or output.grafana.secret_id,
                    "path": spec.grafana.ingress.path,
                    "domain": spec.grafana.ingress.domain,
                },
            )

        if spec.prometheus.enabled:
            table.add_section(
                "Prometheus",
                ingress_component_rows(output.prometheus, spec.prometheus.ingress),
            )
            table.add_section(
                "Prometheus_storage",
                {
                    "class": spec.prometheus.storage.storage_class,
                    "size": spec.prometheus.storage.size,
                    "retention": spec.prometheus.storage.retention,
                },
            )

        if spec.pushgateway.enabled:
            table.add_section(
                "Pushgateway",
                ingress_component_rows(output.pushgateway, spec.pushgateway.ingress),
            )

        if spec.exporters.enabled:
            table.add_section(
                "Exporters",
                {
                    "nodeExporter": spec.exporters.node_exporter.enabled,
                    "kubeStateMetrics": spec.exporters.kube_state_metrics.enabled,
                },
            )

        table.add_section("Prometheus_operator", {"version": output.prometheus_operator.version})

