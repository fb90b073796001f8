"""Logging integrated service: logging operator, Loki and cluster output."""

from integrated_services.engine import (
    DisplayTable,
    IntegratedServiceManager,
    ask_enabled,
    ask_ingress_with_secret,
    ask_one,
    carry_extras,
    choose,
    ingress_component_rows,
)
from integrated_services.errors import error_context
from integrated_services.models import IngressSpecWithSecret, IntegratedServiceModel
from integrated_services.prompts import ConfirmQuestion, InputQuestion, SelectQuestion

from .models import (
    ClusterOutputSpec,
    LoggingOperatorSpec,
    LoggingOutput,
    LoggingSpec,
    LokiSpec,
    OutputProviderSpec,
    StorageProvider,
)

STORAGE_PROVIDER_MENU: dict[str, StorageProvider] = {
    member.display_name: member for member in StorageProvider
}


class LoggingManager(IntegratedServiceManager[LoggingSpec, LoggingOutput]):
    """Builds and displays the logging spec."""

    readable_name = "Logging"
    service_name = "logging"
    spec_model = LoggingSpec
    output_model = LoggingOutput

    def default_baseline(self) -> LoggingSpec:
        return LoggingSpec(
            logging=LoggingOperatorSpec(metrics=True, tls=True),
            loki=LokiSpec(
                enabled=True,
                ingress=IngressSpecWithSecret(enabled=True, path="/loki"),
            ),
            cluster_output=ClusterOutputSpec(enabled=False),
        )

    def ask_spec(self, defaults: LoggingSpec) -> dict[str, IntegratedServiceModel]:
        built: dict[str, IntegratedServiceModel] = {}
        with error_context("error during getting logging operator options"):
            built["logging"] = self.ask_operator(defaults.logging)
        with error_context("error during getting Loki options"):
            built["loki"] = self.ask_loki(defaults.loki)
        with error_context("error during getting cluster output options"):
            built["clusterOutput"] = self.ask_cluster_output(defaults.cluster_output)
        return built

    def ask_operator(self, defaults: LoggingOperatorSpec) -> LoggingOperatorSpec:
        answers = self.prompter.ask(
            [
                ConfirmQuestion(
                    name="tls",
                    message="Do you want to enable TLS for the logging operator?",
                    default=defaults.tls,
                ),
                ConfirmQuestion(
                    name="metrics",
                    message="Do you want to enable metrics for the logging operator?",
                    default=defaults.metrics,
                ),
            ]
        )
        return LoggingOperatorSpec(
            tls=answers["tls"],
            metrics=answers["metrics"],
            **carry_extras(defaults),
        )

    def ask_loki(self, defaults: LokiSpec) -> LokiSpec:
        if not ask_enabled(self.prompter, "Loki", defaults.enabled):
            return LokiSpec(enabled=False, **carry_extras(defaults))

        with error_context("error during getting Loki ingress options"):
            ingress = ask_ingress_with_secret(self.prompter, self.secrets, "Loki", defaults.ingress)

        return LokiSpec(enabled=True, ingress=ingress, **carry_extras(defaults))

    def ask_cluster_output(self, defaults: ClusterOutputSpec) -> ClusterOutputSpec:
        if not ask_enabled(self.prompter, "cluster output", defaults.enabled):
            return ClusterOutputSpec(enabled=False, **carry_extras(defaults))

        current = defaults.provider
        answer = ask_one(
            self.prompter,
            SelectQuestion(
                name="provider",
                message="Select storage provider:",
                options=list(STORAGE_PROVIDER_MENU),
                default=StorageProvider(current.name).display_name,
            ),
        )
        provider = choose(STORAGE_PROVIDER_MENU, answer, "storage provider")

        bucket = ask_one(
            self.prompter,
            InputQuestion(
                name="bucket",
                message="Please provide bucket name:",
                default=current.bucket,
            ),
        )

        # A secret of another provider's kind never matches.
        current_secret = current.secret_id if provider == current.name else ""
        with error_context("error during getting storage provider secret"):
            secret_id = self.secrets.resolve(provider.secret_kind, current_secret, allow_skip=False)

        return ClusterOutputSpec(
            enabled=True,
            provider=OutputProviderSpec(
                name=provider,
                bucket=bucket,
                secret_id=secret_id,
                **carry_extras(current),
            ),
            **carry_extras(defaults),
        )

    def add_details_sections(
        self,
        table: DisplayTable,
        spec: LoggingSpec,
        output: LoggingOutput,
    ) -> None:
        table.add_section(
            "Logging_operator",
            {
                "version": output.logging.operator_version,
                "fluentdVersion": output.logging.fluentd_version,
                "fluentbitVersion": output.logging.fluentbit_version,
                "tls": spec.logging.tls,
                "metrics": spec.logging.metrics,
            },
        )

        if spec.loki.enabled:
            table.add_section("Loki", ingress_component_rows(output.loki, spec.loki.ingress))

        if spec.cluster_output.enabled:
            provider = StorageProvider(spec.cluster_output.provider.name)
            table.add_section(
                "Cluster_output",
                {
                    "provider": provider.display_name,
                    "bucket": spec.cluster_output.provider.bucket,
                    "secretID": spec.cluster_output.provider.secret_id,
                },
            )
