"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Sequence
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

from integrated_services.config import get_settings  # noqa: E402
from integrated_services.engine import SecretResolver  # noqa: E402
from integrated_services.errors import BackendRequestError, PromptIOError  # noqa: E402
from integrated_services.models import (  # noqa: E402
    IntegratedServiceDetails,
    SecretItem,
    SecretKind,
)
from integrated_services.prompts import AnyQuestion, SelectQuestion  # noqa: E402


class ScriptedPrompter:
    """Prompter answering from a script keyed by the exact question message.

    A list value answers repeated questions with the same message in order.
    Unscripted questions get their default; a select without a default gets
    its first option. Every asked question is recorded in ``asked``.
    """

    def __init__(self, answers: dict[str, Any] | None = None, fail_on: str | None = None):
        self.answers = {
            message: list(value) if isinstance(value, list) else value
            for message, value in (answers or {}).items()
        }
        self.fail_on = fail_on
        self.asked: list[AnyQuestion] = []

    def ask(self, questions: Sequence[AnyQuestion]) -> dict[str, Any]:
        answers: dict[str, Any] = {}
        for question in questions:
            if question.message == self.fail_on:
                raise PromptIOError("prompt aborted", partial_answers=answers, question=question.message)
            self.asked.append(question)
            answers[question.name] = self._answer(question)
        return answers

    def _answer(self, question: AnyQuestion) -> Any:
        if question.message in self.answers:
            value = self.answers[question.message]
            if isinstance(value, list):
                return value.pop(0)
            return value
        if isinstance(question, SelectQuestion) and question.default is None:
            return question.options[0]
        return question.default

    @property
    def messages(self) -> list[str]:
        return [question.message for question in self.asked]

    def question(self, message: str) -> AnyQuestion:
        """First asked question with ``message``."""
        for question in self.asked:
            if question.message == message:
                return question
        raise AssertionError(f"question {message!r} was never asked")


class FakePipelineClient:
    """In-memory stand-in for PipelineClient recording every call."""

    def __init__(
        self,
        secrets: list[SecretItem] | None = None,
        services: dict[str, IntegratedServiceDetails] | None = None,
    ):
        self.secrets = secrets or []
        self.services = services or {}
        self.fail_secrets = False
        self.calls: list[tuple[str, ...]] = []
        self.sent: dict[str, Any] = {}

    def list_secrets(self, kind: SecretKind | str | None = None) -> list[SecretItem]:
        kind_value = kind.value if isinstance(kind, SecretKind) else kind
        self.calls.append(("list_secrets", kind_value))
        if self.fail_secrets:
            raise BackendRequestError("failed to list secrets: HTTP 500", status_code=500)
        return [secret for secret in self.secrets if not kind_value or secret.type == kind_value]

    def list_services(self, cluster_id: int) -> dict[str, IntegratedServiceDetails]:
        self.calls.append(("list_services", cluster_id))
        return dict(self.services)

    def get_service(self, cluster_id: int, service_name: str) -> IntegratedServiceDetails:
        self.calls.append(("get_service", cluster_id, service_name))
        return self.services.get(service_name, IntegratedServiceDetails())

    def activate_service(self, cluster_id: int, service_name: str, spec: dict) -> None:
        self.calls.append(("activate_service", cluster_id, service_name))
        self.sent[service_name] = spec

    def update_service(self, cluster_id: int, service_name: str, spec: dict) -> None:
        self.calls.append(("update_service", cluster_id, service_name))
        self.sent[service_name] = spec

    def deactivate_service(self, cluster_id: int, service_name: str) -> None:
        self.calls.append(("deactivate_service", cluster_id, service_name))

    def close(self) -> None:
        pass


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests that touch the environment need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_prompter() -> type[ScriptedPrompter]:
    """Factory for prompters with scripted answers."""
    return ScriptedPrompter


@pytest.fixture
def prompter() -> ScriptedPrompter:
    """Prompter accepting every default."""
    return ScriptedPrompter()


@pytest.fixture
def sample_secrets() -> list[SecretItem]:
    """Stored secrets of every kind the builders ask for."""
    return [
        SecretItem(id="grafana-1", name="grafana-admin", type="password"),
        SecretItem(id="htpasswd-1", name="ops-users", type="htpasswd"),
        SecretItem(id="htpasswd-2", name="dev-users", type="htpasswd"),
        SecretItem(id="slack-1", name="alerts-webhook", type="slack"),
        SecretItem(id="pd-1", name="pd-routing-key", type="pagerduty"),
        SecretItem(id="aws-1", name="aws-logs", type="amazon"),
        SecretItem(id="gcs-1", name="gcp-logs", type="google"),
    ]


@pytest.fixture
def make_client() -> type[FakePipelineClient]:
    """Factory for fake backends with custom contents."""
    return FakePipelineClient


@pytest.fixture
def fake_client(sample_secrets: list[SecretItem]) -> FakePipelineClient:
    return FakePipelineClient(secrets=sample_secrets)


@pytest.fixture
def empty_client() -> FakePipelineClient:
    """Backend without any stored secrets."""
    return FakePipelineClient()


@pytest.fixture
def monitoring_document() -> dict[str, Any]:
    """Stored monitoring spec as the backend returns it."""
    return {
        "grafana": {
            "enabled": True,
            "secretId": "grafana-1",
            "dashboards": True,
            "ingress": {"enabled": True, "domain": "grafana.example.com", "path": "/grafana"},
        },
        "prometheus": {
            "enabled": True,
            "storage": {"class": "gp2", "size": 50, "retention": "7d"},
            "ingress": {"enabled": True, "domain": "", "path": "/prometheus", "secretId": "htpasswd-1"},
        },
        "alertmanager": {
            "enabled": True,
            "provider": {
                "slack": {
                    "enabled": True,
                    "channel": "#alerts",
                    "secretId": "slack-1",
                    "sendResolved": True,
                },
                "pagerDuty": {"enabled": False},
            },
            "ingress": {"enabled": False, "domain": "", "path": "", "secretId": ""},
        },
        "pushgateway": {"enabled": False},
        "exporters": {
            "enabled": True,
            "nodeExporter": {"enabled": True},
            "kubeStateMetrics": {"enabled": False},
        },
    }


@pytest.fixture
def monitoring_output() -> dict[str, Any]:
    """Stored monitoring output as the backend returns it."""
    return {
        "grafana": {
            "url": "https://grafana.example.com/grafana",
            "secretId": "generated-grafana",
            "version": "7.5.5",
            "serviceUrl": "http://monitor-grafana.pipeline-system.svc:80",
        },
        "prometheus": {
            "url": "https://1.2.3.4/prometheus",
            "secretId": "generated-prometheus",
            "version": "2.26.0",
            "serviceUrl": "http://monitor-prometheus.pipeline-system.svc:9090",
        },
        "alertmanager": {
            "url": "",
            "secretId": "generated-alertmanager",
            "version": "0.21.0",
            "serviceUrl": "http://monitor-alertmanager.pipeline-system.svc:9093",
        },
        "pushgateway": {},
        "prometheusOperator": {"version": "0.47.0"},
    }


@pytest.fixture
def logging_document() -> dict[str, Any]:
    """Stored logging spec as the backend returns it."""
    return {
        "logging": {"metrics": True, "tls": False},
        "loki": {
            "enabled": True,
            "ingress": {"enabled": True, "domain": "", "path": "/loki", "secretId": "htpasswd-2"},
        },
        "clusterOutput": {
            "enabled": True,
            "provider": {"name": "gcs", "bucket": "cluster-logs", "secretId": "gcs-1"},
        },
    }


@pytest.fixture
def resolver(prompter: ScriptedPrompter, fake_client: FakePipelineClient) -> SecretResolver:
    return SecretResolver(fake_client, prompter)


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "slow: Slow tests")
