"""Tests for the details display table."""

import io

import pytest
from rich.console import Console

from integrated_services.engine import DisplayTable, SecretResolver, render_table
from integrated_services.models import IntegratedServiceDetails
from integrated_services.services.monitoring import MonitoringManager


@pytest.fixture
def manager(prompter, empty_client):
    return MonitoringManager(prompter, SecretResolver(empty_client, prompter))


@pytest.fixture
def active_details(monitoring_document, monitoring_output):
    return IntegratedServiceDetails(status="ACTIVE", spec=monitoring_document, output=monitoring_output)


class TestDisplayTable:
    def test_sections_keep_insertion_order(self):
        """Test sections are listed in the order they were added."""
        table = DisplayTable()
        table.add_section("b", {"x": 1})
        table.add_section("a", {"y": 2})

        assert list(table) == ["b", "a"]
        assert len(table) == 2
        assert "a" in table

    def test_replacing_section_keeps_position(self):
        """Test re-adding a section replaces its rows in place."""
        table = DisplayTable()
        table.add_section("first", {"x": 1})
        table.add_section("second", {"y": 2})
        table.add_section("first", {"x": 3})

        assert table.to_dict() == {"first": {"x": 3}, "second": {"y": 2}}


class TestWriteDetailsTable:
    def test_inactive_shows_status_only(self, manager):
        """Test an inactive service only shows its status."""
        table = manager.write_details_table(IntegratedServiceDetails(status="INACTIVE"))

        assert table.to_dict() == {"Monitoring": {"Status": "INACTIVE"}}

    def test_active_sections(self, manager, active_details):
        """Test enabled components get a section each, disabled ones none."""
        table = manager.write_details_table(active_details)

        assert list(table) == [
            "Monitoring",
            "Alertmanager",
            "Grafana",
            "Prometheus",
            "Prometheus_storage",
            "Exporters",
            "Prometheus_operator",
        ]
        assert table.section("Monitoring") == {"Status": "ACTIVE"}
        assert table.section("Prometheus_operator") == {"version": "0.47.0"}
        assert table.section("Exporters") == {"nodeExporter": True, "kubeStateMetrics": False}

    def test_component_rows(self, manager, active_details):
        """Test a component section combines output and spec values."""
        table = manager.write_details_table(active_details)

        assert table.section("Prometheus") == {
            "url": "https://1.2.3.4/prometheus",
            "version": "2.26.0",
            "serviceUrl": "http://monitor-prometheus.pipeline-system.svc:9090",
            "secretID": "htpasswd-1",
            "path": "/prometheus",
            "domain": "",
        }
        assert table.section("Prometheus_storage") == {"class": "gp2", "size": 50, "retention": "7d"}

    def test_secret_hidden_for_disabled_ingress(self, manager, active_details):
        """Test no secret is shown when the component's ingress is off."""
        table = manager.write_details_table(active_details)

        assert table.section("Alertmanager")["secretID"] == ""

    def test_output_secret_used_without_spec_secret(self, manager, active_details):
        """Test the generated secret is shown when the spec has none."""
        active_details.spec["grafana"]["secretId"] = ""

        table = manager.write_details_table(active_details)

        assert table.section("Grafana")["secretID"] == "generated-grafana"

    def test_spec_secret_wins(self, manager, active_details):
        """Test the operator's secret is preferred over the generated one."""
        table = manager.write_details_table(active_details)

        assert table.section("Grafana")["secretID"] == "grafana-1"

    def test_undecodable_output_degrades_to_status(self, manager, active_details):
        """Test a malformed output document falls back to the status section."""
        active_details.output["grafana"] = {"url": ["not", "a", "string"]}

        table = manager.write_details_table(active_details)

        assert table.to_dict() == {"Monitoring": {"Status": "ACTIVE"}}

    def test_undecodable_spec_degrades_to_status(self, manager, active_details):
        """Test a malformed spec document falls back to the status section."""
        active_details.spec["prometheus"]["storage"]["size"] = "huge"

        table = manager.write_details_table(active_details)

        assert list(table) == ["Monitoring"]

    def test_null_output_shows_spec_sections(self, manager, monitoring_document):
        """Test a missing output document still renders the configured components."""
        details = IntegratedServiceDetails(status="ACTIVE", spec=monitoring_document, output=None)

        table = manager.write_details_table(details)

        assert details.output == {}
        assert table.section("Grafana")["secretID"] == "grafana-1"

    @pytest.mark.parametrize("output", ["ready", ["grafana"], 3])
    def test_non_object_output_degrades_to_status(self, manager, monitoring_document, output):
        """Test an output document that is not an object falls back to the status section."""
        details = IntegratedServiceDetails(status="ACTIVE", spec=monitoring_document, output=output)

        table = manager.write_details_table(details)

        assert table.to_dict() == {"Monitoring": {"Status": "ACTIVE"}}

    def test_pending_status_is_rendered(self, manager, active_details):
        """Test statuses other than active still show the components."""
        active_details.status = "PENDING"

        table = manager.write_details_table(active_details)

        assert table.section("Monitoring") == {"Status": "PENDING"}
        assert "Grafana" in table


class TestRenderTable:
    def test_render(self, manager, active_details):
        """Test every section is printed with a readable title."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=120, force_terminal=False)

        render_table(manager.write_details_table(active_details), console)

        output = buffer.getvalue()
        assert "Prometheus storage" in output
        assert "Prometheus operator" in output
        assert "kubeStateMetrics" in output
        assert "no" in output
        assert "grafana.example.com" in output
