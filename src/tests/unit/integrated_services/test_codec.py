"""Tests for document <-> typed spec conversion."""

import pytest

from integrated_services.engine import carry_extras, decode_spec, encode_spec, merge_document
from integrated_services.errors import SchemaMismatch
from integrated_services.models import IngressSpecWithSecret
from integrated_services.services.monitoring import (
    MonitoringSpec,
    PagerDutyIntegrationType,
    PushgatewaySpec,
)


class TestDecode:
    def test_decode_full_document(self, monitoring_document):
        """Test decoding a stored monitoring document."""
        spec = decode_spec(monitoring_document, MonitoringSpec)

        assert spec.grafana.secret_id == "grafana-1"
        assert spec.grafana.ingress.domain == "grafana.example.com"
        assert spec.prometheus.storage.storage_class == "gp2"
        assert spec.prometheus.storage.size == 50
        assert spec.alertmanager.provider.slack.channel == "#alerts"
        assert spec.alertmanager.provider.pager_duty.enabled is False
        assert spec.exporters.kube_state_metrics.enabled is False

    def test_keys_match_case_insensitively(self):
        """Test field keys are matched regardless of case."""
        spec = decode_spec(
            {"Grafana": {"Enabled": True, "SecretID": "abc", "INGRESS": {"Path": "/g"}}},
            MonitoringSpec,
        )

        assert spec.grafana.enabled is True
        assert spec.grafana.secret_id == "abc"
        assert spec.grafana.ingress.path == "/g"

    def test_missing_fields_take_defaults(self):
        """Test an empty document decodes into an all-disabled spec."""
        spec = decode_spec({}, MonitoringSpec)

        assert spec.grafana.enabled is False
        assert spec.prometheus.storage.size == 0
        assert spec.alertmanager.provider.pager_duty.integration_type == PagerDutyIntegrationType.PROMETHEUS

    def test_type_mismatch_names_field(self):
        """Test a wrongly typed field is reported with its path."""
        with pytest.raises(SchemaMismatch) as exc_info:
            decode_spec({"prometheus": {"storage": {"size": "lots"}}}, MonitoringSpec, kind="monitoring")

        assert exc_info.value.details["field"] == "prometheus.storage.size"
        assert exc_info.value.details["kind"] == "monitoring"

    def test_unknown_enum_value_is_mismatch(self):
        """Test an integration type outside the enum is rejected."""
        document = {"alertmanager": {"provider": {"pagerDuty": {"integrationType": "webhook"}}}}

        with pytest.raises(SchemaMismatch) as exc_info:
            decode_spec(document, MonitoringSpec)

        assert exc_info.value.details["field"] == "alertmanager.provider.pagerDuty.integrationType"

    def test_non_mapping_document(self):
        """Test a document that is not a mapping fails at the root."""
        with pytest.raises(SchemaMismatch) as exc_info:
            decode_spec(["grafana"], MonitoringSpec)

        assert exc_info.value.details["field"] == "<root>"
        assert exc_info.value.details["kind"] == "MonitoringSpec"


class TestEncode:
    def test_round_trip_is_lossless(self, monitoring_document):
        """Test decoding then encoding reproduces the stored document."""
        spec = decode_spec(monitoring_document, MonitoringSpec)

        assert encode_spec(spec) == monitoring_document

    def test_unknown_keys_survive(self):
        """Test keys the schema does not know are passed through."""
        document = {
            "grafana": {"enabled": True, "theme": "dark"},
            "thanos": {"enabled": True},
        }

        encoded = encode_spec(decode_spec(document, MonitoringSpec))

        assert encoded["grafana"]["theme"] == "dark"
        assert encoded["thanos"] == {"enabled": True}

    def test_disabled_component_only_sends_toggle(self):
        """Test a disabled component drops its nested fields."""
        pushgateway = PushgatewaySpec(
            enabled=False,
            ingress=IngressSpecWithSecret(enabled=True, path="/pushgateway"),
        )

        assert encode_spec(pushgateway) == {"enabled": False}

    def test_disabled_component_keeps_unknown_keys(self):
        """Test unknown keys of a disabled component are still sent."""
        spec = decode_spec({"pushgateway": {"enabled": False, "replicas": 2}}, MonitoringSpec)

        assert encode_spec(spec)["pushgateway"] == {"enabled": False, "replicas": 2}

    def test_wire_keys_are_camel_case(self):
        """Test attribute names are sent under their wire aliases."""
        spec = decode_spec({"prometheus": {"enabled": True, "storage": {"class": "ssd"}}}, MonitoringSpec)

        encoded = encode_spec(spec)

        assert encoded["prometheus"]["storage"]["class"] == "ssd"
        assert encoded["prometheus"]["ingress"]["secretId"] == ""


class TestHelpers:
    def test_merge_replaces_top_level_keys_only(self):
        """Test merging keeps keys the update does not mention."""
        merged = merge_document(
            {"grafana": {"enabled": True}, "thanos": {"enabled": True}},
            {"grafana": {"enabled": False}},
        )

        assert merged == {"grafana": {"enabled": False}, "thanos": {"enabled": True}}

    def test_merge_keeps_stored_key_spelling(self):
        """Test a rebuilt key replaces its case variant under the stored spelling."""
        merged = merge_document(
            {"Grafana": {"enabled": True}, "thanos": {"enabled": True}},
            {"grafana": {"enabled": False}, "pushgateway": {"enabled": False}},
        )

        assert merged == {
            "Grafana": {"enabled": False},
            "thanos": {"enabled": True},
            "pushgateway": {"enabled": False},
        }

    def test_merge_drops_duplicate_case_variants(self):
        """Test only one copy of a rebuilt key is kept."""
        merged = merge_document(
            {"GRAFANA": {"enabled": True}, "grafana": {"enabled": True}},
            {"grafana": {"enabled": False}},
        )

        assert merged == {"GRAFANA": {"enabled": False}}

    def test_merge_does_not_mutate_inputs(self):
        """Test the current document is left untouched."""
        current = {"grafana": {"enabled": True}}

        merge_document(current, {"grafana": {"enabled": False}})

        assert current == {"grafana": {"enabled": True}}

    def test_carry_extras(self):
        """Test only unknown keys are carried over."""
        spec = decode_spec({"grafana": {"enabled": True, "theme": "dark"}}, MonitoringSpec)

        assert carry_extras(spec.grafana) == {"theme": "dark"}
        assert carry_extras(spec.prometheus) == {}
        assert carry_extras(None) == {}
