"""Manager abstraction every integrated service implements, and its registry.

The orchestrator looks a manager up by service name and drives it without
knowing the concrete service:

    manager = registry.get("monitoring")
    spec = manager.build_activate_request()
    manager.validate_spec(spec)
    client.activate_service(cluster_id, manager.service_name, spec)
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from integrated_services.errors import SchemaMismatch, UnsupportedChoice, error_context
from integrated_services.models import (
    Document,
    IntegratedServiceDetails,
    IntegratedServiceModel,
    ServiceSpecModel,
    ServiceStatus,
    ValidationPolicy,
)
from integrated_services.observability import get_logger
from integrated_services.prompts import Prompter

from .codec import decode_spec, encode_spec, merge_document
from .secrets import SecretResolver
from .table import DisplayTable
from .validation import validate_spec

logger = get_logger(__name__)

SpecT = TypeVar("SpecT", bound=ServiceSpecModel)
OutputT = TypeVar("OutputT", bound=IntegratedServiceModel)


class IntegratedServiceManager(ABC, Generic[SpecT, OutputT]):
    """Builds, validates and displays the spec of one integrated service kind."""

    readable_name: ClassVar[str]
    service_name: ClassVar[str]
    spec_model: ClassVar[type[ServiceSpecModel]]
    output_model: ClassVar[type[IntegratedServiceModel]]

    def __init__(
        self,
        prompter: Prompter,
        secrets: SecretResolver,
        policy: ValidationPolicy | None = None,
    ):
        self.prompter = prompter
        self.secrets = secrets
        self.policy = policy or ValidationPolicy()

    @abstractmethod
    def default_baseline(self) -> SpecT:
        """Defaults offered when the service is activated for the first time."""

    @abstractmethod
    def ask_spec(self, defaults: SpecT) -> dict[str, IntegratedServiceModel]:
        """Walk the question tree and return the built sub-specs by wire key."""

    @abstractmethod
    def add_details_sections(self, table: DisplayTable, spec: SpecT, output: OutputT) -> None:
        """Add the per-component sections of the details table."""

    def decode_spec(self, document: Mapping[str, Any]) -> SpecT:
        """Decode a stored spec document of this service."""
        with error_context("service specification does not conform to schema"):
            return decode_spec(document, self.spec_model, kind=self.service_name)

    def _build(self, defaults: SpecT) -> Document:
        built = self.ask_spec(defaults)
        return {key: encode_spec(sub_spec) for key, sub_spec in built.items()}

    def build_activate_request(self, baseline: SpecT | None = None) -> Document:
        """Build a fresh spec document interactively.

        Keys of the baseline that are not asked about are sent as they are.
        """
        if baseline is None:
            baseline = self.default_baseline()
        return merge_document(encode_spec(baseline), self._build(baseline))

    def build_update_request(self, document: Mapping[str, Any]) -> Document:
        """Rebuild the current spec document interactively.

        Only the keys the question tree covers are replaced; every other
        top-level key of ``document`` is left untouched.
        """
        current = self.decode_spec(document)
        return merge_document(document, self._build(current))

    def validate_spec(self, document: Mapping[str, Any], aggregate: bool = False) -> None:
        """Decode and validate a spec document before it is sent."""
        spec = self.decode_spec(document)
        with error_context(f"invalid {self.readable_name} specification"):
            validate_spec(spec, self.policy, aggregate=aggregate)

    def write_details_table(self, details: IntegratedServiceDetails) -> DisplayTable:
        """Project the live state of the service into a display table.

        Undecodable output or spec degrades to the status-only table.
        """
        table = DisplayTable()
        table.add_section(self.readable_name, {"Status": details.status})

        if details.status == ServiceStatus.INACTIVE.value:
            return table

        try:
            output = decode_spec(details.output, self.output_model, kind=f"{self.service_name} output")
            spec = decode_spec(details.spec, self.spec_model, kind=self.service_name)
        except SchemaMismatch as e:
            logger.warning("Failed to decode service details", service=self.service_name, error=str(e))
            return table

        self.add_details_sections(table, spec, output)
        return table


class ServiceRegistry:
    """Integrated service managers by service name."""

    def __init__(self, managers: list[IntegratedServiceManager] | None = None):
        self._managers: dict[str, IntegratedServiceManager] = {}
        for manager in managers or []:
            self.register(manager)

    def register(self, manager: IntegratedServiceManager) -> None:
        if manager.service_name in self._managers:
            raise ValueError(f"service {manager.service_name!r} is already registered")
        self._managers[manager.service_name] = manager

    def get(self, service_name: str) -> IntegratedServiceManager:
        try:
            return self._managers[service_name]
        except KeyError:
            raise UnsupportedChoice(
                "unknown integrated service",
                service=service_name,
                supported=", ".join(sorted(self._managers)),
            ) from None

    def names(self) -> list[str]:
        return list(self._managers)

    def __iter__(self) -> Iterator[IntegratedServiceManager]:
        return iter(self._managers.values())

    def __contains__(self, service_name: object) -> bool:
        return service_name in self._managers
