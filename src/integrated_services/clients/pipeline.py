"""Pipeline API client for integrated services and secrets.

Every call blocks; there are no retries. A failed call raises
``BackendRequestError`` and the operator re-issues the command.
"""

from __future__ import annotations

import time
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from integrated_services.config import PipelineSettings
from integrated_services.errors import BackendRequestError
from integrated_services.models import (
    Document,
    IntegratedServiceDetails,
    SecretItem,
    SecretKind,
)
from integrated_services.observability import (
    get_logger,
    log_external_call_end,
    log_external_call_start,
)

logger = get_logger(__name__)

T = TypeVar("T")

_DETAILS = TypeAdapter(IntegratedServiceDetails)
_SERVICES = TypeAdapter(dict[str, IntegratedServiceDetails])
_SECRETS = TypeAdapter(list[SecretItem])


class PipelineClient:
    """Client for the Pipeline integrated service and secret APIs."""

    def __init__(
        self,
        base_url: str,
        organization_id: int,
        token: str | None = None,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.organization_id = organization_id

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout, connect=5.0),
            verify=verify,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: PipelineSettings) -> PipelineClient:
        """Build a client from the ``PIPELINE_*`` settings."""
        return cls(
            base_url=settings.url,
            organization_id=settings.organization_id,
            token=settings.token or None,
            timeout=settings.timeout_seconds,
            verify=settings.verify_tls,
        )

    def _services_path(self, cluster_id: int) -> str:
        return f"/api/v1/orgs/{self.organization_id}/clusters/{cluster_id}/services"

    def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, raising BackendRequestError on any failure."""
        log_external_call_start(logger, "pipeline", operation)
        start = time.monotonic()

        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_external_call_end(
                logger, "pipeline", operation, False, (time.monotonic() - start) * 1000, str(e)
            )
            raise BackendRequestError(
                f"failed to {operation}: {e}", operation=operation
            ) from e

        duration_ms = (time.monotonic() - start) * 1000
        if response.is_error:
            message = _error_message(response)
            log_external_call_end(logger, "pipeline", operation, False, duration_ms, message)
            raise BackendRequestError(
                f"failed to {operation}: {message}",
                status_code=response.status_code,
                operation=operation,
            )

        log_external_call_end(logger, "pipeline", operation, True, duration_ms)
        return response

    def _parse(self, operation: str, response: httpx.Response, adapter: TypeAdapter[T]) -> T:
        """Validate a response body, raising BackendRequestError when its shape is unexpected."""
        try:
            return adapter.validate_json(response.content)
        except ValidationError as e:
            logger.warning("Unexpected response body", operation=operation, errors=e.error_count())
            raise BackendRequestError(
                f"failed to {operation}: unexpected response",
                status_code=response.status_code,
                operation=operation,
                reason=e.errors()[0]["msg"],
            ) from e

    def list_services(self, cluster_id: int) -> dict[str, IntegratedServiceDetails]:
        """List integrated services of a cluster keyed by service name."""
        operation = "list integrated services"
        response = self._request(operation, "GET", self._services_path(cluster_id))
        return self._parse(operation, response, _SERVICES)

    def get_service(self, cluster_id: int, service_name: str) -> IntegratedServiceDetails:
        """Get status, spec and output of one integrated service."""
        operation = f"get {service_name} details"
        response = self._request(operation, "GET", f"{self._services_path(cluster_id)}/{service_name}")
        return self._parse(operation, response, _DETAILS)

    def activate_service(self, cluster_id: int, service_name: str, spec: Document) -> None:
        """Activate an integrated service with a fresh spec."""
        self._request(
            f"activate {service_name}",
            "POST",
            f"{self._services_path(cluster_id)}/{service_name}",
            json={"spec": spec},
        )
        logger.info("Integrated service activation requested", service=service_name, cluster_id=cluster_id)

    def update_service(self, cluster_id: int, service_name: str, spec: Document) -> None:
        """Replace the spec of an active integrated service."""
        self._request(
            f"update {service_name}",
            "PUT",
            f"{self._services_path(cluster_id)}/{service_name}",
            json={"spec": spec},
        )
        logger.info("Integrated service update requested", service=service_name, cluster_id=cluster_id)

    def deactivate_service(self, cluster_id: int, service_name: str) -> None:
        """Deactivate an integrated service."""
        self._request(
            f"deactivate {service_name}",
            "DELETE",
            f"{self._services_path(cluster_id)}/{service_name}",
        )
        logger.info("Integrated service deactivation requested", service=service_name, cluster_id=cluster_id)

    def list_secrets(self, kind: SecretKind | str | None = None) -> list[SecretItem]:
        """List stored secrets of the organization, optionally filtered by kind.

        Only identifiers, names and types are returned.
        """
        params = {}
        if kind:
            params["type"] = kind.value if isinstance(kind, SecretKind) else kind

        response = self._request(
            "list secrets",
            "GET",
            f"/api/v1/orgs/{self.organization_id}/secrets",
            params=params,
        )
        return self._parse("list secrets", response, _SECRETS)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()


def _error_message(response: httpx.Response) -> str:
    """Extract the backend's error message, falling back to the status line."""
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or f"HTTP {response.status_code}")
    return f"HTTP {response.status_code}"
