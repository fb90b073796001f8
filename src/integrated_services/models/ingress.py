"""Ingress sub-spec shared by every exposable component."""

from collections.abc import Iterator

from .base import IntegratedServiceModel, ValidationPolicy


class BaseIngressSpec(IntegratedServiceModel):
    """Externally reachable endpoint of a component."""

    enabled: bool = False
    domain: str = ""  # empty means the cluster's IP
    path: str = ""

    def iter_violations(self, component: str, policy: ValidationPolicy) -> Iterator[str]:
        if not self.enabled:
            return
        if not self.path:
            yield f"{component} ingress path is required"
        elif not self.path.startswith("/"):
            yield f"{component} ingress path must start with '/'"


class IngressSpecWithSecret(BaseIngressSpec):
    """Ingress protected by an htpasswd secret."""

    secret_id: str = ""

    def iter_violations(self, component: str, policy: ValidationPolicy) -> Iterator[str]:
        yield from super().iter_violations(component, policy)
        if self.enabled and policy.require_ingress_auth and not self.secret_id:
            yield f"{component} ingress requires an htpasswd secret"
