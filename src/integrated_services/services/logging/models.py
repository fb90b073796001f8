"""Logging spec and output models.

Wire shape of the spec:

    {
        "logging": {"metrics", "tls"},
        "loki": {"enabled", "ingress"},
        "clusterOutput": {"enabled", "provider": {"name", "bucket", "secretId"}},
    }
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import Field

from integrated_services.models import (
    ComponentSpec,
    IngressSpecWithSecret,
    IntegratedServiceModel,
    OutputItems,
    SecretKind,
    ServiceSpecModel,
    ValidationPolicy,
)


class StorageProvider(str, Enum):
    """Object storage providers cluster logs can be shipped to."""

    AMAZON_S3 = "s3"
    GOOGLE_GCS = "gcs"
    ALIBABA_OSS = "oss"
    AZURE_BLOB = "azure"

    @property
    def display_name(self) -> str:
        return STORAGE_PROVIDER_NAMES[self]

    @property
    def secret_kind(self) -> SecretKind:
        return STORAGE_PROVIDER_SECRETS[self]


STORAGE_PROVIDER_NAMES: dict[StorageProvider, str] = {
    StorageProvider.AMAZON_S3: "Amazon S3",
    StorageProvider.GOOGLE_GCS: "Google Cloud Storage",
    StorageProvider.ALIBABA_OSS: "Alibaba Object Storage",
    StorageProvider.AZURE_BLOB: "Azure Blob Storage",
}

STORAGE_PROVIDER_SECRETS: dict[StorageProvider, SecretKind] = {
    StorageProvider.AMAZON_S3: SecretKind.AMAZON,
    StorageProvider.GOOGLE_GCS: SecretKind.GOOGLE,
    StorageProvider.ALIBABA_OSS: SecretKind.ALIBABA,
    StorageProvider.AZURE_BLOB: SecretKind.AZURE,
}


class LoggingOperatorSpec(IntegratedServiceModel):
    metrics: bool = False
    tls: bool = False


class LokiSpec(ComponentSpec):
    ingress: IngressSpecWithSecret = Field(default_factory=IngressSpecWithSecret)


class OutputProviderSpec(IntegratedServiceModel):
    name: StorageProvider = StorageProvider.AMAZON_S3
    bucket: str = ""
    secret_id: str = ""


class ClusterOutputSpec(ComponentSpec):
    provider: OutputProviderSpec = Field(default_factory=OutputProviderSpec)


class LoggingSpec(ServiceSpecModel):
    """Spec of the logging integrated service."""

    logging: LoggingOperatorSpec = Field(default_factory=LoggingOperatorSpec)
    loki: LokiSpec = Field(default_factory=LokiSpec)
    cluster_output: ClusterOutputSpec = Field(default_factory=ClusterOutputSpec)

    def iter_violations(self, policy: ValidationPolicy) -> Iterator[str]:
        if self.loki.enabled:
            yield from self.loki.ingress.iter_violations("Loki", policy)

        if self.cluster_output.enabled:
            provider = self.cluster_output.provider
            if not provider.bucket:
                yield "cluster output requires a bucket name"
            if not provider.secret_id:
                yield "cluster output requires a provider secret"


class LoggingOperatorOutput(IntegratedServiceModel):
    operator_version: str = ""
    fluentd_version: str = ""
    fluentbit_version: str = ""


class LoggingOutput(IntegratedServiceModel):
    """Backend-reported state of the logging components."""

    logging: LoggingOperatorOutput = Field(default_factory=LoggingOperatorOutput)
    loki: OutputItems = Field(default_factory=OutputItems)
