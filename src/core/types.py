"""Shared typed models.

This module defines immutable data models used by the provider sources,
the manifest transforms, and the artifact writer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

ProviderType = Literal[
    "CoreProvider",
    "InfrastructureProvider",
    "BootstrapProvider",
    "ControlPlaneProvider",
]
SUPPORTED_PROVIDER_TYPES: tuple[ProviderType, ...] = (
    "CoreProvider",
    "InfrastructureProvider",
    "BootstrapProvider",
    "ControlPlaneProvider",
)

CertSecretMap = dict[str, str]


@dataclass(frozen=True)
class ProviderSpec:
    """One upstream provider release to import.

    Attributes:
        name: Provider name, e.g. ``aws``.
        version: Release tag, e.g. ``v0.7.0``.
        provider_type: clusterctl provider type.
    """

    name: str
    version: str
    provider_type: ProviderType

    @property
    def type_label(self) -> str:
        """Lower-cased provider type without the ``provider`` suffix."""
        return self.provider_type.lower().replace("provider", "")


@dataclass(frozen=True)
class ProviderIdentity:
    """Resolved location of a provider's published release assets.

    Attributes:
        name: Provider name.
        provider_type: clusterctl provider type.
        repository_url: Upstream GitHub repository URL.
        components_path: Release asset holding the components manifest.
        manifest_label: clusterctl label identifying the provider.
    """

    name: str
    provider_type: ProviderType
    repository_url: str
    components_path: str
    manifest_label: str


@dataclass(frozen=True)
class RawBundle:
    """Raw release files fetched for one provider version."""

    metadata_bytes: bytes
    components_bytes: bytes


@dataclass(frozen=True)
class DecodedObject:
    """One Kubernetes-style object from a component set.

    Attributes:
        raw_fields: Complete parsed document. Treat as read-only; transforms
            work on copies.
    """

    raw_fields: Mapping[str, Any]

    @property
    def kind(self) -> str:
        return str(self.raw_fields.get("kind") or "")

    @property
    def name(self) -> str:
        return str(self._metadata.get("name") or "")

    @property
    def namespace(self) -> str:
        return str(self._metadata.get("namespace") or "")

    @property
    def labels(self) -> Mapping[str, str]:
        return dict(self._metadata.get("labels") or {})

    @property
    def annotations(self) -> Mapping[str, str]:
        return dict(self._metadata.get("annotations") or {})

    @property
    def _metadata(self) -> Mapping[str, Any]:
        metadata = self.raw_fields.get("metadata")
        if isinstance(metadata, Mapping):
            return metadata
        return {}


@dataclass(frozen=True)
class ImportArtifact:
    """Packaged output for one provider version.

    Attributes:
        version_key: Provider version, used as the ConfigMap name.
        namespace_label: Namespace the ConfigMap belongs to.
        provider_name: Provider name label value.
        provider_type_label: Stripped, lower-cased provider type label value.
        metadata_payload: Upstream ``metadata.yaml`` content.
        components_payload: Re-serialized transformed components.
    """

    version_key: str
    namespace_label: str
    provider_name: str
    provider_type_label: str
    metadata_payload: str
    components_payload: str
