"""Import artifact packaging and persistence.

This module wraps a provider's metadata and transformed components into
a ConfigMap keyed by provider version and writes it atomically to a file
named after the provider type and name.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

import yaml

from core.constants import (
    ARTIFACT_COMPONENTS_KEY,
    ARTIFACT_FILE_MODE,
    ARTIFACT_FILE_SUFFIX,
    ARTIFACT_METADATA_KEY,
    ARTIFACT_PROVIDER_NAME_LABEL,
    ARTIFACT_PROVIDER_TYPE_LABEL,
)
from core.errors import ArtifactSerializeError, ArtifactWriteError
from core.logging_config import get_logger
from core.types import DecodedObject, ImportArtifact, ProviderSpec
from ingest.manifest_decoder import dump_yaml_document, encode_components

_LOGGER = get_logger(__name__)


def build_artifact(
    spec: ProviderSpec,
    metadata_bytes: bytes,
    objects: Iterable[DecodedObject],
    target_namespace: str,
) -> ImportArtifact:
    """Package transformed components into an import artifact.

    Args:
        spec: Provider being imported.
        metadata_bytes: Raw upstream ``metadata.yaml`` content.
        objects: Final transformed component set.
        target_namespace: Namespace of the resulting ConfigMap.

    Returns:
        Import artifact keyed by provider version.

    Raises:
        ArtifactSerializeError: If metadata is not UTF-8 or components
            cannot be rendered.
    """
    try:
        metadata_payload = metadata_bytes.decode("utf-8")
    except UnicodeDecodeError as error:
        raise ArtifactSerializeError(
            f"Failed to package metadata for {spec.provider_type} {spec.name}: "
            f"payload is not UTF-8 ({error})."
        ) from error
    try:
        components_payload = encode_components(objects)
    except yaml.YAMLError as error:
        raise ArtifactSerializeError(
            f"Failed to serialize components for {spec.provider_type} {spec.name}: {error}."
        ) from error
    return ImportArtifact(
        version_key=spec.version,
        namespace_label=target_namespace,
        provider_name=spec.name,
        provider_type_label=spec.type_label,
        metadata_payload=metadata_payload,
        components_payload=components_payload,
    )


def serialize_artifact(artifact: ImportArtifact) -> str:
    """Render an import artifact as a ConfigMap YAML document.

    Raises:
        ArtifactSerializeError: If the document cannot be rendered.
    """
    try:
        return dump_yaml_document(artifact_to_config_map(artifact))
    except yaml.YAMLError as error:
        raise ArtifactSerializeError(
            f"Failed to serialize artifact {artifact.provider_type_label}-"
            f"{artifact.provider_name} {artifact.version_key}: {error}."
        ) from error


def artifact_to_config_map(artifact: ImportArtifact) -> dict[str, Any]:
    """Build the ConfigMap mapping for an import artifact."""
    return {
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": {
            "name": artifact.version_key,
            "namespace": artifact.namespace_label,
            "labels": {
                ARTIFACT_PROVIDER_NAME_LABEL: artifact.provider_name,
                ARTIFACT_PROVIDER_TYPE_LABEL: artifact.provider_type_label,
            },
        },
        "data": {
            ARTIFACT_METADATA_KEY: artifact.metadata_payload,
            ARTIFACT_COMPONENTS_KEY: artifact.components_payload,
        },
    }


def artifact_file_name(provider_type_label: str, provider_name: str) -> str:
    """Build the deterministic artifact file name, e.g. ``infrastructure-aws.yaml``."""
    return f"{provider_type_label}-{provider_name}{ARTIFACT_FILE_SUFFIX}".lower()


def write_artifact(artifact: ImportArtifact, output_dir: Path) -> Path:
    """Serialize an artifact and atomically replace its output file.

    Args:
        artifact: Artifact to persist.
        output_dir: Directory receiving artifact files.

    Returns:
        Path of the written artifact file.

    Raises:
        ArtifactSerializeError: If serialization fails.
        ArtifactWriteError: If the file cannot be written.
    """
    payload = serialize_artifact(artifact).encode("utf-8")
    target_path = output_dir / artifact_file_name(
        artifact.provider_type_label, artifact.provider_name
    )
    try:
        _atomic_write_bytes(target_path, payload)
    except OSError as error:
        raise ArtifactWriteError(
            f"Failed to write artifact {target_path}: {error}. "
            "Check that the output directory is writable."
        ) from error
    _LOGGER.info("artifact_written", path=str(target_path), size=len(payload))
    return target_path


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write bytes through a sibling temp file so readers never see partial output."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_path, ARTIFACT_FILE_MODE)
        os.replace(temp_path, path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
