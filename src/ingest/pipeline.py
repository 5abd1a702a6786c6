"""Provider import orchestration.

This module runs fetch, decode, normalize, resolve, rewrite, and write
for each provider in declaration order. The first failure stops the run;
artifacts written for earlier providers stay on disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from core.config import AssetImportConfig
from core.constants import METADATA_FILE_NAME
from core.errors import AssetImportError
from core.logging_config import get_logger
from core.types import ProviderIdentity, ProviderSpec, RawBundle
from ingest.manifest_decoder import decode_components
from sources.base import ProviderRepository
from sources.provider_registry import resolve_provider
from store.artifact_writer import build_artifact, write_artifact
from transforms.cert_references import find_cert_secret_names
from transforms.component_normalizer import normalize_components
from transforms.object_rewrite import rewrite_components
from transforms.typed_views import DEFAULT_VIEW_REGISTRY, ViewRegistry

_LOGGER = get_logger(__name__)

ProviderCallback = Callable[[ProviderSpec], None]


def import_providers(
    providers: Iterable[ProviderSpec],
    repository: ProviderRepository,
    config: AssetImportConfig,
    on_provider: ProviderCallback | None = None,
) -> list[Path]:
    """Import every provider in order, stopping at the first failure.

    Args:
        providers: Ordered providers to import.
        repository: Source of provider release files.
        config: Runtime configuration.
        on_provider: Optional callback invoked before each provider starts.

    Returns:
        Written artifact paths, in provider order.

    Raises:
        AssetImportError: The first failure, unchanged.
    """
    written: list[Path] = []
    for spec in providers:
        if on_provider is not None:
            on_provider(spec)
        written.append(import_provider(spec, repository, config))
    return written


def import_provider(
    spec: ProviderSpec,
    repository: ProviderRepository,
    config: AssetImportConfig,
    views: ViewRegistry = DEFAULT_VIEW_REGISTRY,
) -> Path:
    """Import one provider release into an artifact file.

    Args:
        spec: Provider to import.
        repository: Source of provider release files.
        config: Runtime configuration.
        views: View decoders handed to the certificate resolver.

    Returns:
        Path of the written artifact.

    Raises:
        AssetImportError: If any stage fails.
    """
    _LOGGER.info(
        "provider_import_started",
        provider=spec.name,
        provider_type=spec.provider_type,
        version=spec.version,
    )
    try:
        identity = resolve_provider(spec.name, spec.provider_type)
        bundle = fetch_bundle(identity, spec.version, repository)
        source = f"{identity.manifest_label}@{spec.version}/{identity.components_path}"
        objects = decode_components(bundle.components_bytes, source)
        objects = normalize_components(objects, identity, config.target_namespace)
        cert_secret_names = find_cert_secret_names(objects, views)
        final_objects = rewrite_components(objects, cert_secret_names)
        artifact = build_artifact(
            spec, bundle.metadata_bytes, final_objects, config.target_namespace
        )
        artifact_path = write_artifact(artifact, config.output_dir)
    except AssetImportError as error:
        _LOGGER.error(
            "provider_import_failed",
            provider=spec.name,
            provider_type=spec.provider_type,
            version=spec.version,
            error=str(error),
        )
        raise
    _LOGGER.info(
        "provider_import_completed",
        provider=spec.name,
        provider_type=spec.provider_type,
        version=spec.version,
        object_count=len(final_objects),
        path=str(artifact_path),
    )
    return artifact_path


def fetch_bundle(
    identity: ProviderIdentity,
    version: str,
    repository: ProviderRepository,
) -> RawBundle:
    """Fetch the metadata and components files of one provider release."""
    metadata_bytes = repository.fetch_file(identity, version, METADATA_FILE_NAME)
    components_bytes = repository.fetch_file(identity, version, identity.components_path)
    _LOGGER.info(
        "provider_fetched",
        provider=identity.manifest_label,
        version=version,
        metadata_size=len(metadata_bytes),
        components_size=len(components_bytes),
    )
    return RawBundle(metadata_bytes=metadata_bytes, components_bytes=components_bytes)
