"""Provider identity resolution.

This module maps a provider name and type onto the upstream repository
that publishes its release assets, following clusterctl's built-in
provider list and labeling rules.
"""

from __future__ import annotations

from core.errors import ProviderFetchError
from core.types import ProviderIdentity, ProviderSpec, ProviderType

_CLUSTER_API_REPOSITORY = "https://github.com/kubernetes-sigs/cluster-api"

_PROVIDER_REPOSITORIES: dict[tuple[str, ProviderType], str] = {
    ("cluster-api", "CoreProvider"): _CLUSTER_API_REPOSITORY,
    ("kubeadm", "BootstrapProvider"): _CLUSTER_API_REPOSITORY,
    ("kubeadm", "ControlPlaneProvider"): _CLUSTER_API_REPOSITORY,
    ("aws", "InfrastructureProvider"): "https://github.com/kubernetes-sigs/cluster-api-provider-aws",
    ("azure", "InfrastructureProvider"): "https://github.com/kubernetes-sigs/cluster-api-provider-azure",
    ("metal3", "InfrastructureProvider"): "https://github.com/metal3-io/cluster-api-provider-metal3",
    ("gcp", "InfrastructureProvider"): "https://github.com/kubernetes-sigs/cluster-api-provider-gcp",
    ("openstack", "InfrastructureProvider"): (
        "https://github.com/kubernetes-sigs/cluster-api-provider-openstack"
    ),
}

_COMPONENTS_FILE_NAMES: dict[ProviderType, str] = {
    "CoreProvider": "core-components.yaml",
    "InfrastructureProvider": "infrastructure-components.yaml",
    "BootstrapProvider": "bootstrap-components.yaml",
    "ControlPlaneProvider": "control-plane-components.yaml",
}

_LABEL_PREFIXES: dict[ProviderType, str] = {
    "InfrastructureProvider": "infrastructure",
    "BootstrapProvider": "bootstrap",
    "ControlPlaneProvider": "control-plane",
}

DEFAULT_PROVIDERS: tuple[ProviderSpec, ...] = (
    ProviderSpec(name="cluster-api", version="v0.4.3", provider_type="CoreProvider"),
    ProviderSpec(name="aws", version="v0.7.0", provider_type="InfrastructureProvider"),
    ProviderSpec(name="azure", version="v0.5.2", provider_type="InfrastructureProvider"),
    ProviderSpec(name="metal3", version="v0.5.0", provider_type="InfrastructureProvider"),
    ProviderSpec(name="gcp", version="v0.4.0", provider_type="InfrastructureProvider"),
    ProviderSpec(name="openstack", version="v0.4.0", provider_type="InfrastructureProvider"),
)


def resolve_provider(name: str, provider_type: ProviderType) -> ProviderIdentity:
    """Resolve where a provider publishes its release assets.

    Args:
        name: Provider name, e.g. ``aws``.
        provider_type: clusterctl provider type.

    Returns:
        Provider identity with repository URL, components path, and label.

    Raises:
        ProviderFetchError: If the provider is not a known upstream provider.
    """
    repository_url = _PROVIDER_REPOSITORIES.get((name, provider_type))
    if repository_url is None:
        known = ", ".join(f"{key[1]}/{key[0]}" for key in sorted(_PROVIDER_REPOSITORIES))
        raise ProviderFetchError(
            f"Failed to resolve provider {provider_type}/{name}: no upstream repository is "
            f"registered. Known providers: {known}."
        )
    return ProviderIdentity(
        name=name,
        provider_type=provider_type,
        repository_url=repository_url,
        components_path=_COMPONENTS_FILE_NAMES[provider_type],
        manifest_label=build_manifest_label(name, provider_type),
    )


def build_manifest_label(name: str, provider_type: ProviderType) -> str:
    """Build the clusterctl label used to tag a provider's objects.

    Args:
        name: Provider name.
        provider_type: clusterctl provider type.

    Returns:
        ``cluster-api`` for the core provider, otherwise ``<prefix>-<name>``.
    """
    if provider_type == "CoreProvider":
        return "cluster-api"
    return f"{_LABEL_PREFIXES[provider_type]}-{name}"


def select_providers(
    providers: tuple[ProviderSpec, ...],
    names: list[str] | None,
) -> tuple[ProviderSpec, ...]:
    """Filter a provider list by name, preserving declaration order.

    Args:
        providers: Ordered provider list.
        names: Optional provider names to keep. ``None`` keeps everything.

    Returns:
        Selected providers in declaration order.

    Raises:
        ProviderFetchError: If a requested name is not in the list.
    """
    if not names:
        return providers
    known_names = {provider.name for provider in providers}
    unknown = sorted(set(names) - known_names)
    if unknown:
        raise ProviderFetchError(
            f"Unknown provider name(s): {', '.join(unknown)}. "
            f"Choose from: {', '.join(provider.name for provider in providers)}."
        )
    return tuple(provider for provider in providers if provider.name in names)
