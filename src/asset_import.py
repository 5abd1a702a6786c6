"""Public SDK surface for provider asset import.

This module provides a stable import path for scripted imports.
It re-exports the client, typed models, and default provider list.
"""

from __future__ import annotations

from pathlib import Path

from core.config import AssetImportConfig
from core.types import ImportArtifact, ProviderSpec
from ingest.pipeline import ProviderCallback, import_provider, import_providers
from sources.base import ProviderRepository
from sources.github_repository import GitHubRepository
from sources.local_repository import LocalRepository
from sources.provider_registry import DEFAULT_PROVIDERS, resolve_provider, select_providers


class AssetImportClient:
    """Primary SDK entry point for provider imports."""

    def __init__(
        self,
        config: AssetImportConfig | None = None,
        repository: ProviderRepository | None = None,
        providers: tuple[ProviderSpec, ...] = DEFAULT_PROVIDERS,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            repository: Optional provider source; defaults to the local mirror
                when configured, otherwise GitHub.
            providers: Ordered providers this client imports.
        """
        self._config = config or AssetImportConfig.from_env()
        self._repository = repository or build_repository(self._config)
        self._providers = providers

    @property
    def providers(self) -> tuple[ProviderSpec, ...]:
        return self._providers

    def import_providers(
        self,
        names: list[str] | None = None,
        on_provider: ProviderCallback | None = None,
    ) -> list[Path]:
        """Import all providers, or the named subset, in declaration order.

        Args:
            names: Optional provider names to import.
            on_provider: Optional callback invoked before each provider.

        Returns:
            Written artifact paths.

        Raises:
            AssetImportError: On the first failing provider.
        """
        selected = select_providers(self._providers, names)
        return import_providers(selected, self._repository, self._config, on_provider)

    def import_provider(self, spec: ProviderSpec) -> Path:
        """Import a single provider release."""
        return import_provider(spec, self._repository, self._config)


def build_repository(config: AssetImportConfig) -> ProviderRepository:
    """Choose the provider source described by configuration."""
    if config.local_repository is not None:
        return LocalRepository(config.local_repository)
    return GitHubRepository.from_config(config)


__all__ = [
    "AssetImportClient",
    "AssetImportConfig",
    "DEFAULT_PROVIDERS",
    "GitHubRepository",
    "ImportArtifact",
    "LocalRepository",
    "ProviderSpec",
    "build_repository",
    "resolve_provider",
]
