"""Asset import exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class AssetImportError(Exception):
    """Base exception for all asset import failures."""


class AssetConfigError(AssetImportError):
    """Raised for invalid runtime configuration."""


class ProviderFetchError(AssetImportError):
    """Raised when provider resolution or a remote file fetch fails."""


class ManifestDecodeError(AssetImportError):
    """Raised for malformed provider manifest payloads."""


class ResolverContractError(AssetImportError):
    """Raised when an annotated object lacks its expected service reference."""


class ArtifactSerializeError(AssetImportError):
    """Raised when an import artifact cannot be serialized."""


class ArtifactWriteError(AssetImportError):
    """Raised when an import artifact cannot be persisted."""
