"""Provider repository contract shared by remote and local sources."""

from __future__ import annotations

from typing import Protocol

from core.types import ProviderIdentity


class ProviderRepository(Protocol):
    """Source of a provider's versioned release files."""

    def fetch_file(self, identity: ProviderIdentity, version: str, path: str) -> bytes:
        """Return the raw bytes of one release file.

        Raises:
            ProviderFetchError: If the file cannot be fetched.
        """
        ...
