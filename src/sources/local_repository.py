"""Local directory source for provider manifests.

Layout follows clusterctl local repositories:
``<root>/<manifest_label>/<version>/<file>``.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import ProviderFetchError
from core.types import ProviderIdentity


class LocalRepository:
    """Read provider release files from an on-disk mirror."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def fetch_file(self, identity: ProviderIdentity, version: str, path: str) -> bytes:
        """Read one release file from the mirror.

        Raises:
            ProviderFetchError: If the file is missing or unreadable.
        """
        file_path = self._root / identity.manifest_label / version / path
        if not file_path.is_file():
            raise ProviderFetchError(
                f"Failed to read {path!r} from provider's repository {identity.manifest_label!r} "
                f"at {version}: {file_path} does not exist."
            )
        try:
            return file_path.read_bytes()
        except OSError as error:
            raise ProviderFetchError(
                f"Failed to read {file_path} for provider {identity.manifest_label!r}: {error}."
            ) from error
