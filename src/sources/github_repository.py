"""GitHub release asset source for provider manifests.

This module downloads provider release files from GitHub releases.
Failures are reported with provider, version, and path context and
are never retried.
"""

from __future__ import annotations

from urllib.parse import urlparse

import requests

from core.config import AssetImportConfig
from core.constants import GITHUB_BASE_URL
from core.errors import ProviderFetchError
from core.logging_config import get_logger
from core.types import ProviderIdentity

_LOGGER = get_logger(__name__)
_USER_AGENT = "provider-asset-import/0.1"


class GitHubRepository:
    """Fetch provider release assets from ``github.com`` releases."""

    def __init__(
        self,
        timeout: float,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

    @classmethod
    def from_config(cls, config: AssetImportConfig) -> "GitHubRepository":
        """Build a repository client from runtime configuration."""
        return cls(timeout=config.http_timeout, token=config.github_token)

    def fetch_file(self, identity: ProviderIdentity, version: str, path: str) -> bytes:
        """Download one release asset.

        Args:
            identity: Resolved provider identity.
            version: Release tag.
            path: Release asset name.

        Returns:
            Raw asset bytes.

        Raises:
            ProviderFetchError: If the request fails or returns a non-2xx status.
        """
        url = build_release_asset_url(identity, version, path)
        try:
            response = self._session.get(url, timeout=self._timeout, allow_redirects=True)
        except requests.RequestException as error:
            raise ProviderFetchError(
                f"Failed to read {path!r} from provider's repository {identity.manifest_label!r} "
                f"at {version}: {error}. Check network access to {GITHUB_BASE_URL}."
            ) from error
        if response.status_code == 404:
            raise ProviderFetchError(
                f"Failed to read {path!r} from provider's repository {identity.manifest_label!r}: "
                f"release {version} has no such asset ({url})."
            )
        if not response.ok:
            raise ProviderFetchError(
                f"Failed to read {path!r} from provider's repository {identity.manifest_label!r} "
                f"at {version}: HTTP {response.status_code} from {url}."
            )
        _LOGGER.debug("release_asset_downloaded", url=url, size=len(response.content))
        return response.content


def build_release_asset_url(identity: ProviderIdentity, version: str, path: str) -> str:
    """Build the download URL for a release asset.

    Args:
        identity: Resolved provider identity.
        version: Release tag.
        path: Release asset name.

    Returns:
        Asset download URL.

    Raises:
        ProviderFetchError: If the repository URL is not a GitHub repository.
    """
    parsed = urlparse(identity.repository_url)
    parts = [part for part in parsed.path.split("/") if part]
    if parsed.netloc != urlparse(GITHUB_BASE_URL).netloc or len(parts) != 2:
        raise ProviderFetchError(
            f"Invalid repository URL for provider {identity.manifest_label!r}: "
            f"{identity.repository_url}. Expected https://github.com/<owner>/<repo>."
        )
    owner, repo = parts
    return f"{GITHUB_BASE_URL}/{owner}/{repo}/releases/download/{version}/{path}"
