"""Runtime configuration model for asset import.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TARGET_NAMESPACE,
)
from core.errors import AssetConfigError


@dataclass(frozen=True)
class AssetImportConfig:
    """Validated runtime configuration.

    Attributes:
        output_dir: Directory that receives one artifact file per provider.
        target_namespace: Namespace the imported components are installed into.
        local_repository: Optional on-disk provider mirror used instead of GitHub.
        http_timeout: Timeout in seconds for each remote fetch.
        github_token: Optional token sent to GitHub to raise rate limits.
    """

    output_dir: Path
    target_namespace: str
    local_repository: Path | None
    http_timeout: float
    github_token: str | None

    @classmethod
    def from_env(cls) -> "AssetImportConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            AssetConfigError: If environment values are invalid.
        """
        output_dir_value = os.getenv("ASSET_IMPORT_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))
        target_namespace = os.getenv("ASSET_IMPORT_TARGET_NAMESPACE", DEFAULT_TARGET_NAMESPACE)
        local_repository_value = os.getenv("ASSET_IMPORT_LOCAL_REPOSITORY")
        timeout_value = os.getenv("ASSET_IMPORT_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        github_token = os.getenv("GITHUB_TOKEN") or None
        if not target_namespace.strip():
            raise AssetConfigError(
                "Invalid ASSET_IMPORT_TARGET_NAMESPACE value: expected a non-empty namespace. "
                "Unset the variable to use the default namespace."
            )
        local_repository = None
        if local_repository_value:
            local_repository = Path(local_repository_value).expanduser().resolve()
        return cls(
            output_dir=Path(output_dir_value).expanduser().resolve(),
            target_namespace=target_namespace.strip(),
            local_repository=local_repository,
            http_timeout=_parse_http_timeout(timeout_value),
            github_token=github_token,
        )


def _parse_http_timeout(raw_value: str) -> float:
    """Parse the HTTP timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive timeout in seconds.

    Raises:
        AssetConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise AssetConfigError(
            "Invalid ASSET_IMPORT_HTTP_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set ASSET_IMPORT_HTTP_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise AssetConfigError(
            f"Invalid ASSET_IMPORT_HTTP_TIMEOUT value: expected a positive number, got {timeout}."
        )
    return timeout
