"""Asset import CLI entry points.

This module exposes commands to import provider assets and list the
configured providers. It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from asset_import import AssetImportClient
from core.config import AssetImportConfig
from core.errors import AssetImportError
from core.logging_config import configure_logging
from core.types import ProviderSpec


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="asset-import",
        description="Import Cluster API provider components as ConfigMap assets",
    )
    parser.add_argument("--output-dir", help="Override ASSET_IMPORT_OUTPUT_DIR for this command")
    parser.add_argument(
        "--local-repository",
        help="Read provider releases from a local mirror instead of GitHub",
    )
    parser.add_argument("--verbose", action="store_true", help="Emit debug log events")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_import_command(subparsers)
    _add_providers_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the asset import CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        client = _build_client(args.output_dir, args.local_repository)
        if args.command == "import":
            return _run_import_command(client, args)
        if args.command == "providers":
            return _run_providers_command(client)
    except AssetImportError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(output_dir: str | None, local_repository: str | None) -> AssetImportClient:
    """Build SDK client with optional path overrides.

    Args:
        output_dir: Optional output directory override.
        local_repository: Optional local mirror override.

    Returns:
        Configured SDK client.
    """
    config = AssetImportConfig.from_env()
    if output_dir:
        config = replace(config, output_dir=Path(output_dir).expanduser().resolve())
    if local_repository:
        config = replace(
            config, local_repository=Path(local_repository).expanduser().resolve()
        )
    return AssetImportClient(config)


def _run_import_command(client: AssetImportClient, args: argparse.Namespace) -> int:
    """Handle import command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    paths = client.import_providers(names=args.provider, on_provider=_print_provider)
    for path in paths:
        print(path)
    return 0


def _run_providers_command(client: AssetImportClient) -> int:
    """Handle providers command."""
    for provider in client.providers:
        print(f"{provider.provider_type}\t{provider.name}\t{provider.version}")
    return 0


def _print_provider(provider: ProviderSpec) -> None:
    print(provider.provider_type, provider.name, flush=True)


def _add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Import provider components into assets")
    parser.add_argument(
        "--provider",
        action="append",
        help="Import only the named provider; repeat for several",
    )


def _add_providers_command(subparsers: Any) -> None:
    """Register providers subcommand."""
    subparsers.add_parser("providers", help="List the providers that will be imported")
