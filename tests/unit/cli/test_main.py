"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import main
from tests.fixture_paths import provider_mirror_root


def test_cli_providers_lists_default_providers(capsys: pytest.CaptureFixture[str]) -> None:
    """The providers command prints one row per configured provider."""
    exit_code = main(["providers"])
    rows = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert rows[0] == "CoreProvider\tcluster-api\tv0.4.3"
    assert len(rows) == 6


def test_cli_import_from_local_mirror(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Importing a mirrored provider prints its type, name, and artifact path."""
    args = [
        "--output-dir",
        str(tmp_path),
        "--local-repository",
        str(provider_mirror_root()),
        "import",
        "--provider",
        "cluster-api",
    ]

    exit_code = main(args)
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert output == ["CoreProvider cluster-api", str(tmp_path / "core-cluster-api.yaml")]


def test_cli_import_reports_missing_release(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A provider absent from the mirror exits non-zero with the error on stderr."""
    args = [
        "--output-dir",
        str(tmp_path),
        "--local-repository",
        str(provider_mirror_root()),
        "import",
        "--provider",
        "gcp",
    ]

    exit_code = main(args)
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "CoreProvider" not in captured.out and "gcp" in captured.out
    assert "error:" in captured.err and "infrastructure-gcp" in captured.err
    assert list(tmp_path.iterdir()) == []
