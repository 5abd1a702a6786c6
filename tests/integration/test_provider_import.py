"""Integration tests for importing providers from a local mirror."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest
import yaml

from asset_import import AssetImportClient
from core.config import AssetImportConfig
from core.errors import ProviderFetchError
from tests.fake_repositories import InMemoryRepository, provider_files
from tests.fixture_paths import fixture_path, provider_mirror_root


def _client(tmp_path: Path) -> AssetImportClient:
    config = replace(
        AssetImportConfig.from_env(),
        output_dir=tmp_path,
        local_repository=provider_mirror_root(),
    )
    return AssetImportClient(config)


def _components(path: Path) -> list[dict]:
    config_map = yaml.safe_load(path.read_text(encoding="utf-8"))
    return list(yaml.safe_load_all(config_map["data"]["components"]))


def test_core_and_aws_import_end_to_end(tmp_path: Path) -> None:
    """Mirrored providers are rewritten, filtered, and packaged."""
    client = _client(tmp_path)

    core_path, aws_path = client.import_providers(names=["cluster-api", "aws"])

    core_components = _components(core_path)
    kinds = [doc["kind"] for doc in core_components]
    assert kinds == [
        "CustomResourceDefinition",
        "ClusterRoleBinding",
        "Service",
        "Deployment",
        "ValidatingWebhookConfiguration",
    ]
    service = core_components[2]
    assert service["metadata"]["annotations"] == {
        "service.beta.openshift.io/serving-cert-secret-name": "capi-serving-cert"
    }
    deployment = core_components[3]
    image = deployment["spec"]["template"]["spec"]["containers"][0]["image"]
    assert image == "k8s.gcr.io/cluster-api/cluster-api-controller:v0.4.3"

    aws_services = {
        doc["metadata"]["name"]: doc["metadata"].get("annotations")
        for doc in _components(aws_path)
        if doc["kind"] == "Service"
    }
    assert aws_services == {
        "capa-webhook-service": {
            "service.beta.openshift.io/serving-cert-secret-name": "capa-serving-cert"
        },
        "capa-metrics-service": None,
    }


def test_artifact_config_map_shape(tmp_path: Path) -> None:
    """The written file is a ConfigMap named after the provider version."""
    client = _client(tmp_path)

    (path,) = client.import_providers(names=["aws"])

    config_map = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert path.name == "infrastructure-aws.yaml"
    assert config_map["metadata"] == {
        "labels": {"provider-name": "aws", "provider-type": "infrastructure"},
        "name": "v0.7.0",
        "namespace": "openshift-cluster-api",
    }
    assert set(config_map["data"]) == {"components", "metadata"}


def test_crd_and_service_scenario(tmp_path: Path) -> None:
    """A CRD injecting from ns/my-secret annotates its webhook Service."""
    repository = InMemoryRepository(
        provider_files(
            "cluster-api",
            "v0.4.3",
            "core-components.yaml",
            fixture_path("manifests/crd_and_service.yaml").read_bytes(),
        )
    )
    config = replace(AssetImportConfig.from_env(), output_dir=tmp_path)
    client = AssetImportClient(config, repository=repository)

    (path,) = client.import_providers(names=["cluster-api"])

    crd, service = _components(path)
    assert crd["metadata"]["annotations"] == {
        "service.beta.openshift.io/inject-cabundle": "true"
    }
    assert service["metadata"]["annotations"] == {
        "service.beta.openshift.io/serving-cert-secret-name": "my-secret"
    }


def test_full_default_run_stops_at_first_missing_provider(tmp_path: Path) -> None:
    """The mirror lacks azure, so aws is the last artifact written."""
    client = _client(tmp_path)

    with pytest.raises(ProviderFetchError, match="infrastructure-azure"):
        client.import_providers()

    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "core-cluster-api.yaml",
        "infrastructure-aws.yaml",
    ]
