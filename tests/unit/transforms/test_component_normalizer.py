"""Unit tests for target-namespace normalization."""

from __future__ import annotations

from ingest.manifest_decoder import decode_components
from sources.provider_registry import resolve_provider
from tests.fixture_paths import fixture_path
from transforms.component_normalizer import normalize_components

TARGET = "openshift-cluster-api"


def _normalized_core_components() -> dict[str, dict]:
    payload = fixture_path("providers/cluster-api/v0.4.3/core-components.yaml").read_bytes()
    objects = decode_components(payload, "core-components.yaml")
    identity = resolve_provider("cluster-api", "CoreProvider")
    normalized = normalize_components(objects, identity, TARGET)
    return {obj.kind: dict(obj.raw_fields) for obj in normalized}


def test_namespaced_objects_move_to_target_namespace() -> None:
    """Namespaced kinds take the target namespace; cluster-scoped kinds do not."""
    by_kind = _normalized_core_components()

    assert by_kind["Service"]["metadata"]["namespace"] == TARGET
    assert by_kind["Deployment"]["metadata"]["namespace"] == TARGET
    assert "namespace" not in by_kind["CustomResourceDefinition"]["metadata"]
    assert by_kind["Namespace"]["metadata"]["name"] == TARGET


def test_references_follow_target_namespace() -> None:
    """Webhook services, RBAC subjects, and injection annotations are relocated."""
    by_kind = _normalized_core_components()

    crd = by_kind["CustomResourceDefinition"]
    crd_service = crd["spec"]["conversion"]["webhook"]["clientConfig"]["service"]
    webhook_service = by_kind["ValidatingWebhookConfiguration"]["webhooks"][0]["clientConfig"][
        "service"
    ]
    subject = by_kind["ClusterRoleBinding"]["subjects"][0]

    assert crd_service["namespace"] == TARGET
    assert webhook_service["namespace"] == TARGET
    assert subject["namespace"] == TARGET
    assert crd["metadata"]["annotations"]["cert-manager.io/inject-ca-from"] == (
        f"{TARGET}/capi-serving-cert"
    )


def test_every_object_gets_provider_labels() -> None:
    """All objects are labeled with the clusterctl provider label."""
    by_kind = _normalized_core_components()

    for fields in by_kind.values():
        labels = fields["metadata"]["labels"]
        assert labels["cluster.x-k8s.io/provider"] == "cluster-api"
        assert labels["clusterctl.cluster.x-k8s.io"] == ""


def test_normalize_components_does_not_mutate_inputs() -> None:
    """Input objects keep their upstream namespace."""
    payload = fixture_path("manifests/crd_and_service.yaml").read_bytes()
    objects = decode_components(payload, "crd_and_service.yaml")
    identity = resolve_provider("aws", "InfrastructureProvider")

    normalize_components(objects, identity, TARGET)

    assert objects[1].namespace == "ns"
