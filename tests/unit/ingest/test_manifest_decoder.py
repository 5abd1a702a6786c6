"""Unit tests for manifest decoding and encoding."""

from __future__ import annotations

import pytest
import yaml

from core.errors import ManifestDecodeError
from ingest.manifest_decoder import decode_components, encode_components
from tests.fixture_paths import fixture_path


def test_decode_components_preserves_document_order() -> None:
    """Decoded objects follow the order of documents in the stream."""
    payload = fixture_path("providers/cluster-api/v0.4.3/core-components.yaml").read_bytes()

    objects = decode_components(payload, "core-components.yaml")

    assert [obj.kind for obj in objects] == [
        "Namespace",
        "CustomResourceDefinition",
        "ClusterRoleBinding",
        "Service",
        "Deployment",
        "Certificate",
        "Issuer",
        "ValidatingWebhookConfiguration",
    ]


def test_decode_components_skips_empty_documents() -> None:
    """Blank documents between separators are ignored."""
    payload = b"---\nkind: Service\nmetadata:\n  name: a\n---\n---\n"

    objects = decode_components(payload, "inline")

    assert len(objects) == 1 and objects[0].name == "a"


def test_decode_components_raises_for_malformed_yaml() -> None:
    """Malformed YAML aborts decoding."""
    payload = fixture_path("manifests/malformed.yaml").read_bytes()

    with pytest.raises(ManifestDecodeError, match="malformed.yaml"):
        decode_components(payload, "malformed.yaml")


def test_decode_components_raises_for_non_mapping_document() -> None:
    """Every document must be a mapping."""
    with pytest.raises(ManifestDecodeError, match="document 0"):
        decode_components(b"- just\n- a list\n", "inline")


def test_decode_components_raises_for_missing_kind() -> None:
    """Documents without a kind are not Kubernetes objects."""
    with pytest.raises(ManifestDecodeError, match="kind"):
        decode_components(b"metadata:\n  name: orphan\n", "inline")


def test_encode_components_emits_parseable_stream() -> None:
    """Encoded streams decode back to the same documents in order."""
    payload = fixture_path("manifests/crd_and_service.yaml").read_bytes()
    objects = decode_components(payload, "crd_and_service.yaml")

    encoded = encode_components(objects)

    documents = list(yaml.safe_load_all(encoded))
    assert [doc["kind"] for doc in documents] == ["CustomResourceDefinition", "Service"]
    assert encoded.count("---\n") == 1


def test_encode_components_is_deterministic() -> None:
    """Key order in the input does not change the output bytes."""
    first = decode_components(b"kind: Service\nmetadata:\n  name: a\n", "inline")
    second = decode_components(b"metadata:\n  name: a\nkind: Service\n", "inline")

    assert encode_components(first) == encode_components(second)


def test_timestamps_survive_decode_and_encode() -> None:
    """Unquoted RFC 3339 timestamps stay strings with their original text."""
    payload = (
        b"apiVersion: v1\nkind: ConfigMap\nmetadata:\n"
        b"  name: stamped\n  creationTimestamp: 2021-06-01T00:00:00Z\n"
        b"data:\n  released: 2021-06-01\n"
    )

    (obj,) = decode_components(payload, "inline")
    encoded = encode_components([obj])

    assert obj.raw_fields["metadata"]["creationTimestamp"] == "2021-06-01T00:00:00Z"
    assert obj.raw_fields["data"]["released"] == "2021-06-01"
    reloaded = yaml.safe_load(encoded)
    assert reloaded["metadata"]["creationTimestamp"] == "2021-06-01T00:00:00Z"
    assert reloaded["data"]["released"] == "2021-06-01"
