"""Target-namespace and label normalization for provider components.

This module applies the clusterctl component processing rules: namespaced
objects move into the target namespace, cross-object references follow
them, and every object is labeled with its provider.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable

from core.constants import (
    CERT_MANAGER_INJECT_CA_ANNOTATION,
    CLUSTER_ROLE_BINDING_KIND,
    CLUSTER_SCOPED_KINDS,
    CLUSTERCTL_LABEL,
    CLUSTERCTL_PROVIDER_LABEL,
    CRD_KIND,
    MUTATING_WEBHOOK_KIND,
    NAMESPACE_KIND,
    SERVICE_ACCOUNT_KIND,
    VALIDATING_WEBHOOK_KIND,
)
from core.types import DecodedObject, ProviderIdentity


def normalize_components(
    objects: Iterable[DecodedObject],
    identity: ProviderIdentity,
    target_namespace: str,
) -> tuple[DecodedObject, ...]:
    """Relocate a component set into the target namespace and label it.

    Args:
        objects: Decoded component set.
        identity: Provider identity supplying the manifest label.
        target_namespace: Namespace the components are installed into.

    Returns:
        Normalized copies of the objects, in input order.
    """
    return tuple(
        _normalize_object(obj, identity.manifest_label, target_namespace) for obj in objects
    )


def _normalize_object(obj: DecodedObject, manifest_label: str, namespace: str) -> DecodedObject:
    fields = copy.deepcopy(dict(obj.raw_fields))
    metadata = _mapping_at(fields, "metadata")
    kind = obj.kind
    if kind == NAMESPACE_KIND:
        metadata["name"] = namespace
    elif kind not in CLUSTER_SCOPED_KINDS:
        metadata["namespace"] = namespace
    if kind == CLUSTER_ROLE_BINDING_KIND:
        _fix_service_account_subjects(fields, namespace)
    elif kind in (MUTATING_WEBHOOK_KIND, VALIDATING_WEBHOOK_KIND):
        for webhook in fields.get("webhooks") or []:
            if isinstance(webhook, dict):
                _fix_service_reference(webhook.get("clientConfig"), namespace)
    elif kind == CRD_KIND:
        webhook = ((fields.get("spec") or {}).get("conversion") or {}).get("webhook") or {}
        _fix_service_reference(webhook.get("clientConfig"), namespace)
    _fix_injection_namespace(metadata, namespace)
    labels = _mapping_at(metadata, "labels")
    labels[CLUSTERCTL_LABEL] = ""
    labels[CLUSTERCTL_PROVIDER_LABEL] = manifest_label
    return DecodedObject(raw_fields=fields)


def _fix_service_account_subjects(fields: dict[str, Any], namespace: str) -> None:
    for subject in fields.get("subjects") or []:
        if isinstance(subject, dict) and subject.get("kind") == SERVICE_ACCOUNT_KIND:
            subject["namespace"] = namespace


def _fix_service_reference(client_config: Any, namespace: str) -> None:
    if not isinstance(client_config, dict):
        return
    service = client_config.get("service")
    if isinstance(service, dict):
        service["namespace"] = namespace


def _fix_injection_namespace(metadata: dict[str, Any], namespace: str) -> None:
    annotations = metadata.get("annotations")
    if not isinstance(annotations, dict):
        return
    value = annotations.get(CERT_MANAGER_INJECT_CA_ANNOTATION)
    if not isinstance(value, str) or "/" not in value:
        return
    _, secret_name = value.split("/", 1)
    annotations[CERT_MANAGER_INJECT_CA_ANNOTATION] = f"{namespace}/{secret_name}"


def _mapping_at(parent: dict[str, Any], key: str) -> dict[str, Any]:
    value = parent.get(key)
    if not isinstance(value, dict):
        value = {}
        parent[key] = value
    return value
