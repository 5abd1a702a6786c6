"""Kind-dispatched rewrite of provider components.

Each kind maps onto one rewrite policy. Policies return a rewritten copy
of the object, or ``None`` to drop it. Kinds without an entry pass through.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Literal

from core.constants import (
    CERT_MANAGER_INJECT_CA_ANNOTATION,
    CERTIFICATE_KIND,
    CRD_KIND,
    DEPLOYMENT_KIND,
    ISSUER_KIND,
    MUTATING_WEBHOOK_KIND,
    NAMESPACE_KIND,
    SERVICE_CA_INJECT_BUNDLE_ANNOTATION,
    SERVICE_CA_SERVING_SECRET_ANNOTATION,
    SERVICE_KIND,
    VALIDATING_WEBHOOK_KIND,
)
from core.logging_config import get_logger
from core.types import CertSecretMap, DecodedObject
from transforms.cert_references import injection_source

_LOGGER = get_logger(__name__)

RewritePolicy = Literal["inject-cabundle", "serving-cert", "drop", "pass"]
PolicyHandler = Callable[[DecodedObject, CertSecretMap], DecodedObject | None]

# TODO: Deployment images still point at upstream registries; rewrite them to
# OpenShift-built images once an image mapping source exists.
KIND_POLICIES: dict[str, RewritePolicy] = {
    CRD_KIND: "inject-cabundle",
    MUTATING_WEBHOOK_KIND: "inject-cabundle",
    VALIDATING_WEBHOOK_KIND: "inject-cabundle",
    SERVICE_KIND: "serving-cert",
    CERTIFICATE_KIND: "drop",
    ISSUER_KIND: "drop",
    NAMESPACE_KIND: "drop",
    DEPLOYMENT_KIND: "pass",
}


def rewrite_components(
    objects: Iterable[DecodedObject],
    cert_secret_names: CertSecretMap,
) -> tuple[DecodedObject, ...]:
    """Apply per-kind rewrite policies to a component set.

    Args:
        objects: Decoded component set in document order.
        cert_secret_names: Service to Secret mapping from the resolver.

    Returns:
        Rewritten objects in input order, without dropped kinds.
    """
    rewritten: list[DecodedObject] = []
    dropped: list[str] = []
    for obj in objects:
        handler = _POLICY_HANDLERS[policy_for_kind(obj.kind)]
        result = handler(obj, cert_secret_names)
        if result is None:
            dropped.append(f"{obj.kind}/{obj.name}")
            continue
        rewritten.append(result)
    if dropped:
        _LOGGER.info("provider_objects_dropped", objects=dropped)
    return tuple(rewritten)


def policy_for_kind(kind: str) -> RewritePolicy:
    """Return the rewrite policy for a kind, ``pass`` when unlisted."""
    return KIND_POLICIES.get(kind, "pass")


def _inject_ca_bundle(obj: DecodedObject, _: CertSecretMap) -> DecodedObject:
    if injection_source(obj) is None:
        return obj
    fields = copy.deepcopy(dict(obj.raw_fields))
    annotations = _annotations_of(fields)
    del annotations[CERT_MANAGER_INJECT_CA_ANNOTATION]
    annotations[SERVICE_CA_INJECT_BUNDLE_ANNOTATION] = "true"
    return DecodedObject(raw_fields=fields)


def _attach_serving_cert(obj: DecodedObject, cert_secret_names: CertSecretMap) -> DecodedObject:
    secret_name = cert_secret_names.get(obj.name)
    if secret_name is None:
        return obj
    fields = copy.deepcopy(dict(obj.raw_fields))
    _annotations_of(fields)[SERVICE_CA_SERVING_SECRET_ANNOTATION] = secret_name
    return DecodedObject(raw_fields=fields)


def _drop(obj: DecodedObject, _: CertSecretMap) -> None:
    return None


def _pass_through(obj: DecodedObject, _: CertSecretMap) -> DecodedObject:
    return obj


def _annotations_of(fields: dict[str, Any]) -> dict[str, Any]:
    metadata = fields.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
        fields["metadata"] = metadata
    annotations = metadata.get("annotations")
    if not isinstance(annotations, dict):
        annotations = {}
        metadata["annotations"] = annotations
    return annotations


_POLICY_HANDLERS: dict[RewritePolicy, PolicyHandler] = {
    "inject-cabundle": _inject_ca_bundle,
    "serving-cert": _attach_serving_cert,
    "drop": _drop,
    "pass": _pass_through,
}
