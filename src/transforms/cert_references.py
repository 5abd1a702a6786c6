"""Certificate reference resolution for webhook services.

This module correlates cert-manager CA injection annotations on webhook
objects with the Services those webhooks call, producing the Service to
serving-certificate Secret mapping used by the object rewrite stage.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import CA_INJECTION_KINDS, CERT_MANAGER_INJECT_CA_ANNOTATION
from core.errors import ResolverContractError
from core.types import CertSecretMap, DecodedObject
from transforms.typed_views import DEFAULT_VIEW_REGISTRY, ViewRegistry


def find_cert_secret_names(
    objects: Iterable[DecodedObject],
    views: ViewRegistry = DEFAULT_VIEW_REGISTRY,
) -> CertSecretMap:
    """Map webhook Service names to the Secret serving their certificate.

    Args:
        objects: Decoded component set.
        views: View decoders used to read each kind's service reference.

    Returns:
        Mapping from Service name to Secret name.

    Raises:
        ResolverContractError: If an annotated object has no service
            reference or the annotation value is malformed.
    """
    cert_secret_names: CertSecretMap = {}
    for obj in objects:
        if obj.kind not in CA_INJECTION_KINDS:
            continue
        source = injection_source(obj)
        if source is None:
            continue
        secret_name = parse_secret_name(obj, source)
        view = views.decode(obj)
        if view.service_name is None:
            raise ResolverContractError(
                f"{obj.kind} {obj.name!r} carries {CERT_MANAGER_INJECT_CA_ANNOTATION} "
                f"but has no {view.field_path}. The upstream manifest shape is unexpected."
            )
        cert_secret_names[view.service_name] = secret_name
    return cert_secret_names


def injection_source(obj: DecodedObject) -> str | None:
    """Return the cert-manager injection source, or ``None`` when unset or null."""
    value = obj.annotations.get(CERT_MANAGER_INJECT_CA_ANNOTATION)
    if value is None:
        return None
    return str(value)


def parse_secret_name(obj: DecodedObject, value: str) -> str:
    """Extract the Secret name from a ``<namespace>/<secret>`` annotation value.

    Raises:
        ResolverContractError: If the value does not have that form.
    """
    namespace, separator, secret_name = value.partition("/")
    if not separator or not namespace or not secret_name or "/" in secret_name:
        raise ResolverContractError(
            f"{obj.kind} {obj.name!r} has malformed {CERT_MANAGER_INJECT_CA_ANNOTATION} "
            f"value {value!r}; expected '<namespace>/<secret>'."
        )
    return secret_name
