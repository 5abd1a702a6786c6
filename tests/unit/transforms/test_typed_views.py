"""Unit tests for typed service reference views."""

from __future__ import annotations

import pytest

from core.errors import ResolverContractError
from core.types import DecodedObject
from transforms.typed_views import DEFAULT_VIEW_REGISTRY, ViewRegistry, decode_crd_view


def _crd(service: dict[str, str] | None) -> DecodedObject:
    spec: dict[str, object] = {}
    if service is not None:
        spec = {"conversion": {"webhook": {"clientConfig": {"service": service}}}}
    return DecodedObject(
        raw_fields={"kind": "CustomResourceDefinition", "metadata": {"name": "c"}, "spec": spec}
    )


def test_crd_view_reads_conversion_service() -> None:
    """CRD views read the conversion webhook service name."""
    view = decode_crd_view(_crd({"name": "svc"}))

    assert view.service_name == "svc"
    assert view.field_path == "spec.conversion.webhook.clientConfig.service.name"


def test_crd_view_reports_missing_service() -> None:
    """An absent conversion webhook yields an empty view, not an error."""
    assert decode_crd_view(_crd(None)).service_name is None


def test_webhook_view_reads_first_webhook() -> None:
    """Webhook configuration views use the first webhook entry."""
    obj = DecodedObject(
        raw_fields={
            "kind": "MutatingWebhookConfiguration",
            "metadata": {"name": "m"},
            "webhooks": [
                {"clientConfig": {"service": {"name": "first"}}},
                {"clientConfig": {"service": {"name": "second"}}},
            ],
        }
    )

    view = DEFAULT_VIEW_REGISTRY.decode(obj)

    assert view.service_name == "first"
    assert view.field_path == "webhooks[0].clientConfig.service.name"


def test_webhook_view_raises_for_wrong_shape() -> None:
    """A non-list ``webhooks`` field is a contract violation."""
    obj = DecodedObject(
        raw_fields={
            "kind": "ValidatingWebhookConfiguration",
            "metadata": {"name": "v"},
            "webhooks": "oops",
        }
    )

    with pytest.raises(ResolverContractError, match="expected a list"):
        DEFAULT_VIEW_REGISTRY.decode(obj)


def test_registry_raises_for_unregistered_kind() -> None:
    """Registries only decode kinds they were built with."""
    registry = ViewRegistry({"CustomResourceDefinition": decode_crd_view})
    obj = DecodedObject(raw_fields={"kind": "ValidatingWebhookConfiguration"})

    assert registry.supports("CustomResourceDefinition")
    with pytest.raises(ResolverContractError, match="No service reference view"):
        registry.decode(obj)
