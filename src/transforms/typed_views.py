"""Typed views over decoded objects.

A view decoder reads the one nested field a kind exposes for certificate
injection: the Service that backs a CRD conversion webhook or an admission
webhook. Decoders are looked up through an explicit registry value so
callers control which kinds are understood.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from core.constants import CRD_KIND, MUTATING_WEBHOOK_KIND, VALIDATING_WEBHOOK_KIND
from core.errors import ResolverContractError
from core.types import DecodedObject

_CRD_SERVICE_PATH: tuple[str | int, ...] = (
    "spec",
    "conversion",
    "webhook",
    "clientConfig",
    "service",
    "name",
)
_WEBHOOK_SERVICE_PATH: tuple[str | int, ...] = ("webhooks", 0, "clientConfig", "service", "name")


@dataclass(frozen=True)
class ServiceReferenceView:
    """Service reference read from a webhook-bearing object.

    Attributes:
        kind: Object kind.
        object_name: Object name.
        field_path: Dotted path the service name was read from.
        service_name: Referenced Service name, or ``None`` when absent.
    """

    kind: str
    object_name: str
    field_path: str
    service_name: str | None


ViewDecoder = Callable[[DecodedObject], ServiceReferenceView]


class ViewRegistry:
    """Kind-indexed collection of view decoders."""

    def __init__(self, decoders: Mapping[str, ViewDecoder]) -> None:
        self._decoders = dict(decoders)

    def supports(self, kind: str) -> bool:
        return kind in self._decoders

    def decode(self, obj: DecodedObject) -> ServiceReferenceView:
        """Decode an object into its service reference view.

        Raises:
            ResolverContractError: If no decoder is registered for the kind,
                or the object's nested structure has an unexpected type.
        """
        decoder = self._decoders.get(obj.kind)
        if decoder is None:
            raise ResolverContractError(
                f"No service reference view is registered for kind {obj.kind!r} "
                f"(object {obj.name!r})."
            )
        return decoder(obj)


def decode_crd_view(obj: DecodedObject) -> ServiceReferenceView:
    """Read the conversion webhook Service of a CustomResourceDefinition."""
    return _decode_path(obj, _CRD_SERVICE_PATH)


def decode_webhook_configuration_view(obj: DecodedObject) -> ServiceReferenceView:
    """Read the first webhook's Service of an admission webhook configuration."""
    return _decode_path(obj, _WEBHOOK_SERVICE_PATH)


def _decode_path(obj: DecodedObject, path: Sequence[str | int]) -> ServiceReferenceView:
    field_path = ".".join(f"[{step}]" if isinstance(step, int) else step for step in path)
    field_path = field_path.replace(".[", "[")
    value = _lookup(obj, path, field_path)
    if value is not None and not isinstance(value, str):
        raise ResolverContractError(
            f"Invalid {obj.kind} {obj.name!r}: {field_path} is a {type(value).__name__}, "
            "expected a string."
        )
    return ServiceReferenceView(
        kind=obj.kind,
        object_name=obj.name,
        field_path=field_path,
        service_name=value or None,
    )


def _lookup(obj: DecodedObject, path: Sequence[str | int], field_path: str) -> Any:
    node: Any = obj.raw_fields
    for step in path:
        if node is None:
            return None
        if isinstance(step, int):
            if not isinstance(node, list):
                raise ResolverContractError(
                    f"Invalid {obj.kind} {obj.name!r}: expected a list while reading "
                    f"{field_path}, got {type(node).__name__}."
                )
            node = node[step] if step < len(node) else None
            continue
        if not isinstance(node, Mapping):
            raise ResolverContractError(
                f"Invalid {obj.kind} {obj.name!r}: expected a mapping while reading "
                f"{field_path}, got {type(node).__name__}."
            )
        node = node.get(step)
    return node


DEFAULT_VIEW_REGISTRY = ViewRegistry(
    {
        CRD_KIND: decode_crd_view,
        MUTATING_WEBHOOK_KIND: decode_webhook_configuration_view,
        VALIDATING_WEBHOOK_KIND: decode_webhook_configuration_view,
    }
)
