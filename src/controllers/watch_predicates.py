"""Watch event predicates for cluster-scoped configuration singletons.

The operator reconciles one ClusterOperator. Changes to the cluster
Infrastructure or FeatureGate singletons are the only watched updates
that matter, and each maps onto that single reconcile request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

CLUSTER_OPERATOR_NAME = "cluster-api"
INFRASTRUCTURE_RESOURCE_NAME = "cluster"
EXTERNAL_FEATURE_GATE_NAME = "cluster"
INFRASTRUCTURE_KIND = "Infrastructure"
FEATURE_GATE_KIND = "FeatureGate"
CONFIG_API_GROUP = "config.openshift.io"

WatchedObject = Mapping[str, Any]


@dataclass(frozen=True)
class CreateEvent:
    object: WatchedObject


@dataclass(frozen=True)
class UpdateEvent:
    object_old: WatchedObject
    object_new: WatchedObject


@dataclass(frozen=True)
class GenericEvent:
    object: WatchedObject


@dataclass(frozen=True)
class DeleteEvent:
    object: WatchedObject


@dataclass(frozen=True)
class ReconcileRequest:
    """Cluster-scoped reconcile key."""

    name: str
    namespace: str = ""


@dataclass(frozen=True)
class PredicateFuncs:
    """Per-event-type filters deciding whether a watch event is relevant."""

    create: Callable[[CreateEvent], bool]
    update: Callable[[UpdateEvent], bool]
    generic: Callable[[GenericEvent], bool]
    delete: Callable[[DeleteEvent], bool]


def to_cluster_operator(_: WatchedObject) -> list[ReconcileRequest]:
    """Map any watched object onto the ClusterOperator reconcile request."""
    return [ReconcileRequest(name=CLUSTER_OPERATOR_NAME)]


def infrastructure_predicates() -> PredicateFuncs:
    """Match events for the cluster Infrastructure singleton."""
    return _singleton_predicates(INFRASTRUCTURE_KIND, INFRASTRUCTURE_RESOURCE_NAME)


def feature_gate_predicates() -> PredicateFuncs:
    """Match events for the cluster FeatureGate singleton."""
    return _singleton_predicates(FEATURE_GATE_KIND, EXTERNAL_FEATURE_GATE_NAME)


def _singleton_predicates(kind: str, name: str) -> PredicateFuncs:
    def matches(obj: WatchedObject) -> bool:
        return _is_config_kind(obj, kind) and _object_name(obj) == name

    return PredicateFuncs(
        create=lambda event: matches(event.object),
        update=lambda event: matches(event.object_new),
        generic=lambda event: matches(event.object),
        delete=lambda event: matches(event.object),
    )


def _is_config_kind(obj: WatchedObject, kind: str) -> bool:
    if obj.get("kind") != kind:
        return False
    api_version = str(obj.get("apiVersion") or "")
    return api_version.split("/", 1)[0] == CONFIG_API_GROUP


def _object_name(obj: WatchedObject) -> str | None:
    metadata = obj.get("metadata")
    if not isinstance(metadata, Mapping):
        return None
    return metadata.get("name")
