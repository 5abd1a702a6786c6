"""Multi-document YAML manifest decoding and encoding.

This module turns provider component payloads into ordered decoded
objects and renders object sequences back into a stable YAML stream.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import yaml

from core.errors import ManifestDecodeError
from core.types import DecodedObject

DOCUMENT_SEPARATOR = "---\n"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _ManifestLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as the strings they were written as."""

    yaml_implicit_resolvers = {
        first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
        for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


class _BlockStyleDumper(yaml.SafeDumper):
    """Safe dumper that renders multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.Node:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_BlockStyleDumper.add_representer(str, _represent_str)


def decode_components(payload: bytes, source: str) -> tuple[DecodedObject, ...]:
    """Decode a multi-document YAML payload into objects.

    Args:
        payload: Raw manifest bytes.
        source: Human-readable origin used in error messages.

    Returns:
        Decoded objects in document order. Empty documents are skipped.

    Raises:
        ManifestDecodeError: If the payload is not valid YAML or a document
            is not a Kubernetes-style object.
    """
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as error:
        raise ManifestDecodeError(
            f"Failed to decode manifest {source}: payload is not UTF-8 ({error})."
        ) from error
    try:
        documents = list(yaml.load_all(text, Loader=_ManifestLoader))
    except yaml.YAMLError as error:
        raise ManifestDecodeError(
            f"Failed to parse manifest {source}: {error}. The upstream payload is malformed."
        ) from error
    objects: list[DecodedObject] = []
    for index, document in enumerate(documents):
        if document is None:
            continue
        objects.append(_to_decoded_object(document, source, index))
    return tuple(objects)


def encode_components(objects: Iterable[DecodedObject]) -> str:
    """Render objects back into a multi-document YAML stream.

    Args:
        objects: Objects to render, in output order.

    Returns:
        YAML documents joined by ``---`` separators.
    """
    return DOCUMENT_SEPARATOR.join(dump_yaml_document(obj.raw_fields) for obj in objects)


def dump_yaml_document(payload: Mapping[str, Any]) -> str:
    """Render one mapping as a deterministic YAML document.

    Keys are sorted and lines are never folded, so the same input always
    produces the same bytes.
    """
    return yaml.dump(
        _plain(payload),
        Dumper=_BlockStyleDumper,
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
        width=float("inf"),
    )


def _to_decoded_object(document: Any, source: str, index: int) -> DecodedObject:
    if not isinstance(document, dict):
        raise ManifestDecodeError(
            f"Invalid manifest {source}: document {index} is a {type(document).__name__}, "
            "expected a mapping."
        )
    if not document.get("kind"):
        raise ManifestDecodeError(
            f"Invalid manifest {source}: document {index} has no 'kind' field."
        )
    return DecodedObject(raw_fields=document)


def _plain(value: Any) -> Any:
    """Convert mapping views into plain dicts the safe dumper accepts."""
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
