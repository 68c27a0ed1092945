"""Load a request description from a YAML document."""

from __future__ import annotations

import re
from contextlib import closing
from pathlib import Path
from typing import IO, Iterator

import yaml
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from capis.metadata import Cookie, Header, Metadata, Param, parse_method

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class MetadataError(ValueError):
    """Raised when a request description cannot be parsed."""


def _to_int(text: str) -> int:
    """Read the leading decimal integer of ``text``, or 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _is_true(text: str) -> bool:
    return text == "true"


def _first_mapping(node: Node | None) -> MappingNode | None:
    """Return the first mapping met in document order, if any."""
    if isinstance(node, MappingNode):
        return node
    if isinstance(node, SequenceNode):
        for child in node.value:
            found = _first_mapping(child)
            if found is not None:
                return found
    return None


def _scalar_pairs(node: MappingNode, *, lower: bool) -> Iterator[tuple[str, str]]:
    """Yield the pairs of a mapping whose key and value are both scalars."""
    for key_node, value_node in node.value:
        if isinstance(key_node, ScalarNode) and isinstance(value_node, ScalarNode):
            key = key_node.value.lower() if lower else key_node.value
            yield key, value_node.value


def _key_value_entries(node: Node) -> list[tuple[str, str]]:
    """Read key/value pairs from either a list of {key, value} maps or a plain map."""
    entries: list[tuple[str, str]] = []
    if isinstance(node, SequenceNode):
        for item in node.value:
            if not isinstance(item, MappingNode):
                continue
            fields = dict(_scalar_pairs(item, lower=True))
            if "key" in fields and "value" in fields:
                entries.append((fields["key"], fields["value"]))
    elif isinstance(node, MappingNode):
        entries.extend(_scalar_pairs(node, lower=False))
    return entries


def _cookies(node: SequenceNode) -> list[Cookie]:
    cookies: list[Cookie] = []
    for item in node.value:
        if not isinstance(item, MappingNode):
            continue
        fields = dict(_scalar_pairs(item, lower=True))
        if "name" not in fields or "value" not in fields:
            continue
        cookies.append(
            Cookie(
                name=fields["name"],
                value=fields["value"],
                domain=fields.get("domain", ""),
                path=fields.get("path", "/"),
                expires=fields.get("expires", ""),
                http_only=_is_true(fields.get("httponly", "")),
                secure=_is_true(fields.get("secure", "")),
            )
        )
    return cookies


def _apply(meta: Metadata, key: str, value: Node) -> None:
    if isinstance(value, ScalarNode):
        text = value.value
        if key == "method":
            meta.method = parse_method(text)
        elif key == "host":
            meta.host = text
        elif key == "path":
            meta.path = text
        elif key == "url":
            meta.url = text
        elif key == "timeout":
            meta.timeout = _to_int(text)
        elif key == "secure":
            meta.secure = _is_true(text)
        return

    if key == "headers":
        headers = [Header(k, v) for k, v in _key_value_entries(value)]
        if headers:
            meta.headers = headers
    elif key == "params":
        params = [Param(k, v) for k, v in _key_value_entries(value)]
        if params:
            meta.params = params
    elif key == "cookies" and isinstance(value, SequenceNode):
        cookies = _cookies(value)
        if cookies:
            meta.cookies = cookies


def read_yaml(stream: str | bytes | IO) -> Metadata:
    """Parse the first YAML document of ``stream`` into request metadata.

    Raises MetadataError if the document is not valid YAML.
    """
    meta = Metadata()
    try:
        with closing(yaml.compose_all(stream, Loader=yaml.SafeLoader)) as documents:
            root = next(documents, None)
    except yaml.YAMLError as exc:
        raise MetadataError(f"YAML parsing failed: {exc}") from exc

    mapping = _first_mapping(root)
    if mapping is None:
        return meta

    for key_node, value_node in mapping.value:
        if isinstance(key_node, ScalarNode):
            _apply(meta, key_node.value.lower(), value_node)
    return meta


def load_metadata(path: str | Path) -> Metadata:
    """Read request metadata from the YAML file at ``path``."""
    with open(path, encoding="utf-8") as handle:
        return read_yaml(handle)