# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Conversion of trees to and from plain dicts and JSON.

Each node becomes a dict::

    {
        'id': '1b4e28ba-2fa1-11d2-883f-0016d3cca427',
        'type': 'model_container',
        'open': True,
        'payload': {...},
        'children': [...],   # containers only
    }

Loading recreates identities and children order verbatim, so a tree
survives a round trip with the same ids, types, open flags, payloads and
ordering.

Example:
    >>> text = to_json(root, indent=2)
    >>> copy = from_json(text, payload_decoder(Model))
    >>> copy.id == root.id
    True
"""

from __future__ import annotations

import dataclasses
import datetime
import enum
import json
import typing
from typing import Any, Callable

from .exceptions import TreeDecodeError
from .identity import parse_identity
from .node import Node
from .rows import is_record

PayloadEncoder = Callable[[Any], Any]
PayloadDecoder = Callable[[Any], Any]


def encode_value(value: Any) -> Any:
    """Make a field value JSON friendly.

    Enums become their member name (their value when unnamed), datetimes
    and dates ISO 8601 strings, timedeltas a number of seconds. Dicts,
    lists and tuples are encoded item by item.
    """
    if isinstance(value, enum.Enum):
        return value.name if value.name is not None else value.value
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return value.total_seconds()
    if isinstance(value, dict):
        return {key: encode_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    return value


def encode_payload(payload: Any) -> Any:
    """Default payload encoder.

    Records become dicts, lists and plain tuples are encoded item by item.
    Field values go through encode_value. Classes are kept as they are.
    """
    if isinstance(payload, (list, tuple)) and not is_record(payload):
        return [encode_payload(item) for item in payload]
    if isinstance(payload, type):
        return payload
    if not is_record(payload):
        return encode_value(payload)
    if dataclasses.is_dataclass(payload):
        return encode_value(dataclasses.asdict(payload))
    return encode_value(payload._asdict())


def _field_types(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # unresolvable forward references: decode those fields raw
        return {}


def _decode_value(hint: Any, value: Any) -> Any:
    if value is None or not isinstance(hint, type):
        return value
    if issubclass(hint, enum.Enum):
        return hint[value] if isinstance(value, str) else hint(value)
    if hint is datetime.datetime and isinstance(value, str):
        return datetime.datetime.fromisoformat(value)
    if hint is datetime.date and isinstance(value, str):
        return datetime.date.fromisoformat(value)
    if hint is datetime.timedelta and isinstance(value, (int, float)):
        return datetime.timedelta(seconds=value)
    return value


def payload_decoder(cls: type) -> PayloadDecoder:
    """Build a decoder that turns encoded dicts back into cls instances.

    Fields annotated as an Enum, datetime, date or timedelta are converted
    back from the form encode_value gave them.

    Args:
        cls: A dataclass or named tuple type.

    Returns:
        A callable mapping a dict to ``cls(**data)`` and a list to a list of
        decoded items; other values pass through unchanged.

    Raises:
        KeyError: From the returned decoder, for an unknown enum member name.
    """
    hints = _field_types(cls)

    def decode(data: Any) -> Any:
        if isinstance(data, list):
            return [decode(item) for item in data]
        if isinstance(data, dict):
            return cls(**{
                name: _decode_value(hints.get(name), value)
                for name, value in data.items()
            })
        return data
    return decode


def to_dict(node: Node[Any], encode: PayloadEncoder | None = None) -> dict[str, Any]:
    """Convert a subtree to nested dicts.

    Args:
        node: Root of the subtree to convert.
        encode: Payload encoder. Defaults to encode_payload.

    Returns:
        Dict with id, type, open and payload keys; containers also get a
        children list in order.
    """
    encode = encode or encode_payload

    def convert(current: Node[Any]) -> dict[str, Any]:
        return {
            'id': str(current.id),
            'type': current.type,
            'open': current.is_open,
            'payload': encode(current.payload),
        }

    result = convert(node)
    pending: list[tuple[Node[Any], dict[str, Any]]] = [(node, result)]
    while pending:
        current, target = pending.pop()
        if not current.is_container:
            continue
        target['children'] = []
        for child in current:
            child_dict = convert(child)
            target['children'].append(child_dict)
            pending.append((child, child_dict))
    return result


def from_dict(data: dict[str, Any], decode: PayloadDecoder | None = None) -> Node[Any]:
    """Rebuild a subtree from the output of to_dict.

    Leaves are normalized: any children listed for them are ignored and
    their open flag is cleared.

    Args:
        data: Dict produced by to_dict (possibly after a JSON round trip).
        decode: Payload decoder. Defaults to keeping payloads as loaded.

    Returns:
        The rebuilt root node, with parent links in place.

    Raises:
        TreeDecodeError: If a node dict is missing keys, has an invalid id,
            or if an id appears twice.
    """
    seen: set[Any] = set()
    root = _load_node(data, decode, seen)
    pending: list[tuple[Node[Any], Any]] = [(root, data)]
    while pending:
        node, node_data = pending.pop()
        if not node.is_container:
            continue
        children = node_data.get('children') or []
        if not isinstance(children, list):
            raise TreeDecodeError(f"children of {node.id} must be a list")
        for child_data in children:
            child = _load_node(child_data, decode, seen)
            node.add_child(child)
            pending.append((child, child_data))
    return root


def _load_node(data: Any, decode: PayloadDecoder | None, seen: set[Any]) -> Node[Any]:
    """Build one node from its dict, without its children."""
    if not isinstance(data, dict):
        raise TreeDecodeError(f"node must be a dict, not {type(data).__name__}")
    try:
        raw_id = data['id']
        node_type = data['type']
    except KeyError as exc:
        raise TreeDecodeError(f"node is missing key {exc.args[0]!r}") from exc
    if not isinstance(node_type, str):
        raise TreeDecodeError(f"node type must be a string, not {type(node_type).__name__}")
    try:
        identity = parse_identity(raw_id)
    except ValueError as exc:
        raise TreeDecodeError(f"invalid node id {raw_id!r}") from exc
    if identity in seen:
        raise TreeDecodeError(f"duplicate node id {identity}")
    seen.add(identity)

    payload = data.get('payload')
    if decode is not None:
        payload = decode(payload)
    return Node(
        node_type,
        payload,
        identity=identity,
        is_open=bool(data.get('open', False)),
    )


def _json_default(value: Any) -> Any:
    encoded = encode_value(value)
    if encoded is value:
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
    return encoded


def to_json(
    node: Node[Any],
    encode: PayloadEncoder | None = None,
    **json_kwargs: Any,
) -> str:
    """Serialize a subtree to a JSON string.

    Enums, datetimes and timedeltas left by a custom encoder are written
    the way encode_value writes them. Extra keyword arguments (indent,
    sort_keys, default...) go to json.dumps.
    """
    json_kwargs.setdefault('ensure_ascii', False)
    json_kwargs.setdefault('default', _json_default)
    return json.dumps(to_dict(node, encode), **json_kwargs)


def from_json(text: str | bytes, decode: PayloadDecoder | None = None) -> Node[Any]:
    """Rebuild a subtree from a JSON string produced by to_json.

    Raises:
        TreeDecodeError: If text is not valid JSON or not a valid tree.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TreeDecodeError(f"invalid tree JSON: {exc}") from exc
    return from_dict(data, decode)
