# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Ordered-Tree - Generic ordered container trees with tabular rows.

A lightweight, zero-dependency library providing a typed tree of
container and leaf nodes, with stable identities, ordered children,
depth/breadth walks, row formatting and an ASCII printer.
"""

__version__ = "0.1.0"

from .config import CONTAINER_MARKER, DEFAULT_CONFIG, FormatConfig
from .exceptions import (
    InvalidOperationError,
    NodeNotFoundError,
    NotImplementedOperationError,
    RandomnessUnavailableError,
    TreeDecodeError,
    TreeError,
)
from .identity import new_identity, parse_identity
from .node import Node, new_node
from .printer import format_tree
from .rows import format_row, header_for, visible_fields
from .serialization import (
    encode_payload,
    encode_value,
    from_dict,
    from_json,
    payload_decoder,
    to_dict,
    to_json,
)
from .tree import Tree

__all__ = [
    # Core classes
    "Node",
    "Tree",
    "new_node",
    # Identity
    "new_identity",
    "parse_identity",
    # Rows & printing
    "format_row",
    "header_for",
    "visible_fields",
    "format_tree",
    "FormatConfig",
    "DEFAULT_CONFIG",
    "CONTAINER_MARKER",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "payload_decoder",
    "encode_payload",
    "encode_value",
    # Exceptions
    "TreeError",
    "NodeNotFoundError",
    "InvalidOperationError",
    "NotImplementedOperationError",
    "RandomnessUnavailableError",
    "TreeDecodeError",
]
