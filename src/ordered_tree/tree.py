# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree - a holder for a container root with bulk helpers.

Data producers (catalog scrapers, struct-to-table mappers) usually build a
root container, append containers per group and fill them with leaves.
Tree wraps that root and adds the helpers they need: creating items from
nested lists, listing every node, and building an identity index for
callers that need fast lookups.

Example:
    >>> tree = Tree('catalog', type='model')
    >>> family = tree.create_item(['llama:7b', 'llama:13b'])
    >>> family.is_container, len(family)
    (True, 2)
    >>> len(tree)
    4
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Generic, Iterator, TypeVar, TYPE_CHECKING

from .exceptions import InvalidOperationError
from .node import Node, new_node
from .rows import is_record
from .serialization import PayloadDecoder, PayloadEncoder, from_dict, from_json, to_dict, to_json

if TYPE_CHECKING:
    from .config import FormatConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Tree(Generic[T]):
    """Holder of a container root node.

    Attributes:
        root: The root container of the tree.
    """

    __slots__ = ('root',)

    def __init__(
        self,
        root_payload: T = None,
        type: str = 'root',
        *,
        root: Node[T] | None = None,
    ) -> None:
        """Initialize a Tree.

        Args:
            root_payload: Payload of a new root container.
            type: Type tag of a new root container (the container marker
                is appended).
            root: Existing container to wrap instead of creating one.

        Raises:
            InvalidOperationError: If root is a leaf.
        """
        if root is None:
            root = new_node(type, True, root_payload)
        elif not root.is_container:
            raise InvalidOperationError(f"tree root must be a container, not {root.type!r}")
        self.root = root

    def __repr__(self) -> str:
        return f"Tree({self.root!r})"

    def __len__(self) -> int:
        """Return the number of nodes, root included."""
        return sum(1 for _ in self.root.walk_depth())

    def __iter__(self) -> Iterator[Node[T]]:
        """Iterate over all nodes in depth-first pre-order."""
        return self.root.walk_depth()

    def __contains__(self, identity: uuid.UUID) -> bool:
        return identity in self.root

    # ==================== Building ====================

    def _build(self, type: str, payload: Any) -> Node[Any]:
        if isinstance(payload, (list, tuple)) and not is_record(payload):
            node = new_node(type, True, payload)
            for item in payload:
                node.add_child(self._build(type, item))
            return node
        return new_node(type, False, payload)

    def create_item(self, payload: T, parent: Node[T] | None = None) -> Node[T]:
        """Append a new item under parent (the root by default).

        A list or tuple payload (not a named tuple) becomes a container
        holding one child per element, recursively. Anything else becomes
        a leaf. New nodes take the parent's type without container marker.

        Returns:
            The new node, or parent unchanged if parent is a leaf.
        """
        parent = self.root if parent is None else parent
        if not parent.is_container:
            logger.warning("create_item: %r is a leaf", parent.type)
            return parent
        node = self._build(parent.leaf_type, payload)
        parent.add_child(node)
        return node

    def sort(self, less: Callable[[T, T], bool]) -> None:
        """Stable recursive sort of the whole tree. See Node.sort."""
        self.root.sort(less)

    # ==================== Lookup ====================

    def nodes(self) -> list[Node[T]]:
        """Return every node in breadth-first order, root first."""
        return list(self.root.walk_breadth())

    def index(self) -> dict[uuid.UUID, Node[T]]:
        """Build an identity -> node map of the current tree.

        The map is a snapshot; rebuild it after structural changes.
        """
        return {node.id: node for node in self.root.walk_depth()}

    def find_by_id(self, identity: uuid.UUID) -> Node[T] | None:
        return self.root.find_by_id(identity)

    def get_node(self, identity: uuid.UUID) -> Node[T]:
        return self.root.get_node(identity)

    # ==================== Conversion ====================

    def format(self, config: FormatConfig | None = None) -> str:
        return self.root.format(config)

    def to_dict(self, encode: PayloadEncoder | None = None) -> dict[str, Any]:
        return to_dict(self.root, encode)

    def to_json(self, encode: PayloadEncoder | None = None, **json_kwargs: Any) -> str:
        return to_json(self.root, encode, **json_kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any], decode: PayloadDecoder | None = None) -> Tree[Any]:
        """Rebuild a Tree from Tree.to_dict output.

        Raises:
            TreeDecodeError: If data is malformed.
            InvalidOperationError: If the root is a leaf.
        """
        return cls(root=from_dict(data, decode))

    @classmethod
    def from_json(cls, text: str | bytes, decode: PayloadDecoder | None = None) -> Tree[Any]:
        return cls(root=from_json(text, decode))
