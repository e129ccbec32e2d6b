# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node - the element of an ordered container tree.

A Node carries a typed payload and an ordered list of children. Whether a
node may hold children is decided by its type tag: tags ending with
``CONTAINER_MARKER`` ('_container') are containers, everything else is a
leaf.

Key Features:
    - **Stable identity**: every node gets a random UUID at creation
    - **Ordered children**: insertion order is kept by every traversal
    - **Back-reference**: ``node.parent`` is a weak, non-owning reference
    - **Two walks**: pre-order depth-first and level-order breadth-first,
      each usable with a callback or as a generator
    - **Lenient mutation**: not-found and leaf-misuse are logged and
      signalled by the return value, the tree is left unchanged

Example:
    Basic usage::

        root = new_node('model', True, 'catalog')
        family = new_node('llama', True, 'llama')
        root.add_child(family)
        tag = root.insert_item(family.id, 'llama:7b')

        for node in root.walk_depth():
            print(node.depth, node.payload)
"""

from __future__ import annotations

import copy
import logging
import uuid
import weakref
from collections import deque
from functools import cmp_to_key
from typing import Any, Callable, Generic, Iterator, TypeVar, TYPE_CHECKING

from .config import CONTAINER_MARKER
from .exceptions import (
    InvalidOperationError,
    NodeNotFoundError,
    NotImplementedOperationError,
)
from .identity import new_identity

if TYPE_CHECKING:
    from .config import FormatConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Node(Generic[T]):
    """A node in an ordered container tree.

    Each node has:
    - id: Identity assigned at creation, never changes
    - type: Payload schema tag; a '_container' suffix marks containers
    - payload: The value carried by the node
    - parent: The node whose children include this one, or None for a root
    - children: Ordered child nodes (always empty for leaves)
    - is_open: UI disclosure hint, always False for leaves
    - header / row_formatter: Printing hooks read from the printed root

    Example:
        >>> leaf = Node('model', 'llama:7b')
        >>> leaf.is_container
        False
        >>> Node('model_container', 'llama').is_open
        True
    """

    __slots__ = (
        '_id', '_type', '_is_open', 'payload', '_parent', '_children',
        'header', 'row_formatter', '__weakref__',
    )

    def __init__(
        self,
        type: str,
        payload: T = None,
        *,
        identity: uuid.UUID | None = None,
        is_open: bool | None = None,
    ) -> None:
        """Initialize a Node.

        Args:
            type: Type tag. Containers end with CONTAINER_MARKER.
            payload: The value carried by the node.
            identity: Explicit identity, used when rebuilding a serialized
                tree. A fresh one is generated when omitted.
            is_open: Disclosure flag. Defaults to True for containers;
                always coerced to False for leaves.

        Raises:
            RandomnessUnavailableError: If no identity can be generated.
        """
        self._id = identity if identity is not None else new_identity()
        self._type = type
        self.payload = payload
        self._parent: weakref.ref[Node[T]] | None = None
        self._children: list[Node[T]] = []
        self._is_open = (is_open is None or bool(is_open)) and self.is_container
        self.header: list[str] | None = None
        self.row_formatter: Callable[[Node[T]], str] | None = None

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self.is_container:
            return f"Node({self._type!r}, id={self._id}, children={len(self._children)})"
        return f"Node({self._type!r}, id={self._id}, payload={self.payload!r})"

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._children)

    def __iter__(self) -> Iterator[Node[T]]:
        """Iterate over direct children in order."""
        return iter(self._children)

    def __contains__(self, identity: uuid.UUID) -> bool:
        """Check if a node with this identity exists in the subtree."""
        return self.find_by_id(identity) is not None

    def __getitem__(self, identity: uuid.UUID) -> Node[T]:
        """Get a node of the subtree by identity.

        Raises:
            NodeNotFoundError: If no node has this identity.
        """
        return self.get_node(identity)

    # ==================== Identity & Shape ====================

    @property
    def id(self) -> uuid.UUID:
        """The node identity."""
        return self._id

    @property
    def type(self) -> str:
        """The node type tag."""
        return self._type

    @property
    def leaf_type(self) -> str:
        """The type tag without the container marker."""
        return self._type.removesuffix(CONTAINER_MARKER)

    @property
    def is_container(self) -> bool:
        """True if the type tag ends with the container marker."""
        return self._type.endswith(CONTAINER_MARKER)

    @property
    def is_leaf(self) -> bool:
        return not self.is_container

    @property
    def has_children(self) -> bool:
        """True if this is a container with at least one child."""
        return self.is_container and len(self._children) > 0

    @property
    def is_open(self) -> bool:
        """Disclosure flag; only containers can be open."""
        return self._is_open and self.is_container

    @is_open.setter
    def is_open(self, value: bool) -> None:
        self._is_open = bool(value) and self.is_container

    def set_open(self, value: bool) -> None:
        """Set the disclosure flag. Silently ignored on leaves."""
        self.is_open = value

    @property
    def children(self) -> list[Node[T]]:
        """Direct children in order (a copy; mutate through the node API)."""
        return list(self._children)

    @property
    def parent(self) -> Node[T] | None:
        """The parent node, or None for a root.

        The link is weak: a parent owns its children, not the other way
        round. Keep a reference to the root (or use a Tree) while working
        with a subtree. Once the root is garbage collected its former
        children report no parent, is_root becomes True and depth drops
        to 0.
        """
        if self._parent is None:
            return None
        return self._parent()

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def root(self) -> Node[T]:
        """The root node of this hierarchy."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def depth(self) -> int:
        """Number of parent links to the root (root=0)."""
        count = 0
        node = self.parent
        while node is not None:
            count += 1
            node = node.parent
        return count

    def index_of(self, child: Node[T]) -> int:
        """Position of a direct child.

        Raises:
            ValueError: If child is not a direct child of this node.
        """
        for index, candidate in enumerate(self._children):
            if candidate is child:
                return index
        raise ValueError(f"node {child.id} is not a child of {self._id}")

    # ==================== Mutation ====================

    def _require_container(self, operation: str) -> None:
        if not self.is_container:
            raise InvalidOperationError(
                f"{operation} requires a container, {self._type!r} is a leaf"
            )

    def _attach(self, child: Node[T]) -> None:
        """Append child and link it back to this node.

        Raises:
            InvalidOperationError: If this node is a leaf, if child already
                belongs to another node or to this one, or if child is an
                ancestor of this node.
        """
        self._require_container('add_child')
        if child is None:
            raise InvalidOperationError("cannot add None as a child")
        current = child.parent
        if current is self:
            if any(candidate is child for candidate in self._children):
                raise InvalidOperationError(
                    f"node {child.id} is already a child of {self._id}"
                )
        elif current is not None:
            raise InvalidOperationError(
                f"node {child.id} already belongs to {current.id}, remove it first"
            )
        ancestor: Node[T] | None = self
        while ancestor is not None:
            if ancestor is child:
                raise InvalidOperationError(
                    f"adding {child.id} under {self._id} would create a cycle"
                )
            ancestor = ancestor.parent
        self._link(child)
        logger.debug("added %s under %s", child._id, self._id)

    def _link(self, child: Node[T]) -> None:
        # no checks: child must be a fresh root
        child._parent = weakref.ref(self)
        self._children.append(child)

    def add_child(self, child: Node[T]) -> bool:
        """Append child to this container.

        Args:
            child: A root node, or a node whose parent is already this one.

        Returns:
            True if the child was appended. False (with a logged warning)
            if this node is a leaf or the child cannot be attached.
        """
        try:
            self._attach(child)
        except InvalidOperationError as exc:
            logger.warning("add_child: %s", exc)
            return False
        return True

    def remove_by_id(self, identity: uuid.UUID) -> bool:
        """Remove the direct child with this identity, keeping sibling order.

        Does not recurse into grandchildren. The removed node becomes a root.

        Returns:
            True if a child was removed, False if none matched.
        """
        for index, child in enumerate(self._children):
            if child._id == identity:
                del self._children[index]
                child._parent = None
                logger.debug("removed %s from %s", identity, self._id)
                return True
        logger.warning("remove_by_id: %s is not a child of %s", identity, self._id)
        return False

    def remove_self(self) -> bool:
        """Detach this node from its parent.

        Returns:
            True if detached, False if this node is already a root.
        """
        parent = self.parent
        if parent is None:
            logger.warning("remove_self: %s has no parent", self._id)
            return False
        return parent.remove_by_id(self._id)

    def _new_leaf(self, payload: T) -> Node[T]:
        self._require_container('insert_item')
        child: Node[T] = Node(self.leaf_type, payload)
        self._attach(child)
        return child

    def insert_item(self, parent_id: uuid.UUID, payload: T) -> Node[T]:
        """Create a leaf under the container with parent_id.

        The container is searched in the whole subtree of this node. The new
        leaf takes the container's type without the container marker.

        Args:
            parent_id: Identity of the target container.
            payload: Payload of the new leaf.

        Returns:
            The new leaf, or this node unchanged if the target is missing
            or is not a container.

        Example:
            >>> family = new_node('model', True, 'llama')
            >>> family.insert_item(family.id, 'llama:7b').type
            'model'
        """
        parent = self.find_by_id(parent_id)
        if parent is None:
            logger.warning("insert_item: parent %s not found", parent_id)
            return self
        try:
            return parent._new_leaf(payload)
        except InvalidOperationError as exc:
            logger.warning("insert_item: %s", exc)
            return self

    def create_item(self, parent: Node[T], payload: T) -> Node[T]:
        """Create a leaf under parent, like insert_item with a node reference.

        Returns:
            The new leaf, or this node unchanged if parent is a leaf.
        """
        try:
            return parent._new_leaf(payload)
        except InvalidOperationError as exc:
            logger.warning("create_item: %s", exc)
            return self

    def sort(self, less: Callable[[T, T], bool]) -> None:
        """Stable sort of the children by payload, through the whole subtree.

        Args:
            less: Returns True when its first payload sorts before the
                second. Children that compare equal keep their order.

        Example:
            >>> root.sort(lambda a, b: a.idx < b.idx)
        """
        def compare(a: Node[T], b: Node[T]) -> int:
            if less(a.payload, b.payload):
                return -1
            if less(b.payload, a.payload):
                return 1
            return 0

        key = cmp_to_key(compare)
        pending: list[Node[T]] = [self]
        while pending:
            container = pending.pop()
            container._children.sort(key=key)
            pending.extend(child for child in container._children if child.is_container)

    def clone(self, preserve_ids: bool = False) -> Node[T]:
        """Deep copy of this subtree as a new root.

        Payloads are deep-copied. Printing hooks are carried over.

        Args:
            preserve_ids: If True, copies keep the original identities.
                Never attach such a copy to the tree it was cloned from.
        """
        twin = self._copy(preserve_ids)
        pending: list[tuple[Node[T], Node[T]]] = [(self, twin)]
        while pending:
            source, target = pending.pop()
            for child in source._children:
                child_twin = child._copy(preserve_ids)
                target._link(child_twin)
                pending.append((child, child_twin))
        return twin

    def _copy(self, preserve_ids: bool) -> Node[T]:
        twin: Node[T] = Node(
            self._type,
            copy.deepcopy(self.payload),
            identity=self._id if preserve_ids else None,
            is_open=self._is_open,
        )
        twin.header = list(self.header) if self.header is not None else None
        twin.row_formatter = self.row_formatter
        return twin

    # ==================== Lookup ====================

    def find_by_id(self, identity: uuid.UUID) -> Node[T] | None:
        """Pre-order search of the subtree, this node included.

        Returns:
            The first node with this identity, or None.
        """
        for node in self._iter_depth():
            if node._id == identity:
                return node
        return None

    def get_node(self, identity: uuid.UUID) -> Node[T]:
        """Strict variant of find_by_id.

        Raises:
            NodeNotFoundError: If no node has this identity.
        """
        node = self.find_by_id(identity)
        if node is None:
            raise NodeNotFoundError(f"node {identity} not found under {self._id}")
        return node

    def update_by_id(self, identity: uuid.UUID, payload: T) -> bool:
        """Overwrite the payload of the node with this identity.

        Returns:
            True if a node was updated, False if none matched.
        """
        node = self.find_by_id(identity)
        if node is None:
            logger.warning("update_by_id: %s not found under %s", identity, self._id)
            return False
        node.payload = payload
        return True

    # ==================== Reserved ====================

    def find_by_name(self, name: str) -> Node[T] | None:
        raise NotImplementedOperationError("find_by_name is not implemented")

    def find_by_path(self, path: str) -> Node[T] | None:
        raise NotImplementedOperationError("find_by_path is not implemented")

    def remove_by_name(self, name: str) -> bool:
        raise NotImplementedOperationError("remove_by_name is not implemented")

    def remove_by_path(self, path: str) -> bool:
        raise NotImplementedOperationError("remove_by_path is not implemented")

    def insert_by_name(self, name: str, payload: T) -> Node[T]:
        raise NotImplementedOperationError("insert_by_name is not implemented")

    def insert_by_path(self, path: str, payload: T) -> Node[T]:
        raise NotImplementedOperationError("insert_by_path is not implemented")

    def update_by_name(self, name: str, payload: T) -> bool:
        raise NotImplementedOperationError("update_by_name is not implemented")

    def update_by_path(self, path: str, payload: T) -> bool:
        raise NotImplementedOperationError("update_by_path is not implemented")

    # ==================== Walk ====================

    def _iter_depth(self) -> Iterator[Node[T]]:
        stack: list[Node[T]] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def _iter_breadth(self) -> Iterator[Node[T]]:
        queue: deque[Node[T]] = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node._children)

    def walk_depth(
        self, visit: Callable[[Node[T]], Any] | None = None
    ) -> Iterator[Node[T]] | None:
        """Pre-order depth-first walk: this node, then each child subtree.

        Args:
            visit: Optional function called on each node.
                   If provided, walk_depth returns None.

        Returns:
            A generator of nodes if no callback is provided.

        Example:
            >>> [n.payload for n in root.walk_depth()]
            >>> root.walk_depth(lambda n: print(n.payload))
        """
        if visit is not None:
            for node in self._iter_depth():
                visit(node)
            return None
        return self._iter_depth()

    def walk_breadth(
        self, visit: Callable[[Node[T]], Any] | None = None
    ) -> Iterator[Node[T]] | None:
        """Level-order breadth-first walk starting at this node.

        Same callback/generator modes as walk_depth.
        """
        if visit is not None:
            for node in self._iter_breadth():
                visit(node)
            return None
        return self._iter_breadth()

    # ==================== Conversion ====================

    def format(self, config: FormatConfig | None = None) -> str:
        """Render this subtree as an ASCII tree. See printer.format_tree."""
        from .printer import format_tree
        return format_tree(self, config)

    def as_dict(self, encode_payload: Callable[[T], Any] | None = None) -> dict[str, Any]:
        """Convert this subtree to plain dicts. See serialization.to_dict."""
        from .serialization import to_dict
        return to_dict(self, encode_payload)


def new_node(type: str, is_container: bool, payload: T) -> Node[T]:
    """Create a root node.

    Args:
        type: Type tag. The container marker is appended when is_container
            is True and the tag does not end with it yet.
        is_container: Whether the node may hold children.
        payload: The value carried by the node.

    Returns:
        A node with a fresh identity, no parent and no children, open iff
        it is a container.

    Example:
        >>> new_node('model', True, None).type
        'model_container'
    """
    if is_container and not type.endswith(CONTAINER_MARKER):
        type += CONTAINER_MARKER
    return Node(type, payload)
