# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Tree holder."""

import logging
from dataclasses import dataclass

import pytest

from ordered_tree import InvalidOperationError, Tree, new_node, payload_decoder


@dataclass
class Model:
    name: str
    size: float = 0.0
    description: str = ''


class TestTreeBuild:
    """Tests for Tree creation and create_item."""

    def test_root_is_container(self):
        """Test a new tree has an open container root."""
        tree = Tree(Model('root'), type='model')
        assert tree.root.type == 'model_container'
        assert tree.root.is_open
        assert len(tree) == 1

    def test_wrap_existing_root(self):
        """Test an existing container can be wrapped."""
        root = new_node('x', True, None)
        assert Tree(root=root).root is root

    def test_wrap_leaf_fails(self):
        """Test a leaf cannot be a tree root."""
        with pytest.raises(InvalidOperationError):
            Tree(root=new_node('x', False, None))

    def test_catalog_shape(self):
        """Test root, one container per family, leaves per tag."""
        tree = Tree(Model('root'), type='model')
        families = {
            'llama': [Model('llama:7b', 3.8), Model('llama:13b', 7.4)],
            'gemma': [Model('gemma:2b', 1.7)],
        }
        for name, tags in families.items():
            family = new_node(name, True, Model(name, description=f'{name} family'))
            tree.root.add_child(family)
            for tag in tags:
                tree.create_item(tag, parent=family)

        assert [n.payload.name for n in tree.nodes()] == [
            'root', 'llama', 'gemma', 'llama:7b', 'llama:13b', 'gemma:2b',
        ]
        leaf = tree.root.children[0].children[0]
        assert leaf.type == 'llama'
        assert leaf.depth == 2

    def test_create_item_from_list(self):
        """Test a list payload becomes a container of leaves."""
        tree = Tree('catalog', type='model')
        group = tree.create_item(['a', ['b', 'c']])
        assert group.is_container
        assert group.type == 'model_container'
        assert [n.payload for n in group] == ['a', ['b', 'c']]
        nested = group.children[1]
        assert nested.is_container
        assert [n.payload for n in nested] == ['b', 'c']
        assert len(tree) == 6

    def test_create_item_under_leaf(self, caplog):
        """Test a leaf parent is refused."""
        tree = Tree('catalog')
        leaf = tree.create_item('a')
        with caplog.at_level(logging.WARNING, logger='ordered_tree.tree'):
            assert tree.create_item('b', parent=leaf) is leaf
        assert 'is a leaf' in caplog.text
        assert leaf.children == []


class TestTreeLookup:
    """Tests for nodes, index and lookups."""

    def test_index(self):
        """Test the index maps every id to its node."""
        tree = Tree('catalog')
        items = [tree.create_item(i) for i in range(3)]
        index = tree.index()
        assert len(index) == 4
        for item in items:
            assert index[item.id] is item
            assert tree.find_by_id(item.id) is item
            assert tree.get_node(item.id) is item
            assert item.id in tree

    def test_iter_depth_first(self):
        """Test iterating a tree walks depth-first."""
        tree = Tree('r')
        group = tree.create_item(['a', 'b'])
        tree.create_item('c')
        assert [n.payload for n in tree] == ['r', ['a', 'b'], 'a', 'b', 'c']
        assert group in list(tree)

    def test_sort(self):
        """Test sorting the whole tree."""
        tree = Tree(Model('root'))
        for size in (3.0, 1.0, 2.0):
            tree.create_item(Model('m', size))
        tree.sort(lambda a, b: a.size < b.size)
        assert [n.payload.size for n in tree.root] == [1.0, 2.0, 3.0]


class TestTreeConversion:
    """Tests for format and serialization helpers."""

    def test_format(self):
        """Test Tree.format prints the root."""
        tree = Tree('catalog')
        tree.create_item('a')
        assert tree.format() == '└───catalog.\n    └───a.\n'

    def test_json_round_trip(self):
        """Test a tree survives to_json / from_json."""
        tree = Tree(Model('root'), type='model')
        tree.create_item([Model('a', 1.0), Model('b', 2.0)])
        copy = Tree.from_json(tree.to_json(), payload_decoder(Model))
        assert [(n.id, n.type, n.payload) for n in copy] == [
            (n.id, n.type, n.payload) for n in tree
        ]

    def test_from_dict(self):
        """Test a tree can be rebuilt from a dict."""
        tree = Tree('root')
        tree.create_item('a')
        copy = Tree.from_dict(tree.to_dict())
        assert copy.root.id == tree.root.id
        assert [n.payload for n in copy] == ['root', 'a']
