# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the ASCII tree printer."""

import sys
from dataclasses import dataclass, replace

from ordered_tree import DEFAULT_CONFIG, format_tree, new_node
from ordered_tree.printer import format_header, row_text


@dataclass
class Model:
    name: str
    size: int


def small_tree():
    """Root, one container child, two leaf grandchildren."""
    root = new_node('x', True, 'root')
    child = new_node('x', True, 'child')
    root.add_child(child)
    child.add_child(new_node('x', False, 'g1'))
    child.add_child(new_node('x', False, 'g2'))
    return root


class TestFormatTree:
    """Tests for format_tree and Node.format."""

    def test_deterministic(self):
        """Test repeated calls give the same text."""
        root = small_tree()
        assert root.format() == root.format()
        assert format_tree(root) == root.format()

    def test_lines_and_connectors(self):
        """Test line count and last-sibling connectors."""
        lines = small_tree().format().splitlines()
        assert len(lines) == 4
        assert lines[2].lstrip().startswith('├───')
        assert lines[3].lstrip().startswith('└───')
        assert lines[2].index('├───') == lines[3].index('└───')

    def test_exact_output(self):
        """Test the full rendering."""
        assert small_tree().format() == (
            '└───root.\n'
            '    └───child.\n'
            '        ├───g1.\n'
            '        └───g2.\n'
        )

    def test_pipe_below_non_last_sibling(self):
        """Test open ancestors draw a vertical bar."""
        root = new_node('x', True, 'r')
        a = new_node('x', True, 'a')
        root.add_child(a)
        root.add_child(new_node('x', False, 'b'))
        a.add_child(new_node('x', False, 'a1'))
        assert root.format() == (
            '└───r.\n'
            '    ├───a.\n'
            '    │   └───a1.\n'
            '    └───b.\n'
        )

    def test_record_rows(self):
        """Test record cells are joined with a period after the first."""
        root = new_node('model', True, Model('catalog', 0))
        root.add_child(new_node('model', False, Model('llama', 7)))
        assert root.format().splitlines() == ['└───catalog.0', '    └───llama.7']

    def test_header(self):
        """Test the header line comes first."""
        root = small_tree()
        root.header = ['Name', 'Size']
        lines = root.format().splitlines()
        assert len(lines) == 5
        assert lines[0] == ' ' * 25 + 'Name' + ' ' * 14 + 'Size' + ' ' * 14
        assert lines[1] == '└───root.'

    def test_header_only_on_printed_root(self):
        """Test headers of inner nodes are ignored."""
        root = small_tree()
        root.children[0].header = ['Name']
        assert len(root.format().splitlines()) == 4

    def test_row_formatter(self):
        """Test the root row formatter is used for every node."""
        root = small_tree()
        root.row_formatter = lambda node: f"{node.payload}@{node.depth}"
        assert root.format().splitlines() == [
            '└───root@0',
            '    └───child@1',
            '        ├───g1@2',
            '        └───g2@2',
        ]

    def test_subtree(self):
        """Test printing starts at the given node."""
        child = small_tree().children[0]
        assert child.format().splitlines()[0] == '└───child.'

    def test_custom_connectors(self):
        """Test connectors come from the config."""
        config = replace(DEFAULT_CONFIG, branch='|-- ', last_branch='`-- ', pipe='|   ')
        root = small_tree()
        assert format_tree(root, config).splitlines()[2:] == [
            '        |-- g1.',
            '        `-- g2.',
        ]

    def test_chain_deeper_than_recursion_limit(self):
        """Test a very deep chain prints one line per node."""
        depth = sys.getrecursionlimit() + 100
        root = new_node('x', True, 0)
        node = root
        for level in range(1, depth + 1):
            child = new_node('x', True, level)
            node.add_child(child)
            node = child
        lines = root.format().splitlines()
        assert len(lines) == depth + 1
        assert lines[-1] == ' ' * (4 * depth) + f'└───{depth}.'


class TestHelpers:
    """Tests for format_header and row_text."""

    def test_empty_header(self):
        """Test an empty header renders an empty line."""
        assert format_header([]) == ''

    def test_row_text_empty_record(self):
        """Test records without visible fields render as empty text."""
        @dataclass
        class Empty:
            pass

        root = new_node('x', False, Empty())
        assert row_text(root, root) == ''
