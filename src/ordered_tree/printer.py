# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ASCII tree printer.

Renders a subtree with box-drawing connectors::

                             name              size
    └───catalog.
        ├───llama.7
        │   └───llama:7b.4
        └───gemma.2

The header line and the row text hooks are read from the printed root
(``root.header`` and ``root.row_formatter``).
"""

from __future__ import annotations

from typing import Any

from .config import DEFAULT_CONFIG, FormatConfig
from .node import Node
from .rows import format_row


def format_header(header: list[str], config: FormatConfig | None = None) -> str:
    """Render column titles: first indent, then each title padded by column_indent."""
    config = config or DEFAULT_CONFIG
    if not header:
        return ''
    padding = ' ' * config.column_indent
    return ' ' * config.first_column_indent + ''.join(
        title + padding for title in header
    )


def row_text(root: Node[Any], node: Node[Any], config: FormatConfig | None = None) -> str:
    """Text shown for node when printing root.

    Uses root.row_formatter if set. Otherwise the cells of the payload
    joined without separator, with a period after the first cell.
    """
    if root.row_formatter is not None:
        return root.row_formatter(node)
    cells = format_row(node.payload, config)
    if cells:
        cells[0] += '.'
    return ''.join(cells)


def _render(root: Node[Any], config: FormatConfig, lines: list[str]) -> None:
    # explicit stack of (node, prefix, is_last), children pushed reversed
    stack: list[tuple[Node[Any], str, bool]] = [(root, '', True)]
    while stack:
        node, prefix, is_last = stack.pop()
        connector = config.last_branch if is_last else config.branch
        lines.append(prefix + connector + row_text(root, node, config))
        child_prefix = prefix + (config.space if is_last else config.pipe)
        children = node.children
        last = len(children) - 1
        for index in range(last, -1, -1):
            stack.append((children[index], child_prefix, index == last))


def format_tree(root: Node[Any], config: FormatConfig | None = None) -> str:
    """Render the subtree rooted at root as ASCII.

    Args:
        root: The node to print. Its header and row_formatter are used
            for the whole output.
        config: Connectors and indents. Defaults to DEFAULT_CONFIG.

    Returns:
        One line per node (plus the header line when root.header is set),
        each terminated by a newline. The root is drawn as a last sibling.
    """
    config = config or DEFAULT_CONFIG
    lines: list[str] = []
    if root.header is not None:
        lines.append(format_header(root.header, config))
    _render(root, config, lines)
    return '\n'.join(lines) + '\n'
