# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Formatting configuration shared by the row formatter and the printer."""

from __future__ import annotations

from dataclasses import dataclass

CONTAINER_MARKER = "_container"


@dataclass(frozen=True)
class FormatConfig:
    """Knobs for row cells and ASCII tree rendering.

    Attributes:
        first_column_indent: Spaces emitted before the first header title.
        column_indent: Spaces emitted after every header title.
        time_format: strftime pattern for datetime cells.
        branch: Connector for a sibling that is not the last one.
        last_branch: Connector for the last sibling.
        pipe: Prefix extension below a non-last sibling.
        space: Prefix extension below the last sibling.

    Example:
        >>> from dataclasses import replace
        >>> iso = replace(DEFAULT_CONFIG, time_format='%Y-%m-%dT%H:%M:%S')
    """

    first_column_indent: int = 25
    column_indent: int = 14
    time_format: str = "%Y-%m-%d %H:%M:%S"
    branch: str = "├───"
    last_branch: str = "└───"
    pipe: str = "│   "
    space: str = "    "


DEFAULT_CONFIG = FormatConfig()
