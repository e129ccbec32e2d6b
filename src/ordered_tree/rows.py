# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Row formatting - payloads as ordered lists of cell strings.

A structured record (a dataclass instance or a named tuple) becomes one
cell per visible field, in declaration order. Any other payload becomes a
single cell. Cells are always strings so table consumers and the ASCII
printer share one schema regardless of the field types.

Example:
    >>> @dataclass
    ... class Model:
    ...     name: str
    ...     size: int
    >>> format_row(Model('llama', 7))
    ['llama', '7']
    >>> header_for(Model)
    ['name', 'size']
"""

from __future__ import annotations

import dataclasses
import datetime
import enum
from typing import Any

from .config import DEFAULT_CONFIG, FormatConfig


def _is_namedtuple(obj: Any) -> bool:
    cls = obj if isinstance(obj, type) else type(obj)
    return issubclass(cls, tuple) and hasattr(cls, '_fields')


def is_record(obj: Any) -> bool:
    """True if obj is a structured record: a dataclass or a named tuple.

    Works with both instances and classes.
    """
    return dataclasses.is_dataclass(obj) or _is_namedtuple(obj)


def visible_fields(obj: Any) -> list[str]:
    """Names of the visible fields of a record instance or class.

    Fields whose name starts with an underscore are hidden.

    Raises:
        TypeError: If obj is not a record.
    """
    if dataclasses.is_dataclass(obj):
        names = [f.name for f in dataclasses.fields(obj)]
    elif _is_namedtuple(obj):
        names = list(obj._fields)
    else:
        raise TypeError(f"{type(obj).__name__} is not a structured record")
    return [name for name in names if not name.startswith('_')]


def header_for(obj: Any) -> list[str]:
    """Column titles for a record instance or class.

    Returns:
        The visible field names, or an empty list for non-records.
    """
    if not is_record(obj):
        return []
    return visible_fields(obj)


def format_cell(value: Any, config: FormatConfig | None = None) -> str:
    """Format a single field value as a cell string."""
    config = config or DEFAULT_CONFIG
    # str and int enums are still tags
    if isinstance(value, enum.Enum):
        # unnamed Flag combinations have name None
        return value.name if value.name is not None else str(value)
    if isinstance(value, str):
        return value
    # bool is an int subclass
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, datetime.datetime):
        return value.strftime(config.time_format)
    if isinstance(value, datetime.timedelta):
        return str(value)
    return str(value)


def format_row(payload: Any, config: FormatConfig | None = None) -> list[str]:
    """Convert a payload into an ordered list of cell strings.

    Args:
        payload: Any value. Records yield one cell per visible field,
            anything else yields a single cell.
        config: Formatting knobs (time format). Defaults to DEFAULT_CONFIG.

    Returns:
        List of cells; its length equals the number of visible fields for
        records, 1 otherwise.
    """
    if isinstance(payload, type) or not is_record(payload):
        return [str(payload)]
    return [
        format_cell(getattr(payload, name), config)
        for name in visible_fields(payload)
    ]
