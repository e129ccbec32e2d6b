# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Ordered tree exceptions."""

from __future__ import annotations


class TreeError(Exception):
    """Base exception for ordered tree errors."""

    pass


class NodeNotFoundError(TreeError, KeyError):
    """Raised when an identity-based lookup targets an absent node."""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message instead.
        return Exception.__str__(self)


class InvalidOperationError(TreeError):
    """Raised when a container-only operation is invoked on a leaf."""

    pass


class NotImplementedOperationError(TreeError, NotImplementedError):
    """Raised by reserved operations that have no implementation yet."""

    pass


class RandomnessUnavailableError(TreeError):
    """Raised when a fresh node identity cannot be generated."""

    pass


class TreeDecodeError(TreeError, ValueError):
    """Raised when serialized tree data is malformed."""

    pass
