# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node identities: random 128-bit UUIDs."""

from __future__ import annotations

import uuid
from typing import Any

from .exceptions import RandomnessUnavailableError


def new_identity() -> uuid.UUID:
    """Return a fresh random identity.

    Raises:
        RandomnessUnavailableError: If the platform has no randomness source.
    """
    try:
        return uuid.uuid4()
    except (OSError, NotImplementedError) as exc:
        raise RandomnessUnavailableError(
            f"cannot generate node identity: {exc}"
        ) from exc


def parse_identity(value: Any) -> uuid.UUID:
    """Convert a canonical identity string (or a UUID) back to an identity.

    Raises:
        ValueError: If value is not a valid identity.
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise ValueError(f"identity must be a string, not {type(value).__name__}")
    return uuid.UUID(value)
