"""Base entity with UUIDv7 identity.

Entities compare equal when they share the same ``id``, regardless of
the rest of their state.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

import uuid6


class Entity:
    """Identity-carrying base class for domain objects."""

    def __init__(self, id: Optional[UUID] = None) -> None:
        self._id: UUID = id or uuid6.uuid7()

    @property
    def id(self) -> UUID:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))
