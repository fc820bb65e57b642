"""Correlation engine errors."""

from __future__ import annotations


class EntityNotFoundError(Exception):
    """Raised when a lookup finds no backing definition row for the requested entity."""

    def __init__(self, entity_kind: str, name: str) -> None:
        super().__init__(f"No {entity_kind} record found for: {name}")
        self.entity_kind = entity_kind
        self.name = name


class DuplicateCanonicalIdError(Exception):
    """Raised when two rows normalize to the same canonical id within one index."""

    def __init__(self, canonical_id: str) -> None:
        super().__init__(f"Duplicate canonical id detected: {canonical_id}")
        self.canonical_id = canonical_id
