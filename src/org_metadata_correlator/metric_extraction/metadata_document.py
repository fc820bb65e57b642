"""Read-only accessor over semi-structured per-record metadata documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class MetadataDocument:
    """Metadata document attached to a record (for example a flow version's `Metadata`).

    Every accessor returns a defined default for missing or mistyped entries so
    callers never branch on absent keys.
    """

    root: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: object) -> MetadataDocument:
        if isinstance(raw, Mapping):
            return cls(root=raw)
        return cls()

    def collection(self, name: str) -> tuple[Any, ...]:
        """Return the named sub-collection, or an empty tuple when absent."""
        value = self.root.get(name)
        if value is None or isinstance(value, str | bytes | Mapping):
            return ()
        if isinstance(value, Sequence):
            return tuple(value)
        return ()

    def collection_size(self, name: str) -> int:
        return len(self.collection(name))
