"""Mapping from canonical record ids to values, filled in one insertion pass."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Generic, TypeVar

from org_metadata_correlator.identifier_normalization import normalize_record_id

from .correlation_errors import DuplicateCanonicalIdError

_Value = TypeVar("_Value")
_Item = TypeVar("_Item")


class CanonicalIdIndex(Mapping[str, _Value], Generic[_Value]):
    """Read-mostly index keyed by canonical ids; duplicates are rejected on insertion."""

    def __init__(self) -> None:
        self._entries: dict[str, _Value] = {}

    @classmethod
    def from_items(
        cls,
        items: Iterable[_Item],
        *,
        key: Callable[[_Item], str],
        value: Callable[[_Item], _Value],
    ) -> CanonicalIdIndex[_Value]:
        index: CanonicalIdIndex[_Value] = cls()
        for item in items:
            index.insert(key(item), value(item))
        return index

    def insert(self, raw_id: str, value: _Value) -> str:
        """Insert `value` under the canonical form of `raw_id` and return that key."""
        canonical_id = normalize_record_id(raw_id)
        if canonical_id is None:
            raise ValueError("Cannot index a value without an id.")
        if canonical_id in self._entries:
            raise DuplicateCanonicalIdError(canonical_id)
        self._entries[canonical_id] = value
        return canonical_id

    def lookup(self, raw_id: object) -> _Value | None:
        """Return the value for any id format, or None when absent."""
        canonical_id = normalize_record_id(raw_id)
        if canonical_id is None:
            return None
        return self._entries.get(canonical_id)

    def __getitem__(self, canonical_id: str) -> _Value:
        return self._entries[canonical_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
