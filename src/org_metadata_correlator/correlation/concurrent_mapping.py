"""Order-preserving concurrent map/filter over independent row transforms."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

_Input = TypeVar("_Input")
_Output = TypeVar("_Output")

DEFAULT_MAPPING_WORKERS = 4


def map_in_order(
    items: Iterable[_Input] | None,
    transform: Callable[[_Input], _Output],
    *,
    max_workers: int = DEFAULT_MAPPING_WORKERS,
) -> tuple[_Output, ...]:
    """Apply `transform` to every item concurrently; output order follows input order.

    A None input yields an empty tuple. All transforms complete before the
    result is returned; the first exception raised by a transform propagates.
    """
    materialized = list(items or ())
    if not materialized:
        return ()
    if max_workers <= 1 or len(materialized) == 1:
        return tuple(transform(item) for item in materialized)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(materialized))) as executor:
        return tuple(executor.map(transform, materialized))


def filter_in_order(
    items: Iterable[_Input] | None,
    predicate: Callable[[_Input], bool],
    *,
    max_workers: int = DEFAULT_MAPPING_WORKERS,
) -> tuple[_Input, ...]:
    """Keep items whose predicate holds, preserving input order."""
    materialized = list(items or ())
    verdicts = map_in_order(materialized, predicate, max_workers=max_workers)
    return tuple(item for item, keep in zip(materialized, verdicts, strict=True) if keep)
