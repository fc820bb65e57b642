"""Bulk retrieval exports."""

from .bulk_metadata_fetcher import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TOLERABLE_ERROR_CODES,
    BulkRetrievalError,
    fetch_bulk,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TOLERABLE_ERROR_CODES",
    "BulkRetrievalError",
    "fetch_bulk",
]
