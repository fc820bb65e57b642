"""Bulk metadata retrieval with allow-listed per-item failure tolerance."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from org_metadata_correlator.identifier_normalization import normalize_record_id
from org_metadata_correlator.platform_ports.collaborator_contracts import (
    BulkItemResult,
    BulkMetadataSource,
)

DEFAULT_CHUNK_SIZE = 25
DEFAULT_TOLERABLE_ERROR_CODES: tuple[str, ...] = ("UNKNOWN_EXCEPTION",)
MISSING_RESULT_ERROR_CODE = "MISSING_RESULT"
UNREQUESTED_RESULT_ERROR_CODE = "UNREQUESTED_RESULT"

_LOGGER = logging.getLogger(__name__)


class BulkRetrievalError(Exception):
    """Raised when an item fails with an error code outside the allow-list."""

    def __init__(self, kind: str, failure: BulkItemResult) -> None:
        super().__init__(
            f"Bulk {kind} metadata retrieval failed for {failure.requested_id}: "
            f"{failure.error_code} {failure.error_message or ''}".rstrip()
        )
        self.kind = kind
        self.failure = failure


def fetch_bulk(
    source: BulkMetadataSource,
    kind: str,
    ids: Sequence[str],
    tolerable_error_codes: Collection[str] = DEFAULT_TOLERABLE_ERROR_CODES,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    max_workers: int = 4,
) -> list[dict[str, Any]]:
    """Read full metadata for every id, dropping items that fail with a tolerable code.

    Ids are sent in chunks of `chunk_size`; chunks are read concurrently and
    the returned records follow the order of `ids`. Any failure with a code
    outside `tolerable_error_codes` fails the whole call, as does a requested id
    left without a result or a result for an id that was not requested (or was
    already answered). Exceptions raised by
    `source` propagate unchanged.
    """
    if not ids:
        return []
    chunks = _split_into_chunks(list(ids), max(1, chunk_size))
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(chunks)))) as executor:
        chunk_results = list(executor.map(lambda chunk: source.read_metadata(kind, chunk), chunks))

    allowed = set(tolerable_error_codes)
    unanswered = {_result_key(requested_id): requested_id for requested_id in ids}
    records: list[dict[str, Any]] = []
    dropped = 0
    for results in chunk_results:
        for result in results:
            if unanswered.pop(_result_key(result.requested_id), None) is None:
                raise BulkRetrievalError(
                    kind,
                    BulkItemResult.failed(
                        result.requested_id,
                        UNREQUESTED_RESULT_ERROR_CODE,
                        "Result does not match a requested id",
                    ),
                )
            if result.is_success:
                records.append(dict(result.record or {}))
                continue
            if result.error_code in allowed:
                dropped += 1
                _LOGGER.debug(
                    "Dropping %s %s after tolerable error %s",
                    kind,
                    result.requested_id,
                    result.error_code,
                )
                continue
            raise BulkRetrievalError(kind, result)
    if unanswered:
        raise BulkRetrievalError(
            kind,
            BulkItemResult.failed(
                next(iter(unanswered.values())),
                MISSING_RESULT_ERROR_CODE,
                f"No result returned for {len(unanswered)} requested id(s)",
            ),
        )
    if dropped:
        _LOGGER.info("Dropped %d of %d %s records after tolerable errors", dropped, len(ids), kind)
    return records


def _result_key(requested_id: str) -> str:
    return normalize_record_id(requested_id) or requested_id


def _split_into_chunks(ids: list[str], chunk_size: int) -> list[list[str]]:
    return [ids[start : start + chunk_size] for start in range(0, len(ids), chunk_size)]
