"""Protocols for the platform collaborators used by the correlation engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from .query_descriptors import QueryDescriptor

Row = dict[str, Any]


@dataclass(frozen=True)
class BulkItemResult:
    """Outcome of reading full metadata for one requested id."""

    requested_id: str
    record: Mapping[str, Any] | None = None
    error_code: str | None = None
    error_message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.error_code is None and self.record is not None

    @staticmethod
    def succeeded(requested_id: str, record: Mapping[str, Any]) -> BulkItemResult:
        return BulkItemResult(requested_id=requested_id, record=record)

    @staticmethod
    def failed(
        requested_id: str, error_code: str, error_message: str | None = None
    ) -> BulkItemResult:
        return BulkItemResult(
            requested_id=requested_id,
            error_code=error_code,
            error_message=error_message,
        )


class QueryTransport(Protocol):  # pylint: disable=too-few-public-methods
    """Executes row-returning queries; one row set per descriptor, same order."""

    def run_queries(self, descriptors: Sequence[QueryDescriptor]) -> list[list[Row]]: ...


class SchemaDescriber(Protocol):  # pylint: disable=too-few-public-methods
    """Schema-description API returning fields, record types and child relationships."""

    def describe_object(self, api_name: str) -> Mapping[str, Any]: ...


class BulkMetadataSource(Protocol):  # pylint: disable=too-few-public-methods
    """Reads full metadata for one batch of ids, reporting per-item outcomes."""

    def read_metadata(self, kind: str, ids: Sequence[str]) -> Sequence[BulkItemResult]: ...


class DependencyGraphService(Protocol):  # pylint: disable=too-few-public-methods
    """Computes who-uses-whom edges for a set of root ids."""

    def compute_dependencies(self, root_ids: Sequence[str]) -> object: ...


class UrlBuilder(Protocol):  # pylint: disable=too-few-public-methods
    """Produces user-facing deep links; the engine never interprets them."""

    def build_url(self, resource_kind: str, record_id: str | None, *context: str | None) -> str: ...


class RecordCounter(Protocol):  # pylint: disable=too-few-public-methods
    """Returns the live record count of an object."""

    def count_records(self, api_name: str) -> int: ...


class EntityScorer(Protocol):  # pylint: disable=too-few-public-methods
    """Assigns a quality score to a built entity."""

    def compute_score(self, entity: object) -> int: ...


@dataclass(frozen=True)
class PlatformCollaborators:  # pylint: disable=too-many-instance-attributes
    """Bundle of collaborators handed to a correlation run."""

    transport: QueryTransport
    describer: SchemaDescriber
    bulk_source: BulkMetadataSource
    dependencies: DependencyGraphService
    urls: UrlBuilder
    record_counter: RecordCounter
    scorer: EntityScorer
