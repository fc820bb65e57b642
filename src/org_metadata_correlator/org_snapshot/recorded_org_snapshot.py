"""Recorded org snapshot adapter serving every collaborator contract offline."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from org_metadata_correlator.identifier_normalization import normalize_record_id
from org_metadata_correlator.platform_ports.collaborator_contracts import (
    BulkItemResult,
    PlatformCollaborators,
    Row,
)
from org_metadata_correlator.platform_ports.query_descriptors import (
    FilterOperator,
    QueryDescriptor,
    QueryFilter,
)

from .documentation_scorer import DocumentationGapScorer
from .setup_urls import SetupUrlBuilder

MISSING_RECORD_ERROR_CODE = "NOT_FOUND"

_LOGGER = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a recorded org snapshot cannot be read or lacks requested data."""


@dataclass(frozen=True)
class DependencyEdge:
    """One who-uses-whom edge recorded in the snapshot."""

    id: str
    name: str | None
    type: str | None
    ref_id: str
    ref_name: str | None
    ref_type: str | None


@dataclass(frozen=True)
class DependencyGraph:
    """Edges touching the requested root ids, in snapshot order."""

    root_ids: tuple[str, ...]
    edges: tuple[DependencyEdge, ...] = ()


@dataclass(frozen=True)
class OrgSnapshot:
    """Parsed snapshot content keyed the way collaborators look it up."""

    queries: Mapping[str, tuple[Row, ...]] = field(default_factory=dict)
    describes: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    bulk: Mapping[str, Mapping[str, Mapping[str, Any]]] = field(default_factory=dict)
    record_counts: Mapping[str, int] = field(default_factory=dict)
    dependency_edges: tuple[DependencyEdge, ...] = ()


def load_org_snapshot(snapshot_path: Path | str) -> OrgSnapshot:
    """Load a YAML or JSON org snapshot file."""
    path = Path(snapshot_path)
    if not path.exists():
        raise SnapshotError(f"Snapshot file not found: {path}")
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SnapshotError(f"Failed to parse snapshot file {path}: {exc}") from exc
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise SnapshotError("Snapshot root must be a mapping.")
    return OrgSnapshot(
        queries={
            name: tuple(_require_rows(rows, f"queries.{name}"))
            for name, rows in _section(parsed, "queries").items()
        },
        describes={
            name: _require_section_mapping(describe, f"describes.{name}")
            for name, describe in _section(parsed, "describes").items()
        },
        bulk=_parse_bulk_section(_section(parsed, "bulk")),
        record_counts=_parse_record_counts(_section(parsed, "record_counts")),
        dependency_edges=_parse_dependency_edges(parsed.get("dependencies")),
    )


class RecordedQueryTransport:  # pylint: disable=too-few-public-methods
    """Answers query descriptors from recorded row sets, applying their filters in memory."""

    def __init__(self, snapshot: OrgSnapshot) -> None:
        self._snapshot = snapshot

    def run_queries(self, descriptors: Sequence[QueryDescriptor]) -> list[list[Row]]:
        results = []
        for descriptor in descriptors:
            rows = self._snapshot.queries.get(descriptor.name, ())
            matching = [row for row in rows if _matches_all(row, descriptor.filters)]
            _LOGGER.debug("%s returned %d rows", descriptor.statement, len(matching))
            results.append([dict(row) for row in matching])
        return results


class RecordedSchemaDescriber:  # pylint: disable=too-few-public-methods
    def __init__(self, snapshot: OrgSnapshot) -> None:
        self._snapshot = snapshot

    def describe_object(self, api_name: str) -> Mapping[str, Any]:
        try:
            return self._snapshot.describes[api_name]
        except KeyError as exc:
            raise SnapshotError(f"No describe recorded for object: {api_name}") from exc


class RecordedBulkMetadataSource:  # pylint: disable=too-few-public-methods
    """Serves bulk reads; entries recorded with an `error_code` come back as failures."""

    def __init__(self, snapshot: OrgSnapshot) -> None:
        self._snapshot = snapshot

    def read_metadata(self, kind: str, ids: Sequence[str]) -> list[BulkItemResult]:
        entries = self._snapshot.bulk.get(kind, {})
        results = []
        for requested_id in ids:
            entry = entries.get(normalize_record_id(requested_id) or "")
            if entry is None:
                results.append(
                    BulkItemResult.failed(
                        requested_id, MISSING_RECORD_ERROR_CODE, f"No {kind} metadata recorded"
                    )
                )
            elif entry.get("error_code"):
                results.append(
                    BulkItemResult.failed(
                        requested_id, str(entry["error_code"]), entry.get("error_message")
                    )
                )
            else:
                results.append(BulkItemResult.succeeded(requested_id, entry))
        return results


class RecordedDependencyGraphService:  # pylint: disable=too-few-public-methods
    def __init__(self, snapshot: OrgSnapshot) -> None:
        self._snapshot = snapshot

    def compute_dependencies(self, root_ids: Sequence[str]) -> DependencyGraph:
        roots = tuple(root_ids)
        wanted = set(roots)
        return DependencyGraph(
            root_ids=roots,
            edges=tuple(
                edge
                for edge in self._snapshot.dependency_edges
                if edge.id in wanted or edge.ref_id in wanted
            ),
        )


class RecordedRecordCounter:  # pylint: disable=too-few-public-methods
    def __init__(self, snapshot: OrgSnapshot) -> None:
        self._snapshot = snapshot

    def count_records(self, api_name: str) -> int:
        return self._snapshot.record_counts.get(api_name, 0)


def build_snapshot_collaborators(
    snapshot: OrgSnapshot, *, instance_url: str
) -> PlatformCollaborators:
    """Wire every collaborator of a correlation run to one recorded snapshot."""
    return PlatformCollaborators(
        transport=RecordedQueryTransport(snapshot),
        describer=RecordedSchemaDescriber(snapshot),
        bulk_source=RecordedBulkMetadataSource(snapshot),
        dependencies=RecordedDependencyGraphService(snapshot),
        urls=SetupUrlBuilder(instance_url),
        record_counter=RecordedRecordCounter(snapshot),
        scorer=DocumentationGapScorer(),
    )


def _matches_all(row: Mapping[str, Any], filters: Sequence[QueryFilter]) -> bool:
    return all(_matches(row, query_filter) for query_filter in filters)


def _matches(row: Mapping[str, Any], query_filter: QueryFilter) -> bool:
    value = row.get(query_filter.field)
    if query_filter.operator == FilterOperator.IN:
        return value in query_filter.values
    if query_filter.operator == FilterOperator.NOT_EQUALS:
        return value != query_filter.values[0]
    return value == query_filter.values[0]


def _section(parsed: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = parsed.get(name)
    if value is None:
        return {}
    return _require_section_mapping(value, name)


def _require_section_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SnapshotError(f"Snapshot section '{name}' must be a mapping.")
    return value


def _require_rows(value: Any, name: str) -> list[Row]:
    if value is None:
        return []
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise SnapshotError(f"Snapshot section '{name}' must be a list of rows.")
    rows = []
    for row in value:
        rows.append(dict(_require_section_mapping(row, name)))
    return rows


def _parse_bulk_section(section: Mapping[str, Any]) -> dict[str, dict[str, Mapping[str, Any]]]:
    bulk: dict[str, dict[str, Mapping[str, Any]]] = {}
    for kind, entries in section.items():
        by_id: dict[str, Mapping[str, Any]] = {}
        for raw_id, entry in _require_section_mapping(entries, f"bulk.{kind}").items():
            canonical_id = normalize_record_id(raw_id)
            if canonical_id is None:
                raise SnapshotError(f"Snapshot section 'bulk.{kind}' has an entry without an id.")
            by_id[canonical_id] = _require_section_mapping(entry, f"bulk.{kind}.{raw_id}")
        bulk[str(kind)] = by_id
    return bulk


def _parse_record_counts(section: Mapping[str, Any]) -> dict[str, int]:
    counts = {}
    for name, count in section.items():
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise SnapshotError(f"record_counts.{name} must be a non-negative integer.")
        counts[str(name)] = count
    return counts


def _parse_dependency_edges(value: Any) -> tuple[DependencyEdge, ...]:
    edges = []
    for row in _require_rows(value, "dependencies"):
        edge_id = normalize_record_id(row.get("id"))
        ref_id = normalize_record_id(row.get("ref_id"))
        if edge_id is None or ref_id is None:
            raise SnapshotError("Every dependency edge requires 'id' and 'ref_id'.")
        edges.append(
            DependencyEdge(
                id=edge_id,
                name=row.get("name"),
                type=row.get("type"),
                ref_id=ref_id,
                ref_name=row.get("ref_name"),
                ref_type=row.get("ref_type"),
            )
        )
    return tuple(edges)
