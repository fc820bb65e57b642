"""Flow definition and flow version correlation service."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from org_metadata_correlator.bulk_retrieval import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TOLERABLE_ERROR_CODES,
    fetch_bulk,
)
from org_metadata_correlator.entity_models import (
    DependencyAttachment,
    FlowDefinition,
    FlowVersion,
    build_flow_version,
    score_entity,
)
from org_metadata_correlator.entity_models.entity_builders import (
    EntityConstructionError,
    optional_float,
)
from org_metadata_correlator.identifier_normalization import normalize_record_id
from org_metadata_correlator.metric_extraction import MetadataDocument, extract_flow_metrics
from org_metadata_correlator.platform_ports.collaborator_contracts import (
    PlatformCollaborators,
    QueryTransport,
    Row,
    UrlBuilder,
)

from .canonical_id_index import CanonicalIdIndex
from .concurrent_mapping import DEFAULT_MAPPING_WORKERS, map_in_order
from .query_catalog import flow_definitions_query, flow_versions_query

FLOW_METADATA_KIND = "Flow"
DEPENDENCIES_KEYED_BY = "current_version_id"

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlowQueryBatch:
    """Row sets of the definition and version queries, fetched together."""

    definition_rows: tuple[Row, ...]
    version_rows: tuple[Row, ...]


@dataclass
class _DefinitionAccumulator:  # pylint: disable=too-many-instance-attributes
    """Mutable definition state while version rows and bulk records are joined."""

    id: str
    name: str
    url: str
    api_version: float | None
    current_version_id: str | None
    is_version_active: bool
    is_latest_current_version: bool
    description: str | None
    created_date: str | None
    last_modified_date: str | None
    versions_count: int = 0
    type: str | None = None
    current_version: FlowVersion | None = None

    def freeze(self, dependencies: DependencyAttachment) -> FlowDefinition:
        return FlowDefinition(
            id=self.id,
            name=self.name,
            url=self.url,
            api_version=self.api_version,
            current_version_id=self.current_version_id,
            is_version_active=self.is_version_active,
            is_latest_current_version=self.is_latest_current_version,
            versions_count=self.versions_count,
            type=self.type,
            description=self.description,
            created_date=self.created_date,
            last_modified_date=self.last_modified_date,
            dependencies=dependencies,
            current_version=self.current_version,
        )


def fetch_flow_query_batch(transport: QueryTransport) -> FlowQueryBatch:
    """Run the definition and version queries in one batch."""
    definition_rows, version_rows = transport.run_queries(
        [flow_definitions_query(), flow_versions_query()]
    )
    return FlowQueryBatch(definition_rows=tuple(definition_rows), version_rows=tuple(version_rows))


def correlate_flow_definitions(
    collaborators: PlatformCollaborators,
    *,
    tolerable_error_codes: Collection[str] = DEFAULT_TOLERABLE_ERROR_CODES,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    bulk_parallelism: int = 4,
    mapping_workers: int = DEFAULT_MAPPING_WORKERS,
) -> dict[str, FlowDefinition]:
    """Correlate flow definitions with their versions and return them keyed by canonical id.

    The current version of each definition is its active version when one
    exists, otherwise its latest version. Only current versions are read in
    full through the bulk metadata source; a current version dropped by the
    tolerated error codes leaves `current_version` unset.
    """
    batch = fetch_flow_query_batch(collaborators.transport)

    _LOGGER.info("Parsing %d flow definitions", len(batch.definition_rows))
    accumulators = map_in_order(
        batch.definition_rows,
        lambda row: _start_definition(row, urls=collaborators.urls),
        max_workers=mapping_workers,
    )
    definitions = CanonicalIdIndex.from_items(
        accumulators,
        key=lambda accumulator: accumulator.id,
        value=lambda accumulator: accumulator,
    )
    ids_of_interest = _collect_ids_of_interest(definitions.values())

    _LOGGER.info("Retrieving dependencies of %d flow versions", len(ids_of_interest))
    dependencies = DependencyAttachment(
        graph=collaborators.dependencies.compute_dependencies(ids_of_interest),
        dependencies_for=DEPENDENCIES_KEYED_BY,
    )

    _LOGGER.info("Parsing %d flow versions", len(batch.version_rows))
    _count_versions(definitions, batch.version_rows)

    _LOGGER.info("Reading metadata of %d current flow versions", len(ids_of_interest))
    records = fetch_bulk(
        collaborators.bulk_source,
        FLOW_METADATA_KIND,
        ids_of_interest,
        tolerable_error_codes,
        chunk_size=chunk_size,
        max_workers=bulk_parallelism,
    )
    versions = map_in_order(
        records,
        lambda record: _build_current_version(record, urls=collaborators.urls),
        max_workers=mapping_workers,
    )
    _attach_current_versions(definitions, versions)

    scored = map_in_order(
        definitions.values(),
        lambda accumulator: score_entity(accumulator.freeze(dependencies), collaborators.scorer),
        max_workers=mapping_workers,
    )
    _LOGGER.info("Correlated %d flow definitions", len(scored))
    return {definition.id: definition for definition in scored}


def select_process_builders(definitions: Mapping[str, FlowDefinition]) -> dict[str, FlowDefinition]:
    """Keep the definitions whose versions are process builders."""
    return {
        definition_id: definition
        for definition_id, definition in definitions.items()
        if definition.is_process_builder
    }


def _start_definition(row: Mapping[str, Any], *, urls: UrlBuilder) -> _DefinitionAccumulator:
    definition_id = normalize_record_id(row.get("Id"))
    name = row.get("DeveloperName")
    if definition_id is None or not name:
        raise EntityConstructionError("FlowDefinition row requires 'Id' and 'DeveloperName'.")
    active_version_id = normalize_record_id(row.get("ActiveVersionId"))
    latest_version_id = normalize_record_id(row.get("LatestVersionId"))
    return _DefinitionAccumulator(
        id=definition_id,
        name=name,
        url=urls.build_url("flowDefinition", definition_id),
        api_version=optional_float(row.get("ApiVersion")),
        current_version_id=(
            active_version_id if active_version_id is not None else latest_version_id
        ),
        is_version_active=active_version_id is not None,
        is_latest_current_version=active_version_id == latest_version_id,
        description=row.get("Description"),
        created_date=row.get("CreatedDate"),
        last_modified_date=row.get("LastModifiedDate"),
    )


def _collect_ids_of_interest(accumulators: Iterable[_DefinitionAccumulator]) -> list[str]:
    return [
        accumulator.current_version_id
        for accumulator in accumulators
        if accumulator.current_version_id is not None
    ]


def _count_versions(
    definitions: CanonicalIdIndex[_DefinitionAccumulator],
    version_rows: Iterable[Row],
) -> None:
    for row in version_rows:
        parent = definitions.lookup(row.get("DefinitionId"))
        if parent is None:
            _LOGGER.warning(
                "Skipping flow version %s: unknown definition %s",
                row.get("Id"),
                row.get("DefinitionId"),
            )
            continue
        parent.versions_count += 1
        parent.type = row.get("ProcessType")


def _build_current_version(record: Mapping[str, Any], *, urls: UrlBuilder) -> FlowVersion:
    metrics = extract_flow_metrics(MetadataDocument.from_raw(record.get("Metadata")))
    return build_flow_version(record, metrics, urls=urls)


def _attach_current_versions(
    definitions: CanonicalIdIndex[_DefinitionAccumulator],
    versions: Iterable[FlowVersion],
) -> None:
    for version in versions:
        parent = definitions.lookup(version.definition_id)
        if parent is None:
            _LOGGER.warning(
                "Skipping flow version %s: unknown definition %s",
                version.id,
                version.definition_id,
            )
            continue
        parent.current_version = version
