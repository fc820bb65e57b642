"""Correlation engine exports."""

from .canonical_id_index import CanonicalIdIndex
from .concurrent_mapping import DEFAULT_MAPPING_WORKERS, filter_in_order, map_in_order
from .correlation_errors import DuplicateCanonicalIdError, EntityNotFoundError
from .flow_correlation_pipeline import (
    FlowQueryBatch,
    correlate_flow_definitions,
    fetch_flow_query_batch,
    select_process_builders,
)
from .object_correlation_pipeline import describe_object_composite
from .query_catalog import (
    ObjectApiName,
    entity_definition_query,
    flow_definitions_query,
    flow_versions_query,
    parse_object_api_name,
)

__all__ = [
    "CanonicalIdIndex",
    "DEFAULT_MAPPING_WORKERS",
    "DuplicateCanonicalIdError",
    "EntityNotFoundError",
    "FlowQueryBatch",
    "ObjectApiName",
    "correlate_flow_definitions",
    "describe_object_composite",
    "entity_definition_query",
    "fetch_flow_query_batch",
    "filter_in_order",
    "flow_definitions_query",
    "flow_versions_query",
    "map_in_order",
    "parse_object_api_name",
    "select_process_builders",
]
