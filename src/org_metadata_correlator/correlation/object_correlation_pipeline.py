"""Object composite correlation service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from org_metadata_correlator.entity_models import (
    ObjectDescription,
    StandardFieldDetails,
    build_field_set,
    build_object_limit,
    build_object_relationship,
    build_page_layout,
    build_record_type,
    build_standard_field,
    build_validation_rule,
    build_web_link,
    classify_object_type,
    score_entity,
)
from org_metadata_correlator.identifier_normalization import (
    normalize_durable_member_id,
    normalize_record_id,
)
from org_metadata_correlator.platform_ports.collaborator_contracts import (
    PlatformCollaborators,
    Row,
)

from .concurrent_mapping import DEFAULT_MAPPING_WORKERS, filter_in_order, map_in_order
from .correlation_errors import EntityNotFoundError
from .query_catalog import entity_definition_query, parse_object_api_name

CUSTOM_FIELD_DURABLE_MARKER = ".00N"

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ObjectSources:
    """Results of the three independent object retrievals."""

    described: Mapping[str, Any]
    entity: Row
    record_count: int


@dataclass(frozen=True)
class _FieldPartition:
    standard_details: dict[str, StandardFieldDetails]
    custom_field_ids: tuple[str, ...]


def describe_object_composite(
    collaborators: PlatformCollaborators,
    api_name: str,
    *,
    mapping_workers: int = DEFAULT_MAPPING_WORKERS,
) -> ObjectDescription:
    """Merge describe, entity definition and record count of one object into a scored composite.

    Raises:
      EntityNotFoundError: if no entity definition row matches the name and its
        namespace filter.
    """
    sources = _retrieve_object_sources(collaborators, api_name)
    entity = sources.entity
    described = sources.described
    object_durable_id = str(entity.get("DurableId") or api_name)
    object_type = classify_object_type(
        str(described.get("name") or api_name),
        bool(described.get("customSetting")),
    )
    urls = collaborators.urls
    scorer = collaborators.scorer

    fields = _partition_fields(_subquery_records(entity, "Fields"))
    _LOGGER.info(
        "Correlating %s: %d standard and %d custom fields",
        api_name,
        len(fields.standard_details),
        len(fields.custom_field_ids),
    )
    standard_fields = map_in_order(
        filter_in_order(
            _describe_list(described, "fields"),
            lambda describe_field: describe_field.get("name") in fields.standard_details,
            max_workers=mapping_workers,
        ),
        lambda describe_field: score_entity(
            build_standard_field(
                describe_field,
                fields.standard_details[describe_field["name"]],
                object_durable_id=object_durable_id,
                object_type=object_type.value,
                urls=urls,
            ),
            scorer,
        ),
        max_workers=mapping_workers,
    )

    apex_trigger_ids = tuple(
        trigger_id
        for trigger_id in map_in_order(
            _subquery_records(entity, "ApexTriggers"),
            lambda row: normalize_record_id(row.get("Id")),
            max_workers=mapping_workers,
        )
        if trigger_id is not None
    )
    field_sets = map_in_order(
        _subquery_records(entity, "FieldSets"),
        lambda row: score_entity(
            build_field_set(row, object_durable_id=object_durable_id, urls=urls), scorer
        ),
        max_workers=mapping_workers,
    )
    layouts = map_in_order(
        _subquery_records(entity, "Layouts"),
        lambda row: score_entity(
            build_page_layout(row, object_durable_id=object_durable_id, urls=urls), scorer
        ),
        max_workers=mapping_workers,
    )
    limits = map_in_order(
        _subquery_records(entity, "Limits"),
        lambda row: score_entity(build_object_limit(row), scorer),
        max_workers=mapping_workers,
    )
    validation_rules = map_in_order(
        _subquery_records(entity, "ValidationRules"),
        lambda row: score_entity(build_validation_rule(row, urls=urls), scorer),
        max_workers=mapping_workers,
    )
    web_links = map_in_order(
        _subquery_records(entity, "WebLinks"),
        lambda row: score_entity(
            build_web_link(row, object_durable_id=object_durable_id, urls=urls), scorer
        ),
        max_workers=mapping_workers,
    )
    record_types = map_in_order(
        _describe_list(described, "recordTypeInfos"),
        lambda info: score_entity(
            build_record_type(info, object_durable_id=object_durable_id, urls=urls), scorer
        ),
        max_workers=mapping_workers,
    )
    relationships = map_in_order(
        filter_in_order(
            _describe_list(described, "childRelationships"),
            lambda info: bool(info.get("relationshipName")),
            max_workers=mapping_workers,
        ),
        lambda info: score_entity(build_object_relationship(info), scorer),
        max_workers=mapping_workers,
    )

    description = ObjectDescription(
        id=object_durable_id,
        name=str(entity.get("DeveloperName") or api_name),
        api_name=str(described.get("name") or api_name),
        label=described.get("label"),
        label_plural=described.get("labelPlural"),
        is_custom=bool(described.get("custom")),
        is_feed_enabled=bool(described.get("feedEnabled")),
        is_most_recent_enabled=bool(described.get("mruEnabled")),
        is_searchable=bool(described.get("searchable")),
        key_prefix=described.get("keyPrefix"),
        url=urls.build_url(
            "object", None, normalize_record_id(entity.get("Id")), object_type.value
        ),
        package=entity.get("NamespacePrefix") or "",
        type_id=object_type.value,
        description=entity.get("Description"),
        external_sharing_model=entity.get("ExternalSharingModel"),
        internal_sharing_model=entity.get("InternalSharingModel"),
        apex_trigger_ids=apex_trigger_ids,
        field_sets=field_sets,
        limits=limits,
        layouts=layouts,
        validation_rules=validation_rules,
        web_links=web_links,
        standard_fields=standard_fields,
        custom_field_ids=fields.custom_field_ids,
        record_types=record_types,
        relationships=relationships,
        record_count=sources.record_count,
    )
    return score_entity(description, scorer)


def _retrieve_object_sources(collaborators: PlatformCollaborators, api_name: str) -> _ObjectSources:
    query = entity_definition_query(parse_object_api_name(api_name))
    with ThreadPoolExecutor(max_workers=3) as executor:
        describe_future = executor.submit(collaborators.describer.describe_object, api_name)
        entity_future = executor.submit(collaborators.transport.run_queries, [query])
        count_future = executor.submit(collaborators.record_counter.count_records, api_name)
        described = describe_future.result()
        entity_rows = entity_future.result()[0]
        record_count = count_future.result()
    if not entity_rows:
        raise EntityNotFoundError("entity definition", api_name)
    return _ObjectSources(described=described, entity=entity_rows[0], record_count=record_count)


def _partition_fields(field_rows: Sequence[Row]) -> _FieldPartition:
    standard_details: dict[str, StandardFieldDetails] = {}
    custom_field_ids: list[str] = []
    for row in field_rows:
        durable_id = row.get("DurableId")
        if not isinstance(durable_id, str) or not durable_id:
            continue
        field_id = normalize_durable_member_id(durable_id)
        if field_id is None:
            continue
        if CUSTOM_FIELD_DURABLE_MARKER in durable_id:
            custom_field_ids.append(field_id)
        elif row.get("QualifiedApiName"):
            standard_details[row["QualifiedApiName"]] = StandardFieldDetails(
                id=field_id,
                description=row.get("Description"),
                is_indexed=bool(row.get("IsIndexed")),
            )
    return _FieldPartition(
        standard_details=standard_details,
        custom_field_ids=tuple(custom_field_ids),
    )


def _subquery_records(entity: Mapping[str, Any], relationship: str) -> tuple[Row, ...]:
    """Return the records of a nested subquery; absent or empty subqueries give ()."""
    subquery = entity.get(relationship)
    if not isinstance(subquery, Mapping):
        return ()
    records = subquery.get("records")
    if not isinstance(records, Sequence) or isinstance(records, str):
        return ()
    return tuple(records)


def _describe_list(described: Mapping[str, Any], key: str) -> tuple[Mapping[str, Any], ...]:
    values = described.get(key)
    if not isinstance(values, Sequence) or isinstance(values, str):
        return ()
    return tuple(values)