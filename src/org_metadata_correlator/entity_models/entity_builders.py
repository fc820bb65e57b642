"""Builders that turn raw rows into typed, immutable entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, TypeVar

from org_metadata_correlator.identifier_normalization import normalize_record_id
from org_metadata_correlator.metric_extraction import FlowNodeMetrics
from org_metadata_correlator.platform_ports.collaborator_contracts import EntityScorer, UrlBuilder

from .flow_entities import FlowVersion
from .object_entities import (
    FieldSet,
    ObjectLimit,
    ObjectRelationship,
    PageLayout,
    RecordType,
    StandardField,
    ValidationRule,
    WebLink,
)

_ScoredEntity = TypeVar("_ScoredEntity")


class EntityConstructionError(Exception):
    """Raised when a row lacks an attribute its entity requires."""


@dataclass(frozen=True)
class StandardFieldDetails:
    """Tooling-side attributes of a standard field, keyed by API name."""

    id: str
    description: str | None
    is_indexed: bool


def score_entity(entity: _ScoredEntity, scorer: EntityScorer) -> _ScoredEntity:
    """Return a copy of `entity` carrying the scorer's quality score."""
    return replace(entity, score=scorer.compute_score(entity))  # type: ignore[type-var]


def build_flow_version(
    record: Mapping[str, Any],
    metrics: FlowNodeMetrics,
    *,
    urls: UrlBuilder,
) -> FlowVersion:
    """Build a flow version from a bulk metadata record and its extracted metrics."""
    version_id = _require_id(record, "Id", "Flow")
    return FlowVersion(
        id=version_id,
        definition_id=normalize_record_id(record.get("DefinitionId")),
        name=_require(record, "FullName", "Flow"),
        url=urls.build_url("flow", version_id),
        version=optional_int(record.get("VersionNumber")),
        api_version=optional_float(record.get("ApiVersion")),
        total_node_count=metrics.total_node_count,
        dml_create_node_count=metrics.dml_create_node_count,
        dml_delete_node_count=metrics.dml_delete_node_count,
        dml_update_node_count=metrics.dml_update_node_count,
        screen_node_count=metrics.screen_node_count,
        is_active=record.get("Status") == "Active",
        description=record.get("Description"),
        type=record.get("ProcessType"),
        running_mode=record.get("RunInMode"),
        sobject=metrics.sobject,
        trigger_type=metrics.trigger_type,
        created_date=record.get("CreatedDate"),
        last_modified_date=record.get("LastModifiedDate"),
    )


def build_standard_field(
    describe_field: Mapping[str, Any],
    details: StandardFieldDetails,
    *,
    object_durable_id: str,
    object_type: str,
    urls: UrlBuilder,
) -> StandardField:
    """Merge describe presentation metadata with tooling-side field details."""
    label = describe_field.get("label")
    return StandardField(
        id=details.id,
        name=label or _require(describe_field, "name", "Field"),
        label=label,
        description=details.description,
        tooltip=describe_field.get("inlineHelpText"),
        type=describe_field.get("type"),
        length=optional_int(describe_field.get("length")),
        is_unique=bool(describe_field.get("unique")),
        is_encrypted=bool(describe_field.get("encrypted")),
        is_external_id=bool(describe_field.get("externalId")),
        is_indexed=details.is_indexed,
        default_value=describe_field.get("defaultValue"),
        formula=describe_field.get("calculatedFormula"),
        url=urls.build_url("field", details.id, object_durable_id, object_type),
    )


def build_field_set(
    row: Mapping[str, Any], *, object_durable_id: str, urls: UrlBuilder
) -> FieldSet:
    field_set_id = _require_id(row, "Id", "FieldSet")
    return FieldSet(
        id=field_set_id,
        label=row.get("MasterLabel"),
        description=row.get("Description"),
        url=urls.build_url("field-set", field_set_id, object_durable_id),
    )


def build_page_layout(
    row: Mapping[str, Any], *, object_durable_id: str, urls: UrlBuilder
) -> PageLayout:
    layout_id = _require_id(row, "Id", "Layout")
    return PageLayout(
        id=layout_id,
        name=row.get("Name"),
        type=row.get("LayoutType"),
        url=urls.build_url("layout", layout_id, object_durable_id),
    )


def build_object_limit(row: Mapping[str, Any]) -> ObjectLimit:
    """Build a limit entity; a zero maximum yields a zero usage ratio."""
    maximum = optional_int(row.get("Max")) or 0
    remaining = optional_int(row.get("Remaining")) or 0
    used = maximum - remaining
    return ObjectLimit(
        id=_require_id(row, "DurableId", "Limit"),
        label=row.get("Label"),
        max=maximum,
        remaining=remaining,
        used=used,
        used_percentage=(used / maximum) if maximum else 0.0,
        type=row.get("Type"),
    )


def build_validation_rule(row: Mapping[str, Any], *, urls: UrlBuilder) -> ValidationRule:
    rule_id = _require_id(row, "Id", "ValidationRule")
    return ValidationRule(
        id=rule_id,
        name=row.get("ValidationName"),
        is_active=bool(row.get("Active")),
        description=row.get("Description"),
        error_display_field=row.get("ErrorDisplayField"),
        error_message=row.get("ErrorMessage"),
        url=urls.build_url("validation-rule", rule_id),
    )


def build_web_link(row: Mapping[str, Any], *, object_durable_id: str, urls: UrlBuilder) -> WebLink:
    link_id = _require_id(row, "Id", "WebLink")
    return WebLink(
        id=link_id,
        name=row.get("Name"),
        url=urls.build_url("web-link", link_id, object_durable_id),
    )


def build_record_type(
    info: Mapping[str, Any], *, object_durable_id: str, urls: UrlBuilder
) -> RecordType:
    record_type_id = _require_id(info, "recordTypeId", "RecordType")
    return RecordType(
        id=record_type_id,
        name=info.get("name"),
        developer_name=info.get("developerName"),
        url=urls.build_url("record-type", record_type_id, object_durable_id),
        is_active=bool(info.get("active")),
        is_available=bool(info.get("available")),
        is_default_record_type_mapping=bool(info.get("defaultRecordTypeMapping")),
        is_master=bool(info.get("master")),
    )


def build_object_relationship(info: Mapping[str, Any]) -> ObjectRelationship:
    return ObjectRelationship(
        name=_require(info, "relationshipName", "ObjectRelationship"),
        child_object=info.get("childSObject"),
        field_name=info.get("field"),
        is_cascade_delete=bool(info.get("cascadeDelete")),
        is_restricted_delete=bool(info.get("restrictedDelete")),
    )


def _require(row: Mapping[str, Any], key: str, entity_kind: str) -> Any:
    value = row.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise EntityConstructionError(f"{entity_kind} row is missing required attribute '{key}'.")
    return value


def _require_id(row: Mapping[str, Any], key: str, entity_kind: str) -> str:
    canonical = normalize_record_id(_require(row, key, entity_kind))
    if canonical is None:  # pragma: no cover - _require rejects blanks
        raise EntityConstructionError(f"{entity_kind} row has an empty '{key}'.")
    return canonical


def optional_int(value: object) -> int | None:
    """Coerce a numeric row value to int; absent or unparseable values give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value)))
    except ValueError:
        return None


def optional_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(str(value))
    except ValueError:
        return None
