"""Object composite entity and its sub-resource entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StandardField:  # pylint: disable=too-many-instance-attributes
    """Standard field merged from the tooling row and the describe result."""

    id: str
    name: str
    label: str | None
    description: str | None
    tooltip: str | None
    type: str | None
    length: int | None
    is_unique: bool
    is_encrypted: bool
    is_external_id: bool
    is_indexed: bool
    default_value: object
    formula: str | None
    url: str
    score: int | None = None


@dataclass(frozen=True)
class FieldSet:
    id: str
    label: str | None
    description: str | None
    url: str
    score: int | None = None


@dataclass(frozen=True)
class PageLayout:
    id: str
    name: str | None
    type: str | None
    url: str
    score: int | None = None


@dataclass(frozen=True)
class ObjectLimit:  # pylint: disable=too-many-instance-attributes
    """Governor limit applied to an object, with derived usage."""

    id: str
    label: str | None
    max: int
    remaining: int
    used: int
    used_percentage: float
    type: str | None
    score: int | None = None


@dataclass(frozen=True)
class ValidationRule:
    id: str
    name: str | None
    is_active: bool
    description: str | None
    error_display_field: str | None
    error_message: str | None
    url: str
    score: int | None = None


@dataclass(frozen=True)
class WebLink:
    id: str
    name: str | None
    url: str
    score: int | None = None


@dataclass(frozen=True)
class RecordType:  # pylint: disable=too-many-instance-attributes
    id: str
    name: str | None
    developer_name: str | None
    url: str
    is_active: bool
    is_available: bool
    is_default_record_type_mapping: bool
    is_master: bool
    score: int | None = None


@dataclass(frozen=True)
class ObjectRelationship:
    """Child relationship of an object; keyed by relationship name."""

    name: str
    child_object: str | None
    field_name: str | None
    is_cascade_delete: bool
    is_restricted_delete: bool
    score: int | None = None


@dataclass(frozen=True)
class ObjectDescription:  # pylint: disable=too-many-instance-attributes
    """Object schema merged with its sub-resources from all query surfaces."""

    id: str
    name: str
    api_name: str
    label: str | None
    label_plural: str | None
    is_custom: bool
    is_feed_enabled: bool
    is_most_recent_enabled: bool
    is_searchable: bool
    key_prefix: str | None
    url: str
    package: str
    type_id: str
    description: str | None
    external_sharing_model: str | None
    internal_sharing_model: str | None
    apex_trigger_ids: tuple[str, ...]
    field_sets: tuple[FieldSet, ...]
    limits: tuple[ObjectLimit, ...]
    layouts: tuple[PageLayout, ...]
    validation_rules: tuple[ValidationRule, ...]
    web_links: tuple[WebLink, ...]
    standard_fields: tuple[StandardField, ...]
    custom_field_ids: tuple[str, ...]
    record_types: tuple[RecordType, ...]
    relationships: tuple[ObjectRelationship, ...]
    record_count: int
    score: int | None = None
