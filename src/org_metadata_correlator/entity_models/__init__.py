"""Entity model exports."""

from .entity_builders import (
    EntityConstructionError,
    StandardFieldDetails,
    build_field_set,
    build_flow_version,
    build_object_limit,
    build_object_relationship,
    build_page_layout,
    build_record_type,
    build_standard_field,
    build_validation_rule,
    build_web_link,
    score_entity,
)
from .flow_entities import PROCESS_BUILDER_TYPE, DependencyAttachment, FlowDefinition, FlowVersion
from .object_entities import (
    FieldSet,
    ObjectDescription,
    ObjectLimit,
    ObjectRelationship,
    PageLayout,
    RecordType,
    StandardField,
    ValidationRule,
    WebLink,
)
from .object_types import ObjectType, classify_object_type

__all__ = [
    "PROCESS_BUILDER_TYPE",
    "DependencyAttachment",
    "EntityConstructionError",
    "FieldSet",
    "FlowDefinition",
    "FlowVersion",
    "ObjectDescription",
    "ObjectLimit",
    "ObjectRelationship",
    "ObjectType",
    "PageLayout",
    "RecordType",
    "StandardField",
    "StandardFieldDetails",
    "ValidationRule",
    "WebLink",
    "build_field_set",
    "build_flow_version",
    "build_object_limit",
    "build_object_relationship",
    "build_page_layout",
    "build_record_type",
    "build_standard_field",
    "build_validation_rule",
    "build_web_link",
    "classify_object_type",
    "score_entity",
]
