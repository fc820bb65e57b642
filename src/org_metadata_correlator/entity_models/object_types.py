"""Object type classification by API-name suffix conventions."""

from __future__ import annotations

from enum import Enum


class ObjectType(str, Enum):
    """Kinds of objects distinguished in setup links and reports."""

    STANDARD_OBJECT = "StandardEntity"
    CUSTOM_OBJECT = "CustomObject"
    CUSTOM_SETTING = "CustomSetting"
    CUSTOM_METADATA_TYPE = "CustomMetadataType"
    PLATFORM_EVENT = "CustomEvent"
    EXTERNAL_OBJECT = "ExternalObject"
    BIG_OBJECT = "CustomBigObject"
    KNOWLEDGE_ARTICLE = "KnowledgeArticle"


_SUFFIX_TYPES: tuple[tuple[str, ObjectType], ...] = (
    ("__mdt", ObjectType.CUSTOM_METADATA_TYPE),
    ("__e", ObjectType.PLATFORM_EVENT),
    ("__x", ObjectType.EXTERNAL_OBJECT),
    ("__b", ObjectType.BIG_OBJECT),
    ("__kav", ObjectType.KNOWLEDGE_ARTICLE),
    ("__c", ObjectType.CUSTOM_OBJECT),
)


def classify_object_type(api_name: str, is_custom_setting: bool = False) -> ObjectType:
    """Return the object type for an API name; custom settings win over suffixes."""
    if is_custom_setting:
        return ObjectType.CUSTOM_SETTING
    lowered = api_name.lower()
    for suffix, object_type in _SUFFIX_TYPES:
        if lowered.endswith(suffix):
            return object_type
    return ObjectType.STANDARD_OBJECT
