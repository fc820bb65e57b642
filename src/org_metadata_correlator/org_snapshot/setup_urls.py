"""Setup deep-link builder for one org instance."""

from __future__ import annotations

from org_metadata_correlator.entity_models.object_types import ObjectType

_OBJECT_MANAGER = "/lightning/setup/ObjectManager"

_OBJECT_SUBPAGES = {
    "field": "FieldsAndRelationships",
    "field-set": "FieldSets",
    "layout": "PageLayouts",
    "web-link": "ButtonsLinksActions",
    "record-type": "RecordTypes",
}


class SetupUrlBuilder:  # pylint: disable=too-few-public-methods
    """Builds Lightning setup links relative to `instance_url`.

    Context arguments follow the resource kind: sub-resources of an object take
    the object's durable id, fields additionally its object type, and objects
    take the entity definition id and object type.
    """

    def __init__(self, instance_url: str) -> None:
        self._instance_url = instance_url.rstrip("/")

    def build_url(self, resource_kind: str, record_id: str | None, *context: str | None) -> str:
        return self._instance_url + self._path(resource_kind, record_id, context)

    def _path(
        self, resource_kind: str, record_id: str | None, context: tuple[str | None, ...]
    ) -> str:
        if resource_kind == "flowDefinition":
            return f"/{record_id}"
        if resource_kind == "flow":
            return f"/builder_platform_interaction/flowBuilder.app?flowId={record_id}"
        if resource_kind == "validation-rule":
            return f"{_OBJECT_MANAGER}/page?address=%2F{record_id}"
        if resource_kind == "object":
            entity_id = context[0] if context else None
            object_type = context[1] if len(context) > 1 else None
            if object_type == ObjectType.CUSTOM_SETTING.value:
                return f"/lightning/setup/CustomSettings/page?address=%2F{entity_id}"
            if object_type == ObjectType.CUSTOM_METADATA_TYPE.value:
                return f"/lightning/setup/CustomMetadata/page?address=%2F{entity_id}"
            return f"{_OBJECT_MANAGER}/{entity_id}/Details/view"
        if resource_kind in _OBJECT_SUBPAGES:
            object_durable_id = context[0] if context else None
            subpage = _OBJECT_SUBPAGES[resource_kind]
            return f"{_OBJECT_MANAGER}/{object_durable_id}/{subpage}/{record_id}/view"
        raise ValueError(f"Unsupported setup resource kind: {resource_kind}")
