"""Flow version node-count and classification extraction service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .metadata_document import MetadataDocument

FLOW_NODE_COLLECTIONS: tuple[str, ...] = (
    "actionCalls",
    "apexPluginCalls",
    "assignments",
    "collectionProcessors",
    "decisions",
    "loops",
    "orchestratedStages",
    "recordCreates",
    "recordDeletes",
    "recordLookups",
    "recordRollbacks",
    "recordUpdates",
    "screens",
    "steps",
    "waits",
)

PROCESS_METADATA_VALUES = "processMetadataValues"
OBJECT_TYPE_KEY = "ObjectType"
TRIGGER_TYPE_KEY = "TriggerType"


@dataclass(frozen=True)
class FlowNodeMetrics:
    """Derived counters and classification values for one flow version."""

    total_node_count: int
    dml_create_node_count: int
    dml_delete_node_count: int
    dml_update_node_count: int
    screen_node_count: int
    sobject: str | None = None
    trigger_type: str | None = None


def extract_flow_metrics(document: MetadataDocument) -> FlowNodeMetrics:
    """Compute node counts and scan process metadata values of a flow metadata document."""
    process_values = _scan_process_metadata_values(document)
    return FlowNodeMetrics(
        total_node_count=sum(document.collection_size(name) for name in FLOW_NODE_COLLECTIONS),
        dml_create_node_count=document.collection_size("recordCreates"),
        dml_delete_node_count=document.collection_size("recordDeletes"),
        dml_update_node_count=document.collection_size("recordUpdates"),
        screen_node_count=document.collection_size("screens"),
        sobject=process_values.get(OBJECT_TYPE_KEY),
        trigger_type=process_values.get(TRIGGER_TYPE_KEY),
    )


def _scan_process_metadata_values(document: MetadataDocument) -> dict[str, str | None]:
    found: dict[str, str | None] = {}
    for entry in document.collection(PROCESS_METADATA_VALUES):
        if not isinstance(entry, Mapping):
            continue
        name = entry.get("name")
        if name not in (OBJECT_TYPE_KEY, TRIGGER_TYPE_KEY):
            continue
        found[name] = _string_value(entry.get("value"))
    return found


def _string_value(value: object) -> str | None:
    if not isinstance(value, Mapping):
        return None
    string_value = value.get("stringValue")
    return string_value if isinstance(string_value, str) else None
