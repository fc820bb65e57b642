"""Flow node metric extraction tests."""

from __future__ import annotations

from org_metadata_correlator.metric_extraction import (
    FLOW_NODE_COLLECTIONS,
    MetadataDocument,
    extract_flow_metrics,
)


def test_counts_only_present_collections() -> None:
    document = MetadataDocument.from_raw(
        {"recordCreates": [{"name": "a"}, {"name": "b"}], "screens": [{"name": "c"}]}
    )

    metrics = extract_flow_metrics(document)

    assert metrics.total_node_count == 3
    assert metrics.dml_create_node_count == 2
    assert metrics.screen_node_count == 1
    assert metrics.dml_delete_node_count == 0
    assert metrics.dml_update_node_count == 0


def test_every_enumerated_collection_contributes_to_total() -> None:
    document = MetadataDocument.from_raw({name: [{}] for name in FLOW_NODE_COLLECTIONS})

    assert extract_flow_metrics(document).total_node_count == len(FLOW_NODE_COLLECTIONS)


def test_unlisted_collections_are_ignored() -> None:
    document = MetadataDocument.from_raw({"formulas": [{}, {}], "variables": [{}]})

    assert extract_flow_metrics(document).total_node_count == 0


def test_process_metadata_values_set_sobject_and_trigger_type() -> None:
    document = MetadataDocument.from_raw(
        {
            "processMetadataValues": [
                {"name": "ObjectType", "value": {"stringValue": "Account"}},
                {"name": "TriggerType", "value": {"stringValue": "onAllChanges"}},
                {"name": "BuilderType", "value": {"stringValue": "LightningFlowBuilder"}},
            ]
        }
    )

    metrics = extract_flow_metrics(document)

    assert metrics.sobject == "Account"
    assert metrics.trigger_type == "onAllChanges"


def test_missing_process_metadata_values_leave_classification_unset() -> None:
    metrics = extract_flow_metrics(MetadataDocument.from_raw({}))

    assert metrics.sobject is None
    assert metrics.trigger_type is None


def test_document_accessor_defaults_for_absent_or_mistyped_entries() -> None:
    document = MetadataDocument.from_raw({"screens": "not-a-list", "steps": None, "waits": {}})

    assert document.collection("screens") == ()
    assert document.collection("steps") == ()
    assert document.collection("waits") == ()
    assert document.collection_size("decisions") == 0


def test_non_mapping_document_is_treated_as_empty() -> None:
    assert MetadataDocument.from_raw(None).collection("screens") == ()
