"""Scenario-style integration tests for core correlation behaviors."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from org_metadata_correlator.configuration.loader import load_configuration
from org_metadata_correlator.correlation import (
    correlate_flow_definitions,
    describe_object_composite,
    select_process_builders,
)
from org_metadata_correlator.org_snapshot import build_snapshot_collaborators, load_org_snapshot

PROJECT_ROOT = Path(__file__).resolve().parents[3]
SAMPLE_CONFIG = PROJECT_ROOT / "samples" / "config.yaml"


def _sample_collaborators():
    configuration = load_configuration(SAMPLE_CONFIG)
    snapshot = load_org_snapshot(configuration.snapshot.path)
    return configuration, build_snapshot_collaborators(
        snapshot, instance_url=configuration.org.instance_url
    )


def _sample_definitions():
    configuration, collaborators = _sample_collaborators()
    return correlate_flow_definitions(
        collaborators,
        tolerable_error_codes=configuration.bulk.tolerable_error_codes,
        chunk_size=configuration.bulk.chunk_size,
        bulk_parallelism=configuration.bulk.parallelism,
        mapping_workers=configuration.correlation.parallelism,
    )


def test_given_active_and_latest_versions_when_correlating_then_active_version_is_current() -> None:
    definition = _sample_definitions()["3005e000000DefA"]

    assert definition.current_version_id == "3015e000000Ver1"
    assert definition.is_version_active is True
    assert definition.is_latest_current_version is False
    assert definition.versions_count == 2
    assert definition.type == "AutoLaunchedFlow"
    assert definition.current_version.name == "Account_After_Save-1"
    assert definition.current_version.sobject == "Account"
    assert definition.current_version.trigger_type == "RecordAfterSave"
    assert definition.current_version.dml_update_node_count == 1
    assert definition.url == "https://example.my.salesforce.com/3005e000000DefA"
    assert definition.score == 0


def test_given_no_active_version_when_correlating_then_latest_version_is_current() -> None:
    definition = _sample_definitions()["3005e000000DefC"]

    assert definition.current_version_id == "3015e000000Ver4"
    assert definition.is_version_active is False
    assert definition.current_version.total_node_count == 4
    assert definition.current_version.screen_node_count == 2
    assert definition.current_version.is_active is False


def test_given_tolerated_bulk_failure_when_correlating_then_definition_is_kept_unresolved() -> None:
    definition = _sample_definitions()["3005e000000DefB"]

    assert definition.current_version_id == "3015e000000Ver3"
    assert definition.current_version is None
    assert definition.score == 2


def test_given_workflow_versions_when_selecting_then_only_process_builders_remain() -> None:
    process_builders = select_process_builders(_sample_definitions())

    assert list(process_builders) == ["3005e000000DefB"]


def test_given_mixed_id_formats_when_attaching_dependencies_then_graph_uses_canonical_ids() -> None:
    definitions = _sample_definitions()

    graph = definitions["3005e000000DefA"].dependencies.graph
    assert graph.root_ids == ("3015e000000Ver1", "3015e000000Ver3", "3015e000000Ver4")
    assert [edge.ref_name for edge in graph.edges] == ["TierCalculator"]
    assert all(definition.dependencies.graph is graph for definition in definitions.values())


def test_given_packaged_object_when_describing_then_namespace_and_type_are_resolved() -> None:
    _, collaborators = _sample_collaborators()

    description = describe_object_composite(collaborators, "fin__Invoice__c")

    assert description.package == "fin"
    assert description.type_id == "CustomObject"
    assert description.record_count == 87
    assert [field.id for field in description.standard_fields] == ["Name"]
    assert description.url.endswith("/lightning/setup/ObjectManager/01I5e0000000Inv/Details/view")


def test_given_standard_object_when_describing_then_sub_resources_are_merged() -> None:
    _, collaborators = _sample_collaborators()

    description = describe_object_composite(collaborators, "Account")

    assert [field.id for field in description.standard_fields] == ["Name", "Industry"]
    assert description.standard_fields[1].tooltip == "Primary business sector"
    assert description.custom_field_ids == ("00N5e00000AbCdE",)
    assert description.apex_trigger_ids == ("01q5e000000TrgA",)
    assert description.validation_rules[0].name == "Require_Industry"
    assert description.web_links == ()
    assert [relationship.name for relationship in description.relationships] == [
        "Contacts",
        "Opportunities",
    ]
    assert description.limits[0].used == 150


def test_given_module_entry_point_when_requesting_help_then_commands_are_listed() -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        path for path in (str(PROJECT_ROOT / "src"), env.get("PYTHONPATH")) if path
    )

    result = subprocess.run(
        [sys.executable, "-m", "org_metadata_correlator", "--help"],
        cwd=PROJECT_ROOT,
        env=env,
        check=False,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "flows" in result.stdout
    assert "generate-config" in result.stdout
