"""Model export tests."""

from __future__ import annotations

import json
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

import pytest
from openpyxl import load_workbook
from org_metadata_correlator.entity_models import (
    DependencyAttachment,
    FlowDefinition,
    ObjectDescription,
    ObjectLimit,
    ObjectRelationship,
)
from org_metadata_correlator.model_export import (
    FLOWS_SHEET_NAME,
    OBJECT_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    ExportFormat,
    RunMetadata,
    export_flow_definitions_json,
    export_object_json,
    write_flow_workbook,
    write_object_workbook,
)


def _definition(definition_id: str, flow_type: str | None = "Flow") -> FlowDefinition:
    return FlowDefinition(
        id=definition_id,
        name=f"Flow_{definition_id[-1]}",
        url=f"https://acme.my.salesforce.com/{definition_id}",
        api_version=58.0,
        current_version_id=None,
        is_version_active=False,
        is_latest_current_version=True,
        versions_count=0,
        type=flow_type,
        description=None,
        created_date=None,
        last_modified_date=None,
        dependencies=DependencyAttachment(
            graph={"edges": []}, dependencies_for="current_version_id"
        ),
        score=2,
    )


def _description() -> ObjectDescription:
    return ObjectDescription(
        id="Account",
        name="Account",
        api_name="Account",
        label="Account",
        label_plural="Accounts",
        is_custom=False,
        is_feed_enabled=True,
        is_most_recent_enabled=True,
        is_searchable=True,
        key_prefix="001",
        url="https://acme.my.salesforce.com/lightning/setup/ObjectManager/Account/Details/view",
        package="",
        type_id="StandardEntity",
        description=None,
        external_sharing_model="Private",
        internal_sharing_model="ReadWrite",
        apex_trigger_ids=("01q5e000000TrgA",),
        field_sets=(),
        limits=(
            ObjectLimit(
                id="CustomFields",
                label="Custom Fields",
                max=800,
                remaining=600,
                used=200,
                used_percentage=0.25,
                type="Data",
            ),
        ),
        layouts=(),
        validation_rules=(),
        web_links=(),
        standard_fields=(),
        custom_field_ids=("00N5e00000AbCdE",),
        record_types=(),
        relationships=(
            ObjectRelationship(
                name="Contacts",
                child_object="Contact",
                field_name="AccountId",
                is_cascade_delete=False,
                is_restricted_delete=False,
            ),
        ),
        record_count=12,
        score=1,
    )


def _run_metadata(run_kind: str, entity_count: int) -> RunMetadata:
    return RunMetadata(
        run_start=datetime(2024, 5, 1, 8, 30, tzinfo=UTC),
        config_path=Path("/work/config.yaml"),
        snapshot_path=Path("/work/org-snapshot.yaml"),
        instance_url="https://acme.my.salesforce.com",
        run_kind=run_kind,
        entity_count=entity_count,
    )


def test_export_format_follows_output_suffix() -> None:
    assert ExportFormat.for_path(None) is ExportFormat.JSON
    assert ExportFormat.for_path("flows.json") is ExportFormat.JSON
    assert ExportFormat.for_path("REPORT.XLSX") is ExportFormat.WORKBOOK


def test_flow_json_is_sorted_and_carries_derived_flags() -> None:
    definitions = {
        "3005e000000DefB": _definition("3005e000000DefB", "Workflow"),
        "3005e000000DefA": _definition("3005e000000DefA"),
    }

    payload = json.loads(export_flow_definitions_json(definitions))
    exported = payload["flow_definitions"]

    assert list(exported) == ["3005e000000DefA", "3005e000000DefB"]
    assert exported["3005e000000DefA"]["is_process_builder"] is False
    assert exported["3005e000000DefB"]["is_process_builder"] is True
    assert exported["3005e000000DefA"]["dependencies"] == {
        "dependencies_for": "current_version_id"
    }


def test_flow_json_writes_shared_dependency_graph_once() -> None:
    graph = {"edges": [{"id": f"3015e000000Ver{index}"} for index in range(3)]}
    definitions = {
        definition_id: replace(
            _definition(definition_id),
            dependencies=DependencyAttachment(graph=graph, dependencies_for="current_version_id"),
        )
        for definition_id in ("3005e000000DefA", "3005e000000DefB", "3005e000000DefC")
    }

    rendered = export_flow_definitions_json(definitions)

    assert json.loads(rendered)["dependency_graph"] == graph
    assert rendered.count("3015e000000Ver2") == 1


def test_flow_json_rejects_definitions_with_different_graphs() -> None:
    definitions = {
        "3005e000000DefA": _definition("3005e000000DefA"),
        "3005e000000DefB": replace(
            _definition("3005e000000DefB"),
            dependencies=DependencyAttachment(
                graph={"edges": ["other"]}, dependencies_for="current_version_id"
            ),
        ),
    }

    with pytest.raises(ValueError, match="single dependency graph"):
        export_flow_definitions_json(definitions)


def test_flow_json_without_definitions_has_no_graph() -> None:
    assert json.loads(export_flow_definitions_json({})) == {
        "dependency_graph": None,
        "flow_definitions": {},
    }


def test_object_json_serializes_nested_sub_resources() -> None:
    payload = json.loads(export_object_json(_description()))

    assert payload["limits"][0]["used"] == 200
    assert payload["relationships"][0]["name"] == "Contacts"
    assert payload["custom_field_ids"] == ["00N5e00000AbCdE"]


def test_flow_workbook_writes_header_rows_and_run_info(tmp_path: Path) -> None:
    definitions = {"3005e000000DefA": _definition("3005e000000DefA")}

    output_path = write_flow_workbook(
        definitions, tmp_path / "nested" / "flows.xlsx", _run_metadata("flows", 1)
    )

    workbook = load_workbook(output_path)
    assert workbook.sheetnames == [FLOWS_SHEET_NAME, RUN_INFO_SHEET_NAME]
    sheet = workbook[FLOWS_SHEET_NAME]
    headers = [cell.value for cell in sheet[1]]
    assert headers[:3] == ["Id", "Name", "URL"]
    assert "Total Nodes" in headers
    row = dict(zip(headers, [cell.value for cell in sheet[2]], strict=True))
    assert row["Id"] == "3005e000000DefA"
    assert row["Total Nodes"] is None
    assert row["Score"] == 2
    assert sheet.freeze_panes == "A2"
    run_info = workbook[RUN_INFO_SHEET_NAME]
    assert run_info.cell(row=1, column=2).value == "2024-05-01T08:30:00+00:00"


def test_object_workbook_writes_summary_and_sub_resource_sheets(tmp_path: Path) -> None:
    output_path = write_object_workbook(
        _description(), tmp_path / "account.xlsx", _run_metadata("object", 1)
    )

    workbook = load_workbook(output_path)
    assert workbook.sheetnames == [
        OBJECT_SHEET_NAME,
        "StandardFields",
        "FieldSets",
        "Layouts",
        "Limits",
        "ValidationRules",
        "WebLinks",
        "RecordTypes",
        "Relationships",
        RUN_INFO_SHEET_NAME,
    ]
    summary = workbook[OBJECT_SHEET_NAME]
    values = {
        summary.cell(row=row, column=1).value: summary.cell(row=row, column=2).value
        for row in range(1, summary.max_row + 1)
    }
    assert values["custom_field_ids"] == '["00N5e00000AbCdE"]'
    assert values["record_count"] == 12
    limits = workbook["Limits"]
    assert [cell.value for cell in limits[2]][-2:] == [25.0, None]
    assert workbook["Layouts"].max_row == 1
