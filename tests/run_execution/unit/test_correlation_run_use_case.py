"""Tests for run execution use-case service."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import pytest
from openpyxl import load_workbook
from org_metadata_correlator.run_execution import (
    RunExecutionError,
    RunRequest,
    execute_flow_correlation_run,
    execute_object_description_run,
)

SNAPSHOT = """
queries:
  flow_definitions:
    - {Id: 3005e000000DefAQAK, DeveloperName: Sample_Flow, ActiveVersionId: 3015e000000Ver1AAK}
  flow_versions:
    - {Id: 3015e000000Ver1AAK, DefinitionId: 3005e000000DefAQAK, ProcessType: Flow}
  entity_definition:
    - {Id: 000000000000000AAA, DurableId: Account, QualifiedApiName: Account, PublisherId: System}
describes:
  Account: {name: Account, label: Account, fields: []}
bulk:
  Flow:
    3015e000000Ver1:
      Id: 3015e000000Ver1AAK
      DefinitionId: 3005e000000DefAQAK
      FullName: Sample_Flow-1
      Status: Active
      Metadata: {screens: [{name: One}]}
record_counts:
  Account: 7
"""


def _write_config(tmp_path: Path) -> Path:
    (tmp_path / "snapshot.yaml").write_text(SNAPSHOT, encoding="utf-8")
    config = {
        "snapshot": {"path": "snapshot.yaml"},
        "org": {"instance_url": "https://acme.my.salesforce.com"},
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def test_flow_run_without_output_returns_rendered_json(tmp_path: Path) -> None:
    outcome = execute_flow_correlation_run(RunRequest(config_path=str(_write_config(tmp_path))))

    assert outcome.run_kind == "flows"
    assert outcome.entity_count == 1
    assert outcome.output_path is None
    payload = json.loads(outcome.rendered_json)
    definition = payload["flow_definitions"]["3005e000000DefA"]
    assert definition["current_version"]["screen_node_count"] == 1
    assert definition["dependencies"] == {"dependencies_for": "current_version_id"}
    assert payload["dependency_graph"]["root_ids"] == ["3015e000000Ver1"]


def test_flow_run_writes_json_file_into_missing_directory(tmp_path: Path) -> None:
    output_path = tmp_path / "out" / "flows.json"

    outcome = execute_flow_correlation_run(
        RunRequest(config_path=str(_write_config(tmp_path)), output_path=str(output_path))
    )

    assert outcome.output_path == output_path.resolve()
    assert outcome.rendered_json is None
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["flow_definitions"]["3005e000000DefA"]["versions_count"] == 1


def test_object_run_writes_workbook(tmp_path: Path) -> None:
    output_path = tmp_path / "account.xlsx"

    outcome = execute_object_description_run(
        RunRequest(
            config_path=str(_write_config(tmp_path)),
            output_path=str(output_path),
            object_name="Account",
        )
    )

    assert outcome.run_kind == "object"
    assert outcome.output_path == output_path.resolve()
    summary = load_workbook(output_path)["Object"]
    values = {
        summary.cell(row=row, column=1).value: summary.cell(row=row, column=2).value
        for row in range(1, summary.max_row + 1)
    }
    assert values["api_name"] == "Account"
    assert values["record_count"] == 7


def test_injected_collaborators_replace_snapshot_wiring(tmp_path: Path) -> None:
    class CountingRecordCounter:
        def __init__(self) -> None:
            self.requested: list[str] = []

        def count_records(self, api_name: str) -> int:
            self.requested.append(api_name)
            return 99

    counter = CountingRecordCounter()

    outcome = execute_object_description_run(
        RunRequest(config_path=str(_write_config(tmp_path)), object_name="Account"),
        collaborators_factory=lambda artifacts: replace(
            artifacts.collaborators, record_counter=counter
        ),
    )

    assert json.loads(outcome.rendered_json)["record_count"] == 99
    assert counter.requested == ["Account"]


def test_object_run_requires_object_name(tmp_path: Path) -> None:
    with pytest.raises(RunExecutionError, match="object name is required"):
        execute_object_description_run(RunRequest(config_path=str(_write_config(tmp_path))))


def test_invalid_configuration_is_reported_as_run_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("org: {}\n", encoding="utf-8")

    with pytest.raises(RunExecutionError, match="snapshot"):
        execute_flow_correlation_run(RunRequest(config_path=str(config_path)))
