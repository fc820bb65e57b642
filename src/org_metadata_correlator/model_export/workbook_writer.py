"""Correlated model workbook writer service."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from org_metadata_correlator.entity_models import (
    FieldSet,
    FlowDefinition,
    ObjectDescription,
    ObjectLimit,
    ObjectRelationship,
    PageLayout,
    RecordType,
    StandardField,
    ValidationRule,
    WebLink,
)

from .report_models import RunMetadata

FLOWS_SHEET_NAME = "Flows"
OBJECT_SHEET_NAME = "Object"
RUN_INFO_SHEET_NAME = "RunInfo"

_Row = TypeVar("_Row")


@dataclass(frozen=True)
class _Column(Generic[_Row]):
    """One rendered column: header text and the accessor producing its cell value."""

    header: str
    value: Callable[[_Row], Any]


_FLOW_COLUMNS: tuple[_Column[FlowDefinition], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Name", lambda item: item.name),
    _Column("URL", lambda item: item.url),
    _Column("API Version", lambda item: item.api_version),
    _Column("Type", lambda item: item.type),
    _Column("Process Builder", lambda item: item.is_process_builder),
    _Column("Current Version Id", lambda item: item.current_version_id),
    _Column("Version Active", lambda item: item.is_version_active),
    _Column("Latest Is Current", lambda item: item.is_latest_current_version),
    _Column("Versions", lambda item: item.versions_count),
    _Column("Current Version", lambda item: _version_attr(item, "name")),
    _Column("Total Nodes", lambda item: _version_attr(item, "total_node_count")),
    _Column("DML Create Nodes", lambda item: _version_attr(item, "dml_create_node_count")),
    _Column("DML Delete Nodes", lambda item: _version_attr(item, "dml_delete_node_count")),
    _Column("DML Update Nodes", lambda item: _version_attr(item, "dml_update_node_count")),
    _Column("Screen Nodes", lambda item: _version_attr(item, "screen_node_count")),
    _Column("SObject", lambda item: _version_attr(item, "sobject")),
    _Column("Trigger Type", lambda item: _version_attr(item, "trigger_type")),
    _Column("Running Mode", lambda item: _version_attr(item, "running_mode")),
    _Column("Description", lambda item: item.description),
    _Column("Created", lambda item: item.created_date),
    _Column("Last Modified", lambda item: item.last_modified_date),
    _Column("Score", lambda item: item.score),
)

_STANDARD_FIELD_COLUMNS: tuple[_Column[StandardField], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Name", lambda item: item.name),
    _Column("Type", lambda item: item.type),
    _Column("Length", lambda item: item.length),
    _Column("Unique", lambda item: item.is_unique),
    _Column("Encrypted", lambda item: item.is_encrypted),
    _Column("External Id", lambda item: item.is_external_id),
    _Column("Indexed", lambda item: item.is_indexed),
    _Column("Default Value", lambda item: item.default_value),
    _Column("Formula", lambda item: item.formula),
    _Column("Tooltip", lambda item: item.tooltip),
    _Column("Description", lambda item: item.description),
    _Column("URL", lambda item: item.url),
    _Column("Score", lambda item: item.score),
)

_FIELD_SET_COLUMNS: tuple[_Column[FieldSet], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Label", lambda item: item.label),
    _Column("Description", lambda item: item.description),
    _Column("URL", lambda item: item.url),
    _Column("Score", lambda item: item.score),
)

_LAYOUT_COLUMNS: tuple[_Column[PageLayout], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Name", lambda item: item.name),
    _Column("Type", lambda item: item.type),
    _Column("URL", lambda item: item.url),
    _Column("Score", lambda item: item.score),
)

_LIMIT_COLUMNS: tuple[_Column[ObjectLimit], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Label", lambda item: item.label),
    _Column("Type", lambda item: item.type),
    _Column("Max", lambda item: item.max),
    _Column("Used", lambda item: item.used),
    _Column("Remaining", lambda item: item.remaining),
    _Column("Used %", lambda item: round(item.used_percentage * 100, 2)),
    _Column("Score", lambda item: item.score),
)

_VALIDATION_RULE_COLUMNS: tuple[_Column[ValidationRule], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Name", lambda item: item.name),
    _Column("Active", lambda item: item.is_active),
    _Column("Error Display Field", lambda item: item.error_display_field),
    _Column("Error Message", lambda item: item.error_message),
    _Column("Description", lambda item: item.description),
    _Column("URL", lambda item: item.url),
    _Column("Score", lambda item: item.score),
)

_WEB_LINK_COLUMNS: tuple[_Column[WebLink], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Name", lambda item: item.name),
    _Column("URL", lambda item: item.url),
    _Column("Score", lambda item: item.score),
)

_RECORD_TYPE_COLUMNS: tuple[_Column[RecordType], ...] = (
    _Column("Id", lambda item: item.id),
    _Column("Name", lambda item: item.name),
    _Column("Developer Name", lambda item: item.developer_name),
    _Column("Active", lambda item: item.is_active),
    _Column("Available", lambda item: item.is_available),
    _Column("Default", lambda item: item.is_default_record_type_mapping),
    _Column("Master", lambda item: item.is_master),
    _Column("URL", lambda item: item.url),
    _Column("Score", lambda item: item.score),
)

_RELATIONSHIP_COLUMNS: tuple[_Column[ObjectRelationship], ...] = (
    _Column("Name", lambda item: item.name),
    _Column("Child Object", lambda item: item.child_object),
    _Column("Field", lambda item: item.field_name),
    _Column("Cascade Delete", lambda item: item.is_cascade_delete),
    _Column("Restricted Delete", lambda item: item.is_restricted_delete),
    _Column("Score", lambda item: item.score),
)


def write_flow_workbook(
    definitions: Mapping[str, FlowDefinition],
    output_path: Path | str,
    run_metadata: RunMetadata,
) -> Path:
    """Write one row per flow definition plus a RunInfo sheet."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = FLOWS_SHEET_NAME
    rows = [definitions[definition_id] for definition_id in sorted(definitions)]
    _write_table(sheet, _FLOW_COLUMNS, rows)
    _write_run_info_sheet(workbook, run_metadata)
    return _save(workbook, output_path)


def write_object_workbook(
    description: ObjectDescription,
    output_path: Path | str,
    run_metadata: RunMetadata,
) -> Path:
    """Write the object summary and one sheet per sub-resource collection."""
    workbook = Workbook()
    summary = workbook.active
    summary.title = OBJECT_SHEET_NAME
    _write_object_summary(summary, description)

    for title, columns, rows in (
        ("StandardFields", _STANDARD_FIELD_COLUMNS, description.standard_fields),
        ("FieldSets", _FIELD_SET_COLUMNS, description.field_sets),
        ("Layouts", _LAYOUT_COLUMNS, description.layouts),
        ("Limits", _LIMIT_COLUMNS, description.limits),
        ("ValidationRules", _VALIDATION_RULE_COLUMNS, description.validation_rules),
        ("WebLinks", _WEB_LINK_COLUMNS, description.web_links),
        ("RecordTypes", _RECORD_TYPE_COLUMNS, description.record_types),
        ("Relationships", _RELATIONSHIP_COLUMNS, description.relationships),
    ):
        _write_table(workbook.create_sheet(title), columns, rows)

    _write_run_info_sheet(workbook, run_metadata)
    return _save(workbook, output_path)


def _write_table(sheet, columns: Sequence[_Column[Any]], rows: Sequence[Any]) -> None:
    for column_index, column in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=column_index, value=column.header)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(column.header) + 6, 40)
        )
    for row_index, item in enumerate(rows, start=2):
        for column_index, column in enumerate(columns, start=1):
            sheet.cell(
                row=row_index,
                column=column_index,
                value=_normalize_output_value(column.value(item)),
            )
    sheet.freeze_panes = "A2"


def _write_object_summary(sheet, description: ObjectDescription) -> None:
    entries = (
        ("id", description.id),
        ("name", description.name),
        ("api_name", description.api_name),
        ("label", description.label),
        ("label_plural", description.label_plural),
        ("type", description.type_id),
        ("package", description.package),
        ("custom", description.is_custom),
        ("feed_enabled", description.is_feed_enabled),
        ("most_recent_enabled", description.is_most_recent_enabled),
        ("searchable", description.is_searchable),
        ("key_prefix", description.key_prefix),
        ("description", description.description),
        ("external_sharing_model", description.external_sharing_model),
        ("internal_sharing_model", description.internal_sharing_model),
        ("record_count", description.record_count),
        ("apex_trigger_ids", description.apex_trigger_ids),
        ("custom_field_ids", description.custom_field_ids),
        ("url", description.url),
        ("score", description.score),
    )
    _write_key_values(sheet, entries)
    sheet.column_dimensions["A"].width = 28
    sheet.column_dimensions["B"].width = 60


def _write_run_info_sheet(workbook, run_metadata: RunMetadata) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("run_kind", run_metadata.run_kind),
        ("config_path", str(run_metadata.config_path)),
        ("snapshot_path", str(run_metadata.snapshot_path)),
        ("instance_url", run_metadata.instance_url),
        ("entities", run_metadata.entity_count),
    )
    _write_key_values(sheet, entries)


def _write_key_values(sheet, entries: Sequence[tuple[str, Any]]) -> None:
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=_normalize_output_value(value))


def _version_attr(definition: FlowDefinition, name: str) -> Any:
    if definition.current_version is None:
        return None
    return getattr(definition.current_version, name)


def _normalize_output_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return json.dumps(list(value), ensure_ascii=False, separators=(",", ":"))
    return value


def _save(workbook, output_path: Path | str) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()
