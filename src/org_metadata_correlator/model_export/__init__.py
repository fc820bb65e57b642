"""Model export domain exports."""

from .json_export import export_flow_definitions_json, export_object_json, flow_definition_to_dict
from .report_models import ExportFormat, RunMetadata
from .workbook_writer import (
    FLOWS_SHEET_NAME,
    OBJECT_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_flow_workbook,
    write_object_workbook,
)

__all__ = [
    "ExportFormat",
    "RunMetadata",
    "FLOWS_SHEET_NAME",
    "OBJECT_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "export_flow_definitions_json",
    "export_object_json",
    "flow_definition_to_dict",
    "write_flow_workbook",
    "write_object_workbook",
]
