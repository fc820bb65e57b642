"""Model export entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class ExportFormat(str, Enum):
    """Output format selected from the destination file extension."""

    JSON = "json"
    WORKBOOK = "xlsx"

    @classmethod
    def for_path(cls, output_path: Path | str | None) -> ExportFormat:
        if output_path is not None and Path(output_path).suffix.lower() == ".xlsx":
            return cls.WORKBOOK
        return cls.JSON


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    config_path: Path
    snapshot_path: Path
    instance_url: str
    run_kind: str
    entity_count: int
