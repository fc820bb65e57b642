"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from org_metadata_correlator.configuration.runtime_settings import Configuration
from org_metadata_correlator.platform_ports.collaborator_contracts import PlatformCollaborators


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one correlation run.

    `object_name` selects the object composite run; without it the flow
    definitions are correlated.
    """

    config_path: str
    output_path: str | None = None
    object_name: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run.

    `rendered_json` carries the export when no output file was requested.
    """

    run_kind: str
    entity_count: int
    output_path: Path | None
    rendered_json: str | None


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded configuration and wired collaborators required during run execution."""

    configuration: Configuration
    collaborators: PlatformCollaborators
