"""Run execution use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from org_metadata_correlator.configuration import ConfigurationError, load_configuration
from org_metadata_correlator.correlation import (
    correlate_flow_definitions,
    describe_object_composite,
)
from org_metadata_correlator.model_export import (
    ExportFormat,
    RunMetadata,
    export_flow_definitions_json,
    export_object_json,
    write_flow_workbook,
    write_object_workbook,
)
from org_metadata_correlator.org_snapshot import (
    SnapshotError,
    build_snapshot_collaborators,
    load_org_snapshot,
)
from org_metadata_correlator.platform_ports.collaborator_contracts import PlatformCollaborators

from .run_contracts import RunArtifacts, RunOutcome, RunRequest

FLOWS_RUN_KIND = "flows"
OBJECT_RUN_KIND = "object"

_LOGGER = logging.getLogger(__name__)

CollaboratorFactory = Callable[[RunArtifacts], PlatformCollaborators]


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_flow_correlation_run(
    request: RunRequest,
    *,
    collaborators_factory: CollaboratorFactory | None = None,
) -> RunOutcome:
    """Correlate every flow definition of the configured org and export the result."""
    artifacts = _load_run_artifacts(request.config_path)
    collaborators = (
        collaborators_factory(artifacts) if collaborators_factory else artifacts.collaborators
    )
    run_start = datetime.now(UTC)
    bulk = artifacts.configuration.bulk
    definitions = correlate_flow_definitions(
        collaborators,
        tolerable_error_codes=bulk.tolerable_error_codes,
        chunk_size=bulk.chunk_size,
        bulk_parallelism=bulk.parallelism,
        mapping_workers=artifacts.configuration.correlation.parallelism,
    )
    _LOGGER.info("Flow correlation produced %d definitions", len(definitions))

    if ExportFormat.for_path(request.output_path) is ExportFormat.WORKBOOK:
        try:
            output_path = write_flow_workbook(
                definitions,
                request.output_path,
                _run_metadata(artifacts, run_start, FLOWS_RUN_KIND, len(definitions)),
            )
        except OSError as exc:
            raise _output_write_error(request.output_path, exc) from exc
        return RunOutcome(FLOWS_RUN_KIND, len(definitions), output_path, None)
    return _json_outcome(
        FLOWS_RUN_KIND, len(definitions), export_flow_definitions_json(definitions), request
    )


def execute_object_description_run(
    request: RunRequest,
    *,
    collaborators_factory: CollaboratorFactory | None = None,
) -> RunOutcome:
    """Describe one object of the configured org and export the composite."""
    if not request.object_name:
        raise RunExecutionError("An object name is required for an object description run.")
    artifacts = _load_run_artifacts(request.config_path)
    collaborators = (
        collaborators_factory(artifacts) if collaborators_factory else artifacts.collaborators
    )
    run_start = datetime.now(UTC)
    description = describe_object_composite(
        collaborators,
        request.object_name,
        mapping_workers=artifacts.configuration.correlation.parallelism,
    )

    if ExportFormat.for_path(request.output_path) is ExportFormat.WORKBOOK:
        try:
            output_path = write_object_workbook(
                description,
                request.output_path,
                _run_metadata(artifacts, run_start, OBJECT_RUN_KIND, 1),
            )
        except OSError as exc:
            raise _output_write_error(request.output_path, exc) from exc
        return RunOutcome(OBJECT_RUN_KIND, 1, output_path, None)
    return _json_outcome(OBJECT_RUN_KIND, 1, export_object_json(description), request)


def _load_run_artifacts(config_path: str) -> RunArtifacts:
    try:
        configuration = load_configuration(config_path)
        snapshot = load_org_snapshot(configuration.snapshot.path)
    except (ConfigurationError, SnapshotError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(
        configuration=configuration,
        collaborators=build_snapshot_collaborators(
            snapshot, instance_url=configuration.org.instance_url
        ),
    )


def _run_metadata(
    artifacts: RunArtifacts, run_start: datetime, run_kind: str, entity_count: int
) -> RunMetadata:
    configuration = artifacts.configuration
    return RunMetadata(
        run_start=run_start,
        config_path=configuration.path.resolve(),
        snapshot_path=configuration.snapshot.path,
        instance_url=configuration.org.instance_url,
        run_kind=run_kind,
        entity_count=entity_count,
    )


def _json_outcome(
    run_kind: str, entity_count: int, rendered: str, request: RunRequest
) -> RunOutcome:
    if request.output_path is None:
        return RunOutcome(run_kind, entity_count, None, rendered)
    output = Path(request.output_path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered + "\n", encoding="utf-8")
    except OSError as exc:
        raise _output_write_error(output, exc) from exc
    return RunOutcome(run_kind, entity_count, output.resolve(), None)


def _output_write_error(output_path: Path | str | None, exc: OSError) -> RunExecutionError:
    return RunExecutionError(f"Failed to write output file {output_path}: {exc}")
