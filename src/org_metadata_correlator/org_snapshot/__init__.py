"""Recorded org snapshot exports."""

from .documentation_scorer import DocumentationGapScorer
from .recorded_org_snapshot import (
    MISSING_RECORD_ERROR_CODE,
    DependencyEdge,
    DependencyGraph,
    OrgSnapshot,
    RecordedBulkMetadataSource,
    RecordedDependencyGraphService,
    RecordedQueryTransport,
    RecordedRecordCounter,
    RecordedSchemaDescriber,
    SnapshotError,
    build_snapshot_collaborators,
    load_org_snapshot,
)
from .setup_urls import SetupUrlBuilder

__all__ = [
    "MISSING_RECORD_ERROR_CODE",
    "DependencyEdge",
    "DependencyGraph",
    "DocumentationGapScorer",
    "OrgSnapshot",
    "RecordedBulkMetadataSource",
    "RecordedDependencyGraphService",
    "RecordedQueryTransport",
    "RecordedRecordCounter",
    "RecordedSchemaDescriber",
    "SetupUrlBuilder",
    "SnapshotError",
    "build_snapshot_collaborators",
    "load_org_snapshot",
]
