"""Flow definition and flow version entities."""

from __future__ import annotations

from dataclasses import dataclass

PROCESS_BUILDER_TYPE = "Workflow"


@dataclass(frozen=True)
class DependencyAttachment:
    """Unresolved dependency graph attached to an entity.

    `dependencies_for` names the entity attribute whose value keys the graph.
    """

    graph: object
    dependencies_for: str


@dataclass(frozen=True)
class FlowVersion:  # pylint: disable=too-many-instance-attributes
    """One version of a flow, enriched with metrics from its metadata document."""

    id: str
    definition_id: str | None
    name: str
    url: str
    version: int | None
    api_version: float | None
    total_node_count: int
    dml_create_node_count: int
    dml_delete_node_count: int
    dml_update_node_count: int
    screen_node_count: int
    is_active: bool
    description: str | None
    type: str | None
    running_mode: str | None
    sobject: str | None
    trigger_type: str | None
    created_date: str | None
    last_modified_date: str | None
    score: int | None = None


@dataclass(frozen=True)
class FlowDefinition:  # pylint: disable=too-many-instance-attributes
    """Top-level versioned flow artifact with its current version resolved."""

    id: str
    name: str
    url: str
    api_version: float | None
    current_version_id: str | None
    is_version_active: bool
    is_latest_current_version: bool
    versions_count: int
    type: str | None
    description: str | None
    created_date: str | None
    last_modified_date: str | None
    dependencies: DependencyAttachment | None = None
    current_version: FlowVersion | None = None
    score: int | None = None

    @property
    def is_process_builder(self) -> bool:
        """Return True when the definition's versions are process builders."""
        return self.type == PROCESS_BUILDER_TYPE
