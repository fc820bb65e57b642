"""JSON serialization of correlated models."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass, replace
from enum import Enum
from typing import Any

from org_metadata_correlator.entity_models import FlowDefinition, ObjectDescription

DEPENDENCY_GRAPH_KEY = "dependency_graph"
FLOW_DEFINITIONS_KEY = "flow_definitions"


def flow_definition_to_dict(definition: FlowDefinition) -> dict[str, Any]:
    """Return a JSON-ready mapping including derived flags.

    The attached dependency graph is left out; it is shared by every definition
    of a run and exported once by `export_flow_definitions_json`.
    """
    detached = replace(definition, dependencies=replace(definition.dependencies, graph=None))
    payload = asdict(detached)
    del payload["dependencies"]["graph"]
    payload["is_process_builder"] = definition.is_process_builder
    return payload


def export_flow_definitions_json(definitions: Mapping[str, FlowDefinition]) -> str:
    """Render definitions sorted by id, with their shared dependency graph written once.

    Raises:
      ValueError: if the definitions carry different dependency graphs.
    """
    return _dumps(
        {
            DEPENDENCY_GRAPH_KEY: _graph_to_json(_shared_dependency_graph(definitions)),
            FLOW_DEFINITIONS_KEY: {
                definition_id: flow_definition_to_dict(definition)
                for definition_id, definition in sorted(definitions.items())
            },
        }
    )


def export_object_json(description: ObjectDescription) -> str:
    return _dumps(asdict(description))


def _shared_dependency_graph(definitions: Mapping[str, FlowDefinition]) -> object:
    graphs = [definition.dependencies.graph for definition in definitions.values()]
    if not graphs:
        return None
    shared = graphs[0]
    if any(graph is not shared and graph != shared for graph in graphs[1:]):
        raise ValueError("Flow definitions of one export must share a single dependency graph.")
    return shared


def _graph_to_json(graph: object) -> Any:
    if is_dataclass(graph) and not isinstance(graph, type):
        return asdict(graph)
    return graph


def _dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, default=_fallback)


def _fallback(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, set | frozenset):
        return sorted(value, key=str)
    return str(value)
