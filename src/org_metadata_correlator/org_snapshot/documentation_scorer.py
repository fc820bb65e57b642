"""Quality scorer counting documentation gaps on built entities."""

from __future__ import annotations

from dataclasses import fields, is_dataclass

from org_metadata_correlator.entity_models.flow_entities import FlowDefinition


class DocumentationGapScorer:  # pylint: disable=too-few-public-methods
    """Scores one point per gap: a blank description, and a flow without a current version."""

    def compute_score(self, entity: object) -> int:
        score = 0
        if _has_field(entity, "description") and not (getattr(entity, "description") or "").strip():
            score += 1
        if isinstance(entity, FlowDefinition) and entity.current_version is None:
            score += 1
        return score


def _has_field(entity: object, name: str) -> bool:
    return is_dataclass(entity) and any(item.name == name for item in fields(entity))
