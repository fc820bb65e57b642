"""Platform collaborator contract exports."""

from .collaborator_contracts import (
    BulkItemResult,
    BulkMetadataSource,
    DependencyGraphService,
    EntityScorer,
    PlatformCollaborators,
    QueryTransport,
    RecordCounter,
    Row,
    SchemaDescriber,
    UrlBuilder,
)
from .query_descriptors import FilterOperator, QueryDescriptor, QueryFilter, SubqueryDescriptor

__all__ = [
    "BulkItemResult",
    "BulkMetadataSource",
    "DependencyGraphService",
    "EntityScorer",
    "FilterOperator",
    "PlatformCollaborators",
    "QueryDescriptor",
    "QueryFilter",
    "QueryTransport",
    "RecordCounter",
    "Row",
    "SchemaDescriber",
    "SubqueryDescriptor",
    "UrlBuilder",
]
