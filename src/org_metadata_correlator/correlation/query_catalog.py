"""Query descriptors issued by the correlation pipelines."""

from __future__ import annotations

from dataclasses import dataclass

from org_metadata_correlator.platform_ports.query_descriptors import (
    QueryDescriptor,
    QueryFilter,
    SubqueryDescriptor,
)

FLOW_DEFINITIONS_QUERY = "flow_definitions"
FLOW_VERSIONS_QUERY = "flow_versions"
ENTITY_DEFINITION_QUERY = "entity_definition"

FIRST_PARTY_PUBLISHERS: tuple[str, ...] = ("System", "<local>")
PACKAGE_SEPARATOR = "__"


@dataclass(frozen=True)
class ObjectApiName:
    """Object API name split into its optional package prefix."""

    full_name: str
    package: str

    @property
    def is_packaged(self) -> bool:
        return bool(self.package)


def parse_object_api_name(full_name: str) -> ObjectApiName:
    """Detect a package prefix, present iff the name has exactly three `__` segments."""
    segments = full_name.split(PACKAGE_SEPARATOR)
    package = segments[0] if len(segments) == 3 else ""
    return ObjectApiName(full_name=full_name, package=package)


def flow_definitions_query() -> QueryDescriptor:
    return QueryDescriptor(
        name=FLOW_DEFINITIONS_QUERY,
        source="FlowDefinition",
        fields=(
            "Id",
            "MasterLabel",
            "DeveloperName",
            "ApiVersion",
            "Description",
            "ActiveVersionId",
            "LatestVersionId",
            "CreatedDate",
            "LastModifiedDate",
        ),
        tooling=True,
    )


def flow_versions_query() -> QueryDescriptor:
    return QueryDescriptor(
        name=FLOW_VERSIONS_QUERY,
        source="Flow",
        fields=("Id", "DefinitionId", "Status", "ProcessType"),
        filters=(QueryFilter.not_equals("DefinitionId", None),),
        tooling=True,
    )


def entity_definition_query(api_name: ObjectApiName) -> QueryDescriptor:
    """Single-row EntityDefinition lookup with its nested sub-resource subqueries.

    Unpackaged names are restricted to first-party publishers; packaged names
    to an exact namespace match.
    """
    ownership_filter = (
        QueryFilter.equals("NamespacePrefix", api_name.package)
        if api_name.is_packaged
        else QueryFilter.is_in("PublisherId", *FIRST_PARTY_PUBLISHERS)
    )
    return QueryDescriptor(
        name=ENTITY_DEFINITION_QUERY,
        source="EntityDefinition",
        fields=(
            "Id",
            "DurableId",
            "DeveloperName",
            "Description",
            "NamespacePrefix",
            "ExternalSharingModel",
            "InternalSharingModel",
        ),
        subqueries=(
            SubqueryDescriptor(
                "Fields", ("DurableId", "QualifiedApiName", "Description", "IsIndexed")
            ),
            SubqueryDescriptor("ApexTriggers", ("Id",)),
            SubqueryDescriptor("FieldSets", ("Id", "MasterLabel", "Description")),
            SubqueryDescriptor("Layouts", ("Id", "Name", "LayoutType")),
            SubqueryDescriptor("Limits", ("DurableId", "Label", "Max", "Remaining", "Type")),
            SubqueryDescriptor(
                "ValidationRules",
                (
                    "Id",
                    "Active",
                    "Description",
                    "ErrorDisplayField",
                    "ErrorMessage",
                    "ValidationName",
                ),
            ),
            SubqueryDescriptor("WebLinks", ("Id", "Name")),
        ),
        filters=(QueryFilter.equals("QualifiedApiName", api_name.full_name), ownership_filter),
        tooling=True,
        query_more=False,
    )
